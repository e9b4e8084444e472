import pytest

from launchpad_sdk.core.errors import InvalidStateTransition
from launchpad_sdk.core.models import CreationResult
from launchpad_sdk.deployment.state import (
    DeploymentState,
    DeploymentStatus,
    DeploymentStep,
)

RESULT = CreationResult(
    token_address="0x" + "22" * 20,
    pool_address="0x" + "33" * 20,
    tx_hash="0xabc",
    chain_id=97,
)


def _deploying() -> DeploymentState:
    state = DeploymentState(chain_id=97, chain_name="BSC Test")
    state.transition(DeploymentStatus.SWITCHING, DeploymentStep.SWITCHING)
    state.transition(DeploymentStatus.DEPLOYING, DeploymentStep.DEPLOYING)
    return state


def test_happy_path():
    state = _deploying()
    for step in (
        DeploymentStep.SIGNER_READY,
        DeploymentStep.GAS_ESTIMATED,
        DeploymentStep.SUBMITTED,
    ):
        state.advance_progress(step)
    state.succeed(RESULT)

    assert state.status == DeploymentStatus.SUCCESS
    assert state.progress == 100
    assert state.is_terminal
    result = state.to_result()
    assert result.success
    assert result.tx_hash == "0xabc"


def test_cannot_skip_switching():
    state = DeploymentState(chain_id=97, chain_name="BSC Test")
    with pytest.raises(InvalidStateTransition):
        state.transition(DeploymentStatus.DEPLOYING, DeploymentStep.DEPLOYING)


def test_pending_can_fail_directly():
    state = DeploymentState(chain_id=1337, chain_name="Chain 1337")
    state.fail("Chain configuration not found", "CHAIN_NOT_CONFIGURED")
    assert state.status == DeploymentStatus.ERROR
    assert state.progress == 0
    assert state.to_result().error_code == "CHAIN_NOT_CONFIGURED"


def test_failure_keeps_progress():
    state = _deploying()
    state.advance_progress(DeploymentStep.GAS_ESTIMATED)
    state.fail("rejected", "USER_REJECTED")
    assert state.progress == 70
    assert state.error == "rejected"
    assert not state.to_result().success


def test_terminal_states_are_final():
    state = _deploying()
    state.fail("boom")
    with pytest.raises(InvalidStateTransition):
        state.transition(DeploymentStatus.SWITCHING, 70)
    with pytest.raises(InvalidStateTransition):
        state.succeed(RESULT)


def test_progress_is_monotonic():
    state = _deploying()
    state.advance_progress(DeploymentStep.GAS_ESTIMATED)
    with pytest.raises(InvalidStateTransition):
        state.advance_progress(DeploymentStep.SIGNER_READY)
    with pytest.raises(InvalidStateTransition):
        state.advance_progress(DeploymentStep.GAS_ESTIMATED)
    with pytest.raises(InvalidStateTransition):
        state.advance_progress(100)


def test_progress_only_while_deploying():
    state = DeploymentState(chain_id=97, chain_name="BSC Test")
    with pytest.raises(InvalidStateTransition):
        state.advance_progress(DeploymentStep.SIGNER_READY)


def test_snapshot_is_independent():
    state = _deploying()
    snap = state.snapshot()
    state.advance_progress(DeploymentStep.SUBMITTED)
    assert snap.progress == 30
