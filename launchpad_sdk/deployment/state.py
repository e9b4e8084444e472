from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import IntEnum, StrEnum

from launchpad_sdk.core.errors import InvalidStateTransition
from launchpad_sdk.core.models import CreationResult, DeploymentResult


class DeploymentStatus(StrEnum):
    PENDING = "pending"
    SWITCHING = "switching"
    DEPLOYING = "deploying"
    SUCCESS = "success"
    ERROR = "error"


class DeploymentMode(StrEnum):
    SEQUENTIAL = "sequential"
    # Accepted for callers that ask for it; chains still run one at a time.
    PARALLEL = "parallel"


class DeploymentStep(IntEnum):
    PENDING = 0
    SWITCHING = 10
    DEPLOYING = 30
    SIGNER_READY = 50
    GAS_ESTIMATED = 70
    SUBMITTED = 85
    CONFIRMED = 100


LEGAL_TRANSITIONS: dict[DeploymentStatus, frozenset[DeploymentStatus]] = {
    DeploymentStatus.PENDING: frozenset(
        {DeploymentStatus.SWITCHING, DeploymentStatus.ERROR}
    ),
    DeploymentStatus.SWITCHING: frozenset(
        {DeploymentStatus.DEPLOYING, DeploymentStatus.ERROR}
    ),
    DeploymentStatus.DEPLOYING: frozenset(
        {DeploymentStatus.SUCCESS, DeploymentStatus.ERROR}
    ),
    DeploymentStatus.SUCCESS: frozenset(),
    DeploymentStatus.ERROR: frozenset(),
}


@dataclass
class DeploymentState:
    """One chain's deployment attempt. Mutated only through its methods."""

    chain_id: int
    chain_name: str
    status: DeploymentStatus = DeploymentStatus.PENDING
    progress: int = 0
    error: str | None = None
    error_code: str | None = None
    result: CreationResult | None = None

    @property
    def is_terminal(self) -> bool:
        return not LEGAL_TRANSITIONS[self.status]

    def _check_progress(self, progress: int) -> int:
        progress = int(progress)
        if not 0 <= progress <= 100:
            raise InvalidStateTransition(f"Progress {progress} outside 0-100")
        if progress < self.progress:
            raise InvalidStateTransition(
                f"Progress cannot go backwards ({self.progress} -> {progress})"
            )
        return progress

    def transition(self, status: DeploymentStatus, progress: int) -> None:
        status = DeploymentStatus(status)
        if status not in LEGAL_TRANSITIONS[self.status]:
            raise InvalidStateTransition(
                f"Illegal deployment transition {self.status} -> {status} "
                f"on chain {self.chain_id}"
            )
        progress = self._check_progress(progress)
        if status == DeploymentStatus.SUCCESS and progress != 100:
            raise InvalidStateTransition("Success requires progress 100")
        self.status = status
        self.progress = progress

    def advance_progress(self, progress: int) -> None:
        if self.status != DeploymentStatus.DEPLOYING:
            raise InvalidStateTransition(
                f"Progress can only advance while deploying (status={self.status})"
            )
        progress = self._check_progress(progress)
        if progress <= self.progress or progress >= 100:
            raise InvalidStateTransition(
                f"Progress must increase and stay below 100 ({self.progress} -> {progress})"
            )
        self.progress = progress

    def succeed(self, result: CreationResult) -> None:
        self.transition(DeploymentStatus.SUCCESS, DeploymentStep.CONFIRMED)
        self.result = result

    def fail(self, message: str, code: str | None = None) -> None:
        self.transition(DeploymentStatus.ERROR, self.progress)
        self.error = message
        self.error_code = code

    def snapshot(self) -> DeploymentState:
        return copy.deepcopy(self)

    def to_result(self) -> DeploymentResult:
        result = self.result
        return DeploymentResult(
            chain_id=self.chain_id,
            chain_name=self.chain_name,
            success=self.status == DeploymentStatus.SUCCESS,
            token_address=result.token_address if result else None,
            pool_address=result.pool_address if result else None,
            tx_hash=result.tx_hash if result else None,
            error=self.error,
            error_code=self.error_code,
        )
