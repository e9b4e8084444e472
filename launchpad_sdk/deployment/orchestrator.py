from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable

from loguru import logger

from launchpad_sdk.core.chains import (
    get_chain_info,
    get_chain_short_name,
    get_mainnet_chains,
)
from launchpad_sdk.core.constants.base import DEFAULT_NETWORK_SWITCH_SETTLE_SECONDS
from launchpad_sdk.core.errors import (
    ChainNotConfiguredError,
    LaunchpadError,
    WalletNotConnectedError,
    classify_error,
)
from launchpad_sdk.core.models import DeploymentResult, TokenCreationForm
from launchpad_sdk.core.wallet import WalletSession
from launchpad_sdk.deployment.creation import create_token_on_chain
from launchpad_sdk.deployment.state import (
    DeploymentMode,
    DeploymentState,
    DeploymentStatus,
    DeploymentStep,
)
from launchpad_sdk.trading.resolver import AmmAddressCache

UpdateCallback = Callable[[DeploymentState], None]


class DeploymentOrchestrator:
    """Deploy one token form to several chains through a single wallet session.

    Chains are attempted one after another in request order. A failing chain
    is recorded and the batch moves on; the returned map always covers every
    requested chain id.
    """

    def __init__(
        self,
        wallet: WalletSession | None,
        cache: AmmAddressCache | None = None,
        *,
        mode: DeploymentMode = DeploymentMode.SEQUENTIAL,
        switch_settle_seconds: float = DEFAULT_NETWORK_SWITCH_SETTLE_SECONDS,
        on_update: UpdateCallback | None = None,
    ) -> None:
        self.wallet = wallet
        self.cache = cache if cache is not None else AmmAddressCache()
        self.mode = DeploymentMode(mode)
        self.switch_settle_seconds = switch_settle_seconds
        self.on_update = on_update
        self.is_deploying = False
        self._states: list[DeploymentState] = []
        self.logger = logger.bind(component="DeploymentOrchestrator")

    @property
    def deployments(self) -> list[DeploymentState]:
        return [state.snapshot() for state in self._states]

    def reset(self) -> None:
        self._states = []
        self.is_deploying = False

    @staticmethod
    def get_mainnet_chains() -> list[tuple[int, str]]:
        return [(c, get_chain_short_name(c)) for c in get_mainnet_chains()]

    def _notify(self, state: DeploymentState) -> None:
        if self.on_update is None:
            return
        try:
            self.on_update(state.snapshot())
        except Exception:
            self.logger.exception(
                f"on_update failed for {state.chain_name} ({state.status})"
            )

    async def deploy_to_multiple_chains(
        self,
        chain_ids: Iterable[int],
        form: TokenCreationForm,
        image_url: str | None = None,
    ) -> dict[int, DeploymentResult]:
        wallet = self.wallet
        if wallet is None or not wallet.connected or not wallet.address:
            raise WalletNotConnectedError()

        self._states = [
            DeploymentState(chain_id=int(c), chain_name=get_chain_short_name(c))
            for c in chain_ids
        ]
        self.is_deploying = True
        self.logger.info(
            f"Deploying {form.symbol} to {len(self._states)} chain(s) ({self.mode})"
        )

        results: dict[int, DeploymentResult] = {}
        try:
            for state in self._states:
                results[state.chain_id] = await self._deploy_to_chain(
                    wallet, state, form, image_url
                )
        finally:
            self.is_deploying = False
        return results

    def _fail(self, state: DeploymentState, error: LaunchpadError) -> DeploymentResult:
        state.fail(error.message, str(error.kind))
        self.logger.warning(
            f"Deployment on {state.chain_name} failed at {state.progress}%: "
            f"{error.kind}: {error.message}"
        )
        self._notify(state)
        return state.to_result()

    async def _deploy_to_chain(
        self,
        wallet: WalletSession,
        state: DeploymentState,
        form: TokenCreationForm,
        image_url: str | None,
    ) -> DeploymentResult:
        chain_id = state.chain_id
        if get_chain_info(chain_id) is None:
            return self._fail(
                state, ChainNotConfiguredError("Chain configuration not found")
            )

        state.transition(DeploymentStatus.SWITCHING, DeploymentStep.SWITCHING)
        self._notify(state)
        try:
            switched = await wallet.switch_network(chain_id)
        except Exception as exc:
            return self._fail(state, classify_error(exc))
        if not switched:
            return self._fail(
                state,
                ChainNotConfiguredError(
                    f"Failed to switch network to {state.chain_name}"
                ),
            )

        await asyncio.sleep(self.switch_settle_seconds)
        state.transition(DeploymentStatus.DEPLOYING, DeploymentStep.DEPLOYING)
        self._notify(state)

        def _on_step(step: DeploymentStep) -> None:
            state.advance_progress(step)
            self._notify(state)

        try:
            result = await create_token_on_chain(
                wallet,
                chain_id,
                form,
                image_url=image_url,
                cache=self.cache,
                on_step=_on_step,
            )
        except Exception as exc:
            return self._fail(state, classify_error(exc))

        state.succeed(result)
        self.logger.info(
            f"Deployed {form.symbol} on {state.chain_name}: {result.tx_hash}"
        )
        self._notify(state)
        return state.to_result()
