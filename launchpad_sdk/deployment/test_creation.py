from __future__ import annotations

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from launchpad_sdk.conftest import TEST_FACTORY
from launchpad_sdk.core.errors import (
    ContractError,
    CreationEventNotFoundError,
    GasEstimationFailedError,
    UserRejectedError,
)
from launchpad_sdk.core.models import TokenCreationForm
from launchpad_sdk.core.wallet import LocalAccountWallet
from launchpad_sdk.deployment.creation import (
    create_token_on_chain,
    find_token_created_event,
)
from launchpad_sdk.deployment.state import DeploymentStep
from launchpad_sdk.trading.resolver import AmmAddressCache
from launchpad_sdk.trading.test_resolver import (
    CREATOR,
    POOL,
    TOKEN,
    enhanced_log,
    legacy_log,
)

CREATION = "launchpad_sdk.deployment.creation"
FORM = TokenCreationForm(
    name="Moon",
    symbol="MOON",
    total_supply=Decimal("1000000"),
    base_price=Decimal("0.000001"),
    slope=Decimal("0"),
)


def _wallet() -> MagicMock:
    wallet = MagicMock()
    wallet.address = "0x" + "11" * 20
    wallet.chain_id = 97
    wallet.connected = True
    wallet.sign_transaction = AsyncMock(return_value=b"\x00")
    return wallet


def _receipt(*logs) -> dict:
    return {"status": 1, "blockNumber": 10, "logs": list(logs)}


def _from_factory(log: dict, address: str = TEST_FACTORY) -> dict:
    return {**log, "address": address}


class TestFindEvent:
    def test_ignores_logs_from_other_contracts(self):
        receipt = _receipt(
            _from_factory(enhanced_log(), "0x" + "99" * 20),
            _from_factory(legacy_log()),
        )
        event = find_token_created_event(receipt, TEST_FACTORY)
        assert event is not None
        assert event.shape == "legacy"

    def test_no_event(self):
        assert find_token_created_event(_receipt(), TEST_FACTORY) is None


@pytest.mark.asyncio
class TestCreateTokenOnChain:
    @pytest.fixture
    def chain(self):
        with (
            patch(
                "launchpad_sdk.adapters.factory_adapter.adapter.TokenFactoryAdapter.creation_fee",
                new_callable=AsyncMock,
                return_value=10**16,
            ),
            patch(
                "launchpad_sdk.adapters.factory_adapter.adapter.TokenFactoryAdapter.build_create_token_transaction",
                new_callable=AsyncMock,
                return_value={"chainId": 97},
            ) as build,
            patch(f"{CREATION}.prepare_transaction", new_callable=AsyncMock) as prepare,
            patch(f"{CREATION}.sign_and_broadcast", new_callable=AsyncMock) as broadcast,
            patch(
                f"{CREATION}.wait_for_transaction_receipt", new_callable=AsyncMock
            ) as wait,
        ):
            prepare.return_value = {"chainId": 97, "gas": 600_000}
            broadcast.return_value = "0xcreate"
            wait.return_value = _receipt(_from_factory(enhanced_log()))
            yield {"build": build, "prepare": prepare, "broadcast": broadcast, "wait": wait}

    async def test_success_fills_cache_and_reports_steps(self, chain):
        cache = AmmAddressCache()
        steps: list[DeploymentStep] = []

        result = await create_token_on_chain(
            _wallet(), 97, FORM, cache=cache, on_step=steps.append
        )

        assert result.token_address == TOKEN
        assert result.pool_address == POOL
        assert result.tx_hash == "0xcreate"
        assert cache.get(97, TOKEN) == POOL
        assert steps == [
            DeploymentStep.SIGNER_READY,
            DeploymentStep.GAS_ESTIMATED,
            DeploymentStep.SUBMITTED,
        ]
        assert chain["build"].await_args.kwargs["value"] == 10**16

    async def test_result_carries_descriptor(self, chain):
        result = await create_token_on_chain(
            _wallet(), 97, FORM, image_url="ipfs://moon"
        )

        descriptor = result.descriptor
        assert descriptor.address == TOKEN
        assert descriptor.chain_id == 97
        assert (descriptor.name, descriptor.symbol) == ("Moon", "MOON")
        assert descriptor.image_url == "ipfs://moon"
        assert descriptor.creator == CREATOR
        assert descriptor.total_supply == Decimal("1000000")

    async def test_missing_event_carries_hash(self, chain):
        chain["wait"].return_value = _receipt()

        with pytest.raises(CreationEventNotFoundError) as excinfo:
            await create_token_on_chain(_wallet(), 97, FORM)
        assert excinfo.value.tx_hash == "0xcreate"

    async def test_gas_failure_stops_before_signing(self, chain):
        chain["prepare"].side_effect = GasEstimationFailedError()
        steps: list[DeploymentStep] = []

        with pytest.raises(GasEstimationFailedError):
            await create_token_on_chain(_wallet(), 97, FORM, on_step=steps.append)

        assert steps == [DeploymentStep.SIGNER_READY]
        chain["broadcast"].assert_not_awaited()

    async def test_provider_error_is_classified(self, chain):
        chain["broadcast"].side_effect = RuntimeError("user rejected transaction")

        with pytest.raises(UserRejectedError):
            await create_token_on_chain(_wallet(), 97, FORM)

    async def test_switches_wallet_back_before_signing(self, chain):
        wallet = LocalAccountWallet("0x" + "11" * 32, 97)
        assert await wallet.switch_network(84532)

        result = await create_token_on_chain(wallet, 97, FORM)

        assert wallet.chain_id == 97
        assert result.chain_id == 97
        chain["broadcast"].assert_awaited_once()

    async def test_refused_switch_stops_before_any_step(self, chain):
        wallet = _wallet()
        wallet.chain_id = 84532
        wallet.switch_network = AsyncMock(return_value=False)
        steps: list[DeploymentStep] = []

        with pytest.raises(ContractError, match="switch to BSC Testnet"):
            await create_token_on_chain(wallet, 97, FORM, on_step=steps.append)

        assert steps == []
        chain["build"].assert_not_awaited()
        chain["broadcast"].assert_not_awaited()
