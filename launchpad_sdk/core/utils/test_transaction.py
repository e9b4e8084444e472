from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from web3 import AsyncWeb3
from web3.exceptions import TimeExhausted

from launchpad_sdk.core.constants import SUPPORTED_CHAINS
from launchpad_sdk.core.constants.base import (
    SUGGESTED_GAS_PRICE_MULTIPLIER,
    SUGGESTED_PRIORITY_FEE_MULTIPLIER,
)
from launchpad_sdk.core.errors import (
    GasEstimationFailedError,
    InsufficientFundsError,
    RpcTimeoutError,
    UserRejectedError,
)
from launchpad_sdk.core.utils.transaction import (
    PRE_EIP_1559_CHAIN_IDS,
    TransactionRevertedError,
    _get_transaction_from_address,
    buffered_gas_limit,
    gas_limit_transaction,
    gas_price_transaction,
    nonce_transaction,
    send_transaction,
    sign_and_broadcast,
    wait_for_transaction_receipt,
)
from launchpad_sdk.core.utils.web3 import get_transaction_chain_id

MODULE = "launchpad_sdk.core.utils.transaction"
RANDOM_USER_0 = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


def _mock_web3(**eth_attrs):
    web3 = MagicMock()
    web3.eth = MagicMock()
    for name, value in eth_attrs.items():
        setattr(web3.eth, name, value)
    web3.provider.disconnect = AsyncMock()
    web3.provider.endpoint_uri = "http://rpc.invalid"
    return web3


class TestGetChainId:
    def test_valid_chain_id(self):
        assert get_transaction_chain_id({"chainId": 97}) == 97

    def test_chain_id_as_string(self):
        assert get_transaction_chain_id({"chainId": "97"}) == 97

    def test_empty_transaction(self):
        with pytest.raises(ValueError, match="Transaction does not contain chainId"):
            get_transaction_chain_id({})


class TestGetFromAddress:
    def test_lowercase_address_converted_to_checksum(self):
        result = _get_transaction_from_address({"from": RANDOM_USER_0.lower()})
        assert AsyncWeb3.is_checksum_address(result)
        assert result == RANDOM_USER_0

    def test_empty_transaction(self):
        with pytest.raises(
            ValueError, match="Transaction does not contain from address"
        ):
            _get_transaction_from_address({})


class TestBufferedGasLimit:
    @pytest.mark.parametrize(
        "estimate,expected",
        [(100_000, 120_000), (21_000, 25_200), (1, 2), (7, 9), (0, 0)],
    )
    def test_ceil_of_twenty_percent(self, estimate, expected):
        assert buffered_gas_limit(estimate) == expected

    def test_never_below_estimate(self):
        for estimate in (1, 3, 999_999, 12_345_678_901):
            assert buffered_gas_limit(estimate) >= estimate

    def test_negative_estimate_rejected(self):
        with pytest.raises(ValueError):
            buffered_gas_limit(-1)


@pytest.mark.asyncio
class TestNonceTransaction:
    @patch(f"{MODULE}.web3s_from_chain_id")
    async def test_multiple_web3s_returns_max_nonce(self, mock_web3s_context):
        web3s = [
            _mock_web3(get_transaction_count=AsyncMock(return_value=n))
            for n in (5, 8, 6)
        ]
        mock_web3s_context.return_value.__aenter__.return_value = web3s

        result = await nonce_transaction({"from": RANDOM_USER_0, "chainId": 97})

        assert result["nonce"] == 8
        for web3 in web3s:
            web3.eth.get_transaction_count.assert_called_once()

    @patch(f"{MODULE}.web3s_from_chain_id")
    async def test_preserves_existing_fields(self, mock_web3s_context):
        web3 = _mock_web3(get_transaction_count=AsyncMock(return_value=5))
        mock_web3s_context.return_value.__aenter__.return_value = [web3]
        transaction = {
            "from": RANDOM_USER_0,
            "chainId": 97,
            "to": RANDOM_USER_0,
            "value": 100,
            "data": "0xabcd",
        }

        result = await nonce_transaction(transaction)

        assert result["nonce"] == 5
        assert {k: result[k] for k in transaction} == transaction
        assert "nonce" not in transaction


@pytest.mark.asyncio
class TestGasPriceTransaction:
    @patch(f"{MODULE}.web3s_from_chain_id")
    async def test_pricing_on_all_chains(self, mock_web3s_context):
        block = MagicMock()
        block.baseFeePerGas = 10_000_000_000
        fee_history = MagicMock()
        fee_history.reward = [[1_000_000_000] for _ in range(10)]
        web3 = _mock_web3(
            get_block=AsyncMock(return_value=block),
            fee_history=AsyncMock(return_value=fee_history),
        )
        mock_web3s_context.return_value.__aenter__.return_value = [web3]

        for chain_id in SUPPORTED_CHAINS:
            # gas_price is an awaitable property; only provide it when used.
            web3.eth.gas_price = (
                AsyncMock(return_value=5_000_000_000)()
                if chain_id in PRE_EIP_1559_CHAIN_IDS
                else None
            )
            result = await gas_price_transaction({"chainId": chain_id})
            if chain_id in PRE_EIP_1559_CHAIN_IDS:
                assert result["gasPrice"] == int(
                    5_000_000_000 * SUGGESTED_GAS_PRICE_MULTIPLIER
                )
                assert "maxFeePerGas" not in result
            else:
                assert "gasPrice" not in result
                assert result["maxPriorityFeePerGas"] == int(
                    1_000_000_000 * SUGGESTED_PRIORITY_FEE_MULTIPLIER
                )
                assert result["maxFeePerGas"] > result["maxPriorityFeePerGas"]


@pytest.mark.asyncio
class TestGasLimitTransaction:
    @patch(f"{MODULE}.web3s_from_chain_id")
    async def test_applies_buffer_to_max_estimate(self, mock_web3s_context):
        sent: list[dict] = []

        async def _estimate(transaction, **_kwargs):
            sent.append(dict(transaction))
            return 100_000

        web3s = [
            _mock_web3(estimate_gas=AsyncMock(side_effect=_estimate)),
            _mock_web3(estimate_gas=AsyncMock(side_effect=ValueError("rpc down"))),
        ]
        mock_web3s_context.return_value.__aenter__.return_value = web3s

        result = await gas_limit_transaction({"chainId": 97, "gas": 1})

        assert result["gas"] == 120_000
        assert sent == [{"chainId": 97}]

    @patch(f"{MODULE}.web3s_from_chain_id")
    async def test_all_rpcs_failing_raises_gas_estimation_failed(
        self, mock_web3s_context
    ):
        web3 = _mock_web3(
            estimate_gas=AsyncMock(side_effect=ValueError("execution reverted"))
        )
        mock_web3s_context.return_value.__aenter__.return_value = [web3]

        with pytest.raises(GasEstimationFailedError):
            await gas_limit_transaction({"chainId": 97})

    @patch(f"{MODULE}.web3s_from_chain_id")
    async def test_insufficient_funds_during_estimation(self, mock_web3s_context):
        web3 = _mock_web3(
            estimate_gas=AsyncMock(
                side_effect=ValueError(
                    {"code": -32000, "message": "insufficient funds for gas * price"}
                )
            )
        )
        mock_web3s_context.return_value.__aenter__.return_value = [web3]

        with pytest.raises(InsufficientFundsError):
            await gas_limit_transaction({"chainId": 97})


@pytest.mark.asyncio
class TestSignAndBroadcast:
    @patch(f"{MODULE}.broadcast_transaction", new_callable=AsyncMock)
    async def test_prefixes_hash(self, mock_broadcast):
        mock_broadcast.return_value = "abc123"

        async def sign_callback(_tx: dict) -> bytes:
            return b"\x01"

        txn_hash = await sign_and_broadcast({"chainId": 97}, sign_callback)

        assert txn_hash == "0xabc123"
        mock_broadcast.assert_awaited_once_with(97, b"\x01")

    @patch(f"{MODULE}.broadcast_transaction", new_callable=AsyncMock)
    async def test_rejected_signature_maps_to_user_rejected(self, mock_broadcast):
        async def sign_callback(_tx: dict) -> bytes:
            raise RuntimeError("User rejected the request.")

        with pytest.raises(UserRejectedError):
            await sign_and_broadcast({"chainId": 97}, sign_callback)
        mock_broadcast.assert_not_awaited()


@pytest.mark.asyncio
class TestWaitForReceipt:
    @patch(f"{MODULE}.web3s_from_chain_id")
    async def test_revert_status_raises(self, mock_web3s_context):
        web3 = _mock_web3(
            wait_for_transaction_receipt=AsyncMock(
                return_value={"status": 0, "blockNumber": 10}
            )
        )
        mock_web3s_context.return_value.__aenter__.return_value = [web3]

        with pytest.raises(TransactionRevertedError) as excinfo:
            await wait_for_transaction_receipt(97, "0xdead")
        assert excinfo.value.tx_hash == "0xdead"

    @patch(f"{MODULE}.web3s_from_chain_id")
    async def test_timeout_is_retryable_and_keeps_hash(self, mock_web3s_context):
        web3 = _mock_web3(
            wait_for_transaction_receipt=AsyncMock(side_effect=TimeExhausted("slow"))
        )
        mock_web3s_context.return_value.__aenter__.return_value = [web3]

        with pytest.raises(RpcTimeoutError) as excinfo:
            await wait_for_transaction_receipt(97, "beef", timeout=1)
        assert excinfo.value.retryable is True
        assert excinfo.value.tx_hash == "0xbeef"


@pytest.mark.asyncio
class TestSendTransaction:
    @patch(f"{MODULE}.wait_for_transaction_receipt", new_callable=AsyncMock)
    @patch(f"{MODULE}.broadcast_transaction", new_callable=AsyncMock)
    @patch(f"{MODULE}.prepare_transaction", new_callable=AsyncMock)
    async def test_raises_on_revert(self, mock_prepare, mock_broadcast, mock_wait):
        mock_prepare.return_value = {
            "from": RANDOM_USER_0,
            "chainId": 97,
            "gas": 50_000,
            "nonce": 1,
            "gasPrice": 1,
        }
        mock_broadcast.return_value = "0xdeadbeef"
        mock_wait.return_value = {"status": 0, "gasUsed": 50_000}

        async def sign_callback(_tx: dict) -> bytes:
            return b"\x00"

        with pytest.raises(TransactionRevertedError, match="likely out of gas"):
            await send_transaction({"from": RANDOM_USER_0, "chainId": 97}, sign_callback)

    @patch(f"{MODULE}.wait_for_transaction_receipt", new_callable=AsyncMock)
    @patch(f"{MODULE}.broadcast_transaction", new_callable=AsyncMock)
    @patch(f"{MODULE}.prepare_transaction", new_callable=AsyncMock)
    async def test_returns_hash_on_success(
        self, mock_prepare, mock_broadcast, mock_wait
    ):
        prepared = {"from": RANDOM_USER_0, "chainId": 97, "gas": 60_000, "nonce": 3}
        mock_prepare.return_value = prepared
        mock_broadcast.return_value = "0xabc"
        mock_wait.return_value = {"status": 1, "gasUsed": 40_000}
        signed: list[dict] = []

        async def sign_callback(tx: dict) -> bytes:
            signed.append(tx)
            return b"\x00"

        txn_hash = await send_transaction(
            {"from": RANDOM_USER_0, "chainId": 97}, sign_callback
        )

        assert txn_hash == "0xabc"
        assert signed == [prepared]
        mock_wait.assert_awaited_once_with(97, "0xabc")

    @patch(f"{MODULE}.wait_for_transaction_receipt", new_callable=AsyncMock)
    @patch(f"{MODULE}.broadcast_transaction", new_callable=AsyncMock)
    @patch(f"{MODULE}.prepare_transaction", new_callable=AsyncMock)
    async def test_skips_receipt_when_not_waiting(
        self, mock_prepare, mock_broadcast, mock_wait
    ):
        mock_prepare.return_value = {"from": RANDOM_USER_0, "chainId": 97}
        mock_broadcast.return_value = "0x01"

        async def sign_callback(_tx: dict) -> bytes:
            return b"\x00"

        await send_transaction(
            {"from": RANDOM_USER_0, "chainId": 97}, sign_callback, wait_for_receipt=False
        )

        mock_wait.assert_not_awaited()
