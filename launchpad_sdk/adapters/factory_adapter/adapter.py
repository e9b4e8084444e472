from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from eth_utils import event_abi_to_log_topic, to_checksum_address
from web3.exceptions import Web3RPCError

from launchpad_sdk.core.adapters.BaseAdapter import BaseAdapter
from launchpad_sdk.core.chains import get_chain_name
from launchpad_sdk.core.config import (
    get_factory_deploy_block,
    get_rpc_read_timeout,
    get_supported_chains,
    get_token_factory_address,
)
from launchpad_sdk.core.constants.base import DEFAULT_LOG_SCAN_CHUNK_SIZE
from launchpad_sdk.core.constants.launchpad_abi import (
    ENHANCED_TOKEN_CREATED_EVENT_ABI,
    LEGACY_TOKEN_CREATED_EVENT_ABI,
    TOKEN_FACTORY_ABI,
)
from launchpad_sdk.core.errors import ChainNotConfiguredError
from launchpad_sdk.core.models import TokenConfig, TokenCreationForm
from launchpad_sdk.core.utils.retry import is_timeout, retry_async, with_timeout
from launchpad_sdk.core.utils.transaction import encode_call
from launchpad_sdk.core.utils.units import to_wei_native
from launchpad_sdk.core.utils.web3 import web3_from_chain_id

T = TypeVar("T")

ENHANCED_TOKEN_CREATED_TOPIC = "0x" + event_abi_to_log_topic(
    ENHANCED_TOKEN_CREATED_EVENT_ABI
).hex()
LEGACY_TOKEN_CREATED_TOPIC = "0x" + event_abi_to_log_topic(
    LEGACY_TOKEN_CREATED_EVENT_ABI
).hex()
TOKEN_CREATED_TOPICS = (ENHANCED_TOKEN_CREATED_TOPIC, LEGACY_TOKEN_CREATED_TOPIC)


def address_topic(address: str) -> str:
    return "0x" + "00" * 12 + to_checksum_address(address)[2:].lower()


class TokenFactoryAdapter(BaseAdapter):
    adapter_type = "TOKEN_FACTORY"

    def __init__(
        self,
        chain_id: int,
        factory_address: str | None = None,
        config: dict[str, Any] | None = None,
    ) -> None:
        super().__init__("factory_adapter", config)
        self.chain_id = int(chain_id)
        address = factory_address or get_token_factory_address(self.chain_id)
        if not address:
            supported = ", ".join(
                f"{get_chain_name(c)} ({c})" for c in get_supported_chains()
            )
            raise ChainNotConfiguredError(
                f"Token factory not deployed on {get_chain_name(self.chain_id)} "
                f"(chain {self.chain_id}). Supported chains: {supported or 'none'}"
            )
        self.factory_address = to_checksum_address(address)
        self.read_timeout_s = float(
            self.config.get("rpc_read_seconds", get_rpc_read_timeout())
        )

    async def _read(self, what: str, fn: Callable[[Any], Awaitable[T]]) -> T:
        async def _once() -> T:
            async with web3_from_chain_id(self.chain_id) as web3:
                contract = web3.eth.contract(
                    address=self.factory_address, abi=TOKEN_FACTORY_ABI
                )
                return await with_timeout(
                    fn(contract), self.read_timeout_s, what=what
                )

        return await retry_async(
            _once,
            should_retry=is_timeout,
            on_retry=lambda attempt, exc, delay: self.logger.warning(
                f"{what} timed out (attempt {attempt + 1}); retrying in {delay:.2f}s"
            ),
        )

    async def get_all_tokens(self) -> list[str]:
        tokens = await self._read(
            "getAllTokens", lambda c: c.functions.getAllTokens().call()
        )
        return [to_checksum_address(t) for t in tokens or []]

    async def get_token_config(self, token_address: str) -> TokenConfig:
        token = to_checksum_address(token_address)
        raw = await self._read(
            "getTokenConfig", lambda c: c.functions.getTokenConfig(token).call()
        )
        return TokenConfig.from_chain(raw)

    async def get_token_amm(self, token_address: str) -> str:
        token = to_checksum_address(token_address)
        return await self._read(
            "getTokenAMM", lambda c: c.functions.getTokenAMM(token).call()
        )

    async def is_known_token(self, token_address: str) -> bool:
        token = to_checksum_address(token_address)
        return bool(
            await self._read(
                "isKasPumpToken", lambda c: c.functions.isKasPumpToken(token).call()
            )
        )

    async def creation_fee(self) -> int:
        return int(
            await self._read(
                "CREATION_FEE", lambda c: c.functions.CREATION_FEE().call()
            )
        )

    async def get_token_created_logs(
        self,
        token_address: str,
        *,
        from_block: int | None = None,
        chunk_size: int = DEFAULT_LOG_SCAN_CHUNK_SIZE,
    ) -> list[Any]:
        """Walk back from the head and return the first chunk with creation logs.

        Both event shapes index the token as the first topic, so one filter
        covers legacy and enhanced factories.
        """
        start = from_block
        if start is None:
            start = get_factory_deploy_block(self.chain_id)
        topics = [list(TOKEN_CREATED_TOPICS), address_topic(token_address)]

        async with web3_from_chain_id(self.chain_id) as web3:
            head = await with_timeout(
                web3.eth.block_number, self.read_timeout_s, what="eth_blockNumber"
            )
            chunk = max(1, int(chunk_size))
            cur_to = int(head)
            while cur_to >= start:
                cur_from = max(start, cur_to - chunk + 1)
                try:
                    batch = await with_timeout(
                        web3.eth.get_logs(
                            {
                                "fromBlock": cur_from,
                                "toBlock": cur_to,
                                "address": self.factory_address,
                                "topics": topics,
                            }
                        ),
                        self.read_timeout_s,
                        what="eth_getLogs",
                    )
                except Web3RPCError:
                    # Provider refused due to response size; reduce chunk and retry.
                    if chunk == 1:
                        raise
                    chunk = max(1, chunk // 2)
                    continue
                if batch:
                    return list(batch)
                cur_to = cur_from - 1
        return []

    async def build_create_token_transaction(
        self,
        form: TokenCreationForm,
        *,
        from_address: str,
        value: int,
        image_url: str | None = None,
    ) -> dict[str, Any]:
        return await encode_call(
            target=self.factory_address,
            abi=TOKEN_FACTORY_ABI,
            fn_name="createToken",
            args=[
                form.name,
                form.symbol,
                form.description,
                image_url or "",
                to_wei_native(form.total_supply),
                to_wei_native(form.base_price),
                to_wei_native(form.slope),
                form.curve_type_code,
            ],
            from_address=from_address,
            chain_id=self.chain_id,
            value=value,
        )
