from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from eth_utils import to_checksum_address

from launchpad_sdk.core.adapters.BaseAdapter import BaseAdapter
from launchpad_sdk.core.config import get_rpc_read_timeout
from launchpad_sdk.core.constants.base import BASIS_POINTS_PER_PERCENT
from launchpad_sdk.core.constants.launchpad_abi import BONDING_CURVE_AMM_ABI
from launchpad_sdk.core.models import PoolState
from launchpad_sdk.core.utils.retry import is_timeout, retry_async, with_timeout
from launchpad_sdk.core.utils.transaction import encode_call
from launchpad_sdk.core.utils.web3 import web3_from_chain_id

T = TypeVar("T")


class BondingCurveAdapter(BaseAdapter):
    """Reads and unsigned writes against a token's bonding-curve pool.

    Pricing lives in the pool contract; every amount here is in wei and every
    read is against the latest block.
    """

    adapter_type = "BONDING_CURVE"

    def __init__(self, chain_id: int, config: dict[str, Any] | None = None) -> None:
        super().__init__("bonding_curve_adapter", config)
        self.chain_id = int(chain_id)
        self.read_timeout_s = float(
            self.config.get("rpc_read_seconds", get_rpc_read_timeout())
        )

    async def _read(
        self, pool_address: str, what: str, fn: Callable[[Any], Awaitable[T]]
    ) -> T:
        pool = to_checksum_address(pool_address)

        async def _once() -> T:
            async with web3_from_chain_id(self.chain_id) as web3:
                contract = web3.eth.contract(address=pool, abi=BONDING_CURVE_AMM_ABI)
                return await with_timeout(fn(contract), self.read_timeout_s, what=what)

        return await retry_async(_once, should_retry=is_timeout)

    async def get_trading_info(self, pool_address: str) -> PoolState:
        (
            current_supply,
            current_price,
            total_volume,
            graduation_bps,
            is_graduated,
        ) = await self._read(
            pool_address,
            "getTradingInfo",
            lambda c: c.functions.getTradingInfo().call(block_identifier="latest"),
        )
        return PoolState(
            current_supply=int(current_supply),
            current_price=int(current_price),
            total_volume=int(total_volume),
            graduation_progress=int(graduation_bps) / BASIS_POINTS_PER_PERCENT,
            is_graduated=bool(is_graduated),
        )

    async def calculate_tokens_out(
        self, pool_address: str, native_in_wei: int, supply: int
    ) -> int:
        return int(
            await self._read(
                pool_address,
                "calculateTokensOut",
                lambda c: c.functions.calculateTokensOut(
                    int(native_in_wei), int(supply)
                ).call(),
            )
        )

    async def calculate_native_out(
        self, pool_address: str, tokens_in_wei: int, supply: int
    ) -> int:
        return int(
            await self._read(
                pool_address,
                "calculateNativeOut",
                lambda c: c.functions.calculateNativeOut(
                    int(tokens_in_wei), int(supply)
                ).call(),
            )
        )

    async def get_price_impact_bps(
        self, pool_address: str, amount_wei: int, is_buy: bool
    ) -> int:
        return int(
            await self._read(
                pool_address,
                "getPriceImpact",
                lambda c: c.functions.getPriceImpact(
                    int(amount_wei), bool(is_buy)
                ).call(),
            )
        )

    async def get_current_price(self, pool_address: str) -> int:
        return int(
            await self._read(
                pool_address,
                "getCurrentPrice",
                lambda c: c.functions.getCurrentPrice().call(),
            )
        )

    async def quote_amounts(
        self, pool_address: str, amount_wei: int, is_buy: bool, supply: int
    ) -> tuple[int, int]:
        """``(output_wei, price_impact_bps)`` at ``supply``."""
        if is_buy:
            out_coro = self.calculate_tokens_out(pool_address, amount_wei, supply)
        else:
            out_coro = self.calculate_native_out(pool_address, amount_wei, supply)
        output, impact = await asyncio.gather(
            out_coro, self.get_price_impact_bps(pool_address, amount_wei, is_buy)
        )
        return output, impact

    async def build_buy_transaction(
        self,
        pool_address: str,
        *,
        min_tokens_out: int,
        value: int,
        from_address: str,
    ) -> dict[str, Any]:
        return await encode_call(
            target=pool_address,
            abi=BONDING_CURVE_AMM_ABI,
            fn_name="buyTokens",
            args=[int(min_tokens_out)],
            from_address=from_address,
            chain_id=self.chain_id,
            value=int(value),
        )

    async def build_sell_transaction(
        self,
        pool_address: str,
        *,
        token_amount: int,
        min_native_out: int,
        from_address: str,
    ) -> dict[str, Any]:
        return await encode_call(
            target=pool_address,
            abi=BONDING_CURVE_AMM_ABI,
            fn_name="sellTokens",
            args=[int(token_amount), int(min_native_out)],
            from_address=from_address,
            chain_id=self.chain_id,
        )
