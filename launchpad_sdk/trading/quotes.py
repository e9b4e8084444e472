from __future__ import annotations

import asyncio
from decimal import Decimal

from loguru import logger

from launchpad_sdk.adapters.bonding_curve_adapter.adapter import BondingCurveAdapter
from launchpad_sdk.core.config import get_quote_debounce_seconds
from launchpad_sdk.core.constants.base import (
    BASIS_POINTS_PER_PERCENT,
    DEFAULT_QUOTE_GAS_FEE,
    DEFAULT_QUOTE_SLIPPAGE_PERCENT,
    NATIVE_DECIMALS,
    TOKEN_DECIMALS,
)
from launchpad_sdk.core.errors import QuoteUnavailableError, RpcTimeoutError
from launchpad_sdk.core.models import SwapQuote, TradeAction
from launchpad_sdk.core.utils.retry import is_timeout
from launchpad_sdk.core.utils.units import from_base_units, to_base_units
from launchpad_sdk.trading.resolver import AmmResolver


def advisory_minimum_output(output_amount: Decimal) -> Decimal:
    factor = Decimal(1) - Decimal(str(DEFAULT_QUOTE_SLIPPAGE_PERCENT)) / Decimal(100)
    return output_amount * factor


class QuoteEngine:
    def __init__(self, resolver: AmmResolver, curve: BondingCurveAdapter) -> None:
        self.resolver = resolver
        self.curve = curve
        self.logger = logger.bind(component="QuoteEngine", chain_id=curve.chain_id)

    async def get_swap_quote(
        self, token_address: str, amount: Decimal | float | str, action: TradeAction
    ) -> SwapQuote:
        if action not in ("buy", "sell"):
            raise QuoteUnavailableError(f"Unknown trade action: {action}")
        try:
            amount_dec = Decimal(str(amount))
        except ArithmeticError as exc:
            raise QuoteUnavailableError(f"Invalid amount: {amount}") from exc
        if not amount_dec.is_finite() or amount_dec <= 0:
            raise QuoteUnavailableError("Amount must be greater than zero.")

        is_buy = action == "buy"
        in_decimals = NATIVE_DECIMALS if is_buy else TOKEN_DECIMALS
        out_decimals = TOKEN_DECIMALS if is_buy else NATIVE_DECIMALS
        amount_wei = to_base_units(amount_dec, in_decimals)

        try:
            pool = await self.resolver.resolve_pool_address(token_address)
            state = await self.curve.get_trading_info(pool)
            output_wei, impact_bps = await self.curve.quote_amounts(
                pool, amount_wei, is_buy, state.current_supply
            )
        except Exception as exc:
            if is_timeout(exc):
                raise RpcTimeoutError(f"Quote for {token_address} timed out") from exc
            self.logger.warning(f"Quote failed for {token_address}: {exc}")
            raise QuoteUnavailableError() from exc

        output_amount = from_base_units(output_wei, out_decimals)
        return SwapQuote(
            input_amount=amount_dec,
            output_amount=output_amount,
            price_impact=impact_bps / BASIS_POINTS_PER_PERCENT,
            slippage=DEFAULT_QUOTE_SLIPPAGE_PERCENT,
            gas_fee=DEFAULT_QUOTE_GAS_FEE,
            route=state.route,
            minimum_output=advisory_minimum_output(output_amount),
        )


class DebouncedQuoter:
    """Debounce quote reads so only the most recently issued request applies.

    Each ``request`` bumps a generation counter. A request whose generation is
    no longer current after the debounce delay, or after its read returns,
    resolves to ``None`` and leaves ``latest`` untouched.
    """

    def __init__(self, engine: QuoteEngine, delay_s: float | None = None) -> None:
        self.engine = engine
        self.delay_s = get_quote_debounce_seconds() if delay_s is None else delay_s
        self.latest: SwapQuote | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def cancel(self) -> None:
        self._generation += 1

    async def request(
        self, token_address: str, amount: Decimal | float | str, action: TradeAction
    ) -> SwapQuote | None:
        self._generation += 1
        generation = self._generation

        await asyncio.sleep(self.delay_s)
        if generation != self._generation:
            return None

        try:
            quote = await self.engine.get_swap_quote(token_address, amount, action)
        except Exception:
            if generation != self._generation:
                return None
            raise
        if generation != self._generation:
            return None

        self.latest = quote
        return quote
