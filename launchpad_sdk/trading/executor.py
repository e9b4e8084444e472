from __future__ import annotations

from decimal import Decimal

from loguru import logger

from launchpad_sdk.adapters.bonding_curve_adapter.adapter import BondingCurveAdapter
from launchpad_sdk.core.constants.base import TOKEN_DECIMALS
from launchpad_sdk.core.errors import (
    InsufficientFundsError,
    LaunchpadError,
    WalletNotConnectedError,
    classify_error,
)
from launchpad_sdk.core.models import TradeIntent
from launchpad_sdk.core.utils.tokens import ensure_allowance, get_token_balance
from launchpad_sdk.core.utils.transaction import buffered_gas_limit, send_transaction
from launchpad_sdk.core.utils.units import to_base_units, to_token_raw, to_wei_native
from launchpad_sdk.core.wallet import WalletSession, ensure_wallet_chain
from launchpad_sdk.trading.resolver import AmmResolver

__all__ = ["TradeExecutor", "buffered_gas_limit", "compute_minimum_output"]


def compute_minimum_output(
    expected_output: Decimal | float | str,
    slippage_tolerance: Decimal | float | str,
    decimals: int = TOKEN_DECIMALS,
) -> int:
    """``expected * (1 - s/100)`` in base units, rounded down.

    This is the bound sent on-chain; a quote's ``minimum_output`` is ignored.
    """
    expected = Decimal(str(expected_output))
    slippage = Decimal(str(slippage_tolerance))
    if expected < 0:
        raise ValueError("Expected output must be non-negative")
    if slippage < 0 or slippage >= 100:
        raise ValueError("Slippage tolerance must be in [0, 100)")
    bound = expected * (Decimal(1) - slippage / Decimal(100))
    return to_base_units(bound, decimals)


class TradeExecutor:
    def __init__(
        self,
        wallet: WalletSession | None,
        resolver: AmmResolver,
        curve: BondingCurveAdapter,
    ) -> None:
        self.wallet = wallet
        self.resolver = resolver
        self.curve = curve
        self.chain_id = curve.chain_id
        self.logger = logger.bind(component="TradeExecutor", chain_id=self.chain_id)

    async def execute_trade(self, intent: TradeIntent) -> str:
        wallet = self.wallet
        if wallet is None or not wallet.connected or not wallet.address:
            raise WalletNotConnectedError()

        try:
            await ensure_wallet_chain(wallet, self.chain_id, "trade this token")
            pool = await self.resolver.resolve_pool_address(intent.token_address)
            if intent.action == "buy":
                return await self._buy(wallet, pool, intent)
            return await self._sell(wallet, pool, intent)
        except LaunchpadError:
            raise
        except Exception as exc:
            error = classify_error(exc)
            self.logger.error(f"{intent.action} {intent.token_address} failed: {exc}")
            raise error from exc

    async def _buy(self, wallet: WalletSession, pool: str, intent: TradeIntent) -> str:
        value = to_wei_native(intent.base_amount)
        min_tokens_out = compute_minimum_output(
            intent.expected_output, intent.slippage_tolerance
        )
        self.logger.info(
            f"Buying {intent.token_address} with {value} wei, "
            f"minTokensOut={min_tokens_out}"
        )
        transaction = await self.curve.build_buy_transaction(
            pool,
            min_tokens_out=min_tokens_out,
            value=value,
            from_address=wallet.address,
        )
        return await send_transaction(transaction, wallet.sign_transaction)

    async def _sell(self, wallet: WalletSession, pool: str, intent: TradeIntent) -> str:
        token_amount = to_token_raw(intent.base_amount)
        min_native_out = compute_minimum_output(
            intent.expected_output, intent.slippage_tolerance
        )

        balance = await get_token_balance(
            intent.token_address, self.chain_id, wallet.address
        )
        if balance < token_amount:
            raise InsufficientFundsError(
                f"Insufficient token balance: have {balance}, need {token_amount}."
            )

        approved, approve_hash = await ensure_allowance(
            token_address=intent.token_address,
            owner=wallet.address,
            spender=pool,
            amount=token_amount,
            chain_id=self.chain_id,
            signing_callback=wallet.sign_transaction,
        )
        if approved:
            self.logger.info(f"Approval confirmed: {approve_hash}")

        self.logger.info(
            f"Selling {token_amount} of {intent.token_address}, "
            f"minNativeOut={min_native_out}"
        )
        transaction = await self.curve.build_sell_transaction(
            pool,
            token_amount=token_amount,
            min_native_out=min_native_out,
            from_address=wallet.address,
        )
        return await send_transaction(transaction, wallet.sign_transaction)
