from __future__ import annotations

import asyncio
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from launchpad_sdk.adapters.bonding_curve_adapter.adapter import BondingCurveAdapter
from launchpad_sdk.adapters.factory_adapter.adapter import TokenFactoryAdapter
from launchpad_sdk.core.adapters.BaseAdapter import BaseAdapter, require_wallet
from launchpad_sdk.core.adapters.decorators import status_tuple
from launchpad_sdk.core.config import get_default_chain_id, get_token_factory_address
from launchpad_sdk.core.errors import (
    ChainNotConfiguredError,
    ContractsNotInitializedError,
    LaunchpadError,
    classify_error,
)
from launchpad_sdk.core.models import (
    CreationResult,
    DeploymentResult,
    SwapQuote,
    TokenCreationForm,
    TokenInfo,
    TradeAction,
    TradeIntent,
)
from launchpad_sdk.core.utils.tokens import (
    build_approve_transaction,
    get_erc20_metadata,
    get_token_allowance,
    get_token_balance,
    get_token_total_supply,
)
from launchpad_sdk.core.utils.transaction import send_transaction
from launchpad_sdk.core.utils.units import from_wei, to_token_raw
from launchpad_sdk.core.wallet import WalletSession, ensure_wallet_chain
from launchpad_sdk.deployment.creation import create_token_on_chain
from launchpad_sdk.deployment.orchestrator import DeploymentOrchestrator
from launchpad_sdk.deployment.state import DeploymentMode
from launchpad_sdk.trading.executor import TradeExecutor
from launchpad_sdk.trading.quotes import QuoteEngine
from launchpad_sdk.trading.resolver import AmmAddressCache, AmmResolver


class LaunchpadAdapter(BaseAdapter):
    """UI-facing surface over the launchpad contracts on one active chain.

    Read methods return ``(True, data)`` or ``(False, ErrorInfo)`` and never
    raise. Write methods raise typed ``LaunchpadError`` subclasses.
    """

    adapter_type = "LAUNCHPAD"

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        *,
        wallet: WalletSession | None = None,
        cache: AmmAddressCache | None = None,
    ) -> None:
        super().__init__("launchpad_adapter", config)
        self.wallet = wallet
        self.cache = cache if cache is not None else AmmAddressCache()
        chain_id = self.config.get("chain_id")
        if chain_id is None:
            chain_id = wallet.chain_id if wallet is not None else get_default_chain_id()
        self.chain_id = int(chain_id)
        self.initialized = False

        self.factory: TokenFactoryAdapter | None = None
        self.curve: BondingCurveAdapter | None = None
        self.resolver: AmmResolver | None = None
        self.quotes: QuoteEngine | None = None
        self.executor: TradeExecutor | None = None
        self.orchestrator = DeploymentOrchestrator(
            wallet,
            self.cache,
            mode=DeploymentMode(self.config.get("deployment_mode", "sequential")),
        )

    def _build_components(self, factory_address: str) -> None:
        self.factory = TokenFactoryAdapter(self.chain_id, factory_address, self.config)
        self.curve = BondingCurveAdapter(self.chain_id, self.config)
        self.resolver = AmmResolver(self.factory, self.cache)
        self.quotes = QuoteEngine(self.resolver, self.curve)
        self.executor = TradeExecutor(self.wallet, self.resolver, self.curve)

    def _require_initialized(self) -> None:
        if not self.initialized or self.resolver is None:
            raise ContractsNotInitializedError()

    @status_tuple
    async def initialize(self) -> dict[str, Any]:
        factory_address = get_token_factory_address(self.chain_id)
        if not factory_address:
            raise ChainNotConfiguredError(
                f"Token factory address not configured for chain {self.chain_id}"
            )
        self._build_components(factory_address)

        token_count: int | None = None
        try:
            token_count = len(await self.factory.get_all_tokens())
        except Exception as exc:
            # An unreachable factory still leaves writes and lookups usable.
            self.logger.warning(f"Factory validation read failed: {exc}")
        self.initialized = True
        self.logger.info(
            f"Launchpad initialized on chain {self.chain_id} "
            f"(factory {self.factory.factory_address}, tokens={token_count})"
        )
        return {
            "chain_id": self.chain_id,
            "factory_address": self.factory.factory_address,
            "token_count": token_count,
        }

    @status_tuple
    async def get_swap_quote(
        self, token_address: str, amount: Decimal | float | str, action: TradeAction
    ) -> SwapQuote:
        self._require_initialized()
        return await self.quotes.get_swap_quote(token_address, amount, action)

    @status_tuple
    async def get_all_tokens(self) -> list[str]:
        self._require_initialized()
        return await self.factory.get_all_tokens()

    @status_tuple
    async def resolve_pool_address(self, token_address: str) -> str:
        self._require_initialized()
        return await self.resolver.resolve_pool_address(token_address)

    @status_tuple
    async def get_token_info(
        self, token_address: str, *, include_creator: bool = False
    ) -> TokenInfo | None:
        self._require_initialized()
        if not await self.factory.is_known_token(token_address):
            return None

        token_config, (symbol, name, _), total_supply = await asyncio.gather(
            self.factory.get_token_config(token_address),
            get_erc20_metadata(token_address, self.chain_id),
            get_token_total_supply(token_address, self.chain_id),
        )
        pool = await self.resolver.resolve_pool_address(token_address)
        state = await self.curve.get_trading_info(pool)

        creator: str | None = None
        created_at: int | None = None
        if include_creator:
            event = await self.resolver.find_creation_event(token_address)
            if event is not None:
                creator, created_at = event.creator, event.timestamp

        current_supply = from_wei(state.current_supply)
        price = from_wei(state.current_price)
        return TokenInfo(
            address=token_address,
            chain_id=self.chain_id,
            name=token_config.name or name,
            symbol=token_config.symbol or symbol,
            description=token_config.description,
            image=token_config.image_url,
            creator=creator,
            created_at=created_at,
            total_supply=from_wei(total_supply),
            current_supply=current_supply,
            market_cap=current_supply * price,
            price=price,
            volume=from_wei(state.total_volume),
            curve_type=token_config.curve_type,
            bonding_curve_progress=state.graduation_progress,
            amm_address=pool,
            is_graduated=state.is_graduated,
        )

    @status_tuple
    @require_wallet
    async def get_token_balance(self, token_address: str | None = None) -> float:
        balance = await get_token_balance(
            token_address, self.chain_id, self.wallet.address
        )
        return from_wei(balance)

    @status_tuple
    @require_wallet
    async def get_allowance(
        self, token_address: str, spender_address: str | None = None
    ) -> float:
        self._require_initialized()
        spender = spender_address or await self.resolver.resolve_pool_address(
            token_address
        )
        allowance = await get_token_allowance(
            token_address, self.chain_id, self.wallet.address, spender
        )
        return from_wei(allowance)

    @require_wallet
    async def execute_trade(self, intent: TradeIntent) -> str:
        self._require_initialized()
        return await self.executor.execute_trade(intent)

    @require_wallet
    async def create_token(
        self, form: TokenCreationForm, image_url: str | None = None
    ) -> CreationResult:
        self._require_initialized()
        return await create_token_on_chain(
            self.wallet, self.chain_id, form, image_url=image_url, cache=self.cache
        )

    @require_wallet
    async def approve_token(
        self,
        token_address: str,
        spender_address: str,
        amount: Decimal | float | str,
    ) -> str:
        try:
            await ensure_wallet_chain(self.wallet, self.chain_id, "approve this token")
            transaction = await build_approve_transaction(
                from_address=self.wallet.address,
                chain_id=self.chain_id,
                token_address=token_address,
                spender_address=spender_address,
                amount=to_token_raw(amount),
            )
            return await send_transaction(transaction, self.wallet.sign_transaction)
        except LaunchpadError:
            raise
        except Exception as exc:
            raise classify_error(exc) from exc

    async def deploy_to_multiple_chains(
        self,
        chain_ids: Iterable[int],
        form: TokenCreationForm,
        image_url: str | None = None,
    ) -> dict[int, DeploymentResult]:
        return await self.orchestrator.deploy_to_multiple_chains(
            chain_ids, form, image_url
        )
