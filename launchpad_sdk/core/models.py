from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from launchpad_sdk.core.constants.base import (
    CURVE_TYPE_CODES,
    DEFAULT_QUOTE_GAS_FEE,
    ROUTE_AMM,
    ROUTE_BONDING_CURVE,
)

TradeAction = Literal["buy", "sell"]
CurveType = Literal["linear", "exponential"]
Route = Literal["bonding-curve", "amm"]


class TokenDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    chain_id: int
    name: str
    symbol: str
    description: str = ""
    image_url: str = ""
    creator: str | None = None
    total_supply: Decimal


class TokenConfig(BaseModel):
    name: str
    symbol: str
    description: str = ""
    image_url: str = ""
    total_supply: int
    base_price: int
    slope: int
    curve_type: CurveType
    graduation_threshold: int = 0

    @classmethod
    def from_chain(cls, raw: tuple | list) -> TokenConfig:
        (
            name,
            symbol,
            description,
            image_url,
            total_supply,
            base_price,
            slope,
            curve_type,
            graduation_threshold,
        ) = raw
        return cls(
            name=name,
            symbol=symbol,
            description=description,
            image_url=image_url,
            total_supply=int(total_supply),
            base_price=int(base_price),
            slope=int(slope),
            curve_type="linear" if int(curve_type) == 0 else "exponential",
            graduation_threshold=int(graduation_threshold),
        )


class PoolState(BaseModel):
    """Pool trading info as of the block it was read at. Never cached."""

    model_config = ConfigDict(frozen=True)

    current_supply: int
    current_price: int
    total_volume: int
    # 0-100, converted from the pool's basis points
    graduation_progress: float
    is_graduated: bool

    @property
    def route(self) -> Route:
        return ROUTE_AMM if self.is_graduated else ROUTE_BONDING_CURVE


class SwapQuote(BaseModel):
    """Point-in-time estimate. ``minimum_output`` is display-only."""

    model_config = ConfigDict(frozen=True)

    input_amount: Decimal
    output_amount: Decimal
    price_impact: float
    slippage: float
    gas_fee: float = DEFAULT_QUOTE_GAS_FEE
    route: Route
    minimum_output: Decimal


class TradeIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    token_address: str
    action: TradeAction
    base_amount: Decimal = Field(gt=0)
    slippage_tolerance: Decimal = Field(ge=0, lt=100)
    expected_output: Decimal = Field(ge=0)
    price_impact: float = 0.0
    gas_fee: float = 0.0

    @classmethod
    def from_quote(
        cls,
        token_address: str,
        action: TradeAction,
        amount: Decimal | float | str,
        quote: SwapQuote,
        slippage_tolerance: Decimal | float | str,
    ) -> TradeIntent:
        return cls(
            token_address=token_address,
            action=action,
            base_amount=Decimal(str(amount)),
            slippage_tolerance=Decimal(str(slippage_tolerance)),
            expected_output=quote.output_amount,
            price_impact=quote.price_impact,
            gas_fee=quote.gas_fee,
        )


class TokenCreationForm(BaseModel):
    name: str = Field(min_length=1)
    symbol: str = Field(min_length=1)
    description: str = ""
    total_supply: Decimal = Field(gt=0)
    curve_type: CurveType = "linear"
    base_price: Decimal = Field(gt=0)
    slope: Decimal = Field(ge=0)

    @field_validator("symbol")
    @classmethod
    def _upper_symbol(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def curve_type_code(self) -> int:
        return CURVE_TYPE_CODES[self.curve_type]


class TokenInfo(BaseModel):
    address: str
    chain_id: int
    name: str
    symbol: str
    description: str = ""
    image: str = ""
    creator: str | None = None
    created_at: int | None = None
    total_supply: float
    current_supply: float
    market_cap: float
    price: float
    volume: float
    curve_type: CurveType
    bonding_curve_progress: float
    amm_address: str
    is_graduated: bool

    @property
    def descriptor(self) -> TokenDescriptor:
        return TokenDescriptor(
            address=self.address,
            chain_id=self.chain_id,
            name=self.name,
            symbol=self.symbol,
            description=self.description,
            image_url=self.image,
            creator=self.creator,
            total_supply=Decimal(str(self.total_supply)),
        )


class CreationResult(BaseModel):
    token_address: str
    pool_address: str
    tx_hash: str
    chain_id: int
    descriptor: TokenDescriptor | None = None


class DeploymentResult(BaseModel):
    chain_id: int
    chain_name: str
    success: bool
    token_address: str | None = None
    pool_address: str | None = None
    tx_hash: str | None = None
    error: str | None = None
    error_code: str | None = None
