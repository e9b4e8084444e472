from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation

from launchpad_sdk.core.constants.base import NATIVE_DECIMALS, TOKEN_DECIMALS


def _to_decimal(value: str | int | float | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Decimal(value)
    return Decimal(str(value).strip())


def to_base_units(amount: str | int | float | Decimal, decimals: int) -> int:
    try:
        amt = _to_decimal(amount)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {amount}") from exc
    if not amt.is_finite():
        raise ValueError(f"Invalid amount: {amount}")
    if amt < 0:
        raise ValueError("Amount must be non-negative")
    scale = Decimal(10) ** int(decimals)
    return int((amt * scale).to_integral_value(rounding=ROUND_DOWN))


def to_wei_native(amount: str | int | float | Decimal) -> int:
    return to_base_units(amount, NATIVE_DECIMALS)


def to_token_raw(amount: str | int | float | Decimal) -> int:
    return to_base_units(amount, TOKEN_DECIMALS)


def from_base_units(raw: int, decimals: int) -> Decimal:
    return Decimal(int(raw)) / (Decimal(10) ** int(decimals))


def from_wei(raw: int) -> float:
    """Human-readable float for display models; never feed it back into math."""
    return float(from_base_units(raw, NATIVE_DECIMALS))
