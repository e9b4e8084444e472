"""Closed error taxonomy for launchpad reads, trades and deployments.

Provider and library failures are folded into a small set of kinds so callers
can branch on *what went wrong* instead of on provider-specific strings.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel
from web3.exceptions import ContractLogicError, TimeExhausted


class ErrorKind(StrEnum):
    WALLET_NOT_CONNECTED = "WALLET_NOT_CONNECTED"
    CONTRACTS_NOT_INITIALIZED = "CONTRACTS_NOT_INITIALIZED"
    POOL_NOT_FOUND = "POOL_NOT_FOUND"
    QUOTE_UNAVAILABLE = "QUOTE_UNAVAILABLE"
    GAS_ESTIMATION_FAILED = "GAS_ESTIMATION_FAILED"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    USER_REJECTED = "USER_REJECTED"
    SLIPPAGE_EXCEEDED = "SLIPPAGE_EXCEEDED"
    NONCE_ERROR = "NONCE_ERROR"
    CHAIN_NOT_CONFIGURED = "CHAIN_NOT_CONFIGURED"
    CREATION_EVENT_NOT_FOUND = "CREATION_EVENT_NOT_FOUND"
    TIMEOUT = "TIMEOUT"
    CONTRACT_ERROR = "CONTRACT_ERROR"


RETRYABLE_KINDS: frozenset[ErrorKind] = frozenset(
    {ErrorKind.SLIPPAGE_EXCEEDED, ErrorKind.NONCE_ERROR, ErrorKind.TIMEOUT}
)


class ErrorInfo(BaseModel):
    code: ErrorKind
    message: str
    retryable: bool = False
    tx_hash: str | None = None


class LaunchpadError(RuntimeError):
    kind: ErrorKind = ErrorKind.CONTRACT_ERROR
    default_message: str = "Contract interaction failed."

    def __init__(self, message: str | None = None, *, tx_hash: str | None = None):
        self.message = message or self.default_message
        self.tx_hash = tx_hash
        super().__init__(self.message)

    @property
    def retryable(self) -> bool:
        return self.kind in RETRYABLE_KINDS

    def to_info(self) -> ErrorInfo:
        return ErrorInfo(
            code=self.kind,
            message=self.message,
            retryable=self.retryable,
            tx_hash=self.tx_hash,
        )


class WalletNotConnectedError(LaunchpadError):
    kind = ErrorKind.WALLET_NOT_CONNECTED
    default_message = "Wallet not connected."


class ContractsNotInitializedError(LaunchpadError):
    kind = ErrorKind.CONTRACTS_NOT_INITIALIZED
    default_message = "Contracts not initialized."


class PoolNotFoundError(LaunchpadError):
    kind = ErrorKind.POOL_NOT_FOUND
    default_message = "No liquidity pool found for this token."


class QuoteUnavailableError(LaunchpadError):
    kind = ErrorKind.QUOTE_UNAVAILABLE
    default_message = "A quote is not available for this token right now."


class GasEstimationFailedError(LaunchpadError):
    kind = ErrorKind.GAS_ESTIMATION_FAILED
    default_message = "Unable to estimate gas. Transaction may fail."


class InsufficientFundsError(LaunchpadError):
    kind = ErrorKind.INSUFFICIENT_FUNDS
    default_message = "Insufficient balance for transaction and gas fees."


class UserRejectedError(LaunchpadError):
    kind = ErrorKind.USER_REJECTED
    default_message = "Transaction was rejected by user."


class SlippageExceededError(LaunchpadError):
    kind = ErrorKind.SLIPPAGE_EXCEEDED
    default_message = (
        "Transaction failed due to slippage. Try increasing slippage tolerance."
    )


class NonceError(LaunchpadError):
    kind = ErrorKind.NONCE_ERROR
    default_message = "Transaction nonce error. Please try again."


class ChainNotConfiguredError(LaunchpadError):
    kind = ErrorKind.CHAIN_NOT_CONFIGURED
    default_message = "Token factory is not deployed on this chain."


class CreationEventNotFoundError(LaunchpadError):
    kind = ErrorKind.CREATION_EVENT_NOT_FOUND
    default_message = "TokenCreated event not found."


class RpcTimeoutError(LaunchpadError):
    kind = ErrorKind.TIMEOUT
    default_message = "The network took too long to respond. Please retry."


class ContractError(LaunchpadError):
    kind = ErrorKind.CONTRACT_ERROR


class InvalidStateTransition(ValueError):
    pass


_USER_REJECTED_MARKERS = ("user rejected", "user denied", "rejected by user")
_INSUFFICIENT_FUNDS_MARKERS = ("insufficient funds", "insufficient balance")
_NONCE_MARKERS = ("nonce too low", "nonce too high", "replacement transaction")
_SLIPPAGE_MARKERS = ("slippage", "insufficient output", "too little received")
_GAS_MARKERS = ("gas required exceeds", "cannot estimate gas", "unpredictable_gas")


def _error_code(exc: BaseException) -> Any:
    code = getattr(exc, "code", None)
    if code is not None:
        return code
    args = getattr(exc, "args", ())
    if args and isinstance(args[0], dict):
        return args[0].get("code")
    return None


def _error_text(exc: BaseException) -> str:
    parts = [str(exc)]
    for attr in ("message", "reason"):
        value = getattr(exc, attr, None)
        if isinstance(value, str):
            parts.append(value)
    args = getattr(exc, "args", ())
    if args and isinstance(args[0], dict):
        parts.append(str(args[0].get("message") or ""))
    return " ".join(parts).lower()


def _reason(exc: BaseException) -> str:
    for attr in ("reason", "message"):
        value = getattr(exc, attr, None)
        if isinstance(value, str) and value:
            return value
    args = getattr(exc, "args", ())
    if args and isinstance(args[0], dict) and args[0].get("message"):
        return str(args[0]["message"])
    return str(exc) or ContractError.default_message


def _revert_reason(exc: ContractLogicError) -> str:
    reason = _reason(exc)
    prefix = "execution reverted"
    if reason.lower().startswith(prefix):
        reason = reason[len(prefix) :].lstrip(" :")
    return f"Contract reverted: {reason}" if reason else "Contract reverted"


def classify_error(exc: BaseException, *, tx_hash: str | None = None) -> LaunchpadError:
    """Map any failure onto the closed taxonomy."""
    if isinstance(exc, LaunchpadError):
        if tx_hash and not exc.tx_hash:
            exc.tx_hash = tx_hash
        return exc

    tx_hash = tx_hash or getattr(exc, "txn_hash", None) or getattr(
        exc, "transaction_hash", None
    )
    code = _error_code(exc)
    text = _error_text(exc)

    if isinstance(exc, (TimeoutError, TimeExhausted)):
        return RpcTimeoutError(tx_hash=tx_hash)
    if code == "UNPREDICTABLE_GAS_LIMIT" or any(m in text for m in _GAS_MARKERS):
        return GasEstimationFailedError(tx_hash=tx_hash)
    if code == "INSUFFICIENT_FUNDS" or any(
        m in text for m in _INSUFFICIENT_FUNDS_MARKERS
    ):
        return InsufficientFundsError(tx_hash=tx_hash)
    if code in (4001, "ACTION_REJECTED") or any(
        m in text for m in _USER_REJECTED_MARKERS
    ):
        return UserRejectedError(tx_hash=tx_hash)
    if any(m in text for m in _NONCE_MARKERS):
        return NonceError(tx_hash=tx_hash)
    if any(m in text for m in _SLIPPAGE_MARKERS):
        return SlippageExceededError(tx_hash=tx_hash)
    if isinstance(exc, ContractLogicError):
        return ContractError(_revert_reason(exc), tx_hash=tx_hash)
    return ContractError(_reason(exc), tx_hash=tx_hash)
