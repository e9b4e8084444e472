from launchpad_sdk.trading.executor import TradeExecutor, compute_minimum_output
from launchpad_sdk.trading.quotes import DebouncedQuoter, QuoteEngine
from launchpad_sdk.trading.resolver import AmmAddressCache, AmmResolver

__all__ = [
    "AmmAddressCache",
    "AmmResolver",
    "DebouncedQuoter",
    "QuoteEngine",
    "TradeExecutor",
    "compute_minimum_output",
]
