__version__ = "0.1.0"

from launchpad_sdk.adapters.launchpad_adapter import LaunchpadAdapter
from launchpad_sdk.core.errors import ErrorInfo, ErrorKind, LaunchpadError
from launchpad_sdk.core.models import SwapQuote, TokenCreationForm, TradeIntent
from launchpad_sdk.trading.resolver import AmmAddressCache

__all__ = [
    "__version__",
    "AmmAddressCache",
    "ErrorInfo",
    "ErrorKind",
    "LaunchpadAdapter",
    "LaunchpadError",
    "SwapQuote",
    "TokenCreationForm",
    "TradeIntent",
]
