from launchpad_sdk.core.constants.base import (
    GAS_BUFFER_MULTIPLIER,
    TOKEN_DECIMALS,
    ZERO_ADDRESS,
)
from launchpad_sdk.core.constants.chains import (
    CHAIN_ID_TO_CODE,
    DEFAULT_CHAIN_ID,
    SUPPORTED_CHAINS,
)

__all__ = [
    "CHAIN_ID_TO_CODE",
    "DEFAULT_CHAIN_ID",
    "GAS_BUFFER_MULTIPLIER",
    "SUPPORTED_CHAINS",
    "TOKEN_DECIMALS",
    "ZERO_ADDRESS",
]
