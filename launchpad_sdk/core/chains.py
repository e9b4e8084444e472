from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal

from launchpad_sdk.core.config import (
    are_contracts_deployed,
    get_contract_addresses,
    get_dex_router_registry_address,
    get_fee_recipient_address,
    get_rpc_urls_for_chain,
    get_supported_chains,
    get_token_factory_address,
    is_valid_address,
)
from launchpad_sdk.core.constants.chains import (
    CHAIN_EXPLORER_URLS,
    CHAIN_ID_TO_CODE,
    CHAIN_NAMES,
    CHAIN_SHORT_NAMES,
    NATIVE_CURRENCIES,
    SUPPORTED_CHAINS,
    TESTNET_CHAIN_IDS,
)
from launchpad_sdk.core.utils.units import from_base_units

__all__ = [
    "ChainInfo",
    "are_contracts_deployed",
    "format_native_amount",
    "get_chain_info",
    "get_chain_name",
    "get_chain_short_name",
    "get_contract_addresses",
    "get_dex_router_registry_address",
    "get_explorer_url",
    "get_fee_recipient_address",
    "get_mainnet_chains",
    "get_supported_chains",
    "get_token_factory_address",
    "is_testnet",
    "is_valid_address",
]


@dataclass(frozen=True)
class ChainInfo:
    chain_id: int
    name: str
    short_name: str
    code: str
    native_symbol: str
    native_name: str
    native_decimals: int
    explorer_url: str
    testnet: bool
    rpc_urls: list[str] = field(default_factory=list)


def get_chain_info(chain_id: int) -> ChainInfo | None:
    chain_id = int(chain_id)
    if chain_id not in SUPPORTED_CHAINS:
        return None
    symbol, native_name, decimals = NATIVE_CURRENCIES[chain_id]
    return ChainInfo(
        chain_id=chain_id,
        name=CHAIN_NAMES[chain_id],
        short_name=CHAIN_SHORT_NAMES[chain_id],
        code=CHAIN_ID_TO_CODE[chain_id],
        native_symbol=symbol,
        native_name=native_name,
        native_decimals=decimals,
        explorer_url=CHAIN_EXPLORER_URLS[chain_id],
        testnet=chain_id in TESTNET_CHAIN_IDS,
        rpc_urls=get_rpc_urls_for_chain(chain_id),
    )


def get_chain_name(chain_id: int) -> str:
    return CHAIN_NAMES.get(int(chain_id), f"Chain {chain_id}")


def get_chain_short_name(chain_id: int) -> str:
    return CHAIN_SHORT_NAMES.get(int(chain_id), get_chain_name(chain_id))


def is_testnet(chain_id: int) -> bool:
    return int(chain_id) in TESTNET_CHAIN_IDS


def get_mainnet_chains() -> list[int]:
    return [c for c in SUPPORTED_CHAINS if c not in TESTNET_CHAIN_IDS]


def get_explorer_url(
    chain_id: int, kind: Literal["address", "tx"], value: str
) -> str | None:
    base = CHAIN_EXPLORER_URLS.get(int(chain_id))
    if not base:
        return None
    if kind not in ("address", "tx"):
        raise ValueError(f"Unknown explorer link kind: {kind}")
    return f"{base}/{kind}/{value}"


def format_native_amount(chain_id: int, amount: int, *, precision: int = 4) -> str:
    symbol, _, decimals = NATIVE_CURRENCIES.get(int(chain_id), ("ETH", "Ether", 18))
    value = from_base_units(amount, decimals)
    return f"{value:.{precision}f} {symbol}"
