"""Pool-address resolution for launchpad tokens.

Lookup order is cache, then the factory's direct ``getTokenAMM`` read, then a
scan of the factory's ``TokenCreated`` logs. Pool addresses never change once
a token exists, so a resolved address is kept for the lifetime of the cache.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import to_checksum_address
from hexbytes import HexBytes
from loguru import logger

from launchpad_sdk.adapters.factory_adapter.adapter import (
    ENHANCED_TOKEN_CREATED_TOPIC,
    LEGACY_TOKEN_CREATED_TOPIC,
    TokenFactoryAdapter,
)
from launchpad_sdk.core.config import is_valid_address
from launchpad_sdk.core.constants.base import ZERO_ADDRESS
from launchpad_sdk.core.errors import PoolNotFoundError, RpcTimeoutError
from launchpad_sdk.core.utils.retry import is_timeout


def is_usable_address(address: Any) -> bool:
    return (
        isinstance(address, str)
        and is_valid_address(address)
        and address.lower() != ZERO_ADDRESS
    )


class AmmAddressCache:
    """In-memory ``(chain_id, token) -> pool`` map shared by resolvers."""

    def __init__(self) -> None:
        self._pools: dict[tuple[int, str], str] = {}

    @staticmethod
    def _key(chain_id: int, token_address: str) -> tuple[int, str]:
        return int(chain_id), str(token_address).lower()

    def get(self, chain_id: int, token_address: str) -> str | None:
        return self._pools.get(self._key(chain_id, token_address))

    def set(self, chain_id: int, token_address: str, pool_address: str) -> bool:
        if not is_usable_address(pool_address) or not is_valid_address(token_address):
            return False
        key = self._key(chain_id, token_address)
        if key in self._pools:
            return False
        self._pools[key] = to_checksum_address(pool_address)
        return True

    def clear(self) -> None:
        self._pools.clear()

    def __contains__(self, key: tuple[int, str]) -> bool:
        chain_id, token_address = key
        return self._key(chain_id, token_address) in self._pools

    def __len__(self) -> int:
        return len(self._pools)


@dataclass(frozen=True)
class TokenCreatedEvent:
    token_address: str
    pool_address: str
    creator: str
    name: str
    symbol: str
    total_supply: int
    timestamp: int | None
    block_number: int
    log_index: int
    shape: Literal["enhanced", "legacy"]


def _topics(log: Any) -> list[HexBytes]:
    return [HexBytes(t) for t in (log.get("topics") or [])]


def _topic_address(topic: HexBytes) -> str:
    return to_checksum_address(bytes(topic)[-20:])


def decode_enhanced_token_created(log: Any) -> TokenCreatedEvent | None:
    topics = _topics(log)
    if len(topics) != 4 or topics[0] != HexBytes(ENHANCED_TOKEN_CREATED_TOPIC):
        return None
    try:
        name, symbol, total_supply, timestamp = decode(
            ["string", "string", "uint256", "uint256"], HexBytes(log.get("data"))
        )
    except (DecodingError, ValueError, TypeError):
        return None
    return TokenCreatedEvent(
        token_address=_topic_address(topics[1]),
        pool_address=_topic_address(topics[2]),
        creator=_topic_address(topics[3]),
        name=name,
        symbol=symbol,
        total_supply=int(total_supply),
        timestamp=int(timestamp),
        block_number=int(log.get("blockNumber") or 0),
        log_index=int(log.get("logIndex") or 0),
        shape="enhanced",
    )


def decode_legacy_token_created(log: Any) -> TokenCreatedEvent | None:
    topics = _topics(log)
    if len(topics) != 3 or topics[0] != HexBytes(LEGACY_TOKEN_CREATED_TOPIC):
        return None
    try:
        name, symbol, total_supply, amm_address = decode(
            ["string", "string", "uint256", "address"], HexBytes(log.get("data"))
        )
    except (DecodingError, ValueError, TypeError):
        return None
    return TokenCreatedEvent(
        token_address=_topic_address(topics[1]),
        pool_address=to_checksum_address(amm_address),
        creator=_topic_address(topics[2]),
        name=name,
        symbol=symbol,
        total_supply=int(total_supply),
        timestamp=None,
        block_number=int(log.get("blockNumber") or 0),
        log_index=int(log.get("logIndex") or 0),
        shape="legacy",
    )


CREATION_EVENT_DECODERS: tuple[Callable[[Any], TokenCreatedEvent | None], ...] = (
    decode_enhanced_token_created,
    decode_legacy_token_created,
)


def decode_token_created(log: Any) -> TokenCreatedEvent | None:
    for decoder in CREATION_EVENT_DECODERS:
        event = decoder(log)
        if event is not None:
            return event
    return None


class AmmResolver:
    def __init__(
        self,
        factory: TokenFactoryAdapter,
        cache: AmmAddressCache | None = None,
    ) -> None:
        self.factory = factory
        self.chain_id = factory.chain_id
        self.cache = cache if cache is not None else AmmAddressCache()
        self.logger = logger.bind(component="AmmResolver", chain_id=self.chain_id)

    def remember(self, token_address: str, pool_address: str) -> bool:
        return self.cache.set(self.chain_id, token_address, pool_address)

    async def find_creation_event(self, token_address: str) -> TokenCreatedEvent | None:
        logs = await self.factory.get_token_created_logs(token_address)
        token = token_address.lower()
        events = [
            event
            for event in (decode_token_created(log) for log in logs)
            if event is not None and event.token_address.lower() == token
        ]
        if not events:
            return None
        return max(events, key=lambda e: (e.block_number, e.log_index))

    async def resolve_pool_address(self, token_address: str) -> str:
        if not is_valid_address(token_address):
            raise PoolNotFoundError(f"Invalid token address: {token_address}")

        cached = self.cache.get(self.chain_id, token_address)
        if cached:
            return cached

        try:
            pool = await self.factory.get_token_amm(token_address)
        except Exception as exc:
            self.logger.info(
                f"getTokenAMM failed for {token_address}, scanning creation logs: {exc}"
            )
            pool = None
        if is_usable_address(pool):
            self.remember(token_address, pool)
            return self.cache.get(self.chain_id, token_address) or pool

        try:
            event = await self.find_creation_event(token_address)
        except Exception as exc:
            if is_timeout(exc):
                raise RpcTimeoutError(
                    f"Timed out scanning creation logs for {token_address}"
                ) from exc
            raise PoolNotFoundError(
                f"No liquidity pool found for {token_address}"
            ) from exc

        if event is None or not is_usable_address(event.pool_address):
            raise PoolNotFoundError(f"No liquidity pool found for {token_address}")

        self.logger.info(
            f"Resolved pool {event.pool_address} for {token_address} "
            f"from {event.shape} creation event at block {event.block_number}"
        )
        self.remember(token_address, event.pool_address)
        return event.pool_address
