from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from eth_abi import encode
from hexbytes import HexBytes

from launchpad_sdk.adapters.factory_adapter.adapter import (
    ENHANCED_TOKEN_CREATED_TOPIC,
    LEGACY_TOKEN_CREATED_TOPIC,
    address_topic,
)
from launchpad_sdk.core.constants.base import ZERO_ADDRESS
from launchpad_sdk.core.errors import PoolNotFoundError, RpcTimeoutError
from launchpad_sdk.trading.resolver import (
    AmmAddressCache,
    AmmResolver,
    decode_enhanced_token_created,
    decode_legacy_token_created,
    decode_token_created,
)

TOKEN = "0x2222222222222222222222222222222222222222"
POOL = "0x3333333333333333333333333333333333333333"
OTHER_POOL = "0x4444444444444444444444444444444444444444"
CREATOR = "0x1111111111111111111111111111111111111111"


def enhanced_log(token=TOKEN, pool=POOL, *, block=10, index=0) -> dict:
    return {
        "topics": [
            HexBytes(ENHANCED_TOKEN_CREATED_TOPIC),
            HexBytes(address_topic(token)),
            HexBytes(address_topic(pool)),
            HexBytes(address_topic(CREATOR)),
        ],
        "data": encode(
            ["string", "string", "uint256", "uint256"],
            ["Moon", "MOON", 10**27, 1_700_000_000],
        ),
        "blockNumber": block,
        "logIndex": index,
    }


def legacy_log(token=TOKEN, pool=POOL, *, block=10, index=0) -> dict:
    return {
        "topics": [
            HexBytes(LEGACY_TOKEN_CREATED_TOPIC),
            HexBytes(address_topic(token)),
            HexBytes(address_topic(CREATOR)),
        ],
        "data": encode(
            ["string", "string", "uint256", "address"],
            ["Moon", "MOON", 10**27, pool],
        ),
        "blockNumber": block,
        "logIndex": index,
    }


def _factory(*, amm=ZERO_ADDRESS, logs=None) -> MagicMock:
    factory = MagicMock()
    factory.chain_id = 97
    factory.get_token_amm = AsyncMock(return_value=amm)
    factory.get_token_created_logs = AsyncMock(return_value=logs or [])
    return factory


class TestAmmAddressCache:
    def test_set_is_idempotent(self):
        cache = AmmAddressCache()
        assert cache.set(97, TOKEN, POOL) is True
        assert cache.set(97, TOKEN.upper().replace("0X", "0x"), OTHER_POOL) is False
        assert cache.get(97, TOKEN.lower()) == POOL
        assert len(cache) == 1

    def test_keys_are_per_chain(self):
        cache = AmmAddressCache()
        cache.set(97, TOKEN, POOL)
        assert (97, TOKEN) in cache
        assert (84532, TOKEN) not in cache
        assert cache.get(84532, TOKEN) is None

    @pytest.mark.parametrize("pool", [ZERO_ADDRESS, "0x1234", None, ""])
    def test_rejects_unusable_pool(self, pool):
        cache = AmmAddressCache()
        assert cache.set(97, TOKEN, pool) is False
        assert len(cache) == 0

    def test_clear(self):
        cache = AmmAddressCache()
        cache.set(97, TOKEN, POOL)
        cache.clear()
        assert len(cache) == 0


class TestDecoders:
    def test_enhanced(self):
        event = decode_enhanced_token_created(enhanced_log())
        assert event is not None
        assert event.token_address == TOKEN
        assert event.pool_address == POOL
        assert event.creator == CREATOR
        assert event.timestamp == 1_700_000_000
        assert event.shape == "enhanced"

    def test_legacy_carries_pool_in_data(self):
        event = decode_legacy_token_created(legacy_log())
        assert event is not None
        assert event.token_address == TOKEN
        assert event.pool_address == POOL
        assert event.creator == CREATOR
        assert event.timestamp is None
        assert event.shape == "legacy"

    def test_decoders_reject_other_shape(self):
        assert decode_enhanced_token_created(legacy_log()) is None
        assert decode_legacy_token_created(enhanced_log()) is None

    def test_unrelated_log(self):
        log = enhanced_log()
        log["topics"][0] = HexBytes("0x" + "00" * 32)
        assert decode_token_created(log) is None

    def test_malformed_data(self):
        log = enhanced_log()
        log["data"] = b"\x01"
        assert decode_token_created(log) is None


@pytest.mark.asyncio
class TestAmmResolver:
    async def test_cached_pool_skips_chain(self):
        factory = _factory()
        cache = AmmAddressCache()
        cache.set(97, TOKEN, POOL)

        resolved = await AmmResolver(factory, cache).resolve_pool_address(TOKEN)

        assert resolved == POOL
        factory.get_token_amm.assert_not_awaited()
        factory.get_token_created_logs.assert_not_awaited()

    async def test_direct_lookup_fills_cache(self):
        factory = _factory(amm=POOL.lower())
        resolver = AmmResolver(factory)

        assert await resolver.resolve_pool_address(TOKEN) == POOL
        assert await resolver.resolve_pool_address(TOKEN) == POOL

        factory.get_token_amm.assert_awaited_once()
        factory.get_token_created_logs.assert_not_awaited()

    async def test_falls_back_to_legacy_event(self):
        factory = _factory(logs=[legacy_log()])
        resolver = AmmResolver(factory)

        assert await resolver.resolve_pool_address(TOKEN) == POOL
        assert resolver.cache.get(97, TOKEN) == POOL

    async def test_failed_direct_lookup_falls_back(self):
        factory = _factory(logs=[enhanced_log()])
        factory.get_token_amm.side_effect = ValueError("execution reverted")

        assert await AmmResolver(factory).resolve_pool_address(TOKEN) == POOL

    async def test_most_recent_event_wins(self):
        factory = _factory(
            logs=[
                enhanced_log(pool=POOL, block=10, index=3),
                legacy_log(pool=OTHER_POOL, block=12, index=0),
                enhanced_log(pool=POOL, block=12, index=1),
            ]
        )
        event = await AmmResolver(factory).find_creation_event(TOKEN)
        assert event is not None
        assert event.block_number == 12
        assert event.log_index == 1

    async def test_events_for_other_tokens_ignored(self):
        other = "0x5555555555555555555555555555555555555555"
        factory = _factory(logs=[enhanced_log(token=other)])

        with pytest.raises(PoolNotFoundError):
            await AmmResolver(factory).resolve_pool_address(TOKEN)

    async def test_no_pool_anywhere(self):
        with pytest.raises(PoolNotFoundError):
            await AmmResolver(_factory()).resolve_pool_address(TOKEN)

    async def test_invalid_token_address(self):
        factory = _factory()
        with pytest.raises(PoolNotFoundError):
            await AmmResolver(factory).resolve_pool_address("not-an-address")
        factory.get_token_amm.assert_not_awaited()

    async def test_log_scan_timeout_is_distinct(self):
        factory = _factory()
        factory.get_token_created_logs.side_effect = RpcTimeoutError()

        with pytest.raises(RpcTimeoutError):
            await AmmResolver(factory).resolve_pool_address(TOKEN)

    async def test_log_scan_failure_is_pool_not_found(self):
        factory = _factory()
        factory.get_token_created_logs.side_effect = ValueError("bad range")

        with pytest.raises(PoolNotFoundError):
            await AmmResolver(factory).resolve_pool_address(TOKEN)
