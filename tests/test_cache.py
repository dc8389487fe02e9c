"""Tests for the Redis record cache."""

import json
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from tinyurl.database.cache import RedisCache
from tinyurl.database.models import URLRecord


NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
SHORT_URL = "http://sho.rt/s/abc123"


@pytest.fixture
def cache():
    cache = RedisCache(redis_url="redis://localhost:6379/0", ttl_seconds=3600)
    cache.client = AsyncMock()
    return cache


def make_record(expires_in: timedelta) -> URLRecord:
    return URLRecord(
        original_url="http://test.com",
        short_url=SHORT_URL,
        expiry=NOW + expires_in,
        click_count=7,
    )


class TestRedisCache:
    """Test cache reads, writes and failure handling."""

    async def test_set_record_uses_cache_ttl(self, cache):
        assert await cache.set_record(make_record(timedelta(days=7)), NOW)

        key, ttl, payload = cache.client.setex.await_args.args
        assert key == f"tinyurl:record:{SHORT_URL}"
        assert ttl == 3600
        assert json.loads(payload) == {
            "original_url": "http://test.com",
            "expiry": (NOW + timedelta(days=7)).isoformat(),
        }

    async def test_set_record_bounded_by_expiry(self, cache):
        await cache.set_record(make_record(timedelta(minutes=10)), NOW)

        assert cache.client.setex.await_args.args[1] == 600

    async def test_expired_record_not_cached(self, cache):
        assert not await cache.set_record(make_record(timedelta(seconds=-1)), NOW)
        cache.client.setex.assert_not_called()

    async def test_get_record(self, cache):
        expiry = NOW + timedelta(days=1)
        cache.client.get.return_value = json.dumps({
            "original_url": "http://test.com",
            "expiry": expiry.isoformat(),
        })

        record = await cache.get_record(SHORT_URL)

        assert record == URLRecord("http://test.com", SHORT_URL, expiry, 0)

    async def test_get_record_miss(self, cache):
        cache.client.get.return_value = None

        assert await cache.get_record(SHORT_URL) is None

    async def test_malformed_entry_is_miss(self, cache):
        cache.client.get.return_value = "{not json"

        assert await cache.get_record(SHORT_URL) is None

    async def test_redis_errors_are_misses(self, cache):
        cache.client.get.side_effect = RedisConnectionError("connection refused")
        cache.client.setex.side_effect = RedisConnectionError("connection refused")

        assert await cache.get_record(SHORT_URL) is None
        assert not await cache.set_record(make_record(timedelta(days=1)), NOW)

    async def test_disabled_cache_is_noop(self):
        cache = RedisCache(redis_url=None)

        assert not cache.enabled
        assert await cache.get_record(SHORT_URL) is None
        assert not await cache.set_record(make_record(timedelta(days=1)), NOW)
        assert await cache.ping()

    async def test_ping_failure(self, cache):
        cache.client.ping.side_effect = RedisConnectionError("connection refused")

        assert not await cache.ping()
