"""Redis cache layer for URL records."""

import json
import logging
from typing import Optional
from datetime import datetime

import redis.asyncio as redis
from redis.exceptions import RedisError

from .models import URLRecord


class RedisCache:
    """Read-through cache of ``original_url``/``expiry`` per short URL.

    Click counts are never cached. Any Redis failure is logged and treated
    as a miss.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl_seconds: int = 3600,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            ttl_seconds: Upper bound on how long an entry is cached
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.enabled = redis_url is not None
        self.client: Optional[redis.Redis] = None

        if self.enabled:
            self.logger.info(f"Redis cache enabled with TTL={ttl_seconds}s")

    async def connect(self) -> None:
        """Connect to Redis."""
        if not self.enabled:
            return

        try:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self.client.ping()
            self.logger.info("Connected to Redis")
        except RedisError as e:
            self.logger.error(f"Failed to connect to Redis: {e}")
            self.enabled = False

    async def get_record(self, short_url: str) -> Optional[URLRecord]:
        """Get a cached record.

        The returned record carries ``click_count=0``; callers must not
        read the count from it.

        Args:
            short_url: The full short URL

        Returns:
            Cached record or None
        """
        if not self.enabled or not self.client:
            return None

        try:
            payload = await self.client.get(self.get_cache_key(short_url))
        except RedisError as e:
            self.logger.error(f"Cache get error: {e}")
            return None

        if not payload:
            return None

        try:
            data = json.loads(payload)
            return URLRecord.from_dict({**data, "short_url": short_url})
        except (ValueError, KeyError) as e:
            self.logger.warning(f"Discarding malformed cache entry for {short_url}: {e}")
            return None

    async def set_record(self, record: URLRecord, now: datetime) -> bool:
        """Cache a record until the earlier of the cache TTL and its expiry.

        Args:
            record: The record to cache
            now: Current time, used to bound the TTL by the record's expiry

        Returns:
            True if cached
        """
        if not self.enabled or not self.client:
            return False

        ttl = min(self.ttl_seconds, int((record.expiry - now).total_seconds()))
        if ttl <= 0:
            return False

        payload = json.dumps({
            "original_url": record.original_url,
            "expiry": record.expiry.isoformat(),
        })

        try:
            await self.client.setex(self.get_cache_key(record.short_url), ttl, payload)
            return True
        except RedisError as e:
            self.logger.error(f"Cache set error: {e}")
            return False

    async def ping(self) -> bool:
        """Check Redis connectivity."""
        if not self.enabled or not self.client:
            return True

        try:
            await self.client.ping()
            return True
        except RedisError as e:
            self.logger.error(f"Cache ping failed: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.logger.info("Redis connection closed")

    def get_cache_key(self, short_url: str) -> str:
        """Generate cache key for a short URL."""
        return f"tinyurl:record:{short_url}"
