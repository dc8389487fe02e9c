"""Redirect resolution for short URLs.

A request path moves through four checks, in this order:

1. shape: the path carries the prefix and a well-formed slug
2. existence: a record is stored for the short URL
3. expiry: the record has not passed its expiry
4. click count: incremented best-effort before the redirect target is returned

Malformed paths never reach the store, and expired links never count clicks.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from .shortener import Shortener
from .database.base import URLRepository
from .database.cache import RedisCache
from .database.models import URLRecord
from .common.timeutil import utcnow
from .exceptions import (
    ExpiredError,
    InvalidShortURLError,
    NotFoundError,
    PersistenceError,
)


class RedirectResolver:
    """Resolves short link paths to their original URLs."""

    def __init__(
        self,
        repository: URLRepository,
        shortener: Shortener,
        cache: Optional[RedisCache] = None,
        clock: Callable[[], datetime] = utcnow,
        logger: Optional[logging.Logger] = None,
    ):
        self.repository = repository
        self.shortener = shortener
        self.cache = cache
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    def short_url_for_path(self, path: str) -> str:
        """Validate a request path and compose its full short URL.

        Raises:
            InvalidShortURLError: If the path is not a well-formed short link
        """
        if not self.shortener.is_valid_short_path(path):
            self.logger.error(f"Invalid short URL provided: {path}")
            raise InvalidShortURLError(f"Invalid slug: {path}")
        return self.shortener.short_url_for_slug(self.shortener.slug_from_path(path))

    async def lookup(self, short_url: str) -> URLRecord:
        """Fetch a record, consulting the cache first when configured.

        Raises:
            NotFoundError: If no record exists
            PersistenceError: On storage failure
        """
        if self.cache:
            cached = await self.cache.get_record(short_url)
            if cached:
                self.logger.debug(f"Cache hit for {short_url}")
                return cached

        record = await self.repository.find(short_url)

        if self.cache:
            await self.cache.set_record(record, self.clock())

        return record

    async def resolve(self, path: str) -> str:
        """Resolve a short link path to the URL to redirect to.

        Args:
            path: Request path, e.g. ``/r/abc123``

        Returns:
            The original URL

        Raises:
            InvalidShortURLError: If the path is malformed
            NotFoundError: If no record exists
            ExpiredError: If the record has expired
            PersistenceError: If the lookup fails
        """
        short_url = self.short_url_for_path(path)

        try:
            record = await self.lookup(short_url)
        except NotFoundError:
            self.logger.error(f"URL not found: {short_url}")
            raise

        if record.is_expired(self.clock()):
            self.logger.info(f"Attempted to access expired URL: {short_url}")
            raise ExpiredError(f"URL has expired: {short_url}")

        # Bookkeeping only; the redirect goes ahead even if counting fails
        try:
            await self.repository.increment_click_count(short_url)
        except (NotFoundError, PersistenceError) as e:
            self.logger.error(f"Failed to increment click count for {short_url}: {e}")

        return record.original_url

    async def describe(self, path: str) -> URLRecord:
        """Return the stored record for a short link without counting a click.

        Expired records are returned as-is; the cache is bypassed so the
        click count is current.
        """
        return await self.repository.find(self.short_url_for_path(path))
