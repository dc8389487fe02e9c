"""Business logic for creating short URLs."""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from .shortener import Shortener
from .canonical import canonicalize_url
from .database.base import URLRepository
from .database.cache import RedisCache
from .database.models import URLRecord
from .common.validators import is_valid_url, truncate_url
from .common.timeutil import utcnow
from .exceptions import ValidationError


class ShortenService:
    """Turns submitted URLs into persisted short URL records."""

    def __init__(
        self,
        repository: URLRepository,
        shortener: Shortener,
        expiry: timedelta,
        cache: Optional[RedisCache] = None,
        clock: Callable[[], datetime] = utcnow,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize shorten service.

        Args:
            repository: Record store
            shortener: Short URL strategy
            expiry: Time-to-live applied to new records
            cache: Optional record cache, written through on save
            clock: Source of the current UTC time
            logger: Optional logger
        """
        self.repository = repository
        self.shortener = shortener
        self.expiry = expiry
        self.cache = cache
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    async def shorten(self, original_url: str) -> URLRecord:
        """Create or overwrite the short URL record for ``original_url``.

        Resubmitting an equivalent URL yields the same short URL and resets
        the stored record (expiry and click count).

        Args:
            original_url: The URL submitted by the client

        Returns:
            The persisted record

        Raises:
            ValidationError: If the URL is empty, malformed or not http(s)
            PersistenceError: If the store fails
        """
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise ValidationError(f"Invalid URL: {error}")

        canonical = truncate_url(canonicalize_url(original_url))
        short_url = self.shortener.generate_short_url(canonical)

        record = URLRecord(
            original_url=canonical,
            short_url=short_url,
            expiry=self.clock() + self.expiry,
            click_count=0,
        )

        await self.repository.save(record)

        if self.cache:
            await self.cache.set_record(record, self.clock())

        self.logger.info(f"URL shortened successfully: {record.original_url} -> {short_url}")
        return record
