"""In-process URL record store."""

import asyncio
import logging
from dataclasses import replace
from typing import Dict, Optional

from .base import URLRepository
from .models import URLRecord
from ..exceptions import NotFoundError


class MemoryURLRepository(URLRepository):
    """Dictionary-backed store for local runs and tests.

    Records are copied on the way in and out so callers never hold a
    reference to stored state.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._records: Dict[str, URLRecord] = {}
        self._lock = asyncio.Lock()

    async def save(self, record: URLRecord) -> None:
        async with self._lock:
            self._records[record.short_url] = replace(record)
        self.logger.debug(f"Saved {record.short_url} -> {record.original_url}")

    async def find(self, short_url: str) -> URLRecord:
        async with self._lock:
            record = self._records.get(short_url)
            if record is None:
                raise NotFoundError(f"URL not found: {short_url}")
            return replace(record)

    async def increment_click_count(self, short_url: str) -> int:
        async with self._lock:
            record = self._records.get(short_url)
            if record is None:
                raise NotFoundError(f"URL not found: {short_url}")
            record.click_count += 1
            return record.click_count

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self._records.clear()
