"""Abstract base class for URL record store implementations."""

from abc import ABC, abstractmethod

from .models import URLRecord


class URLRepository(ABC):
    """Abstract base class for URL record persistence.

    All operations are coroutines; cancelling the awaiting task aborts the
    in-flight call without applying partial changes.
    """

    @abstractmethod
    async def save(self, record: URLRecord) -> None:
        """Insert or overwrite a record keyed by its short URL.

        On conflict ``original_url``, ``expiry`` and ``click_count`` are
        replaced with the new values.

        Args:
            record: The record to persist

        Raises:
            PersistenceError: On storage failure
        """
        pass

    @abstractmethod
    async def find(self, short_url: str) -> URLRecord:
        """Look up a record by short URL.

        Args:
            short_url: The full short URL

        Returns:
            The stored record, including its current click count

        Raises:
            NotFoundError: If no record exists
            PersistenceError: On storage failure
        """
        pass

    @abstractmethod
    async def increment_click_count(self, short_url: str) -> int:
        """Atomically add one to the record's click count.

        Args:
            short_url: The full short URL

        Returns:
            The new click count

        Raises:
            NotFoundError: If no record exists
            PersistenceError: On storage failure
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release store connections."""
        pass
