"""Data models for URL shortener."""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass
class URLRecord:
    """Represents a short URL record in the database."""

    original_url: str
    short_url: str
    expiry: datetime
    click_count: int = 0

    def is_expired(self, now: datetime) -> bool:
        """Check whether the record is past its expiry at ``now``."""
        return now >= self.expiry

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "original_url": self.original_url,
            "short_url": self.short_url,
            "expiry": self.expiry.isoformat(),
            "click_count": self.click_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "URLRecord":
        """Create from dictionary."""
        expiry = data["expiry"]
        if not isinstance(expiry, datetime):
            expiry = datetime.fromisoformat(expiry)
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        return cls(
            original_url=data["original_url"],
            short_url=data["short_url"],
            expiry=expiry,
            click_count=data.get("click_count", 0),
        )
