"""Short URL generation and validation."""

import logging
import re
import string
import zlib
from abc import ABC, abstractmethod
from typing import Optional

from .canonical import canonicalize_url
from .common.url_builder import build_short_url, normalize_path_prefix


# Base62 characters, digits first
ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase

_SLUG_PATTERN = re.compile(r"[a-zA-Z0-9]+")


def base62_encode(number: int, length: int) -> str:
    """Encode an integer into exactly ``length`` base62 digits.

    The division loop always runs ``length`` times, most significant digit
    first, so small values come out left-padded with ``0`` and values that
    need more digits keep only the low-order ones.

    Args:
        number: Non-negative integer to encode
        length: Number of output characters

    Returns:
        Fixed-width base62 string
    """
    base = len(ALPHABET)
    encoded = [""] * length

    for i in range(length - 1, -1, -1):
        encoded[i] = ALPHABET[number % base]
        number //= base

    return "".join(encoded)


def generate_slug(canonical_url: str, length: int = 6) -> str:
    """Derive a deterministic slug from a canonical URL.

    Uses the CRC-32 (IEEE) checksum of the URL's UTF-8 bytes. Distinct URLs
    whose checksums collide get the same slug; no collision detection is done.

    Args:
        canonical_url: URL already in canonical form
        length: Slug length

    Returns:
        Alphanumeric slug of exactly ``length`` characters
    """
    checksum = zlib.crc32(canonical_url.encode("utf-8")) & 0xFFFFFFFF
    return base62_encode(checksum, length)


class Shortener(ABC):
    """Strategy for turning URLs into short URLs and checking short link paths."""

    @abstractmethod
    def generate_short_url(self, url: str) -> str:
        """Build the full short URL for ``url``.

        Raises:
            ParseError: If ``url`` cannot be canonicalized
        """

    @abstractmethod
    def is_valid_short_path(self, path: str) -> bool:
        """Check that a request path carries the prefix and a well-formed slug."""

    @abstractmethod
    def slug_from_path(self, path: str) -> str:
        """Extract the slug from a valid short link path."""

    @abstractmethod
    def short_url_for_slug(self, slug: str) -> str:
        """Compose the full short URL for a slug."""


class CanonicalShortener(Shortener):
    """CRC-32/base62 shortener over canonicalized URLs."""

    def __init__(
        self,
        domain: str,
        prefix: str = "/r/",
        slug_length: int = 6,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize shortener.

        Args:
            domain: Serving domain (e.g., http://tiny.io)
            prefix: Short link path prefix (e.g., /r/)
            slug_length: Length of generated slugs
            logger: Optional logger
        """
        self.domain = domain.rstrip("/")
        self.prefix = normalize_path_prefix(prefix)
        self.slug_length = slug_length
        self.logger = logger or logging.getLogger(__name__)

    def generate_short_url(self, url: str) -> str:
        canonical = canonicalize_url(url)
        slug = self.generate_slug(canonical)
        self.logger.debug(f"Generated slug {slug} for {canonical}")
        return self.short_url_for_slug(slug)

    def generate_slug(self, canonical_url: str) -> str:
        """Generate a slug of the configured length."""
        return generate_slug(canonical_url, self.slug_length)

    def is_valid_short_path(self, path: str) -> bool:
        if not path.startswith(self.prefix):
            return False
        return self.is_valid_slug(path[len(self.prefix):])

    def is_valid_slug(self, slug: str) -> bool:
        """Check slug length and alphabet."""
        if len(slug) != self.slug_length:
            return False
        return _SLUG_PATTERN.fullmatch(slug) is not None

    def slug_from_path(self, path: str) -> str:
        return path[len(self.prefix):]

    def short_url_for_slug(self, slug: str) -> str:
        return build_short_url(slug, self.domain, self.prefix)
