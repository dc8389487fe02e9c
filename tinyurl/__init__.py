"""Core business logic for URL shortener."""

from .canonical import canonicalize_url, canonicalize_query
from .shortener import Shortener, CanonicalShortener, generate_slug, base62_encode
from .service import ShortenService
from .resolver import RedirectResolver

__all__ = [
    "canonicalize_url",
    "canonicalize_query",
    "Shortener",
    "CanonicalShortener",
    "generate_slug",
    "base62_encode",
    "ShortenService",
    "RedirectResolver",
]
