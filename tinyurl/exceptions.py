"""Exception hierarchy for the URL shortener.

Every error raised by the core derives from ``URLShortenerError`` so the
transport layer can map them to status codes in one place.
"""


class URLShortenerError(Exception):
    """Base class for all URL shortener errors."""


class ValidationError(URLShortenerError):
    """Submitted input is empty, oversized, or uses an unsupported scheme."""


class ParseError(ValidationError):
    """A URL is structurally malformed and cannot be canonicalized."""


class InvalidShortURLError(ValidationError):
    """A short link path does not carry the prefix or a well-formed slug."""


class GenerationError(URLShortenerError):
    """A short code could not be generated."""


class NotFoundError(URLShortenerError):
    """No record exists for the requested short URL."""


class ExpiredError(URLShortenerError):
    """The record exists but its expiry has passed."""


class PersistenceError(URLShortenerError):
    """The backing store failed to complete an operation."""
