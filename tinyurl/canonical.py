"""URL canonicalization.

Equivalent URLs must produce identical text so they hash to the same slug.
Two normalizations are applied:

- a literal ``www.`` prefix is removed from the host (case-sensitive)
- query parameters are re-encoded sorted by key, keeping the relative
  order of repeated values for the same key
"""

import re
from urllib.parse import urlsplit, urlunsplit, unquote_plus, urlencode
from typing import List, Tuple

from .exceptions import ParseError


# ASCII control characters and space are never valid inside a URL
_FORBIDDEN_CHARS = re.compile(r"[\x00-\x20\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def canonicalize_url(raw_url: str) -> str:
    """Normalize a URL into its canonical textual form.

    Args:
        raw_url: The URL as submitted

    Returns:
        Canonical URL string

    Raises:
        ParseError: If the URL is structurally malformed
    """
    if _FORBIDDEN_CHARS.search(raw_url):
        raise ParseError(f"invalid control character in URL: {raw_url!r}")
    if raw_url.startswith(":"):
        raise ParseError(f"missing protocol scheme: {raw_url!r}")

    try:
        parts = urlsplit(raw_url)
        # Accessing port validates it
        parts.port
    except ValueError as e:
        raise ParseError(f"invalid URL {raw_url!r}: {e}") from e

    if _BAD_ESCAPE.search(parts.netloc):
        raise ParseError(f"invalid escape in host: {raw_url!r}")

    netloc = _strip_www(parts.netloc)
    query = canonicalize_query(parts.query)

    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


def canonicalize_query(raw_query: str) -> str:
    """Sort query parameters by key.

    A query that cannot be parsed is returned unchanged.

    Args:
        raw_query: Raw query string without the leading ``?``

    Returns:
        Canonical query string
    """
    if not raw_query:
        return ""

    pairs = _parse_query(raw_query)
    if pairs is None:
        return raw_query

    # sorted() is stable, so values of one key keep their original order
    return urlencode(sorted(pairs, key=lambda pair: pair[0]))


def _parse_query(raw_query: str):
    """Split a raw query into decoded (key, value) pairs, or None if malformed."""
    pairs: List[Tuple[str, str]] = []

    for field in raw_query.split("&"):
        if not field:
            continue
        if ";" in field or _BAD_ESCAPE.search(field):
            return None
        key, _, value = field.partition("=")
        pairs.append((unquote_plus(key), unquote_plus(value)))

    return pairs


def _strip_www(netloc: str) -> str:
    """Remove a leading ``www.`` from the host, keeping userinfo and port."""
    userinfo, at, host = netloc.rpartition("@")
    if host.startswith("www."):
        host = host[len("www."):]
    return f"{userinfo}{at}{host}"
