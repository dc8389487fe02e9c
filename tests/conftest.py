"""Pytest configuration and fixtures."""

import pytest
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport

from config import Config
from tinyurl.database.memory import MemoryURLRepository
from tinyurl.resolver import RedirectResolver
from tinyurl.service import ShortenService
from tinyurl.shortener import CanonicalShortener
from tinyurl.common.logging_config import setup_logging
from web_app import create_app


SHORT_DOMAIN = "http://sho.rt"
PREFIX = "/s/"


class FakeClock:
    """Controllable replacement for ``utcnow``."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def repository() -> MemoryURLRepository:
    return MemoryURLRepository()


@pytest.fixture
def shortener(logger) -> CanonicalShortener:
    return CanonicalShortener(
        domain=SHORT_DOMAIN,
        prefix=PREFIX,
        slug_length=6,
        logger=logger,
    )


@pytest.fixture
def service(repository, shortener, clock, logger) -> ShortenService:
    return ShortenService(
        repository=repository,
        shortener=shortener,
        expiry=timedelta(days=7),
        clock=clock,
        logger=logger,
    )


@pytest.fixture
def resolver(repository, shortener, clock, logger) -> RedirectResolver:
    return RedirectResolver(
        repository=repository,
        shortener=shortener,
        clock=clock,
        logger=logger,
    )


@pytest.fixture
def config() -> Config:
    return Config(
        database_url="memory://",
        domain=SHORT_DOMAIN,
        path_prefix=PREFIX,
        expiry="168h",
    )


@pytest.fixture
def app(repository, service, resolver, config, logger):
    """Create test FastAPI app backed by the in-memory store."""
    return create_app(
        repository=repository,
        cache=None,
        shorten_service=service,
        resolver=resolver,
        config=config,
        logger=logger,
    )


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]


def path_of(short_url: str) -> str:
    """Strip the short domain, leaving the request path."""
    assert short_url.startswith(SHORT_DOMAIN)
    return short_url[len(SHORT_DOMAIN):]
