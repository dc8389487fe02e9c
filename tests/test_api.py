"""Tests for HTTP endpoints."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient, ASGITransport

from tinyurl.database.base import URLRepository
from tinyurl.database.models import URLRecord
from tinyurl.exceptions import PersistenceError
from tinyurl.service import ShortenService
from web_app import create_app

from conftest import SHORT_DOMAIN, path_of


class TestCreateEndpoint:
    """Test POST /create."""

    async def test_create(self, client, sample_urls):
        response = await client.post("/create", json={"original_url": sample_urls[0]})

        assert response.status_code == 201
        data = response.json()
        assert data["original_url"] == sample_urls[0]
        assert data["short_url"].startswith(f"{SHORT_DOMAIN}/s/")
        assert data["click_count"] == 0
        assert "expiry" in data

    async def test_equivalent_urls_same_short_url(self, client):
        first = await client.post("/create", json={"original_url": "https://example.com?a=1&b=2"})
        second = await client.post("/create", json={"original_url": "https://www.example.com?b=2&a=1"})

        assert first.json()["short_url"] == second.json()["short_url"]

    @pytest.mark.parametrize("body", [
        b"{invalid json",
        b"[]",
        b'{"url": "http://test.com"}',
        b'{"original_url": 42}',
        b"",
    ])
    async def test_malformed_body(self, client, body):
        response = await client.post(
            "/create",
            content=body,
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("url", ["", "invalid url", "ftp://example.com", "http://example.com:port"])
    async def test_invalid_url(self, client, url):
        response = await client.post("/create", json={"original_url": url})

        assert response.status_code == 400
        assert "detail" in response.json()

    async def test_persistence_failure(self, shortener, resolver, config, clock):
        repository = AsyncMock(spec=URLRepository)
        repository.save.side_effect = PersistenceError("error saving URL to database")
        service = ShortenService(repository, shortener, timedelta(days=7), clock=clock)
        app = create_app(repository, None, service, resolver, config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
            response = await client.post("/create", json={"original_url": "http://test.com"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}


class TestRedirectEndpoint:
    """Test GET /s/<slug>."""

    async def test_redirect(self, client):
        created = await client.post("/create", json={"original_url": "http://test.com"})
        path = path_of(created.json()["short_url"])

        response = await client.get(path)

        assert response.status_code == 302
        assert response.headers["location"] == "http://test.com"

    async def test_redirect_counts_click(self, client):
        created = await client.post("/create", json={"original_url": "http://test.com"})
        slug = path_of(created.json()["short_url"]).rsplit("/", 1)[-1]

        await client.get(f"/s/{slug}")
        await client.get(f"/s/{slug}")

        info = await client.get(f"/api/urls/{slug}")
        assert info.json()["click_count"] == 2

    @pytest.mark.parametrize("path", ["/s/abc", "/s/abc1234", "/s/abc-12", "/s/abc/12"])
    async def test_invalid_slug(self, client, path):
        response = await client.get(path)

        assert response.status_code == 400

    async def test_unknown_slug(self, client):
        response = await client.get("/s/zzzzzz")

        assert response.status_code == 404

    async def test_expired(self, client, repository, clock):
        await repository.save(URLRecord(
            original_url="http://test.com",
            short_url=f"{SHORT_DOMAIN}/s/old123",
            expiry=clock() - timedelta(days=1),
        ))

        response = await client.get("/s/old123")

        assert response.status_code == 410
        assert (await repository.find(f"{SHORT_DOMAIN}/s/old123")).click_count == 0


class TestInfoAndHealth:
    """Test GET /api/urls/{slug} and GET /health."""

    async def test_get_url_info(self, client, sample_urls):
        created = await client.post("/create", json={"original_url": sample_urls[1]})
        slug = created.json()["short_url"].rsplit("/", 1)[-1]

        response = await client.get(f"/api/urls/{slug}")

        assert response.status_code == 200
        data = response.json()
        assert data["original_url"] == sample_urls[1]
        assert data["click_count"] == 0

    async def test_get_url_info_not_found(self, client):
        response = await client.get("/api/urls/zzzzzz")

        assert response.status_code == 404

    async def test_get_url_info_invalid_slug(self, client):
        response = await client.get("/api/urls/bad")

        assert response.status_code == 400

    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert data["cache"] == "healthy"

    async def test_health_check_unhealthy(self, shortener, service, resolver, config):
        repository = AsyncMock(spec=URLRepository)
        repository.health_check.return_value = False
        app = create_app(repository, None, service, resolver, config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
            response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["database"] == "unhealthy"
