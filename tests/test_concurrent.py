"""Tests that the server handles many simultaneous requests correctly.

Code allocation, alias conflicts and click counting must hold up when
requests interleave on the event loop.
"""

import asyncio
import pytest


@pytest.mark.asyncio
class TestConcurrentConnections:
    """Prove the server handles many simultaneous requests."""

    async def test_concurrent_health_requests(self, client):
        """Many concurrent GET /api/health requests all succeed."""
        concurrency = 50
        tasks = [client.get("/api/health") for _ in range(concurrency)]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 200, f"Request {i}: status {r.status_code}"
            assert r.json()["status"] == "healthy"

    async def test_concurrent_shorten_requests(self, client):
        """Concurrent POST /api/shorten with different URLs all succeed with distinct codes."""
        concurrency = 30
        urls = [f"https://example.com/page_{i}" for i in range(concurrency)]
        tasks = [
            client.post("/api/shorten", json={"destination": url})
            for url in urls
        ]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        codes = []
        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 201, f"Request {i}: status {r.status_code} body={r.text}"
            data = r.json()
            assert data["destination"] == urls[i]
            codes.append(data["code"])

        assert len(codes) == len(set(codes)), "All codes must be unique under concurrency"

    async def test_concurrent_same_alias(self, client):
        """Exactly one of many concurrent requests for one alias wins."""
        concurrency = 20
        tasks = [
            client.post(
                "/api/shorten",
                json={"destination": f"https://example.com/{i}", "alias": "contested"},
            )
            for i in range(concurrency)
        ]
        responses = await asyncio.gather(*tasks)

        statuses = sorted(r.status_code for r in responses)
        assert statuses.count(201) == 1
        assert statuses.count(409) == concurrency - 1

        winner = next(r for r in responses if r.status_code == 201)
        info = await client.get("/api/urls/contested")
        assert info.json()["destination"] == winner.json()["destination"]

    async def test_concurrent_redirect_requests(self, client):
        """Concurrent redirects all succeed and every click is counted."""
        create_resp = await client.post(
            "/api/shorten",
            json={"destination": "https://example.com/redirect-target"},
        )
        assert create_resp.status_code == 201
        code = create_resp.json()["code"]

        concurrency = 20
        tasks = [
            client.get(f"/{code}", follow_redirects=False)
            for _ in range(concurrency)
        ]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 301, f"Request {i}: status {r.status_code}"
            assert r.headers.get("location") == "https://example.com/redirect-target"

        info = await client.get(f"/api/urls/{code}")
        assert info.json()["clickCount"] == concurrency

    async def test_concurrent_stats_requests(self, client):
        """Many concurrent GET /api/stats requests all succeed."""
        concurrency = 40
        tasks = [client.get("/api/stats") for _ in range(concurrency)]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 200, f"Request {i}: status {r.status_code}"
            data = r.json()
            assert "totalLinks" in data
            assert "totalClicks" in data
