"""Integration tests for /health, /metrics, X-Request-ID and error routing."""

from __future__ import annotations

import httpx
import pytest

from weathergate.config import settings
from weathergate.services.metrics import metrics

from conftest import LONDON_PAYLOAD


@pytest.mark.asyncio
async def test_health_ok(client, api_key):
    resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["upstream_configured"] is True
    assert data["cache"]["max_size"] == settings.cache_maxsize
    assert "active_keys" in data["rate_limiter"]
    assert api_key not in resp.text


@pytest.mark.asyncio
async def test_health_degraded_without_credential(client, monkeypatch):
    monkeypatch.setattr(settings, "openweather_api_key", "")
    resp = await client.get("/health")
    assert resp.status_code == 503
    assert resp.json()["status"] == "degraded"


@pytest.mark.asyncio
async def test_metrics_endpoint_structure(client):
    resp = await client.get("/metrics")
    assert resp.status_code == 200
    data = resp.json()
    assert "total_requests" in data
    assert "hits" in data["cache"]
    assert "size" in data["cache"]
    assert "rate_limiter" in data
    assert set(data["upstream"]) == {"ok", "timeouts", "failures"}
    assert "p50" in data["latency_ms"]


@pytest.mark.asyncio
async def test_metrics_track_pipeline(client, api_key, provider):
    provider(lambda request: httpx.Response(200, json=LONDON_PAYLOAD))
    headers = {"X-Forwarded-For": "192.0.2.10"}
    for _ in range(11):
        await client.get("/api/weather", params={"city": "London"}, headers=headers)

    data = (await client.get("/metrics")).json()
    assert data["cache"]["misses"] == 1
    assert data["cache"]["hits"] == 9
    assert data["cache"]["size"] == 1
    assert data["rate_limited"] == 1
    assert data["upstream"]["ok"] == 1
    assert data["rate_limiter"]["active_keys"] == 1


@pytest.mark.asyncio
async def test_request_id_generated(client):
    resp = await client.get("/metrics")
    rid = resp.headers.get("x-request-id")
    assert rid is not None
    assert len(rid) == 32


@pytest.mark.asyncio
async def test_request_id_echoed(client):
    resp = await client.get("/metrics", headers={"X-Request-ID": "trace-abc-123"})
    assert resp.headers["x-request-id"] == "trace-abc-123"


@pytest.mark.asyncio
async def test_response_time_header(client):
    resp = await client.get("/health")
    float(resp.headers["X-Response-Time-Ms"])


@pytest.mark.asyncio
async def test_requests_counted(client):
    await client.get("/health")
    await client.get("/nonexistent")
    assert metrics.total_requests == 2
    assert metrics.status_codes[404] == 1


@pytest.mark.asyncio
async def test_404_returns_json_error(client):
    resp = await client.get("/nonexistent")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


@pytest.mark.asyncio
async def test_health_hit_rate_reflects_cache_traffic(client, api_key, provider):
    provider(lambda request: httpx.Response(200, json=LONDON_PAYLOAD))
    await client.get("/api/weather", params={"city": "London"})
    await client.get("/api/weather", params={"city": "London"})

    data = (await client.get("/health")).json()
    assert data["cache"]["hit_rate"] == 0.5
    assert data["cache"]["size"] == 1
