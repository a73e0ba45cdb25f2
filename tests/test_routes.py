import random
from datetime import datetime, timedelta

import pytest
from fastapi import FastAPI
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from app import app
from config import settings
from errors import EventGenerationError, register_error_handlers
from services.cache import EventCache, event_cache, get_event_cache
from services.events import MOCK_EVENTS, generate_events

ALLOWED_ORIGIN = "http://localhost:3000"


@pytest.fixture
def cache():
    rng = random.Random(5)
    cache = EventCache(generator=lambda count, now=None: generate_events(count, now=now, rng=rng))
    app.dependency_overrides[get_event_cache] = lambda: cache
    yield cache
    app.dependency_overrides.clear()


@pytest.fixture
def client(cache):
    return TestClient(app)


def test_forex_news_cold_then_cached(client):
    first = client.get("/api/forex-news")
    assert first.status_code == 200
    body = first.json()
    assert isinstance(body, list)
    assert len(body) == 20
    assert set(body[0]) == {"date", "time", "currency", "impact", "event", "forecast", "previous"}

    second = client.get("/api/forex-news")
    assert second.status_code == 200
    assert second.json() == body


def test_forex_news_falls_back_to_mock_data(client):
    def broken(count, now=None):
        raise RuntimeError("boom")

    app.dependency_overrides[get_event_cache] = lambda: EventCache(generator=broken)
    resp = client.get("/api/forex-news")
    assert resp.status_code == 200
    assert resp.json() == [e.model_dump(mode="json", by_alias=True) for e in MOCK_EVENTS]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    stamp = datetime.fromisoformat(data["timestamp"])
    assert stamp.utcoffset() == timedelta(0)
    assert data["commit"] == settings.git_sha


def test_cors_headers_for_allowed_origin(client):
    resp = client.get("/health", headers={"Origin": ALLOWED_ORIGIN})
    assert resp.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
    assert resp.headers["access-control-allow-methods"] == "GET, OPTIONS"
    assert resp.headers["access-control-allow-headers"] == "Content-Type, Authorization"
    assert resp.headers["access-control-allow-credentials"] == "true"


def test_cors_omits_origin_not_in_allow_list(client):
    resp = client.get("/health", headers={"Origin": "https://evil.example.com"})
    assert resp.status_code == 200
    assert "access-control-allow-origin" not in resp.headers


def test_preflight_returns_empty_204(client):
    resp = client.options(
        "/api/forex-news",
        headers={"Origin": ALLOWED_ORIGIN, "Access-Control-Request-Method": "GET"},
    )
    assert resp.status_code == 204
    assert resp.content == b""
    assert resp.headers["access-control-allow-origin"] == ALLOWED_ORIGIN


def test_security_headers(client):
    resp = client.get("/health")
    assert resp.headers["x-content-type-options"] == "nosniff"
    assert resp.headers["x-frame-options"] == "DENY"


def test_routes_are_unique_by_path_and_method():
    seen = set()
    for r in app.router.routes:
        if not isinstance(r, APIRoute):
            continue
        methods = set(r.methods)
        methods.discard("HEAD")
        key = (r.path, tuple(sorted(methods)))
        assert key not in seen, f"Duplicate route: {key}"
        seen.add(key)


def _app_with_failing_routes() -> FastAPI:
    failing = FastAPI()
    register_error_handlers(failing)

    @failing.get("/domain")
    async def domain_error():
        raise EventGenerationError(-3)

    @failing.get("/crash")
    async def crash():
        raise KeyError("missing")

    return failing


def test_domain_error_maps_to_json():
    client = TestClient(_app_with_failing_routes())
    resp = client.get("/domain")
    assert resp.status_code == 500
    assert "-3" in resp.json()["error"]


def test_unexpected_error_is_masked():
    client = TestClient(_app_with_failing_routes(), raise_server_exceptions=False)
    resp = client.get("/crash")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_unexpected_error_keeps_cors_headers():
    client = TestClient(_app_with_failing_routes(), raise_server_exceptions=False)
    resp = client.get("/crash", headers={"Origin": ALLOWED_ORIGIN})
    assert resp.status_code == 500
    assert resp.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
    assert resp.headers["access-control-allow-credentials"] == "true"


def test_forex_news_uses_process_wide_cache():
    event_cache.clear()
    client = TestClient(app)
    try:
        first = client.get("/api/forex-news")
        second = client.get("/api/forex-news")
    finally:
        event_cache.clear()

    assert get_event_cache() is event_cache
    assert first.status_code == 200
    assert second.status_code == 200
    assert len(first.json()) == 20
    assert second.json() == first.json()
