"""ASGI Middleware — user context scope and slow-request logging on a bare app."""

import logging

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from restaurants.api.middleware import RequestTimingMiddleware, UserContextMiddleware
from restaurants.infrastructure.user_context import UserContext


def _app(threshold_ms: int) -> FastAPI:
    app = FastAPI()
    app.add_middleware(UserContextMiddleware)
    app.add_middleware(RequestTimingMiddleware, threshold_ms=threshold_ms)

    @app.get("/whoami")
    async def whoami():
        user = UserContext().get_current_user()
        return {"email": user.email if user else None}

    return app


async def _get(app: FastAPI, headers: dict | None = None):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        return await c.get("/whoami", headers=headers or {})


async def test_anonymous_request_resolves_to_none():
    res = await _get(_app(threshold_ms=10_000))
    assert res.json() == {"email": None}


async def test_identity_headers_reach_the_endpoint():
    res = await _get(
        _app(threshold_ms=10_000),
        {"x-user-id": "7", "x-user-email": "owner@chipotle.com"},
    )
    assert res.json() == {"email": "owner@chipotle.com"}


async def test_slow_request_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="restaurants.api.middleware"):
        await _get(_app(threshold_ms=-1))
    record = next(r for r in caplog.records if r.name == "restaurants.api.middleware")
    assert record.path == "/whoami"
    assert record.method == "GET"
    assert record.status_code == 200


async def test_fast_request_not_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="restaurants.api.middleware"):
        await _get(_app(threshold_ms=10_000))
    assert not [r for r in caplog.records if r.name == "restaurants.api.middleware"]
