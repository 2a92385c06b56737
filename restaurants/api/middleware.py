"""ASGI Middleware — user context scope and request timing.

Invariants:
    - Every HTTP request runs inside exactly one user context scope, anonymous
      when the gateway supplied no identity headers
    - Requests slower than slow_request_threshold_ms are logged at WARNING

Design Decisions:
    - Pure ASGI classes over BaseHTTPMiddleware: the ContextVar set here is the
      same one the endpoint reads, and streaming bodies are untouched
    - Identity arrives as headers set by the authenticating gateway; no token
      parsing happens in this service
"""

import logging
import time

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from restaurants.infrastructure.user_context import principal_from_headers, request_scope

logger = logging.getLogger(__name__)


class UserContextMiddleware:
    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        principal = principal_from_headers(Headers(scope=scope))
        with request_scope(principal):
            await self.app(scope, receive, send)


class RequestTimingMiddleware:
    def __init__(self, app: ASGIApp, threshold_ms: int = 1000):
        self.app = app
        self.threshold_ms = threshold_ms

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        status_code = 500
        started = time.perf_counter()

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
            if elapsed_ms > self.threshold_ms:
                logger.warning(
                    f"Slow request: {scope['method']} {scope['path']} took {elapsed_ms}ms",
                    extra={
                        "path": scope["path"], "method": scope["method"],
                        "status_code": status_code, "elapsed_ms": elapsed_ms,
                    },
                )
