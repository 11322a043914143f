"""
Eduverse - HTTP Middleware
Request correlation, timing and access logging
"""

import time
from typing import Callable, FrozenSet, Optional
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from eduverse.core.config import settings
from eduverse.core.logging_config import (
    logger,
    set_request_id,
    set_entity,
    generate_request_id,
)


# Probes and docs are served without access log lines
QUIET_PATHS: FrozenSet[str] = frozenset({
    "/",
    "/health",
    "/favicon.ico",
    "/docs",
    "/redoc",
    "/openapi.json",
})


def should_skip_logging(path: str) -> bool:
    return path in QUIET_PATHS or "/health/" in path


def collection_from_path(path: str) -> Optional[str]:
    """``/api/notices`` -> ``notices``; None outside the API prefix"""
    prefix = settings.API_PREFIX.rstrip("/") + "/"
    if not path.startswith(prefix):
        return None
    segment = path[len(prefix):].split("/", 1)[0]
    return segment or None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    One access log line per API request.

    The request id comes from the X-Request-ID header or is generated, and is
    echoed back along with X-Response-Time. The target collection is put in
    the logging context so pipeline log lines carry it too.
    """

    def __init__(self, app, slow_request_ms: float = 1000):
        super().__init__(app)
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_id(request_id)

        path = request.url.path
        collection = collection_from_path(path)
        if collection:
            set_entity(collection)

        started = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.log_error_with_context(
                    exc,
                    context=f"{request.method} {path}",
                    duration_ms=(time.perf_counter() - started) * 1000,
                )
                raise

            elapsed = (time.perf_counter() - started) * 1000
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{elapsed:.2f}ms"

            if not should_skip_logging(path):
                logger.log_request(
                    request.method,
                    path,
                    response.status_code,
                    elapsed,
                    collection=collection,
                    client_ip=request.client.host if request.client else "unknown",
                )
                if elapsed > self.slow_request_ms:
                    logger.warning(f"Slow request: {request.method} {path} took {elapsed:.2f}ms")

            return response
        finally:
            set_request_id("")
            set_entity("")


__all__ = [
    "RequestLoggingMiddleware",
    "collection_from_path",
    "should_skip_logging",
    "QUIET_PATHS",
]
