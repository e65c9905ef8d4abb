"""
Per-request HTTP middleware: request ids, access logging, body size cap and
response security headers.
"""

import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from infrastructure.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

MAX_BODY_BYTES = 5 * 1024 * 1024

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def _request_id_from(request: Request) -> str:
    """Reuse the caller's X-Request-ID only when it parses as a UUID."""
    supplied = request.headers.get("X-Request-ID")
    if supplied:
        try:
            return str(uuid.UUID(supplied))
        except ValueError:
            logger.debug("Discarding malformed X-Request-ID header")
    return str(uuid.uuid4())


async def reject_large_bodies(request: Request, call_next):
    declared = request.headers.get("content-length", "")
    if request.method in _BODY_METHODS and declared.isdigit() and int(declared) > MAX_BODY_BYTES:
        return JSONResponse(
            status_code=413,
            content={"detail": f"Request body too large (max {MAX_BODY_BYTES // (1024 * 1024)}MB)"},
        )
    return await call_next(request)


async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
    response.headers["X-Response-Time"] = f"{elapsed_ms}ms"

    path = request.url.path
    # health probes are polled constantly
    if not path.startswith("/api/health"):
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            path,
            response.status_code,
            elapsed_ms,
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": elapsed_ms,
            },
        )
    return response


async def assign_request_id(request: Request, call_next):
    request.state.request_id = _request_id_from(request)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request.state.request_id
    return response


async def set_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    if settings.is_production:
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


def register_http_middleware(app: FastAPI) -> None:
    """
    Attach the request middleware.

    Starlette runs the most recently added middleware first, so the security
    headers wrap everything and the body size check sits closest to the routes.
    """
    for middleware in (reject_large_bodies, log_requests, assign_request_id, set_security_headers):
        app.middleware("http")(middleware)
