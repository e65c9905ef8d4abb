"""
Exception handlers mapping application errors onto JSON responses.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from core.exceptions import AppError, AuthError
from infrastructure.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


async def handle_rate_limited(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    retry_after = int(exc.limit.limit.get_expiry())
    logger.warning(
        "Rate limit exceeded: %s",
        exc.detail,
        extra={"method": request.method, "path": request.url.path, "status_code": 429},
    )
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}", "retry_after": retry_after},
        headers={"Retry-After": str(retry_after)},
    )


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        # 500/502 bodies are generic; the cause is only in the log
        logger.error(
            "%s on %s %s: %s",
            type(exc).__name__,
            request.method,
            request.url.path,
            str(exc)[:200],
        )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def handle_invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "errors": jsonable_encoder(exc.errors())},
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    if settings.is_production:
        # Truncated so connection strings or keys in messages stay out of the log
        logger.error("Unhandled exception: %s: %s", type(exc).__name__, str(exc)[:200])
    else:
        logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RateLimitExceeded, handle_rate_limited)
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_invalid_request)
    app.add_exception_handler(Exception, handle_unexpected)
