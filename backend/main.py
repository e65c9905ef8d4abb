"""ArticleForge - Main FastAPI Application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware

from api.middleware.errors import register_exception_handlers
from api.middleware.http import register_http_middleware
from api.middleware.rate_limit import limiter
from api.routes import api_router
from infrastructure.config import get_settings
from infrastructure.database import close_db, init_db
from infrastructure.logging_config import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


def _init_sentry() -> None:
    """Start Sentry at import time so failures during startup are reported too."""
    dsn = settings.sentry_dsn
    if not dsn:
        return
    if not dsn.startswith("https://"):
        logger.warning("SENTRY_DSN appears malformed: %s. Sentry will not be initialized.", dsn[:30])
        return

    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=dsn,
        environment=settings.environment,
        integrations=[
            FastApiIntegration(transaction_style="url"),
            SqlalchemyIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        traces_sample_rate=0.1 if settings.is_production else 1.0,
        send_default_pii=False,
    )
    logger.info("Sentry error tracking initialised (env=%s)", settings.environment)


async def _check_rate_limit_storage() -> None:
    """Ping Redis when it backs the rate limiter; an outage makes every request fail."""
    if not settings.rate_limit_storage_uri.startswith("redis"):
        return

    import redis.asyncio as aioredis
    from redis.exceptions import RedisError

    client = aioredis.from_url(settings.rate_limit_storage_uri)
    try:
        await client.ping()
        logger.info("Rate limit storage reachable")
    except (RedisError, OSError) as e:
        logger.critical("Rate limit storage unreachable (%s); limited routes will error", e)
    finally:
        await client.aclose()


_init_sentry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # JSON logs in production, readable lines elsewhere
    setup_logging(
        json_output=settings.is_production and not settings.debug,
        level="DEBUG" if settings.debug else "INFO",
    )
    logger.info(
        "Starting %s v%s (env=%s, generation provider=%s)",
        settings.app_name,
        settings.app_version,
        settings.environment,
        settings.generation_provider,
    )

    settings.validate_production_secrets()
    # create_all only adds missing tables; existing ones are left alone
    await init_db()
    await _check_rate_limit_storage()

    yield

    logger.info("Shutting down...")
    await close_db()


app = FastAPI(
    title=settings.app_name,
    description="AI article generation, topic and image discovery, and WordPress publishing",
    version=settings.app_version,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

# SlowAPIMiddleware and the @limiter.limit decorators both read app.state.limiter
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

register_exception_handlers(app)
register_http_middleware(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Requested-With", "X-Request-ID"],
)

app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Service banner with links to docs and health."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs" if settings.is_development else "disabled",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        workers=1 if settings.is_development else settings.workers,
    )
