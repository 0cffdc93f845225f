"""Account Monitor Admin - FastAPI Entry Point."""
import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import structlog
from fastapi import FastAPI

from account_monitor.config import settings
from account_monitor.database import engine
from account_monitor.middleware.error_handler import setup_error_handlers
from account_monitor.middleware.logging_middleware import LoggingMiddleware
from account_monitor.api.v1 import accounts as accounts_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("startup", env=settings.APP_ENV)
    if settings.SENTRY_DSN:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration

        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            integrations=[FastApiIntegration()],
            traces_sample_rate=0.1 if settings.APP_ENV == "production" else 1.0,
            environment=settings.APP_ENV,
        )

    yield

    await engine.dispose()
    logger.info("shutdown")


def create_app() -> FastAPI:
    application = FastAPI(
        title="Account Monitor Admin API",
        description="Administration of monitored social media accounts",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    setup_error_handlers(application)
    application.add_middleware(LoggingMiddleware)

    application.include_router(accounts_router.router, prefix="/api/v1/accounts", tags=["Accounts"])

    @application.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
