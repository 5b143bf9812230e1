"""FastAPI application factory"""

import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import sentry_sdk

from src.adapter.services.auth_event_publisher import create_auth_event_publisher
from src.api.error import ClientError, client_error_handler, unhandled_error_handler
from src.api.routes.auth import router as auth_router
from src.api.routes.invoices import router as invoices_router

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def configure_sentry(config) -> None:
    if not (config.ENABLE_SENTRY and config.DSN_SENTRY):
        return
    sentry_sdk.init(dsn=config.DSN_SENTRY, environment=config.SENTRY_ENVIRONMENT)
    logger.info(f"Sentry enabled for environment {config.SENTRY_ENVIRONMENT}")


def create_app(config) -> FastAPI:
    configure_logging(config.LOG_LEVEL)
    configure_sentry(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.AUTO_CREATE_TABLES:
            from src.depends import init_db

            await init_db()
        yield
        await app.state.auth_events.close()

    app = FastAPI(
        title="Invoice Generator API",
        version="1.0.0",
        description="Create, list and print invoices.",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.auth_events = create_auth_event_publisher(config.AUTH_EVENTS_WEBHOOK)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} {response.status_code} "
                f"{elapsed_ms:.1f}ms"
            )
            return response

    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(auth_router, prefix=config.API_PREFIX)
    app.include_router(invoices_router, prefix=config.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"ok": True}

    return app
