"""
Moniewave: FastAPI application entry point.

HTTP surface of the Paystack tool registry. The lifespan builds (or adopts)
the Paystack client, registers every tool, and closes the client on shutdown.
"""
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from moniewave.middleware.request_logging import RequestLoggingMiddleware
from moniewave.routers import health, tools
from moniewave.services.paystack_client import PaystackClient
from moniewave.tools.registry import build_registry
from moniewave.utils.config import BaseConfig, ConfigurationError, get_settings
from moniewave.utils.structured_logging import configure_logging

logger = logging.getLogger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Rate limit key based on client IP."""
    return get_remote_address(request)


def create_app(settings: Optional[BaseConfig] = None, client: Optional[PaystackClient] = None) -> FastAPI:
    """
    Build the HTTP app.

    Args:
        settings: Configuration; defaults to get_settings().
        client: Pre-built Paystack client (tests inject one backed by a mock
            transport). When omitted the lifespan builds one from settings and
            owns its shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.is_ready = False
        logger.info(f"Starting {settings.APP_NAME}")

        paystack = client or PaystackClient(
            settings.paystack_secret(),
            base_url=settings.PAYSTACK_BASE_URL,
            timeout=settings.PAYSTACK_TIMEOUT,
        )
        app.state.registry = build_registry(paystack)
        app.state.is_ready = True
        logger.info(f"✅ {settings.APP_NAME} ready with {len(app.state.registry)} tools")

        yield

        logger.info("Shutting down application")
        app.state.is_ready = False
        await paystack.aclose()
        logger.info(f"Shut down {settings.APP_NAME}")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # -------------------------------------------------
    # Middleware
    # -------------------------------------------------

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Accept", "Authorization", "Content-Type", "X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    limiter = Limiter(key_func=get_rate_limit_key, default_limits=[settings.rate_limit])
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------
    # Routers
    # -------------------------------------------------

    app.include_router(health.router, tags=["Health"])
    app.include_router(tools.router, prefix="/api/v1", tags=["Tools"])

    @app.get("/", tags=["Root"])
    async def root():
        return {
            "message": f"{settings.APP_NAME} v{settings.APP_VERSION} is running",
            "docs": "/docs",
        }

    return app


def run():
    """Console entry point: serve the HTTP API with uvicorn."""
    settings = get_settings()
    configure_logging(settings)
    try:
        settings.paystack_secret()
    except ConfigurationError as e:
        logger.critical(str(e))
        sys.exit(1)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
