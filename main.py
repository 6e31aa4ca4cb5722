"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application instance.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import time
from typing import AsyncGenerator

from config import get_settings, Settings
from core.database.engine import init_db, close_db, create_tables
from core.exceptions.handlers import (
    not_found_exception_handler,
    validation_exception_handler,
    method_not_allowed_exception_handler,
    generic_http_exception_handler,
    unhandled_exception_handler,
)
from core.health.routes import router as health_router
from core.user_management.routes import user_router
from middleware.error_handler import ErrorHandlerMiddleware
from middleware.logging import LoggingMiddleware


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)
settings = get_settings()

OPENAPI_TAGS = [
    {"name": "Users", "description": "Registration, authentication and profile management."},
    {"name": "health", "description": "Health and readiness probes consumed by monitoring systems."},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application.
    Handles startup and shutdown events.
    """
    logger.info(f"🚀 Starting {settings.APP_NAME}")
    start_time = time.time()

    await init_db()
    logger.info("✅ Database initialized")

    await create_tables()
    logger.info("✅ Database tables created/verified")

    startup_time = time.time() - start_time
    logger.info(f"🎉 Application started in {startup_time:.2f} seconds")

    yield

    logger.info(f"🛑 Shutting down {settings.APP_NAME}")
    await close_db()
    logger.info("✅ Application shutdown complete")


def create_app() -> FastAPI:
    """
    FastAPI application factory.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url=settings.API_DOCS_URL if settings.DEBUG else None,
        redoc_url=settings.API_REDOC_URL if settings.DEBUG else None,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    # Add middleware (order matters!)
    _add_middleware(app, settings)

    # Include routers
    _include_routers(app)

    # Add global exception handlers
    _add_exception_handlers(app)

    return app


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    """Add middleware to the FastAPI application."""

    # Security middleware
    if settings.ALLOWED_HOSTS:
        app.add_middleware(
            TrustedHostMiddleware,
            allowed_hosts=settings.ALLOWED_HOSTS
        )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Custom middleware; the last one added runs first
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)


def _include_routers(app: FastAPI) -> None:
    """Include all API routers."""
    app.include_router(user_router)

    # Health check (no prefix, available at /health)
    app.include_router(health_router, tags=["health"])


def _add_exception_handlers(app: FastAPI) -> None:
    """Add global exception handlers answering with JSON bodies."""
    app.add_exception_handler(404, not_found_exception_handler)
    app.add_exception_handler(405, method_not_allowed_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, generic_http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# Create the application instance
app = create_app()


# For development server
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info" if settings.DEBUG else "warning"
    )
