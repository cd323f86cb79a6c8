"""FastAPI application factory for Reviewpool.

This module provides the application factory that creates and configures
a FastAPI application with:
- CORS middleware for cross-origin requests
- Request logging middleware with correlation IDs
- The JSON error envelope for domain and unexpected errors
- Database connection and review engine lifecycle management

Example usage:
    >>> from reviewpool.config import ReviewpoolConfig
    >>> from reviewpool.web.app import create_app
    >>>
    >>> app = create_app(ReviewpoolConfig())
    >>>
    >>> import uvicorn
    >>> uvicorn.run(app, host="0.0.0.0", port=8080)
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reviewpool import __version__
from reviewpool.config import ReviewpoolConfig
from reviewpool.database.connection import get_engine, get_session_factory
from reviewpool.engine import ReviewEngine
from reviewpool.logging import get_logger
from reviewpool.web.errors import register_error_handlers
from reviewpool.web.middleware import RequestLoggingMiddleware
from reviewpool.web.routes import (
    create_health_router,
    create_pull_requests_router,
    create_stats_router,
    create_teams_router,
    create_users_router,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage the database pool and review engine for the app's lifetime.

    Creates the engine, session factory and ``ReviewEngine`` on startup,
    stores them in ``app.state`` for dependency injection and disposes of
    the pool on shutdown.

    Args:
        app: FastAPI application instance

    Yields:
        None after startup, cleans up on context exit
    """
    config: ReviewpoolConfig = app.state.config

    logger.info("app_startup_begin", host=config.web.host, port=config.web.port)

    engine = get_engine(config.database)
    session_factory = get_session_factory(engine)

    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.review_engine = ReviewEngine(session_factory)

    logger.info(
        "database_pool_initialized",
        pool_size=config.database.pool_size,
        max_overflow=config.database.max_overflow,
    )

    yield

    logger.info("app_shutdown_begin")
    await engine.dispose()
    logger.info("database_pool_disposed")


def create_app(config: ReviewpoolConfig | None = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Args:
        config: Optional ReviewpoolConfig. If None, creates default config.

    Returns:
        Configured FastAPI application instance.

    Example:
        >>> from reviewpool.config import AuthConfig, ReviewpoolConfig
        >>>
        >>> config = ReviewpoolConfig(auth=AuthConfig(admin_token="s3cret"))
        >>> app = create_app(config)
    """
    if config is None:
        config = ReviewpoolConfig()

    app = FastAPI(
        title="Reviewpool",
        version=__version__,
        description="Pull request reviewer assignment service",
        lifespan=lifespan,
    )

    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.web.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_error_handlers(app)

    app.include_router(create_health_router())
    app.include_router(create_teams_router())
    app.include_router(create_users_router())
    app.include_router(create_pull_requests_router())
    app.include_router(create_stats_router())

    logger.info(
        "app_created",
        cors_origins=config.web.cors_origins,
        version=__version__,
    )

    return app
