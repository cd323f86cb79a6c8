"""Database connection management for Reviewpool.

This module provides factory functions for creating SQLAlchemy async engines
and session factories, configured from the application's DatabaseConfig,
plus the helpers the engine needs from the storage layer: schema creation
and recognition of uniqueness violations.

Example usage:
    >>> from reviewpool.config import DatabaseConfig
    >>> from reviewpool.database.connection import get_engine, get_session_factory
    >>>
    >>> config = DatabaseConfig(url="postgresql+asyncpg://localhost/reviewpool")
    >>> engine = get_engine(config)
    >>> SessionFactory = get_session_factory(engine)
    >>>
    >>> async with SessionFactory() as session:
    ...     result = await session.execute(select(TeamRecord))
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from reviewpool.config import DatabaseConfig
from reviewpool.database.models.base import Base

# SQLSTATE for unique_violation (PostgreSQL)
UNIQUE_VIOLATION = "23505"


def get_engine(config: DatabaseConfig) -> AsyncEngine:
    """Create an async SQLAlchemy engine from database configuration.

    Pool sizing applies only to server databases; SQLite URLs get the
    dialect's default pool.

    Args:
        config: Database configuration containing URL, pool settings,
                and SQL echo preference.

    Returns:
        Configured AsyncEngine instance.
    """
    kwargs: dict[str, Any] = {"echo": config.echo}
    if not config.url.startswith("sqlite"):
        kwargs["pool_size"] = config.pool_size
        kwargs["max_overflow"] = config.max_overflow
    return create_async_engine(config.url, **kwargs)


def get_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the given engine.

    Sessions use expire_on_commit=False so attributes stay readable after
    commit without triggering lazy loads.

    Args:
        engine: AsyncEngine to bind sessions to.

    Returns:
        Configured async_sessionmaker that produces AsyncSession instances.
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet.

    Intended for development and tests; production deployments apply
    the Alembic migrations instead.

    Args:
        engine: AsyncEngine connected to the target database.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell whether an IntegrityError comes from a uniqueness constraint.

    Other integrity failures (foreign keys, NOT NULL, CHECK) return False
    so callers can let them propagate as storage errors.

    Args:
        exc: Error raised by SQLAlchemy during flush or execute.

    Returns:
        True for PostgreSQL SQLSTATE 23505 or SQLite UNIQUE/PRIMARY KEY failures.
    """
    orig = exc.orig
    for attr in ("sqlstate", "pgcode"):
        if getattr(orig, attr, None) == UNIQUE_VIOLATION:
            return True
    return "UNIQUE constraint failed" in str(orig)
