"""Database layer for Reviewpool.

This module handles database connections, session management, and the
SQLAlchemy models backing teams, users, pull requests and reviewer
assignments.

Public API:
    get_engine: Create an AsyncEngine from DatabaseConfig.
    get_session_factory: Create an async_sessionmaker from an engine.
    create_schema: Create all tables on an engine.
    Base: SQLAlchemy declarative base for all models.
"""

from reviewpool.database.connection import (
    create_schema,
    get_engine,
    get_session_factory,
    is_unique_violation,
)
from reviewpool.database.models import (
    Base,
    PullRequestRecord,
    PullRequestStatus,
    ReviewerAssignment,
    TeamRecord,
    UserRecord,
)

__all__ = [
    "get_engine",
    "get_session_factory",
    "create_schema",
    "is_unique_violation",
    "Base",
    "TeamRecord",
    "UserRecord",
    "PullRequestRecord",
    "PullRequestStatus",
    "ReviewerAssignment",
]
