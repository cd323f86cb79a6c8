"""SQLAlchemy ORM models for Reviewpool.

This module defines the database schema: teams, users, pull requests and
the pull request reviewer assignment table.

All models use SQLAlchemy 2.0 declarative style with Mapped[] type annotations.
"""

from reviewpool.database.models.base import Base
from reviewpool.database.models.pull_request import (
    PullRequestRecord,
    PullRequestStatus,
    ReviewerAssignment,
)
from reviewpool.database.models.team import TeamRecord
from reviewpool.database.models.user import UserRecord

__all__ = [
    "Base",
    "TeamRecord",
    "UserRecord",
    "PullRequestRecord",
    "PullRequestStatus",
    "ReviewerAssignment",
]
