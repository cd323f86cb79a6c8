"""Pull request and reviewer assignment models for Reviewpool.

Defines the pull_requests table, the PullRequestStatus enum and the
pull_request_reviewers association table linking a pull request to at
most two reviewers.
"""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from reviewpool.database.models.base import Base


class PullRequestStatus(str, enum.Enum):
    """Lifecycle status for a pull request.

    States:
        OPEN: Initial state; reviewers may be reassigned.
        MERGED: Terminal state; reviewers are frozen.
    """

    OPEN = "OPEN"
    MERGED = "MERGED"


class PullRequestRecord(Base):
    """A pull request tracked for review assignment.

    Attributes:
        pull_request_id: Unique, immutable identifier (primary key).
        pull_request_name: Human-readable title.
        author_id: Foreign key to the authoring user.
        status: OPEN or MERGED.
        created_at: UTC timestamp set at creation.
        merged_at: UTC timestamp of the first merge, None while open.
    """

    __tablename__ = "pull_requests"

    pull_request_id: Mapped[str] = mapped_column(Text, primary_key=True)
    pull_request_name: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("users.user_id", ondelete="RESTRICT"),
        nullable=False,
    )
    status: Mapped[PullRequestStatus] = mapped_column(
        Enum(
            PullRequestStatus,
            name="pull_request_status",
            native_enum=False,
            create_constraint=True,
            length=16,
        ),
        nullable=False,
        default=PullRequestStatus.OPEN,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    merged_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (Index("ix_pull_requests_author_id", "author_id"),)


class ReviewerAssignment(Base):
    """Assignment edge between a pull request and one of its reviewers.

    The composite primary key forbids assigning the same reviewer twice.
    Rows are removed together with their pull request.

    Attributes:
        pull_request_id: Foreign key to the pull request.
        reviewer_id: Foreign key to the reviewing user.
    """

    __tablename__ = "pull_request_reviewers"

    pull_request_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("pull_requests.pull_request_id", ondelete="CASCADE"),
        primary_key=True,
    )
    reviewer_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("users.user_id", ondelete="RESTRICT"),
        primary_key=True,
    )

    __table_args__ = (Index("ix_pull_request_reviewers_reviewer_id", "reviewer_id"),)
