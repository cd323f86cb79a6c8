"""Pull request and reviewer assignment query functions for Reviewpool.

These functions run inside a transaction owned by the caller. Mutations
that must be conditional on current state (merge, reviewer removal) are
expressed as single guarded statements returning the affected row count.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from reviewpool.database.models.pull_request import (
    PullRequestRecord,
    PullRequestStatus,
    ReviewerAssignment,
)


async def insert_pull_request(
    session: AsyncSession,
    pull_request_id: str,
    pull_request_name: str,
    author_id: str,
    created_at: datetime,
) -> PullRequestRecord:
    """Insert an OPEN pull request and flush it.

    Args:
        session: Active async database session.
        pull_request_id: Unique pull request ID.
        pull_request_name: Human-readable title.
        author_id: ID of the authoring user.
        created_at: Creation timestamp (UTC).

    Returns:
        The persisted PullRequestRecord.

    Raises:
        sqlalchemy.exc.IntegrityError: If the ID is already in use.
    """
    pull_request = PullRequestRecord(
        pull_request_id=pull_request_id,
        pull_request_name=pull_request_name,
        author_id=author_id,
        status=PullRequestStatus.OPEN,
        created_at=created_at,
        merged_at=None,
    )
    session.add(pull_request)
    await session.flush()
    return pull_request


async def add_reviewers(
    session: AsyncSession,
    pull_request_id: str,
    reviewer_ids: Iterable[str],
) -> None:
    """Insert one assignment edge per reviewer.

    Args:
        session: Active async database session.
        pull_request_id: ID of the pull request.
        reviewer_ids: IDs of the reviewers to assign.
    """
    session.add_all(
        ReviewerAssignment(pull_request_id=pull_request_id, reviewer_id=reviewer_id)
        for reviewer_id in reviewer_ids
    )
    await session.flush()


async def get_pull_request(
    session: AsyncSession,
    pull_request_id: str,
    for_update: bool = False,
) -> PullRequestRecord | None:
    """Retrieve a pull request by ID.

    Args:
        session: Active async database session.
        pull_request_id: ID of the pull request.
        for_update: Lock the row until the transaction ends. Ignored by
            SQLite, which serializes writers on its own.

    Returns:
        The PullRequestRecord if found, None otherwise.
    """
    stmt = select(PullRequestRecord).where(
        PullRequestRecord.pull_request_id == pull_request_id
    )
    if for_update:
        stmt = stmt.with_for_update()
    result = await session.execute(stmt.execution_options(populate_existing=True))
    return result.scalar_one_or_none()


async def list_reviewer_ids(session: AsyncSession, pull_request_id: str) -> list[str]:
    """List the reviewers assigned to a pull request, ordered by ID."""
    stmt = (
        select(ReviewerAssignment.reviewer_id)
        .where(ReviewerAssignment.pull_request_id == pull_request_id)
        .order_by(ReviewerAssignment.reviewer_id.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def mark_merged(
    session: AsyncSession,
    pull_request_id: str,
    merged_at: datetime,
) -> int:
    """Set MERGED status and merge timestamp on an OPEN pull request.

    Args:
        session: Active async database session.
        pull_request_id: ID of the pull request.
        merged_at: Merge timestamp (UTC).

    Returns:
        Number of rows updated: 1, or 0 if the pull request was not OPEN.
    """
    stmt = (
        update(PullRequestRecord)
        .where(PullRequestRecord.pull_request_id == pull_request_id)
        .where(PullRequestRecord.status == PullRequestStatus.OPEN)
        .values(status=PullRequestStatus.MERGED, merged_at=merged_at)
    )
    result = await session.execute(stmt)
    return result.rowcount  # type: ignore[attr-defined]


async def remove_reviewer(
    session: AsyncSession,
    pull_request_id: str,
    reviewer_id: str,
) -> int:
    """Delete a single assignment edge.

    Returns:
        Number of rows deleted: 1, or 0 if the edge was already gone.
    """
    stmt = (
        delete(ReviewerAssignment)
        .where(ReviewerAssignment.pull_request_id == pull_request_id)
        .where(ReviewerAssignment.reviewer_id == reviewer_id)
    )
    result = await session.execute(stmt)
    return result.rowcount  # type: ignore[attr-defined]


async def list_reviewer_pull_requests(
    session: AsyncSession,
    reviewer_id: str,
) -> list[PullRequestRecord]:
    """List pull requests a user is assigned to review, newest first.

    Args:
        session: Active async database session.
        reviewer_id: ID of the reviewer.

    Returns:
        PullRequestRecord instances ordered by created_at descending,
        ties broken by pull request ID descending.
    """
    stmt = (
        select(PullRequestRecord)
        .join(
            ReviewerAssignment,
            ReviewerAssignment.pull_request_id == PullRequestRecord.pull_request_id,
        )
        .where(ReviewerAssignment.reviewer_id == reviewer_id)
        .order_by(
            PullRequestRecord.created_at.desc(),
            PullRequestRecord.pull_request_id.desc(),
        )
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())
