"""Aggregate query functions for Reviewpool reporting.

Read-only; each function issues a single statement so the figures it
returns come from one consistent snapshot.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import case, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from reviewpool.database.models.pull_request import (
    PullRequestRecord,
    PullRequestStatus,
    ReviewerAssignment,
)
from reviewpool.database.models.user import UserRecord


async def reviewer_assignment_counts(session: AsyncSession) -> list[Any]:
    """Count assignment edges per user, including users with none.

    Returns:
        Rows with ``user_id``, ``username`` and ``total_assignments``,
        ordered by total_assignments descending then username ascending.
    """
    total = func.count(ReviewerAssignment.reviewer_id).label("total_assignments")
    stmt = (
        select(UserRecord.user_id, UserRecord.username, total)
        .outerjoin(ReviewerAssignment, ReviewerAssignment.reviewer_id == UserRecord.user_id)
        .group_by(UserRecord.user_id, UserRecord.username)
        .order_by(total.desc(), UserRecord.username.asc(), UserRecord.user_id.asc())
    )
    result = await session.execute(stmt)
    return list(result.all())


async def pull_request_counts(session: AsyncSession) -> Any:
    """Count pull requests by status and by reviewer presence.

    Returns:
        A row with ``total``, ``open``, ``merged``, ``with_reviewers`` and
        ``without_reviewers``.
    """
    has_reviewers = exists().where(
        ReviewerAssignment.pull_request_id == PullRequestRecord.pull_request_id
    )

    def _count_where(condition: Any, label: str) -> Any:
        return func.coalesce(func.sum(case((condition, 1), else_=0)), 0).label(label)

    stmt = select(
        func.count(PullRequestRecord.pull_request_id).label("total"),
        _count_where(PullRequestRecord.status == PullRequestStatus.OPEN, "open"),
        _count_where(PullRequestRecord.status == PullRequestStatus.MERGED, "merged"),
        _count_where(has_reviewers, "with_reviewers"),
        _count_where(~has_reviewers, "without_reviewers"),
    )
    result = await session.execute(stmt)
    return result.one()
