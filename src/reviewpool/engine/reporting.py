"""Read-only reviewer workload and pull request statistics."""

from __future__ import annotations

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reviewpool.database.queries import stats as stats_queries
from reviewpool.engine.models import PRStats, ReviewerStats

logger = structlog.get_logger(__name__)


class Reporting:
    """Derives statistics from current teams, users and pull requests."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory
        self._logger = logger.bind(component="Reporting")

    async def get_reviewer_stats(self) -> list[ReviewerStats]:
        """Assignment counts for every user, busiest first.

        Counts include edges on merged pull requests. Ties are ordered by
        username.
        """
        async with self.session_factory() as session, session.begin():
            rows = await stats_queries.reviewer_assignment_counts(session)

        stats = [
            ReviewerStats(
                user_id=row.user_id,
                username=row.username,
                total_assignments=row.total_assignments,
            )
            for row in rows
        ]
        self._logger.debug("reviewer_stats_computed", reviewer_count=len(stats))
        return stats

    async def get_pr_stats(self) -> PRStats:
        """Pull request totals by status and by reviewer presence."""
        async with self.session_factory() as session, session.begin():
            row = await stats_queries.pull_request_counts(session)

        stats = PRStats(
            total_prs=row.total,
            open_prs=row.open,
            merged_prs=row.merged,
            prs_with_reviewers=row.with_reviewers,
            prs_without_reviewers=row.without_reviewers,
        )
        self._logger.debug(
            "pr_stats_computed",
            total=stats.total_prs,
            open=stats.open_prs,
            merged=stats.merged_prs,
        )
        return stats
