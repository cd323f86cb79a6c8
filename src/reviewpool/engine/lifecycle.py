"""Pull request lifecycle for Reviewpool.

This module owns pull request rows and their reviewer assignment edges.
It implements the pull request state machine (OPEN -> MERGED, MERGED is
terminal), reviewer assignment on creation, idempotent merge, and the
per-reviewer pull request listing.

Every mutation runs in a single transaction. The pull request row is
locked with ``SELECT ... FOR UPDATE`` before it is changed, so concurrent
merges of the same pull request serialize and only the first one sets
``merged_at``.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reviewpool.database.connection import is_unique_violation
from reviewpool.database.models.pull_request import PullRequestStatus
from reviewpool.database.queries import pull_request as pr_queries
from reviewpool.engine.directory import Directory
from reviewpool.engine.models import MAX_REVIEWERS, PullRequest, PullRequestSummary
from reviewpool.engine.selector import ReviewerSelector
from reviewpool.errors import InvalidRequestError, PRExistsError, PRNotFoundError

logger = structlog.get_logger(__name__)


VALID_TRANSITIONS: dict[PullRequestStatus, set[PullRequestStatus]] = {
    PullRequestStatus.OPEN: {PullRequestStatus.MERGED},
    PullRequestStatus.MERGED: set(),  # Terminal
}


def validate_transition(current: PullRequestStatus, target: PullRequestStatus) -> bool:
    """Validate if a status transition is allowed.

    Args:
        current: Current pull request status.
        target: Target pull request status.

    Returns:
        True if the transition is valid according to VALID_TRANSITIONS.
    """
    return target in VALID_TRANSITIONS.get(current, set())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


async def load_pull_request(
    session: AsyncSession,
    pull_request_id: str,
    for_update: bool = False,
) -> PullRequest:
    """Load a pull request and its reviewers inside the caller's transaction.

    Raises:
        PRNotFoundError: If the pull request does not exist.
    """
    record = await pr_queries.get_pull_request(session, pull_request_id, for_update=for_update)
    if record is None:
        raise PRNotFoundError(pull_request_id)
    reviewer_ids = await pr_queries.list_reviewer_ids(session, pull_request_id)
    return PullRequest.from_record(record, reviewer_ids)


class PullRequestLifecycle:
    """Creates, reads and merges pull requests.

    Attributes:
        session_factory: Factory producing a fresh AsyncSession per operation.
        directory: Directory used to resolve authors.
        selector: Reviewer selector used on creation.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        directory: Directory,
        selector: ReviewerSelector,
    ) -> None:
        self.session_factory = session_factory
        self.directory = directory
        self.selector = selector
        self._logger = logger.bind(component="PullRequestLifecycle")

    async def create_pull_request(
        self,
        pull_request_id: str,
        pull_request_name: str,
        author_id: str,
    ) -> PullRequest:
        """Create an OPEN pull request and assign up to two reviewers.

        Reviewers are active members of the author's team other than the
        author. A team where nobody else is active yields no reviewers.

        Args:
            pull_request_id: Unique pull request ID.
            pull_request_name: Title.
            author_id: ID of the authoring user.

        Returns:
            The created pull request.

        Raises:
            InvalidRequestError: If any argument is blank.
            UserNotFoundError: If the author does not exist.
            PRExistsError: If the ID is already in use.
        """
        for field, value in (
            ("pull_request_id", pull_request_id),
            ("pull_request_name", pull_request_name),
            ("author_id", author_id),
        ):
            if not value.strip():
                raise InvalidRequestError(f"{field} is required")

        async with self.session_factory() as session, session.begin():
            author = await self.directory.resolve_user(session, author_id)
            reviewer_ids = await self.selector.select(
                session,
                author.team_name,
                exclude={author_id},
                count=MAX_REVIEWERS,
            )

            try:
                await pr_queries.insert_pull_request(
                    session,
                    pull_request_id=pull_request_id,
                    pull_request_name=pull_request_name,
                    author_id=author_id,
                    created_at=utc_now(),
                )
            except IntegrityError as exc:
                if is_unique_violation(exc):
                    raise PRExistsError(pull_request_id) from exc
                raise

            await pr_queries.add_reviewers(session, pull_request_id, reviewer_ids)
            pull_request = await load_pull_request(session, pull_request_id)

        self._logger.info(
            "pull_request_created",
            pull_request_id=pull_request_id,
            author_id=author_id,
            team_name=author.team_name,
            reviewers=pull_request.assigned_reviewers,
        )
        return pull_request

    async def get_pull_request(self, pull_request_id: str) -> PullRequest:
        """Return a pull request with reviewers ordered by ID.

        Raises:
            PRNotFoundError: If the pull request does not exist.
        """
        async with self.session_factory() as session, session.begin():
            return await load_pull_request(session, pull_request_id)

    async def merge_pull_request(self, pull_request_id: str) -> PullRequest:
        """Merge a pull request; merging a merged one returns it unchanged.

        Args:
            pull_request_id: ID of the pull request.

        Returns:
            The merged pull request. On repeat calls ``merged_at`` is the
            timestamp of the first merge.

        Raises:
            PRNotFoundError: If the pull request does not exist.
        """
        async with self.session_factory() as session, session.begin():
            current = await load_pull_request(session, pull_request_id, for_update=True)

            if not validate_transition(current.status, PullRequestStatus.MERGED):
                self._logger.info(
                    "pull_request_already_merged",
                    pull_request_id=pull_request_id,
                    merged_at=current.merged_at.isoformat() if current.merged_at else None,
                )
                return current

            # 0 rows means a concurrent merge won; its merged_at stands
            await pr_queries.mark_merged(session, pull_request_id, utc_now())
            merged = await load_pull_request(session, pull_request_id)

        self._logger.info(
            "pull_request_merged",
            pull_request_id=pull_request_id,
            merged_at=merged.merged_at.isoformat() if merged.merged_at else None,
        )
        return merged

    async def list_reviewer_pull_requests(self, user_id: str) -> list[PullRequestSummary]:
        """List pull requests the user reviews, newest first.

        An unknown user simply has no pull requests.
        """
        async with self.session_factory() as session, session.begin():
            records = await pr_queries.list_reviewer_pull_requests(session, user_id)
            summaries = [PullRequestSummary.from_record(r) for r in records]

        self._logger.debug(
            "reviewer_pull_requests_listed",
            user_id=user_id,
            count=len(summaries),
        )
        return summaries
