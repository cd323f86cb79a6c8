"""Reviewer reassignment for Reviewpool.

Replaces one assigned reviewer of an OPEN pull request with another
active member of the old reviewer's team. The whole read-check-swap
sequence runs in one transaction with the pull request row locked, and
the edge removal is a guarded DELETE: if a concurrent reassignment
already removed the edge, the affected row count is 0 and this call
fails with NotAssignedError instead of inserting a second replacement.
"""

from __future__ import annotations

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reviewpool.database.queries import pull_request as pr_queries
from reviewpool.engine.directory import Directory
from reviewpool.engine.lifecycle import load_pull_request
from reviewpool.engine.models import PullRequest
from reviewpool.engine.selector import ReviewerSelector
from reviewpool.errors import (
    InvalidRequestError,
    NoCandidateError,
    NotAssignedError,
    PRMergedError,
)

logger = structlog.get_logger(__name__)


async def swap_reviewer(
    session: AsyncSession,
    pull_request_id: str,
    old_reviewer_id: str,
    new_reviewer_id: str,
) -> None:
    """Replace one assignment edge with another inside the caller's transaction.

    Raises:
        NotAssignedError: If the old edge no longer exists.
    """
    removed = await pr_queries.remove_reviewer(session, pull_request_id, old_reviewer_id)
    if removed != 1:
        raise NotAssignedError(pull_request_id, old_reviewer_id)
    await pr_queries.add_reviewers(session, pull_request_id, [new_reviewer_id])


class ReassignmentProtocol:
    """Swaps a reviewer on an open pull request.

    Attributes:
        session_factory: Factory producing a fresh AsyncSession per operation.
        directory: Directory used to resolve the old reviewer's team.
        selector: Selector drawing the replacement.
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
        self._logger = logger.bind(component="ReassignmentProtocol")

    async def reassign_reviewer(
        self,
        pull_request_id: str,
        old_reviewer_id: str,
    ) -> tuple[PullRequest, str]:
        """Replace ``old_reviewer_id`` with a random eligible teammate.

        The replacement is an active member of the old reviewer's team who
        is neither the author, the old reviewer, nor already assigned.

        Args:
            pull_request_id: ID of the pull request.
            old_reviewer_id: Currently assigned reviewer to replace.

        Returns:
            The updated pull request and the new reviewer's ID.

        Raises:
            InvalidRequestError: If an argument is blank.
            PRNotFoundError: If the pull request does not exist.
            PRMergedError: If the pull request is merged.
            NotAssignedError: If ``old_reviewer_id`` is not assigned.
            NoCandidateError: If nobody is eligible; nothing is changed.
        """
        if not pull_request_id.strip():
            raise InvalidRequestError("pull_request_id is required")
        if not old_reviewer_id.strip():
            raise InvalidRequestError("old_user_id is required")

        async with self.session_factory() as session, session.begin():
            pull_request = await load_pull_request(session, pull_request_id, for_update=True)

            if pull_request.is_merged:
                raise PRMergedError(pull_request_id)
            if old_reviewer_id not in pull_request.assigned_reviewers:
                raise NotAssignedError(pull_request_id, old_reviewer_id)

            old_reviewer = await self.directory.resolve_user(session, old_reviewer_id)
            exclude = {pull_request.author_id, old_reviewer_id, *pull_request.assigned_reviewers}
            picked = await self.selector.select(
                session,
                old_reviewer.team_name,
                exclude=exclude,
                count=1,
            )
            if not picked:
                raise NoCandidateError(pull_request_id, old_reviewer.team_name)

            new_reviewer_id = picked[0]
            await swap_reviewer(session, pull_request_id, old_reviewer_id, new_reviewer_id)
            updated = await load_pull_request(session, pull_request_id)

        self._logger.info(
            "reviewer_reassigned",
            pull_request_id=pull_request_id,
            old_reviewer_id=old_reviewer_id,
            new_reviewer_id=new_reviewer_id,
            team_name=old_reviewer.team_name,
        )
        return updated, new_reviewer_id
