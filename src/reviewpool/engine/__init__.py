"""Team and pull request lifecycle engine for Reviewpool.

``ReviewEngine`` composes the engine components and exposes the logical
operations callers use:

- Directory: create_team, get_team, set_user_activity
- Pull request lifecycle: create_pull_request, get_pull_request,
  merge_pull_request, list_reviewer_pull_requests
- Reassignment: reassign_reviewer
- Reporting: get_reviewer_stats, get_pr_stats

The engine performs no authentication; callers are trusted. Domain
failures are raised as ``reviewpool.errors.ReviewpoolError`` subclasses,
storage failures propagate unchanged.

Example:
    >>> engine = ReviewEngine(session_factory)
    >>> await engine.create_team("backend", [TeamMember(user_id="u1", username="alice")])
    >>> pr = await engine.create_pull_request("pr-1", "Add search", "u1")
"""

from __future__ import annotations

import random
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reviewpool.engine.directory import Directory
from reviewpool.engine.lifecycle import PullRequestLifecycle
from reviewpool.engine.models import (
    MAX_REVIEWERS,
    MergedState,
    OpenState,
    PRStats,
    PullRequest,
    PullRequestSummary,
    ReviewerStats,
    Team,
    TeamMember,
    User,
)
from reviewpool.engine.reassignment import ReassignmentProtocol
from reviewpool.engine.reporting import Reporting
from reviewpool.engine.selector import ReviewerSelector
from reviewpool.logging import operation_context


class ReviewEngine:
    """Facade over the directory, lifecycle, reassignment and reporting components.

    Attributes:
        directory: Team and user operations.
        selector: Shared reviewer selector.
        lifecycle: Pull request creation, lookup and merge.
        reassignment: Reviewer replacement.
        reporting: Statistics.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        rng: random.Random | None = None,
    ) -> None:
        """Wire the engine components to a session factory.

        Args:
            session_factory: Factory producing one session per operation.
            rng: Optional random source for reviewer selection.
        """
        self.directory = Directory(session_factory)
        self.selector = ReviewerSelector(rng)
        self.lifecycle = PullRequestLifecycle(session_factory, self.directory, self.selector)
        self.reassignment = ReassignmentProtocol(session_factory, self.directory, self.selector)
        self.reporting = Reporting(session_factory)

    async def create_team(self, team_name: str, members: Sequence[TeamMember]) -> Team:
        with operation_context("create_team", team_name=team_name):
            return await self.directory.create_team(team_name, members)

    async def get_team(self, team_name: str) -> Team:
        with operation_context("get_team", team_name=team_name):
            return await self.directory.get_team(team_name)

    async def set_user_activity(self, user_id: str, is_active: bool) -> User:
        with operation_context("set_user_activity", user_id=user_id):
            return await self.directory.set_user_activity(user_id, is_active)

    async def create_pull_request(
        self,
        pull_request_id: str,
        pull_request_name: str,
        author_id: str,
    ) -> PullRequest:
        with operation_context("create_pull_request", pull_request_id=pull_request_id):
            return await self.lifecycle.create_pull_request(
                pull_request_id, pull_request_name, author_id
            )

    async def get_pull_request(self, pull_request_id: str) -> PullRequest:
        with operation_context("get_pull_request", pull_request_id=pull_request_id):
            return await self.lifecycle.get_pull_request(pull_request_id)

    async def merge_pull_request(self, pull_request_id: str) -> PullRequest:
        with operation_context("merge_pull_request", pull_request_id=pull_request_id):
            return await self.lifecycle.merge_pull_request(pull_request_id)

    async def reassign_reviewer(
        self,
        pull_request_id: str,
        old_reviewer_id: str,
    ) -> tuple[PullRequest, str]:
        with operation_context("reassign_reviewer", pull_request_id=pull_request_id):
            return await self.reassignment.reassign_reviewer(pull_request_id, old_reviewer_id)

    async def list_reviewer_pull_requests(self, user_id: str) -> list[PullRequestSummary]:
        with operation_context("list_reviewer_pull_requests", user_id=user_id):
            return await self.lifecycle.list_reviewer_pull_requests(user_id)

    async def get_reviewer_stats(self) -> list[ReviewerStats]:
        with operation_context("get_reviewer_stats"):
            return await self.reporting.get_reviewer_stats()

    async def get_pr_stats(self) -> PRStats:
        with operation_context("get_pr_stats"):
            return await self.reporting.get_pr_stats()


__all__ = [
    "ReviewEngine",
    "Directory",
    "PullRequestLifecycle",
    "ReassignmentProtocol",
    "Reporting",
    "ReviewerSelector",
    "MAX_REVIEWERS",
    "MergedState",
    "OpenState",
    "PRStats",
    "PullRequest",
    "PullRequestSummary",
    "ReviewerStats",
    "Team",
    "TeamMember",
    "User",
]
