"""Domain models returned by the Reviewpool engine.

These are immutable Pydantic snapshots built from database rows at the
end of each operation; callers never see ORM objects.

The pull request status is a tagged variant: ``OpenState`` or
``MergedState`` carrying its merge timestamp, discriminated on ``status``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from reviewpool.database.models.pull_request import PullRequestRecord, PullRequestStatus
from reviewpool.database.models.user import UserRecord

# Fixed reviewer cap per pull request
MAX_REVIEWERS = 2


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    SQLite hands back naive datetimes even for timezone-aware columns;
    they are stored in UTC, so the zone is reattached.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class User(BaseModel):
    """A team member.

    Attributes:
        user_id: Unique user identifier.
        username: Display name.
        team_name: Owning team.
        is_active: Whether the user can be picked as a reviewer.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    username: str
    team_name: str
    is_active: bool

    @classmethod
    def from_record(cls, record: UserRecord) -> User:
        return cls(
            user_id=record.user_id,
            username=record.username,
            team_name=record.team_name,
            is_active=record.is_active,
        )


class TeamMember(BaseModel):
    """Input entry for team creation."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    username: str
    is_active: bool = True


class Team(BaseModel):
    """A team and its members, ordered by username."""

    model_config = ConfigDict(frozen=True)

    team_name: str
    members: list[User]


class OpenState(BaseModel):
    """Pull request awaiting review; reviewers may change."""

    model_config = ConfigDict(frozen=True)

    status: Literal[PullRequestStatus.OPEN] = PullRequestStatus.OPEN


class MergedState(BaseModel):
    """Terminal state; ``merged_at`` is fixed by the first merge."""

    model_config = ConfigDict(frozen=True)

    status: Literal[PullRequestStatus.MERGED] = PullRequestStatus.MERGED
    merged_at: datetime


PullRequestState = Annotated[Union[OpenState, MergedState], Field(discriminator="status")]


class PullRequest(BaseModel):
    """A pull request with its assigned reviewers.

    Attributes:
        pull_request_id: Unique pull request ID.
        pull_request_name: Title.
        author_id: Authoring user.
        state: OpenState or MergedState.
        assigned_reviewers: Reviewer IDs ordered ascending (0 to 2 entries).
        created_at: Creation timestamp (UTC).
    """

    model_config = ConfigDict(frozen=True)

    pull_request_id: str
    pull_request_name: str
    author_id: str
    state: PullRequestState
    assigned_reviewers: list[str] = Field(default_factory=list, max_length=MAX_REVIEWERS)
    created_at: datetime

    @property
    def status(self) -> PullRequestStatus:
        return self.state.status

    @property
    def merged_at(self) -> datetime | None:
        if isinstance(self.state, MergedState):
            return self.state.merged_at
        return None

    @property
    def is_merged(self) -> bool:
        return isinstance(self.state, MergedState)

    @classmethod
    def from_record(cls, record: PullRequestRecord, reviewer_ids: list[str]) -> PullRequest:
        state: OpenState | MergedState
        if record.status == PullRequestStatus.MERGED and record.merged_at is not None:
            state = MergedState(merged_at=as_utc(record.merged_at))
        else:
            state = OpenState()
        return cls(
            pull_request_id=record.pull_request_id,
            pull_request_name=record.pull_request_name,
            author_id=record.author_id,
            state=state,
            assigned_reviewers=sorted(reviewer_ids),
            created_at=as_utc(record.created_at),
        )


class PullRequestSummary(BaseModel):
    """Short pull request view used in reviewer listings."""

    model_config = ConfigDict(frozen=True)

    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PullRequestStatus

    @classmethod
    def from_record(cls, record: PullRequestRecord) -> PullRequestSummary:
        return cls(
            pull_request_id=record.pull_request_id,
            pull_request_name=record.pull_request_name,
            author_id=record.author_id,
            status=record.status,
        )


class ReviewerStats(BaseModel):
    """Number of assignment edges referencing one user."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    username: str
    total_assignments: int


class PRStats(BaseModel):
    """Pull request totals; with + without reviewers always equals total."""

    model_config = ConfigDict(frozen=True)

    total_prs: int
    open_prs: int
    merged_prs: int
    prs_with_reviewers: int
    prs_without_reviewers: int
