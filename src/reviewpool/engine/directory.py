"""Team and user directory for Reviewpool.

The Directory owns team and user rows. Creating a team upserts its
members: a user ID that already exists is overwritten with the supplied
username and activity flag and moved to the new team. There is no
explicit "remove member" operation; moving users between teams is done
this way on purpose.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reviewpool.database.connection import is_unique_violation
from reviewpool.database.models.user import UserRecord
from reviewpool.database.queries import team as team_queries
from reviewpool.database.queries import user as user_queries
from reviewpool.engine.models import Team, TeamMember, User
from reviewpool.errors import (
    InvalidRequestError,
    TeamExistsError,
    TeamNotFoundError,
    UserNotFoundError,
)

logger = structlog.get_logger(__name__)


def _validate_team_request(team_name: str, members: Sequence[TeamMember]) -> None:
    if not team_name.strip():
        raise InvalidRequestError("team name is required")
    if not members:
        raise InvalidRequestError(f"team {team_name!r} must have at least one member")
    for idx, member in enumerate(members):
        if not member.user_id.strip():
            raise InvalidRequestError(f"members[{idx}].user_id is required")
        if not member.username.strip():
            raise InvalidRequestError(f"members[{idx}].username is required")


class Directory:
    """Team and user operations, each run as one transaction.

    Attributes:
        session_factory: Factory producing a fresh AsyncSession per operation.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory
        self._logger = logger.bind(component="Directory")

    async def create_team(self, team_name: str, members: Sequence[TeamMember]) -> Team:
        """Create a team and upsert its members atomically.

        Args:
            team_name: Unique, non-empty team name.
            members: Members to create or move into the team. When the same
                user ID appears twice, the last entry wins.

        Returns:
            The created team with members ordered by username.

        Raises:
            InvalidRequestError: If the name is blank, there are no members,
                or a member has a blank ID or username.
            TeamExistsError: If a team with this name already exists.
        """
        _validate_team_request(team_name, members)

        async with self.session_factory() as session, session.begin():
            try:
                await team_queries.insert_team(session, team_name)
            except IntegrityError as exc:
                if is_unique_violation(exc):
                    raise TeamExistsError(team_name) from exc
                raise

            for member in members:
                await user_queries.upsert_user(
                    session,
                    user_id=member.user_id,
                    username=member.username,
                    team_name=team_name,
                    is_active=member.is_active,
                )

            records = await team_queries.list_team_members(session, team_name)

        team = Team(team_name=team_name, members=[User.from_record(r) for r in records])
        self._logger.info(
            "team_created",
            team_name=team_name,
            member_count=len(team.members),
        )
        return team

    async def get_team(self, team_name: str) -> Team:
        """Return a team with its members ordered by username.

        Raises:
            TeamNotFoundError: If no team has this name.
        """
        async with self.session_factory() as session, session.begin():
            if await team_queries.get_team(session, team_name) is None:
                raise TeamNotFoundError(team_name)
            records = await team_queries.list_team_members(session, team_name)

        return Team(team_name=team_name, members=[User.from_record(r) for r in records])

    async def set_user_activity(self, user_id: str, is_active: bool) -> User:
        """Set a user's activity flag.

        Setting the current value again succeeds without further effect.

        Args:
            user_id: ID of the user.
            is_active: New activity flag.

        Returns:
            The updated user.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        async with self.session_factory() as session, session.begin():
            record = await user_queries.get_user(session, user_id, for_update=True)
            if record is None:
                raise UserNotFoundError(user_id)
            previous = record.is_active
            record.is_active = is_active
            await session.flush()
            user = User.from_record(record)

        self._logger.info(
            "user_activity_set",
            user_id=user_id,
            previous=previous,
            is_active=is_active,
        )
        return user

    async def resolve_user(self, session: AsyncSession, user_id: str) -> UserRecord:
        """Look up a user inside the caller's transaction.

        Args:
            session: Session of the surrounding transaction.
            user_id: ID of the user.

        Returns:
            The user's row.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        record = await user_queries.get_user(session, user_id)
        if record is None:
            raise UserNotFoundError(user_id)
        return record
