"""Team query functions for Reviewpool.

These functions run inside a transaction owned by the caller; they never
commit or begin on their own.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from reviewpool.database.models.team import TeamRecord
from reviewpool.database.models.user import UserRecord


async def insert_team(session: AsyncSession, team_name: str) -> TeamRecord:
    """Insert a new team row and flush it.

    Args:
        session: Active async database session.
        team_name: Unique team name.

    Returns:
        The persisted TeamRecord.

    Raises:
        sqlalchemy.exc.IntegrityError: If the name is already taken.
    """
    team = TeamRecord(team_name=team_name)
    session.add(team)
    await session.flush()
    return team


async def get_team(session: AsyncSession, team_name: str) -> TeamRecord | None:
    """Retrieve a team by name.

    Args:
        session: Active async database session.
        team_name: Name of the team to retrieve.

    Returns:
        The TeamRecord if found, None otherwise.
    """
    stmt = select(TeamRecord).where(TeamRecord.team_name == team_name)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def list_team_members(session: AsyncSession, team_name: str) -> list[UserRecord]:
    """List the members of a team ordered by username.

    Rows are re-populated from the database so values written earlier in
    the same transaction by bulk upserts are visible.

    Args:
        session: Active async database session.
        team_name: Name of the team.

    Returns:
        UserRecord instances ordered by username, then user_id.
    """
    stmt = (
        select(UserRecord)
        .where(UserRecord.team_name == team_name)
        .order_by(UserRecord.username.asc(), UserRecord.user_id.asc())
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())
