"""User query functions for Reviewpool.

These functions run inside a transaction owned by the caller.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from reviewpool.database.models.user import UserRecord

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def upsert_user(
    session: AsyncSession,
    user_id: str,
    username: str,
    team_name: str,
    is_active: bool,
) -> None:
    """Insert a user or overwrite an existing one with the same ID.

    An existing user has username, team_name and is_active replaced, which
    moves them to ``team_name``.

    Args:
        session: Active async database session.
        user_id: Unique user identifier.
        username: Display name.
        team_name: Team the user belongs to after the call.
        is_active: Review eligibility flag.

    Raises:
        NotImplementedError: If the bound dialect has no ON CONFLICT support.
    """
    dialect = session.get_bind().dialect.name
    insert = _UPSERT_DIALECTS.get(dialect)
    if insert is None:
        raise NotImplementedError(f"upsert is not supported on dialect {dialect!r}")

    stmt = insert(UserRecord).values(
        user_id=user_id,
        username=username,
        team_name=team_name,
        is_active=is_active,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[UserRecord.user_id],
        set_={
            "username": stmt.excluded.username,
            "team_name": stmt.excluded.team_name,
            "is_active": stmt.excluded.is_active,
        },
    )
    await session.execute(stmt)


async def get_user(
    session: AsyncSession,
    user_id: str,
    for_update: bool = False,
) -> UserRecord | None:
    """Retrieve a user by ID.

    Args:
        session: Active async database session.
        user_id: ID of the user to retrieve.
        for_update: Lock the row until the transaction ends.

    Returns:
        The UserRecord if found, None otherwise.
    """
    stmt = select(UserRecord).where(UserRecord.user_id == user_id)
    if for_update:
        stmt = stmt.with_for_update()
    result = await session.execute(stmt.execution_options(populate_existing=True))
    return result.scalar_one_or_none()


async def list_active_member_ids(session: AsyncSession, team_name: str) -> list[str]:
    """List IDs of the active members of a team.

    Ordered by user_id so seeded selection is reproducible.

    Args:
        session: Active async database session.
        team_name: Name of the team.

    Returns:
        Active user IDs in ascending order.
    """
    stmt = (
        select(UserRecord.user_id)
        .where(UserRecord.team_name == team_name)
        .where(UserRecord.is_active.is_(True))
        .order_by(UserRecord.user_id.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())
