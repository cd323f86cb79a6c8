"""Integration tests for team and user directory operations.

Covers team creation with member upserts (including moving users between
teams), team lookup ordering, activity toggling and input validation.
"""

from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from reviewpool.database.queries.user import get_user, list_active_member_ids
from reviewpool.engine import ReviewEngine, TeamMember
from reviewpool.errors import (
    InvalidRequestError,
    TeamExistsError,
    TeamNotFoundError,
    UserNotFoundError,
)


@pytest.mark.asyncio
async def test_create_team_returns_members_sorted_by_username(
    review_engine: ReviewEngine, make_members: Any
) -> None:
    team = await review_engine.create_team(
        "payments",
        make_members(("u9", "zoe"), ("u7", "adam"), ("u8", "mia", False)),
    )

    assert team.team_name == "payments"
    assert [m.username for m in team.members] == ["adam", "mia", "zoe"]
    assert all(m.team_name == "payments" for m in team.members)
    assert {m.user_id: m.is_active for m in team.members} == {
        "u7": True,
        "u8": False,
        "u9": True,
    }


@pytest.mark.asyncio
async def test_create_team_twice_raises_team_exists(
    review_engine: ReviewEngine, backend_team: Any, make_members: Any
) -> None:
    with pytest.raises(TeamExistsError) as exc_info:
        await review_engine.create_team("backend", make_members(("u50", "eve")))

    assert exc_info.value.code == "TEAM_EXISTS"
    # The failed request must not have created its member
    with pytest.raises(UserNotFoundError):
        await review_engine.set_user_activity("u50", False)


@pytest.mark.asyncio
async def test_create_team_moves_existing_user(
    review_engine: ReviewEngine, backend_team: Any, make_members: Any
) -> None:
    """Listing an existing user under a new team overwrites and moves them."""
    team = await review_engine.create_team(
        "frontend",
        make_members(("u2", "bobby", False), ("u10", "frank")),
    )

    moved = next(m for m in team.members if m.user_id == "u2")
    assert moved.username == "bobby"
    assert moved.team_name == "frontend"
    assert moved.is_active is False

    backend = await review_engine.get_team("backend")
    assert [m.user_id for m in backend.members] == ["u1", "u3", "u4"]


@pytest.mark.asyncio
async def test_duplicate_member_in_request_last_entry_wins(
    review_engine: ReviewEngine, make_members: Any
) -> None:
    team = await review_engine.create_team(
        "ops",
        make_members(("u20", "gina"), ("u20", "georgina", False)),
    )

    assert len(team.members) == 1
    assert team.members[0].username == "georgina"
    assert team.members[0].is_active is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("team_name", "member_list", "message"),
    [
        ("", [TeamMember(user_id="u1", username="alice")], "team name is required"),
        ("   ", [TeamMember(user_id="u1", username="alice")], "team name is required"),
        ("empty", [], "at least one member"),
        ("blank-id", [TeamMember(user_id=" ", username="alice")], "user_id is required"),
        ("blank-name", [TeamMember(user_id="u1", username="")], "username is required"),
    ],
)
async def test_create_team_rejects_invalid_input(
    review_engine: ReviewEngine,
    team_name: str,
    member_list: list[TeamMember],
    message: str,
) -> None:
    with pytest.raises(InvalidRequestError, match=message):
        await review_engine.create_team(team_name, member_list)


@pytest.mark.asyncio
async def test_get_team_not_found(review_engine: ReviewEngine) -> None:
    with pytest.raises(TeamNotFoundError) as exc_info:
        await review_engine.get_team("nope")

    assert exc_info.value.code == "NOT_FOUND"
    assert exc_info.value.team_name == "nope"


@pytest.mark.asyncio
async def test_set_user_activity_round_trip(
    review_engine: ReviewEngine, backend_team: Any
) -> None:
    user = await review_engine.set_user_activity("u3", False)

    assert user.user_id == "u3"
    assert user.team_name == "backend"
    assert user.is_active is False

    again = await review_engine.set_user_activity("u3", False)
    assert again.is_active is False

    team = await review_engine.get_team("backend")
    assert [m.user_id for m in team.members if m.is_active] == ["u1", "u2", "u4"]

    restored = await review_engine.set_user_activity("u3", True)
    assert restored.is_active is True


@pytest.mark.asyncio
async def test_inactive_users_leave_the_reviewer_pool(
    review_engine: ReviewEngine, backend_team: Any, db_session: AsyncSession
) -> None:
    await review_engine.set_user_activity("u3", False)

    assert await list_active_member_ids(db_session, "backend") == ["u1", "u2", "u4"]
    record = await get_user(db_session, "u3")
    assert record is not None
    assert record.is_active is False


@pytest.mark.asyncio
async def test_set_user_activity_unknown_user(review_engine: ReviewEngine) -> None:
    with pytest.raises(UserNotFoundError) as exc_info:
        await review_engine.set_user_activity("ghost", True)

    assert exc_info.value.user_id == "ghost"
