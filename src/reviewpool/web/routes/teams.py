"""Team endpoints for Reviewpool.

- ``POST /team/add`` creates a team and upserts its members (admin).
- ``GET /team/get`` returns a team with members ordered by username.

Listing an existing user under a new team moves that user to the new
team; this is the only way membership changes.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi import status as http_status
from pydantic import BaseModel, Field

from reviewpool.engine import ReviewEngine, Team, TeamMember
from reviewpool.logging import get_logger
from reviewpool.web.auth import require_admin, require_reader
from reviewpool.web.dependencies import get_review_engine

logger = get_logger(__name__)


class TeamMemberPayload(BaseModel):
    """A member entry in team requests and responses."""

    user_id: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    is_active: bool = True


class TeamCreate(BaseModel):
    """Request schema for creating a team.

    Attributes:
        team_name: Unique team name
        members: Users to create or move into the team
    """

    team_name: str = Field(..., min_length=1)
    members: list[TeamMemberPayload] = Field(..., min_length=1)


class TeamResponse(BaseModel):
    team_name: str
    members: list[TeamMemberPayload]

    @classmethod
    def from_team(cls, team: Team) -> TeamResponse:
        return cls(
            team_name=team.team_name,
            members=[
                TeamMemberPayload(
                    user_id=m.user_id,
                    username=m.username,
                    is_active=m.is_active,
                )
                for m in team.members
            ],
        )


class TeamEnvelope(BaseModel):
    team: TeamResponse


def create_teams_router() -> APIRouter:
    """Create the team router.

    Routes:
        POST /team/add - Create a team (admin token)
        GET /team/get - Get a team by name (user or admin token)
    """
    router = APIRouter(prefix="/team", tags=["teams"])

    @router.post(
        "/add",
        response_model=TeamEnvelope,
        status_code=http_status.HTTP_201_CREATED,
        dependencies=[Depends(require_admin)],
    )
    async def add_team(
        payload: TeamCreate,
        engine: ReviewEngine = Depends(get_review_engine),  # noqa: B008
    ) -> TeamEnvelope:
        team = await engine.create_team(
            payload.team_name,
            [
                TeamMember(user_id=m.user_id, username=m.username, is_active=m.is_active)
                for m in payload.members
            ],
        )
        logger.info("team_created_via_api", team_name=team.team_name)
        return TeamEnvelope(team=TeamResponse.from_team(team))

    @router.get(
        "/get",
        response_model=TeamResponse,
        dependencies=[Depends(require_reader)],
    )
    async def get_team(
        team_name: str = Query(..., min_length=1),
        engine: ReviewEngine = Depends(get_review_engine),  # noqa: B008
    ) -> TeamResponse:
        team = await engine.get_team(team_name.strip())
        return TeamResponse.from_team(team)

    return router
