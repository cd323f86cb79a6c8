"""User endpoints for Reviewpool.

- ``POST /users/setIsActive`` flips a user's review eligibility (admin).
- ``GET /users/getReview`` lists pull requests a user reviews, newest first.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from reviewpool.database.models.pull_request import PullRequestStatus
from reviewpool.engine import ReviewEngine, User
from reviewpool.web.auth import require_admin, require_reader
from reviewpool.web.dependencies import get_review_engine


class SetUserActive(BaseModel):
    user_id: str = Field(..., min_length=1)
    is_active: bool


class UserResponse(BaseModel):
    user_id: str
    username: str
    team_name: str
    is_active: bool

    @classmethod
    def from_user(cls, user: User) -> UserResponse:
        return cls(
            user_id=user.user_id,
            username=user.username,
            team_name=user.team_name,
            is_active=user.is_active,
        )


class UserEnvelope(BaseModel):
    user: UserResponse


class PullRequestShort(BaseModel):
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PullRequestStatus


class ReviewAssignments(BaseModel):
    """Pull requests a user is assigned to review."""

    user_id: str
    pull_requests: list[PullRequestShort]


def create_users_router() -> APIRouter:
    """Create the user router.

    Routes:
        POST /users/setIsActive - Set activity flag (admin token)
        GET /users/getReview - Pull requests under review (user or admin token)
    """
    router = APIRouter(prefix="/users", tags=["users"])

    @router.post(
        "/setIsActive",
        response_model=UserEnvelope,
        dependencies=[Depends(require_admin)],
    )
    async def set_is_active(
        payload: SetUserActive,
        engine: ReviewEngine = Depends(get_review_engine),  # noqa: B008
    ) -> UserEnvelope:
        user = await engine.set_user_activity(payload.user_id, payload.is_active)
        return UserEnvelope(user=UserResponse.from_user(user))

    @router.get(
        "/getReview",
        response_model=ReviewAssignments,
        dependencies=[Depends(require_reader)],
    )
    async def get_review(
        user_id: str = Query(..., min_length=1),
        engine: ReviewEngine = Depends(get_review_engine),  # noqa: B008
    ) -> ReviewAssignments:
        user_id = user_id.strip()
        summaries = await engine.list_reviewer_pull_requests(user_id)
        return ReviewAssignments(
            user_id=user_id,
            pull_requests=[
                PullRequestShort(
                    pull_request_id=s.pull_request_id,
                    pull_request_name=s.pull_request_name,
                    author_id=s.author_id,
                    status=s.status,
                )
                for s in summaries
            ],
        )

    return router
