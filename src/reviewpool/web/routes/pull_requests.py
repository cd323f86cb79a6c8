"""Pull request endpoints for Reviewpool.

All routes require the admin token:

- ``POST /pullRequest/create`` creates a pull request and assigns up to
  two reviewers from the author's team.
- ``POST /pullRequest/merge`` merges it; repeating the call returns the
  same record with the first ``mergedAt``.
- ``POST /pullRequest/reassign`` replaces one reviewer.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi import status as http_status
from pydantic import BaseModel, ConfigDict, Field

from reviewpool.database.models.pull_request import PullRequestStatus
from reviewpool.engine import PullRequest, ReviewEngine
from reviewpool.logging import get_logger
from reviewpool.web.auth import require_admin
from reviewpool.web.dependencies import get_review_engine

logger = get_logger(__name__)


class PullRequestCreate(BaseModel):
    pull_request_id: str = Field(..., min_length=1)
    pull_request_name: str = Field(..., min_length=1)
    author_id: str = Field(..., min_length=1)


class PullRequestMerge(BaseModel):
    pull_request_id: str = Field(..., min_length=1)


class ReviewerReassign(BaseModel):
    pull_request_id: str = Field(..., min_length=1)
    old_user_id: str = Field(..., min_length=1)


class PullRequestResponse(BaseModel):
    """Response schema for a pull request.

    ``mergedAt`` is omitted while the pull request is open.
    """

    model_config = ConfigDict(populate_by_name=True)

    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PullRequestStatus
    assigned_reviewers: list[str]
    created_at: datetime = Field(alias="createdAt")
    merged_at: datetime | None = Field(default=None, alias="mergedAt")

    @classmethod
    def from_pull_request(cls, pr: PullRequest) -> PullRequestResponse:
        return cls(
            pull_request_id=pr.pull_request_id,
            pull_request_name=pr.pull_request_name,
            author_id=pr.author_id,
            status=pr.status,
            assigned_reviewers=list(pr.assigned_reviewers),
            created_at=pr.created_at,
            merged_at=pr.merged_at,
        )


class PullRequestEnvelope(BaseModel):
    pr: PullRequestResponse


class ReassignResponse(BaseModel):
    pr: PullRequestResponse
    replaced_by: str


def create_pull_requests_router() -> APIRouter:
    """Create the pull request router.

    Routes:
        POST /pullRequest/create - Create and assign reviewers
        POST /pullRequest/merge - Merge (idempotent)
        POST /pullRequest/reassign - Replace a reviewer
    """
    router = APIRouter(
        prefix="/pullRequest",
        tags=["pull-requests"],
        dependencies=[Depends(require_admin)],
    )

    @router.post(
        "/create",
        response_model=PullRequestEnvelope,
        response_model_exclude_none=True,
        status_code=http_status.HTTP_201_CREATED,
    )
    async def create_pull_request(
        payload: PullRequestCreate,
        engine: ReviewEngine = Depends(get_review_engine),  # noqa: B008
    ) -> PullRequestEnvelope:
        pr = await engine.create_pull_request(
            payload.pull_request_id,
            payload.pull_request_name,
            payload.author_id,
        )
        logger.info(
            "pull_request_created_via_api",
            pull_request_id=pr.pull_request_id,
            reviewer_count=len(pr.assigned_reviewers),
        )
        return PullRequestEnvelope(pr=PullRequestResponse.from_pull_request(pr))

    @router.post(
        "/merge",
        response_model=PullRequestEnvelope,
        response_model_exclude_none=True,
    )
    async def merge_pull_request(
        payload: PullRequestMerge,
        engine: ReviewEngine = Depends(get_review_engine),  # noqa: B008
    ) -> PullRequestEnvelope:
        pr = await engine.merge_pull_request(payload.pull_request_id)
        return PullRequestEnvelope(pr=PullRequestResponse.from_pull_request(pr))

    @router.post(
        "/reassign",
        response_model=ReassignResponse,
        response_model_exclude_none=True,
    )
    async def reassign_reviewer(
        payload: ReviewerReassign,
        engine: ReviewEngine = Depends(get_review_engine),  # noqa: B008
    ) -> ReassignResponse:
        pr, replacement = await engine.reassign_reviewer(
            payload.pull_request_id,
            payload.old_user_id,
        )
        return ReassignResponse(
            pr=PullRequestResponse.from_pull_request(pr),
            replaced_by=replacement,
        )

    return router
