"""Statistics endpoints for Reviewpool (user or admin token)."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from reviewpool.engine import PRStats, ReviewEngine, ReviewerStats
from reviewpool.web.auth import require_reader
from reviewpool.web.dependencies import get_review_engine


class ReviewerStatsResponse(BaseModel):
    reviewers: list[ReviewerStats]


def create_stats_router() -> APIRouter:
    """Create the statistics router.

    Routes:
        GET /stats/reviewers - Assignment count per user
        GET /stats/pullRequests - Pull request totals
    """
    router = APIRouter(
        prefix="/stats",
        tags=["stats"],
        dependencies=[Depends(require_reader)],
    )

    @router.get("/reviewers", response_model=ReviewerStatsResponse)
    async def reviewer_stats(
        engine: ReviewEngine = Depends(get_review_engine),  # noqa: B008
    ) -> ReviewerStatsResponse:
        return ReviewerStatsResponse(reviewers=await engine.get_reviewer_stats())

    @router.get("/pullRequests", response_model=PRStats)
    async def pull_request_stats(
        engine: ReviewEngine = Depends(get_review_engine),  # noqa: B008
    ) -> PRStats:
        return await engine.get_pr_stats()

    return router
