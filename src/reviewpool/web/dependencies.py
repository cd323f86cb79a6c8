"""FastAPI dependencies shared by the Reviewpool routers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

if TYPE_CHECKING:
    from reviewpool.engine import ReviewEngine


def get_review_engine(request: Request) -> ReviewEngine:
    """Dependency that retrieves the review engine from app state.

    Args:
        request: FastAPI request object

    Returns:
        ReviewEngine stored on app.state by the lifespan handler or a test
    """
    return request.app.state.review_engine  # type: ignore[no-any-return]
