"""Health check endpoints for Reviewpool.

- ``GET /health`` is a liveness probe with no dependencies.
- ``GET /health/ready`` verifies database connectivity.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy import text

from reviewpool.logging import get_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = get_logger(__name__)


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Current health status ("ok")
    """

    status: str


class ReadinessResponse(BaseModel):
    """Readiness check response model.

    Attributes:
        status: Current readiness status ("ok", "unhealthy")
        database: Database connectivity status ("connected", "disconnected")
    """

    status: str
    database: str


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    """Dependency that retrieves session factory from app state."""
    return request.app.state.session_factory  # type: ignore[no-any-return]


def create_health_router() -> APIRouter:
    """Create health check router.

    Routes:
        GET /health - Basic liveness check
        GET /health/ready - Readiness check with database verification
    """
    router = APIRouter(prefix="/health", tags=["health"])

    @router.get("", response_model=HealthResponse)
    async def health() -> dict[str, Any]:
        return {"status": "ok"}

    @router.get("/ready", response_model=ReadinessResponse)
    async def readiness(
        session_factory: async_sessionmaker[AsyncSession] = Depends(  # noqa: B008
            get_session_factory
        ),
    ) -> dict[str, Any]:
        """Readiness check with database connectivity verification.

        Returns:
            Status response with database connectivity information.
        """
        try:
            async with session_factory() as session:
                await session.execute(text("SELECT 1"))

            logger.debug("readiness_check_passed", database="connected")
            return {"status": "ok", "database": "connected"}

        except Exception as exc:
            logger.warning(
                "readiness_check_failed",
                database="disconnected",
                error=str(exc),
            )
            return {"status": "unhealthy", "database": "disconnected"}

    return router
