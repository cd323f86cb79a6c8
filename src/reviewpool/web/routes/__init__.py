"""FastAPI route definitions for the Reviewpool HTTP API."""

from __future__ import annotations

from reviewpool.web.routes.health import (
    HealthResponse,
    ReadinessResponse,
    create_health_router,
)
from reviewpool.web.routes.pull_requests import (
    PullRequestCreate,
    PullRequestResponse,
    ReviewerReassign,
    create_pull_requests_router,
)
from reviewpool.web.routes.stats import create_stats_router
from reviewpool.web.routes.teams import TeamCreate, TeamResponse, create_teams_router
from reviewpool.web.routes.users import SetUserActive, UserResponse, create_users_router

__all__ = [
    # Health
    "HealthResponse",
    "ReadinessResponse",
    "create_health_router",
    # Teams
    "TeamCreate",
    "TeamResponse",
    "create_teams_router",
    # Users
    "SetUserActive",
    "UserResponse",
    "create_users_router",
    # Pull requests
    "PullRequestCreate",
    "PullRequestResponse",
    "ReviewerReassign",
    "create_pull_requests_router",
    # Stats
    "create_stats_router",
]
