"""Database query functions for Reviewpool.

This module provides async query functions for all database entities:
- Team insertion and member listing
- User upsert, lookup and active-member listing
- Pull request insertion, guarded merge and reviewer edge changes
- Aggregate counts for reporting

None of these functions manage transactions; callers wrap them in
``async with session.begin()``.
"""

from reviewpool.database.queries.pull_request import (
    add_reviewers,
    get_pull_request,
    insert_pull_request,
    list_reviewer_ids,
    list_reviewer_pull_requests,
    mark_merged,
    remove_reviewer,
)
from reviewpool.database.queries.stats import (
    pull_request_counts,
    reviewer_assignment_counts,
)
from reviewpool.database.queries.team import get_team, insert_team, list_team_members
from reviewpool.database.queries.user import (
    get_user,
    list_active_member_ids,
    upsert_user,
)

__all__ = [
    # Team queries
    "insert_team",
    "get_team",
    "list_team_members",
    # User queries
    "upsert_user",
    "get_user",
    "list_active_member_ids",
    # Pull request queries
    "insert_pull_request",
    "add_reviewers",
    "get_pull_request",
    "list_reviewer_ids",
    "mark_merged",
    "remove_reviewer",
    "list_reviewer_pull_requests",
    # Reporting queries
    "reviewer_assignment_counts",
    "pull_request_counts",
]
