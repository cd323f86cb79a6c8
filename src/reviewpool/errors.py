"""Domain errors raised by the Reviewpool engine.

Every error carries a stable ``code`` that outer layers (HTTP, CLI) map
to their own responses. They are recoverable by the caller; storage
failures are never wrapped in one of these and propagate unchanged.
"""

from __future__ import annotations


class ReviewpoolError(Exception):
    """Base class for domain-level errors.

    Attributes:
        code: Stable machine-readable error code.
        message: Human-readable description.
    """

    code = "INTERNAL"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(ReviewpoolError):
    """Raised when an operation receives blank or malformed input."""

    code = "BAD_REQUEST"


class TeamExistsError(ReviewpoolError):
    """Raised when creating a team whose name is already taken."""

    code = "TEAM_EXISTS"

    def __init__(self, team_name: str):
        self.team_name = team_name
        super().__init__(f"team {team_name!r} already exists")


class TeamNotFoundError(ReviewpoolError):
    code = "NOT_FOUND"

    def __init__(self, team_name: str):
        self.team_name = team_name
        super().__init__(f"team {team_name!r} not found")


class UserNotFoundError(ReviewpoolError):
    code = "NOT_FOUND"

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"user {user_id!r} not found")


class PRExistsError(ReviewpoolError):
    """Raised when a pull request ID is already in use."""

    code = "PR_EXISTS"

    def __init__(self, pull_request_id: str):
        self.pull_request_id = pull_request_id
        super().__init__(f"pull request {pull_request_id!r} already exists")


class PRNotFoundError(ReviewpoolError):
    code = "NOT_FOUND"

    def __init__(self, pull_request_id: str):
        self.pull_request_id = pull_request_id
        super().__init__(f"pull request {pull_request_id!r} not found")


class PRMergedError(ReviewpoolError):
    """Raised when mutating the reviewers of a merged pull request."""

    code = "PR_MERGED"

    def __init__(self, pull_request_id: str):
        self.pull_request_id = pull_request_id
        super().__init__(f"pull request {pull_request_id!r} already merged")


class NotAssignedError(ReviewpoolError):
    """Raised when the reviewer to replace is not assigned to the pull request."""

    code = "NOT_ASSIGNED"

    def __init__(self, pull_request_id: str, user_id: str):
        self.pull_request_id = pull_request_id
        self.user_id = user_id
        super().__init__(
            f"user {user_id!r} is not assigned to pull request {pull_request_id!r}"
        )


class NoCandidateError(ReviewpoolError):
    """Raised when no active team member is eligible as a replacement reviewer."""

    code = "NO_CANDIDATE"

    def __init__(self, pull_request_id: str, team_name: str):
        self.pull_request_id = pull_request_id
        self.team_name = team_name
        super().__init__(
            f"no active candidates available in team {team_name!r} "
            f"for pull request {pull_request_id!r}"
        )
