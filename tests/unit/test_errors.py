"""Unit tests for domain error codes and HTTP status mapping."""

from __future__ import annotations

import pytest

from reviewpool.errors import (
    InvalidRequestError,
    NoCandidateError,
    NotAssignedError,
    PRExistsError,
    PRMergedError,
    PRNotFoundError,
    ReviewpoolError,
    TeamExistsError,
    TeamNotFoundError,
    UserNotFoundError,
)
from reviewpool.web.errors import STATUS_BY_CODE


@pytest.mark.parametrize(
    ("error", "code", "status"),
    [
        (InvalidRequestError("bad"), "BAD_REQUEST", 400),
        (TeamExistsError("backend"), "TEAM_EXISTS", 400),
        (TeamNotFoundError("backend"), "NOT_FOUND", 404),
        (UserNotFoundError("u1"), "NOT_FOUND", 404),
        (PRNotFoundError("pr-1"), "NOT_FOUND", 404),
        (PRExistsError("pr-1"), "PR_EXISTS", 409),
        (PRMergedError("pr-1"), "PR_MERGED", 409),
        (NotAssignedError("pr-1", "u2"), "NOT_ASSIGNED", 409),
        (NoCandidateError("pr-1", "backend"), "NO_CANDIDATE", 409),
    ],
)
def test_error_code_and_status(error: ReviewpoolError, code: str, status: int) -> None:
    assert isinstance(error, ReviewpoolError)
    assert error.code == code
    assert STATUS_BY_CODE[error.code] == status
    assert str(error) == error.message


def test_messages_name_the_entities() -> None:
    assert "backend" in TeamExistsError("backend").message
    error = NotAssignedError("pr-7", "u9")
    assert "pr-7" in error.message
    assert "u9" in error.message
    assert error.pull_request_id == "pr-7"
    assert error.user_id == "u9"


def test_base_error_is_internal() -> None:
    assert ReviewpoolError("boom").code == "INTERNAL"
    assert "INTERNAL" not in STATUS_BY_CODE
