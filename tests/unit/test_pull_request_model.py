"""Unit tests for the pull request state machine and domain models.

Tests cover:
- VALID_TRANSITIONS and validate_transition
- OpenState / MergedState discrimination on status
- Building PullRequest snapshots from database rows
- Reviewer cap and timestamp normalization
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import TypeAdapter, ValidationError

from reviewpool.database.models.pull_request import PullRequestRecord, PullRequestStatus
from reviewpool.engine.lifecycle import VALID_TRANSITIONS, validate_transition
from reviewpool.engine.models import (
    MAX_REVIEWERS,
    MergedState,
    OpenState,
    PullRequest,
    PullRequestState,
    as_utc,
)

CREATED = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_record(
    status: PullRequestStatus = PullRequestStatus.OPEN,
    merged_at: datetime | None = None,
    created_at: datetime = CREATED,
) -> PullRequestRecord:
    return PullRequestRecord(
        pull_request_id="pr-1",
        pull_request_name="Add search",
        author_id="u1",
        status=status,
        created_at=created_at,
        merged_at=merged_at,
    )


class TestValidTransitions:
    def test_every_status_is_defined(self) -> None:
        assert set(VALID_TRANSITIONS) == set(PullRequestStatus)

    @pytest.mark.parametrize(
        ("current", "target", "expected"),
        [
            (PullRequestStatus.OPEN, PullRequestStatus.MERGED, True),
            (PullRequestStatus.OPEN, PullRequestStatus.OPEN, False),
            (PullRequestStatus.MERGED, PullRequestStatus.OPEN, False),
            (PullRequestStatus.MERGED, PullRequestStatus.MERGED, False),
        ],
    )
    def test_validate_transition(
        self,
        current: PullRequestStatus,
        target: PullRequestStatus,
        expected: bool,
    ) -> None:
        assert validate_transition(current, target) is expected

    def test_merged_is_terminal(self) -> None:
        assert VALID_TRANSITIONS[PullRequestStatus.MERGED] == set()


class TestPullRequestState:
    def test_discriminates_on_status(self) -> None:
        adapter = TypeAdapter(PullRequestState)

        assert isinstance(adapter.validate_python({"status": PullRequestStatus.OPEN}), OpenState)
        merged = adapter.validate_python(
            {"status": PullRequestStatus.MERGED, "merged_at": "2026-03-02T08:00:00+00:00"}
        )
        assert isinstance(merged, MergedState)
        assert merged.merged_at == datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)

    def test_merged_state_requires_timestamp(self) -> None:
        with pytest.raises(ValidationError):
            TypeAdapter(PullRequestState).validate_python({"status": PullRequestStatus.MERGED})


class TestPullRequestFromRecord:
    def test_open_record(self) -> None:
        pr = PullRequest.from_record(make_record(), ["u3", "u2"])

        assert pr.status == PullRequestStatus.OPEN
        assert isinstance(pr.state, OpenState)
        assert pr.merged_at is None
        assert not pr.is_merged
        assert pr.assigned_reviewers == ["u2", "u3"]

    def test_merged_record(self) -> None:
        merged_at = CREATED + timedelta(hours=3)

        pr = PullRequest.from_record(
            make_record(PullRequestStatus.MERGED, merged_at=merged_at), ["u2"]
        )

        assert pr.is_merged
        assert pr.status == PullRequestStatus.MERGED
        assert pr.merged_at == merged_at

    def test_naive_timestamps_are_treated_as_utc(self) -> None:
        naive = datetime(2026, 3, 1, 12, 0)

        pr = PullRequest.from_record(make_record(created_at=naive), [])

        assert pr.created_at == CREATED
        assert pr.created_at.tzinfo is not None

    def test_reviewer_cap(self) -> None:
        with pytest.raises(ValidationError):
            PullRequest(
                pull_request_id="pr-1",
                pull_request_name="Too many",
                author_id="u1",
                state=OpenState(),
                assigned_reviewers=["u2", "u3", "u4"],
                created_at=CREATED,
            )

    def test_snapshot_is_immutable(self) -> None:
        pr = PullRequest.from_record(make_record(), [])

        with pytest.raises(ValidationError):
            pr.pull_request_name = "Renamed"  # type: ignore[misc]


def test_as_utc_converts_other_zones() -> None:
    plus_two = timezone(timedelta(hours=2))

    assert as_utc(datetime(2026, 3, 1, 14, 0, tzinfo=plus_two)) == CREATED
    assert as_utc(datetime(2026, 3, 1, 14, 0, tzinfo=plus_two)).tzinfo == timezone.utc


def test_max_reviewers_is_two() -> None:
    assert MAX_REVIEWERS == 2
