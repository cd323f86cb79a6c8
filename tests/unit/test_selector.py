"""Unit tests for reviewer selection."""

from __future__ import annotations

import random
from collections import Counter
from unittest.mock import AsyncMock, patch

import pytest

from reviewpool.engine.selector import ReviewerSelector


class TestChoose:
    """Test the pure sampling step."""

    def test_returns_count_distinct_candidates(self) -> None:
        selector = ReviewerSelector(rng=random.Random(1))

        picked = selector.choose(["a", "b", "c", "d"], exclude=set(), count=2)

        assert len(picked) == 2
        assert len(set(picked)) == 2
        assert set(picked) <= {"a", "b", "c", "d"}

    def test_never_returns_excluded(self) -> None:
        selector = ReviewerSelector(rng=random.Random(2))

        for _ in range(50):
            picked = selector.choose(["a", "b", "c"], exclude={"a", "c"}, count=2)
            assert picked == ["b"]

    @pytest.mark.parametrize(
        ("candidates", "count", "expected_len"),
        [
            ([], 2, 0),
            (["a"], 2, 1),
            (["a", "b"], 2, 2),
            (["a", "b", "c"], 0, 0),
            (["a", "b", "c"], -1, 0),
            (["a", "b", "c"], 1, 1),
        ],
    )
    def test_size_is_min_of_count_and_pool(
        self, candidates: list[str], count: int, expected_len: int
    ) -> None:
        selector = ReviewerSelector(rng=random.Random(3))
        assert len(selector.choose(candidates, exclude=[], count=count)) == expected_len

    def test_duplicate_candidates_are_ignored(self) -> None:
        selector = ReviewerSelector(rng=random.Random(4))

        picked = selector.choose(["a", "a", "a"], exclude=[], count=2)

        assert picked == ["a"]

    def test_same_seed_same_choice(self) -> None:
        candidates = [f"u{i}" for i in range(10)]

        first = ReviewerSelector(rng=random.Random(99)).choose(candidates, [], 2)
        second = ReviewerSelector(rng=random.Random(99)).choose(candidates, [], 2)

        assert first == second

    def test_every_candidate_gets_picked(self) -> None:
        selector = ReviewerSelector(rng=random.Random(5))
        counts: Counter[str] = Counter()

        for _ in range(600):
            counts.update(selector.choose(["a", "b", "c"], exclude=[], count=1))

        assert set(counts) == {"a", "b", "c"}
        assert min(counts.values()) > 100


class TestSelect:
    """Test selection against the active member query."""

    @pytest.mark.asyncio
    async def test_select_uses_active_members_of_team(self) -> None:
        selector = ReviewerSelector(rng=random.Random(6))
        session = AsyncMock()

        with patch(
            "reviewpool.engine.selector.list_active_member_ids",
            AsyncMock(return_value=["u1", "u2", "u3"]),
        ) as mock_query:
            picked = await selector.select(session, "backend", exclude={"u1"}, count=2)

        mock_query.assert_awaited_once_with(session, "backend")
        assert sorted(picked) == ["u2", "u3"]

    @pytest.mark.asyncio
    async def test_select_with_empty_pool(self) -> None:
        selector = ReviewerSelector()

        with patch(
            "reviewpool.engine.selector.list_active_member_ids",
            AsyncMock(return_value=[]),
        ):
            picked = await selector.select(AsyncMock(), "ghosts", exclude=[], count=2)

        assert picked == []
