"""Reviewer selection for Reviewpool.

Selection is split in two steps:

- ``ReviewerSelector.choose`` is a pure function over a candidate list:
  it drops excluded IDs and draws a uniform random sample. The random
  source is injectable, so tests can pass a seeded ``random.Random``.
- ``ReviewerSelector.select`` loads the active members of a team inside
  the caller's transaction and delegates to ``choose``.

Randomness never lives in SQL (no ``ORDER BY random()``), and there is no
weighting by current review load.

Example:
    >>> selector = ReviewerSelector(rng=random.Random(7))
    >>> picked = selector.choose(["bob", "carol", "dave"], exclude={"bob"}, count=2)
    >>> sorted(picked)
    ['carol', 'dave']
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from reviewpool.database.queries.user import list_active_member_ids

logger = structlog.get_logger(__name__)


class ReviewerSelector:
    """Picks reviewers uniformly at random among eligible team members.

    Attributes:
        rng: Random source used for sampling.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        """Initialize the selector.

        Args:
            rng: Random source. Defaults to a fresh ``random.Random`` seeded
                from system entropy.
        """
        self.rng = rng if rng is not None else random.Random()
        self._logger = logger.bind(component="ReviewerSelector")

    def choose(
        self,
        candidates: Sequence[str],
        exclude: Iterable[str],
        count: int,
    ) -> list[str]:
        """Pick up to ``count`` distinct candidates not in ``exclude``.

        Args:
            candidates: Eligible user IDs; duplicates are ignored.
            exclude: User IDs that must not be picked.
            count: Maximum number of IDs to return.

        Returns:
            A uniformly random subset of the remaining candidates with
            ``min(count, len(remaining))`` entries, possibly empty.
        """
        if count <= 0:
            return []
        excluded = set(exclude)
        eligible = [c for c in dict.fromkeys(candidates) if c not in excluded]
        return self.rng.sample(eligible, min(count, len(eligible)))

    async def select(
        self,
        session: AsyncSession,
        team_name: str,
        exclude: Iterable[str],
        count: int,
    ) -> list[str]:
        """Pick up to ``count`` active members of ``team_name``.

        Args:
            session: Session of the surrounding transaction.
            team_name: Team whose active members form the pool.
            exclude: User IDs that must not be picked.
            count: Maximum number of reviewers to return.

        Returns:
            Selected user IDs, a subset of active members minus ``exclude``.
        """
        excluded = set(exclude)
        active = await list_active_member_ids(session, team_name)
        chosen = self.choose(active, excluded, count)

        self._logger.debug(
            "reviewers_selected",
            team_name=team_name,
            pool_size=len(active),
            excluded=sorted(excluded),
            requested=count,
            selected=chosen,
        )
        return chosen
