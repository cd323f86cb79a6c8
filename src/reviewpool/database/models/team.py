"""Team model for Reviewpool.

A team is identified by its unique name and owns a pool of users who
review each other's pull requests. Teams are never deleted.
"""

from __future__ import annotations

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from reviewpool.database.models.base import Base


class TeamRecord(Base):
    """A named group of users sharing a reviewer pool.

    Attributes:
        team_name: Unique, immutable team name (primary key).
    """

    __tablename__ = "teams"

    team_name: Mapped[str] = mapped_column(Text, primary_key=True)
