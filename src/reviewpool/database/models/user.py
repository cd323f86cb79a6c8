"""User model for Reviewpool.

Each user belongs to exactly one team. Membership moves when the same
user ID is listed in another team's creation request.
"""

from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Index, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from reviewpool.database.models.base import Base


class UserRecord(Base):
    """A team member who can author and review pull requests.

    Attributes:
        user_id: Globally unique, immutable identifier (primary key).
        username: Display name, used to order team members.
        team_name: Foreign key to the owning team.
        is_active: Whether the user is eligible for new review assignments.
    """

    __tablename__ = "users"

    user_id: Mapped[str] = mapped_column(Text, primary_key=True)
    username: Mapped[str] = mapped_column(Text, nullable=False)
    team_name: Mapped[str] = mapped_column(
        Text,
        ForeignKey("teams.team_name", ondelete="RESTRICT"),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    __table_args__ = (Index("ix_users_team_name", "team_name"),)
