"""Initial schema for Reviewpool.

Creates teams, users, pull_requests and the pull_request_reviewers
association table, plus the lookup indexes used by reviewer selection
and the per-reviewer listing.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "teams",
        sa.Column("team_name", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("team_name", name="pk_teams"),
    )

    op.create_table(
        "users",
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("team_name", sa.Text(), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.PrimaryKeyConstraint("user_id", name="pk_users"),
        sa.ForeignKeyConstraint(
            ["team_name"],
            ["teams.team_name"],
            name="fk_users_team_name_teams",
            ondelete="RESTRICT",
        ),
    )
    op.create_index("ix_users_team_name", "users", ["team_name"])

    op.create_table(
        "pull_requests",
        sa.Column("pull_request_id", sa.Text(), nullable=False),
        sa.Column("pull_request_name", sa.Text(), nullable=False),
        sa.Column("author_id", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("merged_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("pull_request_id", name="pk_pull_requests"),
        sa.ForeignKeyConstraint(
            ["author_id"],
            ["users.user_id"],
            name="fk_pull_requests_author_id_users",
            ondelete="RESTRICT",
        ),
        sa.CheckConstraint(
            "status IN ('OPEN', 'MERGED')",
            name="ck_pull_requests_pull_request_status",
        ),
    )
    op.create_index("ix_pull_requests_author_id", "pull_requests", ["author_id"])

    op.create_table(
        "pull_request_reviewers",
        sa.Column("pull_request_id", sa.Text(), nullable=False),
        sa.Column("reviewer_id", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint(
            "pull_request_id", "reviewer_id", name="pk_pull_request_reviewers"
        ),
        sa.ForeignKeyConstraint(
            ["pull_request_id"],
            ["pull_requests.pull_request_id"],
            name="fk_pull_request_reviewers_pull_request_id_pull_requests",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["reviewer_id"],
            ["users.user_id"],
            name="fk_pull_request_reviewers_reviewer_id_users",
            ondelete="RESTRICT",
        ),
    )
    op.create_index(
        "ix_pull_request_reviewers_reviewer_id",
        "pull_request_reviewers",
        ["reviewer_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_pull_request_reviewers_reviewer_id", table_name="pull_request_reviewers")
    op.drop_table("pull_request_reviewers")
    op.drop_index("ix_pull_requests_author_id", table_name="pull_requests")
    op.drop_table("pull_requests")
    op.drop_index("ix_users_team_name", table_name="users")
    op.drop_table("users")
    op.drop_table("teams")
