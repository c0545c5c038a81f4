"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-16 09:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_VOTE_KINDS = ("upvote", "downvote")
_REPORT_CATEGORIES = ("spam", "misinformation", "offensive")
_COVERS = ("none", "controversial", "spam", "misinformation", "offensive", "triggering")
_AUDIT_STATES = ("none", "testing", "passed", "failed")


def _enum(name: str, values: tuple[str, ...]) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True, length=32)


def upgrade() -> None:
    """Create users, follows, freets and the vote/report ledgers."""
    op.create_table(
        "user_account",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False),
        sa.Column("date_joined", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_table(
        "follow",
        sa.Column("follower_id", sa.Integer(), nullable=False),
        sa.Column("followee_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["follower_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["followee_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("follower_id", "followee_id"),
    )
    op.create_table(
        "freet",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("content", sa.String(length=280), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("modified_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False),
        sa.Column("downvotes", sa.Integer(), nullable=False),
        sa.Column("spam_reports", sa.Integer(), nullable=False),
        sa.Column("misinformation_reports", sa.Integer(), nullable=False),
        sa.Column("offensive_reports", sa.Integer(), nullable=False),
        sa.Column("flagged", sa.Boolean(), nullable=False),
        sa.Column("cover", _enum("cover", _COVERS), nullable=False),
        sa.Column("audit_state", _enum("auditstate", _AUDIT_STATES), nullable=False),
        sa.Column("audit_category", _enum("reportcategory", _REPORT_CATEGORIES), nullable=True),
        sa.Column("audit_yes", sa.Integer(), nullable=True),
        sa.Column("audit_no", sa.Integer(), nullable=True),
        sa.Column("audit_started_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("upvotes >= 0 AND downvotes >= 0", name="ck_freet_votes_non_negative"),
        sa.CheckConstraint(
            "spam_reports >= 0 AND misinformation_reports >= 0 AND offensive_reports >= 0",
            name="ck_freet_reports_non_negative",
        ),
        sa.ForeignKeyConstraint(["author_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_freet_modified_at", "freet", ["modified_at"])
    op.create_index("ix_freet_author_id", "freet", ["author_id"])

    op.create_table(
        "freet_vote",
        sa.Column("freet_id", sa.Integer(), nullable=False),
        sa.Column("voter_id", sa.Integer(), nullable=False),
        sa.Column("kind", _enum("votekind", _VOTE_KINDS), nullable=False),
        sa.ForeignKeyConstraint(["freet_id"], ["freet.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["voter_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("freet_id", "voter_id"),
    )
    op.create_index("ix_freet_vote_freet_id", "freet_vote", ["freet_id"])

    op.create_table(
        "freet_report",
        sa.Column("freet_id", sa.Integer(), nullable=False),
        sa.Column("reporter_id", sa.Integer(), nullable=False),
        sa.Column("category", _enum("reportcategory", _REPORT_CATEGORIES), nullable=False),
        sa.ForeignKeyConstraint(["freet_id"], ["freet.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reporter_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("freet_id", "reporter_id"),
    )
    op.create_index("ix_freet_report_freet_id", "freet_report", ["freet_id"])


def downgrade() -> None:
    """Drop every table created by :func:`upgrade`."""
    op.drop_index("ix_freet_report_freet_id", table_name="freet_report")
    op.drop_table("freet_report")
    op.drop_index("ix_freet_vote_freet_id", table_name="freet_vote")
    op.drop_table("freet_vote")
    op.drop_index("ix_freet_author_id", table_name="freet")
    op.drop_index("ix_freet_modified_at", table_name="freet")
    op.drop_table("freet")
    op.drop_table("follow")
    op.drop_table("user_account")
