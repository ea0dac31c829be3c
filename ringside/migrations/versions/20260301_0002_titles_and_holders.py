"""Titles and title holder history.

Revision ID: 0002
Revises: 0001
Create Date: 2026-03-01

- titles, with the denormalized current_holder_id pointer and an optional
  show reservation
- title_holders, one row per reign

CRITICAL: uq_title_holders_open_reign allows a single open reign
(held_until IS NULL) per title.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def _updated_at_trigger(table: str) -> str:
    return f"""
        CREATE TRIGGER update_{table}_updated_at
            AFTER UPDATE ON {table}
            FOR EACH ROW
            BEGIN
                UPDATE {table} SET updated_at = CURRENT_TIMESTAMP WHERE id = NEW.id;
            END
    """


def upgrade() -> None:
    op.create_table(
        "titles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("title_type", sa.Text(), nullable=False),
        sa.Column("division", sa.Text(), nullable=False),
        sa.Column("prestige_tier", sa.Integer(), nullable=False),
        sa.Column("gender", sa.Text(), nullable=False),
        sa.Column("show_id", sa.Integer(), nullable=True),
        sa.Column("current_holder_id", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("is_user_created", sa.Boolean(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["show_id"], ["shows.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(
            ["current_holder_id"], ["wrestlers.id"], ondelete="SET NULL"
        ),
        sa.CheckConstraint(
            "prestige_tier >= 1 AND prestige_tier <= 5",
            name="ck_titles_prestige_tier_range",
        ),
    )
    op.create_index("idx_titles_show_id", "titles", ["show_id"])

    op.create_table(
        "title_holders",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title_id", sa.Integer(), nullable=False),
        sa.Column("wrestler_id", sa.Integer(), nullable=False),
        sa.Column(
            "held_since",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column("held_until", sa.DateTime(timezone=True), nullable=True),
        sa.Column("event_name", sa.Text(), nullable=True),
        sa.Column("event_location", sa.Text(), nullable=True),
        sa.Column("change_method", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["title_id"], ["titles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["wrestler_id"], ["wrestlers.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "uq_title_holders_open_reign",
        "title_holders",
        ["title_id"],
        unique=True,
        sqlite_where=sa.text("held_until IS NULL"),
        postgresql_where=sa.text("held_until IS NULL"),
    )
    op.create_index("idx_title_holders_title_id", "title_holders", ["title_id"])
    op.create_index("idx_title_holders_wrestler_id", "title_holders", ["wrestler_id"])

    for table in ("titles", "title_holders"):
        op.execute(_updated_at_trigger(table))


def downgrade() -> None:
    for table in ("title_holders", "titles"):
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at")

    op.drop_index("idx_title_holders_wrestler_id", table_name="title_holders")
    op.drop_index("idx_title_holders_title_id", table_name="title_holders")
    op.drop_index("uq_title_holders_open_reign", table_name="title_holders")
    op.drop_table("title_holders")
    op.drop_index("idx_titles_show_id", table_name="titles")
    op.drop_table("titles")
