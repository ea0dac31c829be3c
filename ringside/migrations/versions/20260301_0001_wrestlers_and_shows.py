"""Wrestlers, signature moves, shows and show rosters.

Revision ID: 0001
Revises:
Create Date: 2026-03-01

Creates the global entities and the roster assignment table:
- wrestlers with the enhanced profile and six power ratings (1-10)
- signature_moves ('primary' / 'secondary')
- shows
- show_rosters, one row per (show, wrestler) pair

CRITICAL: uq_show_rosters_active_wrestler makes "one active show per
wrestler" a property of the store, not just of the roster manager.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

POWER_RATINGS = ("strength", "speed", "agility", "stamina", "charisma", "technique")


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
    # Wrestlers table
    op.create_table(
        "wrestlers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("gender", sa.Text(), nullable=False),
        sa.Column("wins", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("losses", sa.Integer(), nullable=False, server_default="0"),
        # Enhanced profile
        sa.Column("real_name", sa.Text(), nullable=True),
        sa.Column("nickname", sa.Text(), nullable=True),
        sa.Column("height", sa.Text(), nullable=True),
        sa.Column("weight", sa.Text(), nullable=True),
        sa.Column("debut_year", sa.Integer(), nullable=True),
        sa.Column("promotion", sa.Text(), nullable=True),
        # Power ratings (1-10)
        *(
            sa.Column(rating, sa.Integer(), nullable=False, server_default="5")
            for rating in POWER_RATINGS
        ),
        sa.Column("biography", sa.Text(), nullable=True),
        sa.Column("is_user_created", sa.Boolean(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("wins >= 0", name="ck_wrestlers_wins_nonnegative"),
        sa.CheckConstraint("losses >= 0", name="ck_wrestlers_losses_nonnegative"),
        *(
            sa.CheckConstraint(
                f"{rating} >= 1 AND {rating} <= 10",
                name=f"ck_wrestlers_{rating}_range",
            )
            for rating in POWER_RATINGS
        ),
    )

    # Signature moves
    op.create_table(
        "signature_moves",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("wrestler_id", sa.Integer(), nullable=False),
        sa.Column("move_name", sa.Text(), nullable=False),
        sa.Column("move_type", sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["wrestler_id"], ["wrestlers.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "move_type IN ('primary', 'secondary')", name="ck_signature_moves_type"
        ),
    )
    op.create_index(
        "idx_signature_moves_wrestler_id", "signature_moves", ["wrestler_id"]
    )

    # Shows
    op.create_table(
        "shows",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    # Show rosters - exclusive assignment history
    op.create_table(
        "show_rosters",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("show_id", sa.Integer(), nullable=False),
        sa.Column("wrestler_id", sa.Integer(), nullable=False),
        sa.Column(
            "assigned_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["show_id"], ["shows.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["wrestler_id"], ["wrestlers.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("show_id", "wrestler_id", name="uq_show_rosters_show_wrestler"),
    )
    op.create_index(
        "uq_show_rosters_active_wrestler",
        "show_rosters",
        ["wrestler_id"],
        unique=True,
        sqlite_where=sa.text("is_active = 1"),
        postgresql_where=sa.text("is_active"),
    )
    op.create_index(
        "idx_show_rosters_show_active", "show_rosters", ["show_id", "is_active"]
    )

    for table in ("wrestlers", "signature_moves", "shows"):
        op.execute(_updated_at_trigger(table))


def downgrade() -> None:
    for table in ("shows", "signature_moves", "wrestlers"):
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at")

    op.drop_index("idx_show_rosters_show_active", table_name="show_rosters")
    op.drop_index("uq_show_rosters_active_wrestler", table_name="show_rosters")
    op.drop_table("show_rosters")
    op.drop_table("shows")
    op.drop_index("idx_signature_moves_wrestler_id", table_name="signature_moves")
    op.drop_table("signature_moves")
    op.drop_table("wrestlers")
