"""Match booking system.

Revision ID: 0003
Revises: 0002
Create Date: 2026-03-01

- matches: status moves from Scheduled to Resolved when the result is
  recorded and never moves back, even if the winner row is later deleted
- match_participants: one slot per (match, wrestler)
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0003"
down_revision: Union[str, None] = "0002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "matches",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("show_id", sa.Integer(), nullable=False),
        sa.Column("match_name", sa.Text(), nullable=True),
        sa.Column("match_type", sa.Text(), nullable=False),
        sa.Column("match_stipulation", sa.Text(), nullable=True),
        sa.Column("scheduled_date", sa.Date(), nullable=True),
        sa.Column("match_order", sa.Integer(), nullable=True),
        sa.Column("winner_id", sa.Integer(), nullable=True),
        sa.Column("is_title_match", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("title_id", sa.Integer(), nullable=True),
        sa.Column("status", sa.Text(), nullable=False, server_default="Scheduled"),
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
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["show_id"], ["shows.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["winner_id"], ["wrestlers.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["title_id"], ["titles.id"], ondelete="SET NULL"),
        sa.CheckConstraint(
            "status IN ('Scheduled', 'Resolved')", name="ck_matches_status"
        ),
    )
    op.create_index("idx_matches_show_id", "matches", ["show_id"])
    op.create_index("idx_matches_winner_id", "matches", ["winner_id"])
    op.create_index("idx_matches_title_id", "matches", ["title_id"])
    op.create_index("idx_matches_scheduled_date", "matches", ["scheduled_date"])

    op.create_table(
        "match_participants",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("match_id", sa.Integer(), nullable=False),
        sa.Column("wrestler_id", sa.Integer(), nullable=False),
        sa.Column("team_number", sa.Integer(), nullable=True),
        sa.Column("entrance_order", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["match_id"], ["matches.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["wrestler_id"], ["wrestlers.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "match_id", "wrestler_id", name="uq_match_participants_match_wrestler"
        ),
    )
    op.create_index(
        "idx_match_participants_wrestler_id", "match_participants", ["wrestler_id"]
    )
    op.create_index(
        "idx_match_participants_team", "match_participants", ["match_id", "team_number"]
    )

    op.execute(
        """
        CREATE TRIGGER update_matches_updated_at
            AFTER UPDATE ON matches
            FOR EACH ROW
            BEGIN
                UPDATE matches SET updated_at = CURRENT_TIMESTAMP WHERE id = NEW.id;
            END
        """
    )


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS update_matches_updated_at")

    op.drop_index("idx_match_participants_team", table_name="match_participants")
    op.drop_index("idx_match_participants_wrestler_id", table_name="match_participants")
    op.drop_table("match_participants")
    op.drop_index("idx_matches_scheduled_date", table_name="matches")
    op.drop_index("idx_matches_title_id", table_name="matches")
    op.drop_index("idx_matches_winner_id", table_name="matches")
    op.drop_index("idx_matches_show_id", table_name="matches")
    op.drop_table("matches")
