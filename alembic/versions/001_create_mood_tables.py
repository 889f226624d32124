"""Create mood_entries and playlist_history tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "mood_entries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("mood", sa.Integer(), nullable=False),
        sa.Column("mood_emoji", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_mood_entries")),
    )
    op.create_index(op.f("ix_mood_entries_created_at"), "mood_entries", ["created_at"], unique=False)

    op.create_table(
        "playlist_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("mood", sa.Integer(), nullable=False),
        sa.Column("playlist_id", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_playlist_history")),
    )
    op.create_index(op.f("ix_playlist_history_mood"), "playlist_history", ["mood"], unique=False)
    op.create_index(op.f("ix_playlist_history_created_at"), "playlist_history", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_playlist_history_created_at"), table_name="playlist_history")
    op.drop_index(op.f("ix_playlist_history_mood"), table_name="playlist_history")
    op.drop_table("playlist_history")
    op.drop_index(op.f("ix_mood_entries_created_at"), table_name="mood_entries")
    op.drop_table("mood_entries")
