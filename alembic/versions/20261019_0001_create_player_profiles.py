"""create player_profiles table

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "player_profiles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("player_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("height", sa.Integer(), nullable=True),
        sa.Column("weight", sa.Integer(), nullable=True),
        sa.Column("graduation_year", sa.String(length=4), nullable=True),
        sa.Column("positions", sa.Text(), nullable=True),
        sa.Column("bats", sa.Text(), nullable=True),
        sa.Column("throws", sa.Text(), nullable=True),
        sa.Column("city", sa.Text(), nullable=True),
        sa.Column("state", sa.Text(), nullable=True),
        sa.Column("team_last_played", sa.Text(), nullable=True),
        sa.Column("profile_url", sa.String(length=512), nullable=False),
        sa.Column("showcase_report", sa.Text(), nullable=True),
        sa.Column("scraped_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_player_profiles"),
        sa.UniqueConstraint("player_id", name="uq_player_profiles_player_id"),
    )
    op.create_index(
        "ix_player_profiles_scraped_at",
        "player_profiles",
        ["scraped_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_player_profiles_scraped_at", table_name="player_profiles")
    op.drop_table("player_profiles")
