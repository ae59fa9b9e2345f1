"""Concept catalog and per-user concept progress

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "concepts",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("prerequisites", sa.JSON(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_concepts_position", "concepts", ["position"])

    op.create_table(
        "concept_progress",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("concept_id", sa.String(64), sa.ForeignKey("concepts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("course_id", sa.String(64), nullable=True),
        sa.Column("mastery_score", sa.Float(), nullable=False, server_default="0"),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("mastered", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("mastered_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="not_started"),
        sa.Column("description_read", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("video_watched", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("quiz_passed", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("failed_attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("time_spent", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_quiz_attempt", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("user_id", "concept_id", name="uq_concept_progress_user_concept"),
    )
    op.create_index("ix_concept_progress_user_id", "concept_progress", ["user_id"])
    op.create_index("ix_concept_progress_concept_id", "concept_progress", ["concept_id"])


def downgrade() -> None:
    op.drop_index("ix_concept_progress_concept_id", table_name="concept_progress")
    op.drop_index("ix_concept_progress_user_id", table_name="concept_progress")
    op.drop_table("concept_progress")
    op.drop_index("ix_concepts_position", table_name="concepts")
    op.drop_table("concepts")
