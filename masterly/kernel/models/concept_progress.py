"""
Concept progress model - per-user, per-concept mastery record.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from masterly.kernel.models.base import Base, generate_uuid


class ProgressStatus(str, Enum):
    """Lifecycle of a concept progress record."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class ConceptProgress(Base):
    """
    Mastery state of one concept for one user.

    mastery_score is stored on a 0-100 scale and only ever increases.
    `version` backs optimistic concurrency for read-modify-write updates.
    last_updated is written by the engine on every change and is the only
    modification timestamp; created_at is set once by the database.
    """

    __tablename__ = "concept_progress"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=generate_uuid,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    concept_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("concepts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    course_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    mastery_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    mastered: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    mastered_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ProgressStatus.NOT_STARTED.value,
    )

    # Learning steps
    description_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    video_watched: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    quiz_passed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    failed_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    time_spent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # seconds
    last_quiz_attempt: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    last_updated: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __table_args__ = (
        UniqueConstraint("user_id", "concept_id", name="uq_concept_progress_user_concept"),
    )
