"""
Repository interfaces for the concept catalog and mastery records.

Engines depend on these abstractions only; the SQL and in-memory stores
implement them.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from masterly.kernel.models.concept_progress import ProgressStatus


class ConceptNode(BaseModel):
    """Catalog entry as seen by the engines."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: Optional[str] = None
    prerequisites: List[str] = []

    @field_validator("prerequisites", mode="before")
    @classmethod
    def _stringify_ids(cls, v):
        return [str(p) for p in (v or [])]


class MasteryRecord(BaseModel):
    """Per-user, per-concept mastery state (score on a 0-100 scale)."""

    model_config = ConfigDict(from_attributes=True)

    user_id: uuid.UUID
    concept_id: str
    course_id: Optional[str] = None
    mastery_score: float = 0.0
    attempts: int = 0
    mastered: bool = False
    mastered_at: Optional[datetime] = None
    status: ProgressStatus = ProgressStatus.NOT_STARTED
    description_read: bool = False
    video_watched: bool = False
    quiz_passed: bool = False
    failed_attempts: int = 0
    time_spent: int = 0
    last_quiz_attempt: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    version: int = 1

    @property
    def normalized_score(self) -> float:
        """Mastery on the engine's 0-1 scale."""
        return max(0.0, min(1.0, self.mastery_score / 100.0))


class ConceptRepository(ABC):
    """Read-only access to the concept catalog."""

    @abstractmethod
    async def list_concepts(self) -> List[ConceptNode]:
        """Return the full catalog in catalog order."""

    @abstractmethod
    async def get(self, concept_id: str) -> Optional[ConceptNode]:
        """Return one concept or None."""


class MasteryRepository(ABC):
    """
    Persistence for mastery records.

    Writes are either insert-if-absent or conditional on the record version,
    so callers can run read-modify-write cycles without losing updates.
    """

    @abstractmethod
    async def get(self, user_id: uuid.UUID, concept_id: str) -> Optional[MasteryRecord]:
        """Return the record for (user, concept) or None."""

    @abstractmethod
    async def list_for_user(self, user_id: uuid.UUID) -> List[MasteryRecord]:
        """Return all of a user's records."""

    @abstractmethod
    async def create_if_absent(self, record: MasteryRecord) -> bool:
        """Insert the record unless one exists for (user, concept). True if inserted."""

    @abstractmethod
    async def save_if_version(self, record: MasteryRecord, expected_version: int) -> bool:
        """
        Overwrite the stored record if its version still equals expected_version.

        On success the stored version becomes expected_version + 1.
        Returns False when another writer got there first.
        """

    @abstractmethod
    async def commit(self) -> None:
        """Make preceding writes durable."""

    @abstractmethod
    async def rollback(self) -> None:
        """Discard uncommitted writes."""
