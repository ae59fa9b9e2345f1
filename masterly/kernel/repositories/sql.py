"""
SQLAlchemy-backed repositories.
"""

import uuid
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from masterly.kernel.models.concept import Concept
from masterly.kernel.models.concept_progress import ConceptProgress
from masterly.kernel.models.base import generate_uuid
from masterly.kernel.repositories.base import (
    ConceptNode,
    ConceptRepository,
    MasteryRecord,
    MasteryRepository,
)

# Columns rewritten by a versioned save
_MUTABLE_FIELDS = (
    "course_id",
    "mastery_score",
    "attempts",
    "mastered",
    "mastered_at",
    "status",
    "description_read",
    "video_watched",
    "quiz_passed",
    "failed_attempts",
    "time_spent",
    "last_quiz_attempt",
    "last_updated",
)


class SqlConceptRepository(ConceptRepository):
    """Concept catalog stored in the `concepts` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_concepts(self) -> List[ConceptNode]:
        q = select(Concept).order_by(Concept.position, Concept.id)
        result = await self.session.execute(q)
        return [ConceptNode.model_validate(row) for row in result.scalars().all()]

    async def get(self, concept_id: str) -> Optional[ConceptNode]:
        row = await self.session.get(Concept, concept_id)
        return ConceptNode.model_validate(row) if row else None


class SqlMasteryRepository(MasteryRepository):
    """Mastery records stored in the `concept_progress` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _row_values(self, record: MasteryRecord) -> dict:
        values = {f: getattr(record, f) for f in _MUTABLE_FIELDS}
        values["status"] = record.status.value
        return values

    async def get(self, user_id: uuid.UUID, concept_id: str) -> Optional[MasteryRecord]:
        q = (
            select(ConceptProgress)
            .where(
                ConceptProgress.user_id == user_id,
                ConceptProgress.concept_id == concept_id,
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(q)
        row = result.scalar_one_or_none()
        return MasteryRecord.model_validate(row) if row else None

    async def list_for_user(self, user_id: uuid.UUID) -> List[MasteryRecord]:
        q = (
            select(ConceptProgress)
            .where(ConceptProgress.user_id == user_id)
            .order_by(ConceptProgress.concept_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(q)
        return [MasteryRecord.model_validate(row) for row in result.scalars().all()]

    async def create_if_absent(self, record: MasteryRecord) -> bool:
        values = self._row_values(record)
        values.update(
            id=generate_uuid(),
            user_id=record.user_id,
            concept_id=record.concept_id,
            version=record.version,
        )
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            stmt = postgresql.insert(ConceptProgress).values(**values)
        elif dialect == "sqlite":
            stmt = sqlite.insert(ConceptProgress).values(**values)
        else:
            if await self.get(record.user_id, record.concept_id) is not None:
                return False
            self.session.add(ConceptProgress(**values))
            await self.session.flush()
            return True

        stmt = stmt.on_conflict_do_nothing(index_elements=["user_id", "concept_id"])
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def save_if_version(self, record: MasteryRecord, expected_version: int) -> bool:
        values = self._row_values(record)
        values["version"] = expected_version + 1
        stmt = (
            update(ConceptProgress)
            .where(
                ConceptProgress.user_id == record.user_id,
                ConceptProgress.concept_id == record.concept_id,
                ConceptProgress.version == expected_version,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
