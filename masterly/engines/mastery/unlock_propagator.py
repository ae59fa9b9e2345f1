"""
Unlock Propagator - recomputes which concepts a user may work on.

A concept is unlocked when it has no prerequisites or every prerequisite is
mastered. Newly unlocked concepts get a zero-progress record the first time
they are seen. The whole catalog is recomputed on every call; repeated calls
with no mastery change return the same set and create nothing.
"""

import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Set

from pydantic import BaseModel

from masterly.kernel.repositories.base import (
    ConceptNode,
    ConceptRepository,
    MasteryRecord,
    MasteryRepository,
)
from masterly.logging_config import get_logger

logger = get_logger(__name__)


class UnlockResult(BaseModel):
    """Unlocked concept ids (catalog order) and the ids whose records were just created."""

    unlocked: List[str]
    created: List[str] = []


def compute_unlocked(concepts: Iterable[ConceptNode], mastered: Set[str]) -> List[str]:
    """Concept ids whose prerequisites are all in `mastered`, in catalog order."""
    return [
        c.id
        for c in concepts
        if not c.prerequisites or all(p in mastered for p in c.prerequisites)
    ]


class UnlockPropagator:
    """Computes the unlocked frontier and materializes progress stubs."""

    def __init__(self, concepts: ConceptRepository, mastery: MasteryRepository):
        self.concepts = concepts
        self.mastery = mastery

    async def unlock_reachable(
        self,
        user_id: uuid.UUID,
        course_id: Optional[str] = None,
    ) -> UnlockResult:
        catalog = await self.concepts.list_concepts()
        records = await self.mastery.list_for_user(user_id)

        existing = {r.concept_id for r in records}
        mastered = {r.concept_id for r in records if r.mastered}
        unlocked = compute_unlocked(catalog, mastered)

        created: List[str] = []
        now = datetime.now(timezone.utc)
        for concept_id in unlocked:
            if concept_id in existing:
                continue
            stub = MasteryRecord(
                user_id=user_id,
                concept_id=concept_id,
                course_id=course_id,
                last_updated=now,
            )
            if await self.mastery.create_if_absent(stub):
                created.append(concept_id)

        if created:
            await self.mastery.commit()
            logger.info(
                "Created progress records for newly unlocked concepts",
                extra={"created_ids": created, "unlocked_count": len(unlocked)},
            )
        return UnlockResult(unlocked=unlocked, created=created)
