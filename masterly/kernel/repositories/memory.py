"""
In-memory repositories for single-process deployments and tests.

Writes land immediately, so commit/rollback are no-ops. Records are copied on
the way in and out so callers never share mutable state with the store.
"""

import uuid
from typing import Dict, Iterable, List, Optional, Tuple

from masterly.kernel.repositories.base import (
    ConceptNode,
    ConceptRepository,
    MasteryRecord,
    MasteryRepository,
)


class InMemoryConceptRepository(ConceptRepository):
    """Catalog held in a list; insertion order is catalog order."""

    def __init__(self, concepts: Iterable[ConceptNode] = ()):
        self._concepts: List[ConceptNode] = [c.model_copy(deep=True) for c in concepts]

    async def list_concepts(self) -> List[ConceptNode]:
        return [c.model_copy(deep=True) for c in self._concepts]

    async def get(self, concept_id: str) -> Optional[ConceptNode]:
        for c in self._concepts:
            if c.id == concept_id:
                return c.model_copy(deep=True)
        return None


class InMemoryMasteryRepository(MasteryRepository):
    """Records keyed by (user_id, concept_id)."""

    def __init__(self, records: Iterable[MasteryRecord] = ()):
        self._records: Dict[Tuple[uuid.UUID, str], MasteryRecord] = {}
        for r in records:
            self._records[(r.user_id, r.concept_id)] = r.model_copy(deep=True)

    async def get(self, user_id: uuid.UUID, concept_id: str) -> Optional[MasteryRecord]:
        record = self._records.get((user_id, concept_id))
        return record.model_copy(deep=True) if record else None

    async def list_for_user(self, user_id: uuid.UUID) -> List[MasteryRecord]:
        return [
            r.model_copy(deep=True)
            for (uid, _), r in sorted(self._records.items(), key=lambda kv: kv[0][1])
            if uid == user_id
        ]

    async def create_if_absent(self, record: MasteryRecord) -> bool:
        key = (record.user_id, record.concept_id)
        if key in self._records:
            return False
        self._records[key] = record.model_copy(deep=True)
        return True

    async def save_if_version(self, record: MasteryRecord, expected_version: int) -> bool:
        key = (record.user_id, record.concept_id)
        current = self._records.get(key)
        if current is None or current.version != expected_version:
            return False
        self._records[key] = record.model_copy(update={"version": expected_version + 1}, deep=True)
        return True

    async def commit(self) -> None:
        return None

    async def rollback(self) -> None:
        return None
