"""
Mastery Store - the single source of truth for per-user concept mastery.

Every write is a read-modify-write cycle made safe by optimistic versioning:
the save only lands if the record version is unchanged since the read,
otherwise the record is re-read and the change recomputed. This keeps the
"take the max score" merge from losing a concurrent higher score.
"""

import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel

from masterly.engines.mastery.unlock_propagator import UnlockPropagator
from masterly.kernel.errors import ConcurrencyConflictError, ValidationError
from masterly.kernel.models.concept_progress import ProgressStatus
from masterly.kernel.repositories.base import MasteryRecord, MasteryRepository
from masterly.logging_config import get_logger

logger = get_logger(__name__)

# Fixed on the stored 0-100 scale; not configurable per concept
MASTERY_THRESHOLD = 75.0

RecordMutation = Callable[[MasteryRecord, datetime], None]


class MasteryUpdateResult(BaseModel):
    """Outcome of a mastery update. `unlocked` is None if propagation failed."""

    mastered: bool
    record: MasteryRecord
    unlocked: Optional[List[str]] = None


def validate_score_percent(score: float) -> None:
    if score < 0 or score > 100:
        raise ValidationError(f"Score must be between 0 and 100, got {score}.")


def apply_observed_score(record: MasteryRecord, observed: float, now: datetime) -> None:
    """Merge one observed score into a record (in place)."""
    record.mastery_score = max(record.mastery_score, observed)
    record.attempts += 1
    if record.mastery_score >= MASTERY_THRESHOLD:
        if not record.mastered:
            record.mastered_at = now
        record.mastered = True
        record.status = ProgressStatus.COMPLETED
    elif record.status == ProgressStatus.NOT_STARTED:
        record.status = ProgressStatus.IN_PROGRESS


class MasteryStore:
    """Reads and writes mastery records; triggers unlock propagation after score changes."""

    def __init__(
        self,
        repository: MasteryRepository,
        propagator: UnlockPropagator,
        max_retries: int = 5,
    ):
        self.repository = repository
        self.propagator = propagator
        self.max_retries = max_retries

    async def get_record(self, user_id: uuid.UUID, concept_id: str) -> Optional[MasteryRecord]:
        return await self.repository.get(user_id, concept_id)

    async def get_mastery(self, user_id: uuid.UUID, concept_id: str) -> float:
        """Normalized mastery in [0, 1]; 0 when the user has no record."""
        record = await self.repository.get(user_id, concept_id)
        return record.normalized_score if record else 0.0

    async def mastery_map(self, user_id: uuid.UUID) -> Dict[str, float]:
        """concept_id -> normalized mastery for every record the user has."""
        return {r.concept_id: r.normalized_score for r in await self.repository.list_for_user(user_id)}

    async def apply(
        self,
        user_id: uuid.UUID,
        concept_id: str,
        mutate: RecordMutation,
        course_id: Optional[str] = None,
    ) -> MasteryRecord:
        """
        Run `mutate` against the current record and persist it atomically.

        The record is created with zero progress if missing. `mutate` may run
        more than once when a concurrent writer wins the race, so it must only
        derive its changes from the record it is given.
        """
        for attempt in range(1, self.max_retries + 1):
            record = await self.repository.get(user_id, concept_id)
            if record is None:
                await self.repository.create_if_absent(
                    MasteryRecord(user_id=user_id, concept_id=concept_id, course_id=course_id)
                )
                record = await self.repository.get(user_id, concept_id)
                if record is None:
                    continue

            expected_version = record.version
            now = datetime.now(timezone.utc)
            updated = record.model_copy(deep=True)
            if course_id and not updated.course_id:
                updated.course_id = course_id
            mutate(updated, now)
            updated.last_updated = now

            if await self.repository.save_if_version(updated, expected_version):
                updated.version = expected_version + 1
                await self.repository.commit()
                return updated

            logger.info(
                "Mastery record changed concurrently; retrying",
                extra={"concept_id": concept_id, "attempt": attempt},
            )

        raise ConcurrencyConflictError(
            f"Could not update progress for concept '{concept_id}' after {self.max_retries} attempts."
        )

    async def propagate_unlocks(
        self,
        user_id: uuid.UUID,
        course_id: Optional[str] = None,
    ) -> Optional[List[str]]:
        """
        Recompute unlocks after a committed write.

        Failures are logged and swallowed: the score write stays committed and
        unlock_reachable is idempotent and can be re-run later.
        """
        try:
            result = await self.propagator.unlock_reachable(user_id, course_id)
        except Exception:
            logger.exception("Unlock propagation failed; mastery update kept")
            await self.repository.rollback()
            return None
        return result.unlocked

    async def update_mastery(
        self,
        user_id: uuid.UUID,
        concept_id: str,
        observed_score_percent: float,
        course_id: Optional[str] = None,
    ) -> MasteryUpdateResult:
        """Record an observed score (0-100) and propagate unlocks."""
        validate_score_percent(observed_score_percent)
        record = await self.apply(
            user_id,
            concept_id,
            lambda r, now: apply_observed_score(r, observed_score_percent, now),
            course_id=course_id,
        )
        logger.info(
            "Mastery updated",
            extra={
                "concept_id": concept_id,
                "observed_score": observed_score_percent,
                "mastery_score": record.mastery_score,
                "mastered": record.mastered,
            },
        )
        unlocked = await self.propagate_unlocks(user_id, course_id)
        return MasteryUpdateResult(mastered=record.mastered, record=record, unlocked=unlocked)
