"""
Progress Tracker - learning-step transitions for a user's concept progress.

Covers the steps around the mastery score: reading the description, watching
the video, quiz completion with failed-attempt counting, and resets.

Reset policy: a reset only clears the gate flags (description_read,
video_watched, quiz_passed) and the failed-attempt counter. Mastery score,
attempt count, `mastered` and `mastered_at` are history and are never reset.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from masterly.engines.mastery.mastery_store import (
    MASTERY_THRESHOLD,
    MasteryStore,
    apply_observed_score,
    validate_score_percent,
)
from masterly.engines.mastery.unlock_propagator import UnlockResult, compute_unlocked
from masterly.engines.pathing.graph import ConceptGraph
from masterly.engines.pathing.ranker import can_attempt
from masterly.kernel.errors import NotFoundError, ValidationError
from masterly.kernel.models.concept_progress import ProgressStatus
from masterly.kernel.repositories.base import ConceptRepository, MasteryRecord
from masterly.logging_config import get_logger

logger = get_logger(__name__)


class ProgressAction(str, Enum):
    """Actions accepted by the generic concept progress update."""

    MARK_DESCRIPTION_READ = "mark_description_read"
    MARK_VIDEO_WATCHED = "mark_video_watched"
    QUIZ_COMPLETED = "quiz_completed"


class ConceptProgressView(BaseModel):
    """A user's progress on one concept (zero defaults if never touched)."""

    record: MasteryRecord
    can_attempt: bool


class ProgressEntry(BaseModel):
    record: MasteryRecord
    locked: bool


class QuizOutcome(BaseModel):
    """Result of a quiz attempt."""

    score: float
    passed: bool
    mastered: bool
    reset_applied: bool
    record: MasteryRecord
    unlocked: Optional[List[str]] = None


def score_from_answers(correct_answers: int, total_questions: int) -> int:
    """Percentage of correct answers, rounded; an empty quiz scores 0."""
    if correct_answers < 0 or correct_answers > max(total_questions, 0):
        raise ValidationError("correctAnswers must be between 0 and totalQuestions.")
    if total_questions <= 0:
        return 0
    return round(correct_answers / total_questions * 100)


def reset_gate_flags(record: MasteryRecord) -> None:
    record.description_read = False
    record.video_watched = False
    record.quiz_passed = False
    record.failed_attempts = 0


class ProgressTracker:
    """Applies learning-step transitions through the mastery store."""

    def __init__(
        self,
        concepts: ConceptRepository,
        store: MasteryStore,
        failure_reset_threshold: int = 3,
    ):
        self.concepts = concepts
        self.store = store
        self.failure_reset_threshold = failure_reset_threshold

    async def _require_concept(self, concept_id: str) -> None:
        if await self.concepts.get(concept_id) is None:
            raise NotFoundError(f"Concept '{concept_id}' not found.")

    async def get_progress(self, user_id: uuid.UUID, concept_id: str) -> ConceptProgressView:
        """Progress for one concept plus whether its prerequisites allow an attempt."""
        catalog = await self.concepts.list_concepts()
        graph = ConceptGraph.from_concepts(catalog)
        graph.require(concept_id)

        record = await self.store.get_record(user_id, concept_id)
        if record is None:
            record = MasteryRecord(user_id=user_id, concept_id=concept_id)
        mastery = await self.store.mastery_map(user_id)
        return ConceptProgressView(record=record, can_attempt=can_attempt(concept_id, mastery, graph))

    async def list_progress(self, user_id: uuid.UUID) -> List[ProgressEntry]:
        """
        All of the user's records with a locked flag.

        Runs unlock propagation first, so newly reachable concepts appear.
        """
        result = await self.unlock_reachable(user_id)
        unlocked = set(result.unlocked)
        records = await self.store.repository.list_for_user(user_id)
        return [ProgressEntry(record=r, locked=r.concept_id not in unlocked) for r in records]

    async def unlock_reachable(self, user_id: uuid.UUID, course_id: Optional[str] = None) -> UnlockResult:
        """Create stubs for every concept whose prerequisites are all mastered."""
        return await self.store.propagator.unlock_reachable(user_id, course_id)

    async def unlocked_concepts(self, user_id: uuid.UUID) -> List[str]:
        """Unlocked set without side effects (no stub creation)."""
        catalog = await self.concepts.list_concepts()
        records = await self.store.repository.list_for_user(user_id)
        return compute_unlocked(catalog, {r.concept_id for r in records if r.mastered})

    async def mark_description_read(
        self,
        user_id: uuid.UUID,
        concept_id: str,
        course_id: Optional[str] = None,
    ) -> MasteryRecord:
        await self._require_concept(concept_id)

        def mutate(r: MasteryRecord, now: datetime) -> None:
            r.description_read = True
            if r.status == ProgressStatus.NOT_STARTED:
                r.status = ProgressStatus.IN_PROGRESS

        return await self.store.apply(user_id, concept_id, mutate, course_id=course_id)

    async def mark_video_watched(
        self,
        user_id: uuid.UUID,
        concept_id: str,
        time_spent: int = 0,
        course_id: Optional[str] = None,
    ) -> MasteryRecord:
        await self._require_concept(concept_id)

        def mutate(r: MasteryRecord, now: datetime) -> None:
            r.video_watched = True
            if time_spent:
                r.time_spent += time_spent

        return await self.store.apply(user_id, concept_id, mutate, course_id=course_id)

    async def record_quiz(
        self,
        user_id: uuid.UUID,
        concept_id: str,
        score: float,
        time_spent: int = 0,
        course_id: Optional[str] = None,
    ) -> QuizOutcome:
        """
        Record a quiz score (0-100).

        Passing resets the failure counter; reaching the failure threshold
        clears the gate flags so the learner has to revisit the material.
        """
        validate_score_percent(score)
        await self._require_concept(concept_id)
        passed = score >= MASTERY_THRESHOLD
        reset_applied = False

        def mutate(r: MasteryRecord, now: datetime) -> None:
            nonlocal reset_applied
            reset_applied = False
            apply_observed_score(r, score, now)
            r.last_quiz_attempt = now
            if time_spent:
                r.time_spent += time_spent
            if passed:
                r.quiz_passed = True
                r.failed_attempts = 0
                return
            r.quiz_passed = False
            r.failed_attempts += 1
            if r.failed_attempts >= self.failure_reset_threshold:
                reset_gate_flags(r)
                if not r.mastered:
                    r.status = ProgressStatus.IN_PROGRESS
                reset_applied = True

        record = await self.store.apply(user_id, concept_id, mutate, course_id=course_id)
        if reset_applied:
            logger.info(
                "Gate flags reset after repeated quiz failures",
                extra={"concept_id": concept_id, "threshold": self.failure_reset_threshold},
            )
        unlocked = await self.store.propagate_unlocks(user_id, course_id)
        return QuizOutcome(
            score=score,
            passed=passed,
            mastered=record.mastered,
            reset_applied=reset_applied,
            record=record,
            unlocked=unlocked,
        )

    async def submit_quiz(
        self,
        user_id: uuid.UUID,
        concept_id: str,
        correct_answers: int,
        total_questions: int,
        time_spent: int = 0,
        course_id: Optional[str] = None,
    ) -> QuizOutcome:
        score = score_from_answers(correct_answers, total_questions)
        return await self.record_quiz(user_id, concept_id, score, time_spent, course_id)

    async def reset_progress(
        self,
        user_id: uuid.UUID,
        concept_id: str,
        course_id: Optional[str] = None,
    ) -> MasteryRecord:
        """Explicit reset of the learning steps; mastery history is kept."""
        if await self.store.get_record(user_id, concept_id) is None:
            raise NotFoundError(f"No progress recorded for concept '{concept_id}'.")

        def mutate(r: MasteryRecord, now: datetime) -> None:
            reset_gate_flags(r)
            r.status = ProgressStatus.COMPLETED if r.mastered else ProgressStatus.NOT_STARTED

        return await self.store.apply(user_id, concept_id, mutate, course_id=course_id)

    async def apply_action(
        self,
        user_id: uuid.UUID,
        concept_id: str,
        action: ProgressAction,
        *,
        score: Optional[float] = None,
        time_spent: int = 0,
        course_id: Optional[str] = None,
    ) -> MasteryRecord:
        """Dispatch a generic progress update."""
        if action == ProgressAction.MARK_DESCRIPTION_READ:
            return await self.mark_description_read(user_id, concept_id, course_id)
        if action == ProgressAction.MARK_VIDEO_WATCHED:
            return await self.mark_video_watched(user_id, concept_id, time_spent, course_id)
        if score is None:
            raise ValidationError("score is required for quiz_completed.")
        outcome = await self.record_quiz(user_id, concept_id, score, time_spent, course_id)
        return outcome.record
