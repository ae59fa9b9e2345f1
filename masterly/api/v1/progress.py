"""
Concept progress endpoints: learning steps, quizzes, resets and unlocks.
"""

from typing import List, Optional

from fastapi import APIRouter

from masterly.api.deps import CurrentUser, ProgressTrackerDep
from masterly.schemas.progress import (
    ConceptProgressResponse,
    ConceptProgressSchema,
    ProgressListItem,
    ProgressUpdateRequest,
    QuizResultResponse,
    QuizSubmitRequest,
    ResetProgressRequest,
    UnlockedConceptsResponse,
)

router = APIRouter()


@router.get("", response_model=List[ProgressListItem])
async def list_progress(user: CurrentUser, tracker: ProgressTrackerDep):
    """List the caller's progress records, unlocking newly reachable concepts first."""
    entries = await tracker.list_progress(user.id)
    return [ProgressListItem.from_record(e.record, locked=e.locked) for e in entries]


@router.get("/unlocked", response_model=UnlockedConceptsResponse)
async def get_unlocked_concepts(user: CurrentUser, tracker: ProgressTrackerDep):
    """Unlock every concept whose prerequisites are all mastered."""
    result = await tracker.unlock_reachable(user.id)
    return UnlockedConceptsResponse(unlocked=result.unlocked, created=result.created)


@router.get("/concepts/{concept_id}", response_model=ConceptProgressResponse)
async def get_concept_progress(concept_id: str, user: CurrentUser, tracker: ProgressTrackerDep):
    view = await tracker.get_progress(user.id, concept_id)
    return ConceptProgressResponse(
        progress=ConceptProgressSchema.from_record(view.record),
        can_attempt=view.can_attempt,
    )


@router.put("/concepts/{concept_id}", response_model=ConceptProgressSchema)
async def update_concept_progress(
    concept_id: str,
    data: ProgressUpdateRequest,
    user: CurrentUser,
    tracker: ProgressTrackerDep,
):
    """Apply a learning step (description read, video watched, quiz completed)."""
    record = await tracker.apply_action(
        user.id,
        concept_id,
        data.action,
        score=data.score,
        time_spent=data.time_spent,
        course_id=data.course_id,
    )
    return ConceptProgressSchema.from_record(record)


@router.post("/concepts/{concept_id}/quiz", response_model=QuizResultResponse)
async def submit_quiz(
    concept_id: str,
    data: QuizSubmitRequest,
    user: CurrentUser,
    tracker: ProgressTrackerDep,
):
    """Score a quiz attempt and fold it into the concept's mastery."""
    outcome = await tracker.submit_quiz(
        user.id,
        concept_id,
        data.correct_answers,
        data.total_questions,
        time_spent=data.time_spent,
        course_id=data.course_id,
    )
    return QuizResultResponse(
        score=outcome.score,
        passed=outcome.passed,
        mastered=outcome.mastered,
        reset_applied=outcome.reset_applied,
        progress=ConceptProgressSchema.from_record(outcome.record),
        unlocked_concepts=outcome.unlocked,
    )


@router.post("/concepts/{concept_id}/reset", response_model=ConceptProgressSchema)
async def reset_concept_progress(
    concept_id: str,
    user: CurrentUser,
    tracker: ProgressTrackerDep,
    data: Optional[ResetProgressRequest] = None,
):
    """Clear the learning steps for a concept; mastery history is kept."""
    course_id = data.course_id if data else None
    record = await tracker.reset_progress(user.id, concept_id, course_id=course_id)
    return ConceptProgressSchema.from_record(record)
