"""
Pydantic schemas for concept progress and quiz endpoints.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from masterly.engines.mastery.progress_tracker import ProgressAction
from masterly.kernel.models.concept_progress import ProgressStatus
from masterly.kernel.repositories.base import MasteryRecord
from masterly.schemas.common import CamelModel


class ConceptProgressSchema(CamelModel):
    """A user's progress on one concept."""

    concept_id: str
    course_id: Optional[str] = None
    mastery_score: float  # 0-100 as stored
    score: float  # normalized 0-1
    attempts: int
    mastered: bool
    mastered_at: Optional[datetime] = None
    status: ProgressStatus
    description_read: bool
    video_watched: bool
    quiz_passed: bool
    failed_attempts: int
    time_spent: int
    last_quiz_attempt: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: MasteryRecord, **extra) -> "ConceptProgressSchema":
        data = record.model_dump(exclude={"user_id", "version"})
        data["score"] = record.normalized_score
        data.update(extra)
        return cls(**data)


class ProgressListItem(ConceptProgressSchema):
    locked: bool


class ConceptProgressResponse(CamelModel):
    progress: ConceptProgressSchema
    can_attempt: bool


class ProgressUpdateRequest(CamelModel):
    """Generic concept progress update."""

    action: ProgressAction
    course_id: Optional[str] = None
    time_spent: int = Field(default=0, ge=0)
    score: Optional[float] = Field(default=None, ge=0, le=100)


class QuizSubmitRequest(CamelModel):
    """Quiz submission summarized as correct/total."""

    correct_answers: int = Field(ge=0)
    total_questions: int = Field(ge=0)
    time_spent: int = Field(default=0, ge=0)
    course_id: Optional[str] = None


class QuizResultResponse(CamelModel):
    score: float
    passed: bool
    mastered: bool
    reset_applied: bool
    progress: ConceptProgressSchema
    unlocked_concepts: Optional[List[str]] = None


class ResetProgressRequest(CamelModel):
    course_id: Optional[str] = None


class UnlockedConceptsResponse(CamelModel):
    unlocked: List[str]
    created: List[str]
