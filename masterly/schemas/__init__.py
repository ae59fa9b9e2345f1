"""
API request/response schemas.
"""

from masterly.schemas.common import CamelModel, ErrorResponse, HealthResponse, InternalErrorResponse
from masterly.schemas.concept import ConceptSchema
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
from masterly.schemas.recommendation import (
    PathNodeSchema,
    PathSchema,
    PrerequisiteMasterySchema,
    RecommendationRequest,
    RecommendationResponse,
)

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "HealthResponse",
    "InternalErrorResponse",
    "ConceptSchema",
    "ConceptProgressResponse",
    "ConceptProgressSchema",
    "ProgressListItem",
    "ProgressUpdateRequest",
    "QuizResultResponse",
    "QuizSubmitRequest",
    "ResetProgressRequest",
    "UnlockedConceptsResponse",
    "PathNodeSchema",
    "PathSchema",
    "PrerequisiteMasterySchema",
    "RecommendationRequest",
    "RecommendationResponse",
]
