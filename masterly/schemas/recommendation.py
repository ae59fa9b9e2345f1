"""
Pydantic schemas for the recommendation API.
"""

from typing import List, Optional

from masterly.engines.pathing.ranker import RankedPaths
from masterly.schemas.common import CamelModel


class PrerequisiteMasterySchema(CamelModel):
    """Mastery (0-1) of one direct prerequisite."""

    prerequisite_id: str
    score: float


class PathNodeSchema(CamelModel):
    """One annotated concept on a path."""

    concept_id: str
    title: str
    locked: bool
    prerequisite_masteries: List[PrerequisiteMasterySchema]


class PathSchema(CamelModel):
    """A candidate learning path and its cost."""

    path: List[str]
    detailed_path: List[PathNodeSchema]
    total_cost: float


class RecommendationResponse(CamelModel):
    """Best path plus every candidate, cheapest first."""

    best_path: PathSchema
    all_paths: List[PathSchema]

    @classmethod
    def from_ranked(cls, ranked: RankedPaths) -> "RecommendationResponse":
        return cls(
            best_path=PathSchema.model_validate(ranked.best),
            all_paths=[PathSchema.model_validate(p) for p in ranked.ranked],
        )


class RecommendationRequest(CamelModel):
    """Body for POST /recommendation/generate."""

    goal_concept_id: Optional[str] = None
    current_concept_id: Optional[str] = None
