"""
Learning path recommendation endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Query

from masterly.api.deps import CurrentUser, RecommendationServiceDep
from masterly.schemas.recommendation import RecommendationRequest, RecommendationResponse

router = APIRouter()


@router.get("/{goal_concept_id}", response_model=RecommendationResponse)
async def get_recommendation(
    goal_concept_id: str,
    user: CurrentUser,
    service: RecommendationServiceDep,
    current_concept_id: Optional[str] = Query(None, alias="currentConceptId"),
):
    """
    Recommend the cheapest learning path to a goal concept.

    `currentConceptId` is a concept id or "root" to start from any
    concept without prerequisites.
    """
    ranked = await service.recommend(user.id, goal_concept_id, current_concept_id)
    return RecommendationResponse.from_ranked(ranked)


@router.post("/generate", response_model=RecommendationResponse)
async def generate_recommendation(
    data: RecommendationRequest,
    user: CurrentUser,
    service: RecommendationServiceDep,
):
    """Same as the GET form, with both ids in the body."""
    ranked = await service.recommend(user.id, data.goal_concept_id, data.current_concept_id)
    return RecommendationResponse.from_ranked(ranked)
