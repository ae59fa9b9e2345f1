"""
Recommendation Service - best learning path from a start point to a goal.
"""

import uuid
from typing import Optional

from masterly.engines.mastery.mastery_store import MasteryStore
from masterly.engines.pathing.enumerator import enumerate_paths
from masterly.engines.pathing.graph import ConceptGraph
from masterly.engines.pathing.ranker import RankedPaths, build_concept_meta, rank_paths
from masterly.kernel.errors import ValidationError
from masterly.kernel.repositories.base import ConceptRepository
from masterly.logging_config import get_logger

logger = get_logger(__name__)


class RecommendationService:
    """Builds the graph, enumerates candidate paths and ranks them for one user."""

    def __init__(self, concepts: ConceptRepository, store: MasteryStore):
        self.concepts = concepts
        self.store = store

    async def recommend(
        self,
        user_id: uuid.UUID,
        goal_concept_id: Optional[str],
        current_concept_id: Optional[str],
    ) -> RankedPaths:
        """
        Recommend a path to `goal_concept_id`.

        `current_concept_id` is a concept id or "root" (start from whichever
        prerequisite-free concept reaches the goal first).
        """
        if not goal_concept_id or not current_concept_id:
            raise ValidationError("Missing goalConceptId or currentConceptId")

        catalog = await self.concepts.list_concepts()
        graph = ConceptGraph.from_concepts(catalog)
        graph.require(goal_concept_id, "Goal concept")

        paths = enumerate_paths(graph, current_concept_id, goal_concept_id)
        mastery = await self.store.mastery_map(user_id)
        ranked = rank_paths(paths, mastery, build_concept_meta(graph))

        logger.info(
            "Recommendation computed",
            extra={
                "goal": goal_concept_id,
                "start": current_concept_id,
                "path_count": len(ranked.ranked),
                "best_cost": ranked.best.total_cost,
            },
        )
        return ranked
