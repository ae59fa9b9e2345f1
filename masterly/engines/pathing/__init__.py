"""
Pathing Engine - concept graph, path enumeration and cost ranking.
"""

from masterly.engines.pathing.enumerator import ROOT_START, enumerate_paths, find_all_paths
from masterly.engines.pathing.graph import ConceptGraph
from masterly.engines.pathing.ranker import (
    PATH_LOCK_THRESHOLD,
    ConceptMeta,
    PathNode,
    PrerequisiteMastery,
    RankedPaths,
    ScoredPath,
    build_concept_meta,
    can_attempt,
    node_cost,
    rank_paths,
)
from masterly.engines.pathing.recommendation_service import RecommendationService

__all__ = [
    "ROOT_START",
    "enumerate_paths",
    "find_all_paths",
    "ConceptGraph",
    "PATH_LOCK_THRESHOLD",
    "ConceptMeta",
    "PathNode",
    "PrerequisiteMastery",
    "RankedPaths",
    "ScoredPath",
    "build_concept_meta",
    "can_attempt",
    "node_cost",
    "rank_paths",
    "RecommendationService",
]
