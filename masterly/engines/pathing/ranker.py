"""
Path Cost Ranker - scores candidate paths by mastery gap.

Two separate thresholds are in play:
- PATH_LOCK_THRESHOLD (0.70) gates visibility/attempts: a node is locked
  while any direct prerequisite sits below it, and a node at or above it
  costs nothing.
- The mastery-completion threshold (75 on the stored 0-100 scale) lives in
  the mastery store and gates advancement.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from masterly.engines.pathing.graph import ConceptGraph

PATH_LOCK_THRESHOLD = 0.7
UNKNOWN_TITLE = "Unknown"


@dataclass(frozen=True)
class ConceptMeta:
    """Title and prerequisites of a concept, as needed for annotation."""

    title: str
    prerequisites: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PrerequisiteMastery:
    prerequisite_id: str
    score: float


@dataclass(frozen=True)
class PathNode:
    """One annotated step of a learning path."""

    concept_id: str
    title: str
    locked: bool
    prerequisite_masteries: List[PrerequisiteMastery]


@dataclass(frozen=True)
class ScoredPath:
    path: List[str]
    detailed_path: List[PathNode]
    total_cost: float


@dataclass(frozen=True)
class RankedPaths:
    """Paths sorted by ascending cost; `best` is the first of them."""

    best: ScoredPath
    ranked: List[ScoredPath]


def node_cost(mastery: float) -> float:
    """Remaining gap below the lock threshold; zero once mastery reaches it."""
    return 1.0 - mastery if mastery < PATH_LOCK_THRESHOLD else 0.0


def is_locked(prerequisite_masteries: Sequence[PrerequisiteMastery]) -> bool:
    return any(p.score < PATH_LOCK_THRESHOLD for p in prerequisite_masteries)


def can_attempt(concept_id: str, mastery_map: Mapping[str, float], graph: ConceptGraph) -> bool:
    """True if every direct prerequisite is at or above the lock threshold."""
    return all(
        mastery_map.get(prereq_id, 0.0) >= PATH_LOCK_THRESHOLD
        for prereq_id in graph.prerequisites_of(concept_id)
    )


def score_path(
    path: Sequence[str],
    mastery_map: Mapping[str, float],
    concept_meta: Mapping[str, ConceptMeta],
) -> ScoredPath:
    """Annotate every node of a path and sum its cost."""
    total_cost = 0.0
    detailed: List[PathNode] = []
    for concept_id in path:
        meta: Optional[ConceptMeta] = concept_meta.get(concept_id)
        prereqs = meta.prerequisites if meta else []
        prerequisite_masteries = [
            PrerequisiteMastery(prerequisite_id=p, score=mastery_map.get(p, 0.0))
            for p in prereqs
        ]
        total_cost += node_cost(mastery_map.get(concept_id, 0.0))
        detailed.append(
            PathNode(
                concept_id=concept_id,
                title=meta.title if meta else UNKNOWN_TITLE,
                locked=is_locked(prerequisite_masteries),
                prerequisite_masteries=prerequisite_masteries,
            )
        )
    return ScoredPath(path=list(path), detailed_path=detailed, total_cost=total_cost)


def rank_paths(
    paths: Sequence[Sequence[str]],
    mastery_map: Mapping[str, float],
    concept_meta: Mapping[str, ConceptMeta],
) -> RankedPaths:
    """
    Score and order paths by ascending total cost.

    The sort is stable, so equal-cost paths keep enumeration order and the
    first one encountered is the recommendation.
    """
    if not paths:
        raise ValueError("rank_paths needs at least one path")
    scored = [score_path(p, mastery_map, concept_meta) for p in paths]
    ranked = sorted(scored, key=lambda sp: sp.total_cost)
    return RankedPaths(best=ranked[0], ranked=ranked)


def build_concept_meta(graph: ConceptGraph) -> Dict[str, ConceptMeta]:
    """id -> metadata lookup, built once per request."""
    return {
        cid: ConceptMeta(title=graph.title_of(cid) or UNKNOWN_TITLE, prerequisites=graph.prerequisites_of(cid))
        for cid in graph.concept_ids()
    }
