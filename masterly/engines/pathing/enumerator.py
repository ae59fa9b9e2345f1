"""
Path Enumerator - all simple learning paths from a start concept to a goal.

Paths run in the direction a learner travels (prerequisite -> dependent).
The graph is expected to be a DAG but cycles are tolerated, since
`nx.all_simple_paths` never revisits a node on the current path.

Enumeration runs on the subgraph of concepts that can reach the goal, so
dead branches are never explored.
"""

from typing import List

import networkx as nx

from masterly.engines.pathing.graph import ConceptGraph
from masterly.kernel.errors import NoPathError
from masterly.logging_config import get_logger

logger = get_logger(__name__)

ROOT_START = "root"


def _goal_subgraph(graph: ConceptGraph, goal_id: str) -> nx.DiGraph:
    """View of the goal plus every concept from which the goal is reachable."""
    can_reach = nx.ancestors(graph.digraph, goal_id)
    can_reach.add(goal_id)
    return graph.digraph.subgraph(can_reach)


def _paths_from(subgraph: nx.DiGraph, start_id: str, goal_id: str) -> List[List[str]]:
    if start_id not in subgraph:
        return []
    if start_id == goal_id:
        return [[goal_id]]
    return [list(path) for path in nx.all_simple_paths(subgraph, start_id, goal_id)]


def find_all_paths(graph: ConceptGraph, start_id: str, goal_id: str) -> List[List[str]]:
    """All simple paths from start to goal, possibly empty. Both ids must exist."""
    return _paths_from(_goal_subgraph(graph, goal_id), start_id, goal_id)


def enumerate_paths(graph: ConceptGraph, start_id: str, goal_id: str) -> List[List[str]]:
    """
    Enumerate candidate paths to the goal.

    With start_id == "root" the roots are tried in catalog order and the
    first root yielding any path wins; paths from later roots are not merged.

    Raises:
        NotFoundError: goal (or an explicit start) is not in the catalog
        NoPathError: nothing connects the start (or any root) to the goal
    """
    graph.require(goal_id, "Goal concept")
    subgraph = _goal_subgraph(graph, goal_id)

    if start_id == ROOT_START:
        for root_id in graph.roots():
            paths = _paths_from(subgraph, root_id, goal_id)
            if paths:
                logger.debug(
                    "Root-mode paths found",
                    extra={"root": root_id, "goal": goal_id, "path_count": len(paths)},
                )
                return paths
        raise NoPathError(f"No paths found to concept '{goal_id}' from any starting point.")

    graph.require(start_id, "Start concept")
    paths = _paths_from(subgraph, start_id, goal_id)
    if not paths:
        raise NoPathError(f"No paths found from '{start_id}' to concept '{goal_id}'.")
    return paths
