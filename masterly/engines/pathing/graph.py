"""
Concept Graph - in-memory prerequisite graph built per request.
"""

from typing import Iterable, List, Optional

import networkx as nx

from masterly.kernel.errors import NotFoundError
from masterly.kernel.repositories.base import ConceptNode


class ConceptGraph:
    """
    Directed graph over catalog concepts.

    Edges run prerequisite -> dependent, the way a learner moves. Nodes and
    edges are inserted in catalog order so neighbour iteration, and every
    traversal built on it, is reproducible.

    Each node carries its declared prerequisite list as an attribute. That
    list keeps dangling ids, which never become nodes or edges.
    """

    def __init__(self) -> None:
        self.digraph = nx.DiGraph()

    @classmethod
    def from_concepts(cls, concepts: Iterable[ConceptNode]) -> "ConceptGraph":
        """Build a graph from catalog records (later duplicates of an id are ignored)."""
        graph = cls()
        g = graph.digraph
        for concept in concepts:
            if concept.id in g:
                continue
            g.add_node(
                concept.id,
                title=concept.title,
                prerequisites=list(dict.fromkeys(concept.prerequisites)),
            )

        for concept_id, prereqs in g.nodes(data="prerequisites"):
            for prereq_id in prereqs:
                if prereq_id in g:
                    g.add_edge(prereq_id, concept_id)
        return graph

    def __contains__(self, concept_id: object) -> bool:
        return concept_id in self.digraph

    def __len__(self) -> int:
        return self.digraph.number_of_nodes()

    def require(self, concept_id: str, label: str = "Concept") -> None:
        """Raise NotFoundError unless the concept is in the catalog."""
        if concept_id not in self.digraph:
            raise NotFoundError(f"{label} '{concept_id}' not found in catalog.")

    def prerequisites_of(self, concept_id: str) -> List[str]:
        if concept_id not in self.digraph:
            return []
        return list(self.digraph.nodes[concept_id]["prerequisites"])

    def dependents_of(self, concept_id: str) -> List[str]:
        if concept_id not in self.digraph:
            return []
        return list(self.digraph.successors(concept_id))

    def title_of(self, concept_id: str) -> Optional[str]:
        if concept_id not in self.digraph:
            return None
        return self.digraph.nodes[concept_id]["title"]

    def roots(self) -> List[str]:
        """Concepts that declare no prerequisites, in catalog order."""
        return [cid for cid, prereqs in self.digraph.nodes(data="prerequisites") if not prereqs]

    def concept_ids(self) -> List[str]:
        return list(self.digraph.nodes)
