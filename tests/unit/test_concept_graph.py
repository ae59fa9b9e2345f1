"""Unit tests for ConceptGraph construction and lookups."""

import pytest

from conftest import make_catalog
from masterly.engines.pathing.graph import ConceptGraph
from masterly.kernel.errors import NotFoundError
from masterly.kernel.repositories import ConceptNode


class TestConceptGraph:
    """Tests for building the prerequisite graph from catalog records."""

    def test_edges_in_both_directions(self, diamond_catalog):
        graph = ConceptGraph.from_concepts(diamond_catalog)
        assert graph.prerequisites_of("D") == ["B", "C"]
        assert graph.dependents_of("A") == ["B", "C"]
        assert graph.dependents_of("D") == []
        assert len(graph) == 4

    def test_roots_in_catalog_order(self):
        graph = ConceptGraph.from_concepts(make_catalog([("X", []), ("Y", ["X"]), ("A", [])]))
        assert graph.roots() == ["X", "A"]

    def test_dangling_prerequisite_is_not_a_node(self):
        """A prerequisite id missing from the catalog never becomes a node."""
        graph = ConceptGraph.from_concepts(make_catalog([("A", ["ghost"])]))
        assert "ghost" not in graph
        assert graph.prerequisites_of("A") == ["ghost"]
        assert graph.dependents_of("ghost") == []
        assert graph.roots() == []

    def test_duplicate_ids_and_prerequisites_collapse(self):
        catalog = [
            ConceptNode(id="A", title="First A"),
            ConceptNode(id="A", title="Second A"),
            ConceptNode(id="B", title="B", prerequisites=["A", "A"]),
        ]
        graph = ConceptGraph.from_concepts(catalog)
        assert graph.title_of("A") == "First A"
        assert graph.prerequisites_of("B") == ["A"]
        assert graph.dependents_of("A") == ["B"]

    def test_numeric_prerequisite_ids_are_stringified(self):
        node = ConceptNode(id="2", title="Two", prerequisites=[1])
        assert node.prerequisites == ["1"]

    def test_require_raises_not_found(self, chain_catalog):
        graph = ConceptGraph.from_concepts(chain_catalog)
        graph.require("A")
        with pytest.raises(NotFoundError) as exc:
            graph.require("Z", "Goal concept")
        assert "Goal concept 'Z' not found" in exc.value.message
        assert exc.value.status_code == 404

    def test_digraph_edges_run_prerequisite_to_dependent(self, diamond_catalog):
        graph = ConceptGraph.from_concepts(diamond_catalog)
        assert list(graph.digraph.nodes) == ["A", "B", "C", "D"]
        assert list(graph.digraph.edges) == [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")]

    def test_dangling_prerequisite_adds_no_edge(self):
        graph = ConceptGraph.from_concepts(make_catalog([("A", []), ("B", ["A", "ghost"])]))
        assert graph.digraph.number_of_edges() == 1
        assert graph.digraph.has_edge("A", "B")
