"""Unit tests for path enumeration: explicit start, root mode, cycles."""

import pytest

from conftest import make_catalog
from masterly.engines.pathing.enumerator import ROOT_START, enumerate_paths, find_all_paths
from masterly.engines.pathing.graph import ConceptGraph
from masterly.kernel.errors import NoPathError, NotFoundError


def graph_of(entries):
    return ConceptGraph.from_concepts(make_catalog(entries))


class TestExplicitStart:
    """Enumeration from a named start concept."""

    def test_chain_has_single_path(self, chain_catalog):
        graph = ConceptGraph.from_concepts(chain_catalog)
        assert enumerate_paths(graph, "A", "C") == [["A", "B", "C"]]

    def test_diamond_paths_in_catalog_order(self, diamond_catalog):
        graph = ConceptGraph.from_concepts(diamond_catalog)
        assert enumerate_paths(graph, "A", "D") == [["A", "B", "D"], ["A", "C", "D"]]

    def test_start_equals_goal(self, chain_catalog):
        graph = ConceptGraph.from_concepts(chain_catalog)
        assert enumerate_paths(graph, "B", "B") == [["B"]]

    def test_start_downstream_of_goal_has_no_path(self, chain_catalog):
        graph = ConceptGraph.from_concepts(chain_catalog)
        with pytest.raises(NoPathError):
            enumerate_paths(graph, "C", "A")

    def test_unknown_goal(self, chain_catalog):
        graph = ConceptGraph.from_concepts(chain_catalog)
        with pytest.raises(NotFoundError) as exc:
            enumerate_paths(graph, "A", "Z")
        assert "Goal concept" in exc.value.message

    def test_unknown_start(self, chain_catalog):
        graph = ConceptGraph.from_concepts(chain_catalog)
        with pytest.raises(NotFoundError) as exc:
            enumerate_paths(graph, "Q", "C")
        assert "Start concept" in exc.value.message

    def test_branch_not_leading_to_goal_is_skipped(self):
        graph = graph_of([("A", []), ("B", ["A"]), ("X", ["A"]), ("Y", ["X"]), ("C", ["B"])])
        assert find_all_paths(graph, "A", "C") == [["A", "B", "C"]]


class TestRootMode:
    """Enumeration with the "root" start token."""

    def test_first_root_with_paths_wins(self):
        # R1 and R2 both reach G; only R1's paths are returned
        graph = graph_of([("R1", []), ("R2", []), ("G", ["R1", "R2"])])
        assert enumerate_paths(graph, ROOT_START, "G") == [["R1", "G"]]

    def test_only_reaching_root_contributes(self):
        graph = graph_of([("A", []), ("B", []), ("C", ["A"])])
        assert enumerate_paths(graph, ROOT_START, "C") == [["A", "C"]]

    def test_skips_roots_that_cannot_reach_goal(self):
        graph = graph_of([("R1", []), ("R2", []), ("G", ["R2"])])
        assert enumerate_paths(graph, ROOT_START, "G") == [["R2", "G"]]

    def test_goal_that_is_a_root(self):
        graph = graph_of([("A", []), ("B", ["A"])])
        assert enumerate_paths(graph, ROOT_START, "A") == [["A"]]

    def test_no_root_reaches_goal(self):
        # Every ancestor of G sits on a cycle, so no root leads there
        graph = graph_of([("R", []), ("P", ["Q"]), ("Q", ["P"]), ("G", ["P"])])
        with pytest.raises(NoPathError) as exc:
            enumerate_paths(graph, ROOT_START, "G")
        assert "from any starting point" in exc.value.message


class TestCycles:
    """Malformed catalogs with cycles still terminate with simple paths."""

    def test_cycle_does_not_loop(self):
        # A -> B -> C -> B (cycle between B and C) and C -> D
        graph = graph_of([("A", []), ("B", ["A", "C"]), ("C", ["B"]), ("D", ["C"])])
        paths = enumerate_paths(graph, "A", "D")
        assert paths == [["A", "B", "C", "D"]]
        for path in paths:
            assert len(path) == len(set(path))

    def test_self_loop(self):
        graph = graph_of([("A", []), ("B", ["A", "B"]), ("C", ["B"])])
        assert enumerate_paths(graph, "A", "C") == [["A", "B", "C"]]
