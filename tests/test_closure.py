"""
Tests for ClosureEngine: closures, distances and most specific ancestors.
"""

import pytest

from conftest import iri
from taxograph.constants import RDFS_SUBCLASSOF
from taxograph.errors import ConfigurationError, CycleDetected
from taxograph.localtypes import Direction


class TestClosures:
    def test_diamond_ancestors(self, diamond, closures_of):
        closures = closures_of(diamond)
        assert closures.ancestors(iri("D")) == {iri("B"), iri("C"), iri("root")}
        assert closures.ancestors(iri("root")) == frozenset()
        assert closures.descendants(iri("root")) == {iri("B"), iri("C"), iri("D")}

    def test_closures_are_exclusive(self, diamond, closures_of):
        closures = closures_of(diamond)
        for vertex, ancestors in closures.all_ancestors().items():
            assert vertex not in ancestors

    def test_single_and_bulk_closures_agree(self, diamond, closures_of):
        single = closures_of(diamond)
        expected = {v: single.ancestors(v) for v in single.taxonomic_vertices()}
        assert dict(closures_of(diamond).all_ancestors()) == expected

    def test_recurrence(self, taxonomy, closures_of):
        """anc(v) is the union of {p} and anc(p) over the parents p of v."""
        graph = taxonomy(
            [("B", "A"), ("C", "A"), ("D", "B"), ("E", "C"), ("E", "D"), ("F", "E")]
        )
        closures = closures_of(graph)
        ancestors = closures.all_ancestors()
        for vertex in closures.taxonomic_vertices():
            expected = set()
            for parent in closures.neighbors(vertex, Direction.OUT):
                expected |= {parent} | ancestors[parent]
            assert ancestors[vertex] == expected

    def test_inverse_symmetry(self, diamond, closures_of):
        closures = closures_of(diamond)
        ancestors = closures.all_ancestors()
        descendants = closures.all_descendants()
        for u in closures.taxonomic_vertices():
            for v in closures.taxonomic_vertices():
                assert (v in ancestors[u]) == (u in descendants[v])

    def test_instances_are_not_part_of_the_taxonomy(self, taxonomy, closures_of):
        closures = closures_of(taxonomy([("A", "root")], instances={"i": ["A"]}))
        assert iri("i") not in closures.taxonomic_vertices()
        assert closures.descendants(iri("A")) == frozenset()

    def test_both_direction_is_rejected(self, diamond, closures_of):
        with pytest.raises(ValueError):
            closures_of(diamond).closure(iri("D"), Direction.BOTH)


class TestCycles:
    def test_single_closure(self, taxonomy, closures_of):
        closures = closures_of(taxonomy([("A", "B"), ("B", "C"), ("C", "A")]))
        with pytest.raises(CycleDetected) as excinfo:
            closures.ancestors(iri("A"))
        assert excinfo.value.vertex == iri("A")

    def test_all_closures(self, taxonomy, closures_of):
        closures = closures_of(taxonomy([("A", "B"), ("B", "A"), ("C", "root")]))
        with pytest.raises(CycleDetected):
            closures.all_descendants()

    def test_cycle_above_vertex(self, taxonomy, closures_of):
        """v -> X -> Y -> X: the cycle does not pass through v."""
        closures = closures_of(taxonomy([("v", "X"), ("X", "Y"), ("Y", "X")]))
        with pytest.raises(CycleDetected) as excinfo:
            closures.ancestors(iri("v"))
        assert excinfo.value.vertex in {iri("X"), iri("Y")}

    def test_most_specific_ancestor(self, taxonomy, closures_of):
        graph = taxonomy([("X", "root"), ("A", "X"), ("B", "X"), ("A", "B"), ("B", "A")])
        with pytest.raises(CycleDetected):
            closures_of(graph).most_specific_ancestors(iri("A"), iri("B"))


class TestCaching:
    def test_mutation_invalidates_closures(self, diamond, closures_of):
        closures = closures_of(diamond)
        assert iri("E") not in closures.all_ancestors()

        diamond.add_edge(iri("E"), RDFS_SUBCLASSOF, iri("D"))
        assert closures.ancestors(iri("E")) == {iri("D"), iri("B"), iri("C"), iri("root")}
        assert iri("E") in closures.descendants(iri("root"))

    def test_mutation_invalidates_distances(self, siblings, closures_of):
        closures = closures_of(siblings)
        assert closures.shortest_paths(iri("A"))[iri("root")] == 2

        siblings.add_edge(iri("A"), RDFS_SUBCLASSOF, iri("root"))
        assert closures.shortest_paths(iri("A"))[iri("root")] == 1

    def test_distance_maps_are_not_kept(self, taxonomy, closures_of):
        closures = closures_of(taxonomy([(f"L{i}", "root") for i in range(20)]))
        closures.all_ancestors()
        entries = len(closures._cache)

        for i in range(20):
            closures.shortest_paths(iri(f"L{i}"))
            closures.shortest_paths(iri(f"L{i}"), Direction.BOTH)
            closures.most_specific_ancestors(iri("L0"), iri(f"L{i}"))

        assert len(closures._cache) == entries


class TestShortestPaths:
    def test_out(self, diamond, closures_of):
        distances = closures_of(diamond).shortest_paths(iri("D"))
        assert distances == {iri("D"): 0, iri("B"): 1, iri("C"): 1, iri("root"): 1}

    def test_in(self, siblings, closures_of):
        distances = closures_of(siblings).shortest_paths(iri("root"), Direction.IN)
        assert distances == {iri("root"): 0, iri("X"): 1, iri("A"): 2, iri("B"): 2}

    def test_both_uses_monotone_paths(self, siblings, closures_of):
        distances = closures_of(siblings).shortest_paths(iri("X"), Direction.BOTH)
        assert distances == {iri("X"): 0, iri("root"): 1, iri("A"): 1, iri("B"): 1}

        # B is a sibling, not reachable without changing direction
        assert iri("B") not in closures_of(siblings).shortest_paths(iri("A"), Direction.BOTH)


class TestMostSpecificAncestor:
    def test_siblings(self, siblings, closures_of):
        closures = closures_of(siblings)
        assert closures.most_specific_ancestors(iri("A"), iri("B")) == ((iri("X"),), 2)

    def test_vertex_is_its_own_ancestor(self, siblings, closures_of):
        closures = closures_of(siblings)
        assert closures.most_specific_ancestor(iri("A"), iri("X")) == iri("X")
        assert closures.most_specific_ancestors(iri("A"), iri("A")) == ((iri("A"),), 0)

    def test_ties_are_sorted(self, taxonomy, closures_of):
        graph = taxonomy(
            [("C", "root"), ("B", "root"), ("D", "C"), ("D", "B"), ("E", "C"), ("E", "B")]
        )
        closures = closures_of(graph)
        assert closures.most_specific_ancestors(iri("D"), iri("E")) == (
            (iri("B"), iri("C")),
            2,
        )
        assert closures.most_specific_ancestor(iri("E"), iri("D")) == iri("B")

    def test_no_common_ancestor(self, taxonomy, closures_of):
        closures = closures_of(taxonomy([], classes=["P", "Q"]))
        with pytest.raises(ConfigurationError, match="no common ancestor"):
            closures.most_specific_ancestor(iri("P"), iri("Q"))


class TestRootsAndLeaves:
    def test_diamond(self, diamond, closures_of):
        closures = closures_of(diamond)
        assert closures.roots() == (iri("root"),)
        assert closures.leaves() == {iri("D")}
        assert closures.leaves([iri("B"), iri("D")]) == {iri("D")}

    def test_isolated_classes_are_roots_and_leaves(self, taxonomy, closures_of):
        closures = closures_of(taxonomy([], classes=["Q", "P"]))
        assert closures.roots() == (iri("P"), iri("Q"))
        assert closures.leaves() == {iri("P"), iri("Q")}
