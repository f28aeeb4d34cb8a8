"""
Tests for taxograph.similarity: measures, information content and groupwise
aggregation.
"""

import math
from itertools import product

import numpy as np
import pytest

from conftest import iri
from taxograph.constants import SYNTHETIC_ROOT
from taxograph.errors import ConfigurationError, CycleDetected
from taxograph.localtypes import VertexType
from taxograph.reduction import reroot
from taxograph.similarity import (
    MEASURES,
    PathDistances,
    PekarStaab2002,
    SimilarityEngine,
    SMConf,
    build_measure,
    groupwise_similarity,
    lin_1998,
    pekar_staab_2002,
    sanchez_2011,
    seco_2004,
    wu_palmer_1994,
)

PEKAR_STAAB = SMConf("pekar_staab_2002")


@pytest.fixture
def engine(siblings, predicates) -> SimilarityEngine:
    return SimilarityEngine(siblings, predicates)


class TestFormulas:
    def test_pekar_staab(self):
        assert pekar_staab_2002(PathDistances(2, 1, 1)) == 0.5
        assert pekar_staab_2002(PathDistances(0, 0, 0)) == 1.0

    def test_wu_palmer(self):
        assert wu_palmer_1994(PathDistances(1, 1, 1)) == 0.5

    def test_lin_with_null_information(self):
        assert lin_1998(0.0, 0.0, 0.0) == 1.0


class TestPekarStaab:
    def test_siblings(self, engine):
        assert engine.similarity(iri("A"), iri("B"), PEKAR_STAAB) == pytest.approx(1 / 3)

    def test_parent(self, engine):
        assert engine.similarity(iri("A"), iri("X"), PEKAR_STAAB) == pytest.approx(0.5)

    @pytest.mark.parametrize("name", ["root", "X", "A"])
    def test_identity(self, engine, name):
        assert engine.similarity(iri(name), iri(name), PEKAR_STAAB) == 1.0

    def test_explicit_root(self, siblings, predicates):
        engine = SimilarityEngine(siblings, predicates, root=iri("X"))
        assert engine.similarity(iri("A"), iri("B"), PEKAR_STAAB) == 0.0

    def test_measure_instances_are_accepted(self, engine):
        assert engine.similarity(iri("A"), iri("B"), PekarStaab2002()) == pytest.approx(1 / 3)

    def test_cycle_below_the_root(self, taxonomy, predicates):
        graph = taxonomy([("X", "root"), ("A", "X"), ("B", "X"), ("A", "B"), ("B", "A")])
        engine = SimilarityEngine(graph, predicates)
        with pytest.raises(CycleDetected):
            engine.similarity(iri("A"), iri("B"), PEKAR_STAAB)


class TestOtherMeasures:
    def test_wu_palmer(self, engine):
        assert engine.similarity(iri("A"), iri("B"), SMConf("wu_palmer_1994")) == 0.5

    def test_rada(self, engine):
        assert engine.similarity(iri("A"), iri("B"), SMConf("rada_1989")) == pytest.approx(1 / 3)
        assert engine.similarity(iri("A"), iri("A"), SMConf("rada_1989")) == 1.0

    def test_resnik_uses_most_informative_ancestor(self, engine):
        expected = 1 - math.log(3) / math.log(4)
        score = engine.similarity(iri("A"), iri("B"), SMConf("resnik_1995"))
        assert score == pytest.approx(expected)

    def test_lin(self, engine):
        expected = 1 - math.log(3) / math.log(4)
        assert engine.similarity(iri("A"), iri("B"), SMConf("lin_1998")) == pytest.approx(expected)
        assert engine.similarity(iri("A"), iri("A"), SMConf("lin_1998")) == pytest.approx(1.0)

    def test_lin_with_sanchez(self, engine):
        conf = SMConf("lin_1998", {"ic": "sanchez_2011"})
        assert 0.0 < engine.similarity(iri("A"), iri("B"), conf) < 1.0

    def test_scores_are_symmetric_and_bounded(self, taxonomy, predicates):
        graph = taxonomy(
            [("B", "A"), ("C", "A"), ("D", "B"), ("E", "C"), ("E", "D"), ("F", "E")]
        )
        engine = SimilarityEngine(graph, predicates)
        concepts = [iri(name) for name in "ABCDEF"]

        for identifier in MEASURES:
            conf = SMConf(identifier)
            for a, b in product(concepts, repeat=2):
                score = engine.similarity(a, b, conf)
                assert 0.0 <= score <= 1.0
                assert score == pytest.approx(engine.similarity(b, a, conf))


class TestInformationContent:
    def test_seco(self, siblings, closures_of):
        table = seco_2004(closures_of(siblings))
        assert table[iri("root")] == 0.0
        assert table[iri("A")] == 1.0
        assert table[iri("X")] == pytest.approx(1 - math.log(3) / math.log(4))

    def test_sanchez_decreases_towards_the_root(self, siblings, closures_of):
        table = sanchez_2011(closures_of(siblings))
        assert table[iri("root")] == 0.0
        assert table[iri("A")] > table[iri("X")] > table[iri("root")]
        assert table[iri("A")] == pytest.approx(2 - math.log(4) / math.log(3))

    def test_unknown_concept(self, engine):
        engine.graph.create_vertex(iri("i"), VertexType.INSTANCE)
        with pytest.raises(ConfigurationError, match="not a concept"):
            engine.information_content(iri("i"), "seco_2004")


class TestConfiguration:
    def test_case_insensitive_identifier(self):
        assert isinstance(build_measure(SMConf(" Pekar_Staab_2002 ")), PekarStaab2002)

    def test_unknown_measure(self, engine):
        with pytest.raises(ConfigurationError, match="Unknown measure"):
            engine.similarity(iri("A"), iri("B"), SMConf("jaccard"))

    def test_unknown_option(self):
        with pytest.raises(ConfigurationError, match="ic"):
            build_measure(SMConf("pekar_staab_2002", {"ic": "seco_2004"}))

    def test_unknown_information_content(self):
        with pytest.raises(ConfigurationError, match="zhou"):
            build_measure(SMConf("resnik_1995", {"ic": "zhou_2008"}))

    def test_unknown_vertex(self, engine):
        with pytest.raises(ConfigurationError, match="Unknown vertex"):
            engine.similarity(iri("A"), iri("nowhere"), PEKAR_STAAB)

    def test_unknown_root(self, siblings, predicates):
        engine = SimilarityEngine(siblings, predicates, root=iri("nowhere"))
        with pytest.raises(ConfigurationError, match="Unknown root"):
            engine.root

    def test_several_roots_until_rerooted(self, taxonomy, predicates):
        graph = taxonomy([("A", "P")], classes=["Q"])
        engine = SimilarityEngine(graph, predicates)
        with pytest.raises(ConfigurationError, match="exactly one root"):
            engine.root

        reroot(engine.closures, SYNTHETIC_ROOT)
        assert engine.root == SYNTHETIC_ROOT
        assert engine.similarity(iri("A"), iri("Q"), PEKAR_STAAB) == 0.0


class TestMatrices:
    def test_similarity_matrix(self, engine):
        vertices = [iri("A"), iri("B"), iri("X"), iri("root")]
        matrix = engine.similarity_matrix(vertices, PEKAR_STAAB)

        assert matrix.shape == (4, 4)
        np.testing.assert_allclose(matrix, matrix.T)
        np.testing.assert_allclose(np.diag(matrix), np.ones(4))
        assert matrix[0, 1] == pytest.approx(1 / 3)

    def test_cross_similarity(self, engine):
        matrix = engine.cross_similarity([iri("A")], [iri("A"), iri("B")], PEKAR_STAAB)
        np.testing.assert_allclose(matrix, [[1.0, 1 / 3]])


class TestCaching:
    def test_distance_maps_are_not_kept(self, taxonomy, predicates):
        leaves = [f"L{i}" for i in range(20)]
        engine = SimilarityEngine(taxonomy([(leaf, "root") for leaf in leaves]), predicates)
        engine.similarity(iri("L0"), iri("L1"), PEKAR_STAAB)
        entries = (len(engine._cache), len(engine.closures._cache))

        for a, b in product(leaves, repeat=2):
            engine.similarity(iri(a), iri(b), PEKAR_STAAB)

        assert (len(engine._cache), len(engine.closures._cache)) == entries


class TestGroupwise:
    def test_best_match_average(self, engine):
        score = groupwise_similarity(engine, [iri("A")], [iri("A"), iri("B")], PEKAR_STAAB)
        assert score == pytest.approx(5 / 6)

    def test_optimal_assignment(self, engine):
        score = groupwise_similarity(
            engine, [iri("A")], [iri("A"), iri("B")], PEKAR_STAAB, "optimal_assignment"
        )
        assert score == pytest.approx(0.5)

    def test_identical_groups(self, engine):
        group = [iri("A"), iri("B")]
        for strategy in ("best_match_average", "optimal_assignment"):
            assert groupwise_similarity(engine, group, group, PEKAR_STAAB, strategy) == 1.0

    def test_empty_group(self, engine):
        with pytest.raises(ConfigurationError, match="non-empty"):
            groupwise_similarity(engine, [], [iri("A")], PEKAR_STAAB)

    def test_unknown_strategy(self, engine):
        with pytest.raises(ConfigurationError, match="strategy"):
            groupwise_similarity(engine, [iri("A")], [iri("A")], PEKAR_STAAB, "max")
