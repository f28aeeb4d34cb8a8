"""
SimilarityEngine: semantic similarity between concepts of one taxonomy.

The engine never mutates the graph. The root and the information content
tables are cached for the current graph generation only; distance maps are
rebuilt for every query.
"""

import logging
from collections.abc import Sequence

import numpy as np

from taxograph.closure import ClosureEngine
from taxograph.errors import ConfigurationError
from taxograph.graph import GraphStore, PredicateRepository
from taxograph.localtypes import Direction, ShortestPathMap, VertexId
from taxograph.utils import GenerationCache

from .information_content import INTRINSIC_IC
from .measures import SimilarityMeasure, SMConf, build_measure

logger = logging.getLogger(__name__)


class SimilarityEngine:
    """
    Pairwise similarity over a rooted taxonomy.

    Args:
        graph: The graph holding the taxonomy.
        predicates: The session's predicate repository.
        root: The root of the taxonomy; when omitted, the unique taxonomic
            vertex without ancestors.
        closures: A ClosureEngine to share with other components.
    """

    def __init__(
        self,
        graph: GraphStore,
        predicates: PredicateRepository,
        root: VertexId | None = None,
        closures: ClosureEngine | None = None,
    ) -> None:
        self.graph = graph
        self.closures = closures or ClosureEngine(graph, predicates)
        self._root = root
        self._cache: GenerationCache = GenerationCache(lambda: graph.generation)

    @property
    def root(self) -> VertexId:
        """
        Raises:
            ConfigurationError: If the given root is unknown, or if the
                taxonomy has no or several roots.
        """
        return self._cache.get("root", self._resolve_root)

    def _resolve_root(self) -> VertexId:
        if self._root is not None:
            if self.graph.get_vertex(self._root) is None:
                raise ConfigurationError(f"Unknown root {self._root}")
            return self._root

        roots = self.closures.roots()
        if len(roots) != 1:
            raise ConfigurationError(
                f"The taxonomy must have exactly one root, found {len(roots)}: "
                "consider rerooting the graph"
            )
        logger.debug(f"Using root {roots[0]}")
        return roots[0]

    def _check(self, *vertices: VertexId) -> None:
        for vertex in vertices:
            if self.graph.get_vertex(vertex) is None:
                raise ConfigurationError(f"Unknown vertex {vertex}")

    # Building blocks used by the measures

    def most_specific_ancestor(self, a: VertexId, b: VertexId) -> VertexId:
        return self.closures.most_specific_ancestor(a, b)

    def common_ancestors(self, a: VertexId, b: VertexId) -> frozenset[VertexId]:
        """Inclusive common ancestors of a and b."""
        return (self.closures.ancestors(a) | {a}) & (self.closures.ancestors(b) | {b})

    def shortest_paths(self, source: VertexId) -> ShortestPathMap:
        """Distances from source to its ancestors and to its descendants."""
        return self.closures.shortest_paths(source, Direction.BOTH)

    def information_content(self, vertex: VertexId, kind: str) -> float:
        if kind not in INTRINSIC_IC:
            raise ConfigurationError(f"Unknown information content '{kind}'")
        table = self._cache.get(("ic", kind), lambda: INTRINSIC_IC[kind](self.closures))
        if vertex not in table:
            raise ConfigurationError(f"{vertex} is not a concept of the taxonomy")
        return table[vertex]

    # Scores

    def similarity(
        self, a: VertexId, b: VertexId, conf: SMConf | SimilarityMeasure
    ) -> float:
        """
        Similarity of a and b with the configured measure.

        Raises:
            ConfigurationError: On unknown vertex, measure or option, or when
                the taxonomy is not rooted.
            CycleDetected: If the taxonomy is not acyclic.
        """
        self._check(a, b)
        measure = build_measure(conf)
        return measure.sim(a, b, self)

    def cross_similarity(
        self,
        group_a: Sequence[VertexId],
        group_b: Sequence[VertexId],
        conf: SMConf | SimilarityMeasure,
    ) -> np.ndarray:
        """Matrix of sim(group_a[i], group_b[j])."""
        measure = build_measure(conf)
        self._check(*group_a, *group_b)
        matrix = np.zeros((len(group_a), len(group_b)), dtype=float)
        for i, a in enumerate(group_a):
            for j, b in enumerate(group_b):
                matrix[i, j] = measure.sim(a, b, self)
        return matrix

    def similarity_matrix(
        self, vertices: Sequence[VertexId], conf: SMConf | SimilarityMeasure
    ) -> np.ndarray:
        """Symmetric matrix of pairwise similarities, in the order of vertices."""
        measure = build_measure(conf)
        self._check(*vertices)
        n = len(vertices)
        matrix = np.zeros((n, n), dtype=float)
        for i in range(n):
            for j in range(i, n):
                matrix[i, j] = matrix[j, i] = measure.sim(vertices[i], vertices[j], self)
        return matrix
