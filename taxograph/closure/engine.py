"""
Reachability over the taxonomic relation.

Closures are exclusive: a vertex never belongs to its own ancestors or
descendants. Computing every closure at once processes vertices in
topological order, each vertex merging the already-computed closures of its
direct neighbours, which avoids one traversal per vertex.
"""

import logging
from collections.abc import Iterable

from taxograph.errors import ConfigurationError, CycleDetected
from taxograph.graph import GraphStore, PredicateRepository
from taxograph.localtypes import (
    TAXONOMIC_TYPES,
    ClosureSet,
    Direction,
    ShortestPathMap,
    VertexId,
)
from taxograph.utils import (
    GenerationCache,
    breadth_first_distances,
    reachable_from,
    topological_sort,
)

logger = logging.getLogger(__name__)


class ClosureEngine:
    """
    Ancestor/descendant closures and distances over a graph's taxonomy.

    Bulk closures are cached per graph generation: any mutation of the graph
    invalidates them. Distance maps are computed per query and never kept.
    """

    def __init__(self, graph: GraphStore, predicates: PredicateRepository) -> None:
        self.graph = graph
        self.predicates = predicates
        self._cache: GenerationCache = GenerationCache(lambda: graph.generation)

    # Adjacency

    def neighbors(self, vertex: VertexId, direction: Direction) -> frozenset[VertexId]:
        """Direct taxonomic neighbours (parents for OUT, children for IN)."""
        return self.graph.neighbors(vertex, self.predicates.taxonomic, direction)

    def taxonomic_vertices(self) -> set[VertexId]:
        """Class and root vertices, plus any vertex incident to a taxonomic edge."""
        vertices = set(self.graph.list_vertices(TAXONOMIC_TYPES))
        for edge in self.graph.list_edges(self.predicates.taxonomic):
            vertices.add(edge.source)
            vertices.add(edge.target)
        return vertices

    # Closures

    def closure(self, vertex: VertexId, direction: Direction) -> frozenset[VertexId]:
        """
        Vertices reachable from vertex in the given direction, itself excluded.

        Raises:
            CycleDetected: If a cycle is reachable from vertex.
        """
        if direction is Direction.BOTH:
            raise ValueError("Closures are defined for OUT or IN only")
        all_closures = self._cache.peek(("closures", direction))
        if all_closures is not None:
            return all_closures.get(vertex, frozenset())

        reachable, cycle_node = reachable_from(
            vertex, lambda v: self.neighbors(v, direction)
        )
        if cycle_node is not None:
            raise CycleDetected(
                f"Cycle detected through vertex {cycle_node}", cycle_node
            )
        return reachable

    def all_closures(self, direction: Direction) -> ClosureSet:
        """
        Closure of every taxonomic vertex in the given direction.

        Raises:
            CycleDetected: If the taxonomy is not acyclic.
        """
        if direction is Direction.BOTH:
            raise ValueError("Closures are defined for OUT or IN only")
        return self._cache.get(
            ("closures", direction), lambda: self._compute_all_closures(direction)
        )

    def _compute_all_closures(self, direction: Direction) -> dict[VertexId, frozenset[VertexId]]:
        vertices = self.taxonomic_vertices()
        neighbours = {v: self.neighbors(v, direction) for v in vertices}

        # Neighbours must be processed before the vertices pointing to them
        neighbour_to_dependents: dict[VertexId, set[VertexId]] = {v: set() for v in vertices}
        for vertex, targets in neighbours.items():
            for target in targets:
                neighbour_to_dependents.setdefault(target, set()).add(vertex)

        try:
            order = topological_sort(neighbour_to_dependents)
        except ValueError as e:
            raise CycleDetected(
                f"The taxonomic graph contains a cycle, no {direction.value} closure exists"
            ) from e

        closures: dict[VertexId, frozenset[VertexId]] = {}
        for vertex in order:
            reached: set[VertexId] = set()
            for target in neighbours.get(vertex, ()):
                reached.add(target)
                reached.update(closures[target])
            closures[vertex] = frozenset(reached)

        logger.debug(
            f"Computed {direction.value} closures of {len(closures)} vertices "
            f"(generation {self.graph.generation})"
        )
        return closures

    def ancestors(self, vertex: VertexId) -> frozenset[VertexId]:
        return self.closure(vertex, Direction.OUT)

    def descendants(self, vertex: VertexId) -> frozenset[VertexId]:
        return self.closure(vertex, Direction.IN)

    def all_ancestors(self) -> ClosureSet:
        return self.all_closures(Direction.OUT)

    def all_descendants(self) -> ClosureSet:
        return self.all_closures(Direction.IN)

    # Distances

    def shortest_paths(
        self, source: VertexId, direction: Direction = Direction.OUT
    ) -> ShortestPathMap:
        """
        Edge-count distance from source to every vertex it reaches.

        With Direction.BOTH, ancestors are measured along OUT-only paths and
        descendants along IN-only paths, so a single map covers both the
        path up to the root and the paths down to the descendants.
        """
        if direction is not Direction.BOTH:
            return breadth_first_distances(
                source, lambda v: self.neighbors(v, direction)
            )
        distances = breadth_first_distances(
            source, lambda v: self.neighbors(v, Direction.IN)
        )
        # In a DAG, ancestors and descendants of a vertex are disjoint
        distances.update(
            breadth_first_distances(source, lambda v: self.neighbors(v, Direction.OUT))
        )
        return distances

    def most_specific_ancestors(
        self, a: VertexId, b: VertexId
    ) -> tuple[tuple[VertexId, ...], int]:
        """
        Common ancestors of a and b with minimal summed distance.

        Each vertex counts as its own ancestor at distance 0, so the most
        specific ancestor of a vertex and one of its ancestors is that ancestor.

        Returns:
            The tied ancestors sorted by identifier, and their summed distance.

        Raises:
            ConfigurationError: If a and b share no ancestor.
            CycleDetected: If a cycle lies above a or b.
        """
        common = (self.ancestors(a) | {a}) & (self.ancestors(b) | {b})
        if not common:
            raise ConfigurationError(
                f"{a} and {b} have no common ancestor, consider rerooting the graph"
            )

        from_a = self.shortest_paths(a, Direction.OUT)
        from_b = self.shortest_paths(b, Direction.OUT)

        best = min(from_a[c] + from_b[c] for c in common)
        tied = sorted(c for c in common if from_a[c] + from_b[c] == best)
        return tuple(tied), best

    def most_specific_ancestor(self, a: VertexId, b: VertexId) -> VertexId:
        """The first, by identifier, of the most specific common ancestors."""
        tied, _ = self.most_specific_ancestors(a, b)
        return tied[0]

    # Helpers for other components

    def roots(self) -> tuple[VertexId, ...]:
        """Taxonomic vertices without ancestors, sorted."""
        return tuple(
            sorted(
                v
                for v in self.taxonomic_vertices()
                if not self.neighbors(v, Direction.OUT)
            )
        )

    def leaves(self, vertices: Iterable[VertexId] | None = None) -> frozenset[VertexId]:
        """Taxonomic vertices without descendants."""
        candidates = self.taxonomic_vertices() if vertices is None else vertices
        return frozenset(v for v in candidates if not self.neighbors(v, Direction.IN))
