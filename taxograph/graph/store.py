"""
Graph storage.

GraphStore is the interface the engines consume; MemoryGraph is an in-memory
implementation indexing edges per vertex and direction.

Every structural change (vertex creation/removal/retyping, edge addition/
removal) advances the store's `generation`, which derived caches use to
detect staleness.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Set
from typing import Protocol, runtime_checkable

from taxograph.errors import ConfigurationError
from taxograph.localtypes import (
    Direction,
    Edge,
    PredicateId,
    Vertex,
    VertexId,
    VertexType,
)

logger = logging.getLogger(__name__)

# scheme ":" followed by a non-empty, whitespace-free remainder
IRI_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:[^\s<>\"{}|\\^`]+$")

type Predicates = PredicateId | Set[PredicateId] | None
type VertexTypes = VertexType | Set[VertexType] | None


@runtime_checkable
class GraphStore(Protocol):
    """Abstraction for the backing graph."""

    @property
    def generation(self) -> int: ...

    def list_vertices(self, type_filter: VertexTypes = None) -> frozenset[VertexId]: ...

    def list_edges(
        self,
        predicates: Predicates = None,
        vertex: VertexId | None = None,
        direction: Direction | None = None,
    ) -> frozenset[Edge]: ...

    def neighbors(
        self, vertex: VertexId, predicates: Predicates, direction: Direction
    ) -> frozenset[VertexId]: ...

    def get_vertex(self, vertex: VertexId) -> Vertex | None: ...

    def create_vertex(
        self, vertex: VertexId, vertex_type: VertexType = VertexType.CLASS
    ) -> Vertex: ...

    def set_vertex_type(self, vertex: VertexId, vertex_type: VertexType) -> None: ...

    def add_edges(
        self, edges: Iterable[Edge], vertex_type: VertexType = VertexType.UNDEFINED
    ) -> int: ...

    def remove_vertices(self, vertices: Iterable[VertexId]) -> int: ...

    def remove_edges(self, edges: Iterable[Edge]) -> int: ...

    def resolve_identifier(self, identifier: str) -> VertexId: ...


def _as_set[T](value: T | Set[T] | None) -> Set[T] | None:
    if value is None or isinstance(value, Set):
        return value
    return {value}


class MemoryGraph:
    """
    In-memory GraphStore.

    Example:
        >>> g = MemoryGraph()
        >>> g.add_edge("http://x/A", "http://x/narrower", "http://x/B")
        True
        >>> g.neighbors("http://x/A", {"http://x/narrower"}, Direction.OUT)
        frozenset({'http://x/B'})
    """

    def __init__(self, name: str = "http://taxograph.org/graph") -> None:
        self.name = name
        self._types: dict[VertexId, VertexType] = {}
        self._out: dict[VertexId, set[Edge]] = {}
        self._in: dict[VertexId, set[Edge]] = {}
        self._edges: set[Edge] = set()
        self._generation = 0

    def __repr__(self) -> str:
        return (
            f"MemoryGraph({self.name!r}, vertices={len(self._types)}, "
            f"edges={len(self._edges)}, generation={self._generation})"
        )

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._types

    @property
    def generation(self) -> int:
        return self._generation

    def _advance(self) -> None:
        self._generation += 1

    # Vertices

    def list_vertices(self, type_filter: VertexTypes = None) -> frozenset[VertexId]:
        types = _as_set(type_filter)
        if types is None:
            return frozenset(self._types)
        return frozenset(v for v, t in self._types.items() if t in types)

    def get_vertex(self, vertex: VertexId) -> Vertex | None:
        vertex_type = self._types.get(vertex)
        if vertex_type is None:
            return None
        return Vertex(vertex, vertex_type)

    def create_vertex(
        self, vertex: VertexId, vertex_type: VertexType = VertexType.CLASS
    ) -> Vertex:
        """Creates a vertex, or returns the existing one unchanged."""
        if vertex not in self._types:
            self._types[vertex] = vertex_type
            self._out[vertex] = set()
            self._in[vertex] = set()
            self._advance()
        return Vertex(vertex, self._types[vertex])

    def set_vertex_type(self, vertex: VertexId, vertex_type: VertexType) -> None:
        if vertex not in self._types:
            raise ConfigurationError(f"Unknown vertex {vertex}")
        if self._types[vertex] != vertex_type:
            self._types[vertex] = vertex_type
            self._advance()

    def remove_vertices(self, vertices: Iterable[VertexId]) -> int:
        """Removes vertices and their incident edges. Returns the number removed."""
        removed = 0
        for vertex in set(vertices):
            if vertex not in self._types:
                continue
            for edge in self._out.pop(vertex) | self._in.pop(vertex):
                self._discard_edge(edge)
            del self._types[vertex]
            removed += 1
        if removed:
            self._advance()
        return removed

    # Edges

    def add_edge(
        self,
        source: VertexId,
        predicate: PredicateId,
        target: VertexId,
        vertex_type: VertexType = VertexType.CLASS,
    ) -> bool:
        """Adds one edge, creating missing endpoints with the given type."""
        return self.add_edges((Edge(source, predicate, target),), vertex_type) == 1

    def add_edges(
        self, edges: Iterable[Edge], vertex_type: VertexType = VertexType.UNDEFINED
    ) -> int:
        """
        Adds edges, creating missing endpoints with the given type.

        Returns:
            The number of edges which were not already present.
        """
        added = 0
        for edge in edges:
            edge = Edge(*edge)
            if edge in self._edges:
                continue
            for vertex in (edge.source, edge.target):
                if vertex not in self._types:
                    self._types[vertex] = vertex_type
                    self._out[vertex] = set()
                    self._in[vertex] = set()
            self._edges.add(edge)
            self._out[edge.source].add(edge)
            self._in[edge.target].add(edge)
            added += 1
        if added:
            self._advance()
        return added

    def _discard_edge(self, edge: Edge) -> None:
        self._edges.discard(edge)
        # Endpoints may already be popped while removing a vertex
        if edge.source in self._out:
            self._out[edge.source].discard(edge)
        if edge.target in self._in:
            self._in[edge.target].discard(edge)

    def remove_edges(self, edges: Iterable[Edge]) -> int:
        """Removes edges. Returns the number of edges actually removed."""
        removed = 0
        for edge in set(edges):
            if edge in self._edges:
                self._discard_edge(edge)
                removed += 1
        if removed:
            self._advance()
        return removed

    def list_edges(
        self,
        predicates: Predicates = None,
        vertex: VertexId | None = None,
        direction: Direction | None = None,
    ) -> frozenset[Edge]:
        """
        Edges, optionally restricted to some predicates and to a vertex.

        With a vertex, direction OUT selects edges whose source is the vertex,
        IN edges whose target is the vertex, BOTH or None both.
        """
        wanted = _as_set(predicates)

        if vertex is None:
            candidates: Iterable[Edge] = self._edges
        elif vertex not in self._types:
            return frozenset()
        elif direction is Direction.OUT:
            candidates = self._out[vertex]
        elif direction is Direction.IN:
            candidates = self._in[vertex]
        else:
            candidates = self._out[vertex] | self._in[vertex]

        if wanted is None:
            return frozenset(candidates)
        return frozenset(e for e in candidates if e.predicate in wanted)

    def neighbors(
        self, vertex: VertexId, predicates: Predicates, direction: Direction
    ) -> frozenset[VertexId]:
        """Vertices one edge away from vertex in the given direction."""
        wanted = _as_set(predicates)
        result: set[VertexId] = set()
        if direction in (Direction.OUT, Direction.BOTH):
            result.update(
                e.target
                for e in self._out.get(vertex, ())
                if wanted is None or e.predicate in wanted
            )
        if direction in (Direction.IN, Direction.BOTH):
            result.update(
                e.source
                for e in self._in.get(vertex, ())
                if wanted is None or e.predicate in wanted
            )
        return frozenset(result)

    def resolve_identifier(self, identifier: str) -> VertexId:
        """
        Turns a string into a vertex identifier.

        Raises:
            ConfigurationError: If the string is not an absolute IRI.
        """
        candidate = identifier.strip()
        if not IRI_PATTERN.match(candidate):
            raise ConfigurationError(
                f"'{identifier}' cannot be converted into an identifier (absolute IRI expected)"
            )
        return candidate
