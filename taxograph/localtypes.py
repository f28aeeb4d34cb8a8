"""
Type definitions for taxonomic graph processing.

This module contains the value types shared by every component:
vertices, edges, traversal directions and the derived mappings
(closures, shortest-path maps) computed over them.
"""

from __future__ import annotations

from collections.abc import Mapping, Set
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

# Identifiers are lexical IRIs, e.g. "http://x/A"
type VertexId = str
type PredicateId = str

# Derived structures
type ClosureSet = Mapping[VertexId, frozenset[VertexId]]
type ShortestPathMap = Mapping[VertexId, int]
type Adjacency = Mapping[VertexId, Set[VertexId]]


class VertexType(Enum):
    """Type tag of a vertex."""

    CLASS = "class"
    INSTANCE = "instance"
    ROOT = "root"  # Synthetic root created by rerooting
    UNDEFINED = "undefined"


# Vertices which take part in the subsumption hierarchy
TAXONOMIC_TYPES: frozenset[VertexType] = frozenset(
    {VertexType.CLASS, VertexType.ROOT}
)


class Direction(Enum):
    """
    Traversal direction over an edge relation.

    OUT follows an edge from its source to its target (toward ancestors for
    subsumption), IN follows it backward (toward descendants).
    BOTH is only meaningful for shortest-path maps: ancestors are reached
    through OUT-only paths and descendants through IN-only paths.
    """

    OUT = "out"
    IN = "in"
    BOTH = "both"

    def reverse(self) -> Direction:
        match self:
            case Direction.OUT:
                return Direction.IN
            case Direction.IN:
                return Direction.OUT
            case _:
                return self


@dataclass(frozen=True, slots=True)
class Vertex:
    """
    A vertex of the graph.

    Attributes:
        id: The identifier, also used as the lexical value of the vertex.
        type: The type tag.
    """

    id: VertexId
    type: VertexType = VertexType.CLASS

    def __str__(self) -> str:
        return self.id


class Edge(NamedTuple):
    """A directed (source, predicate, target) triple."""

    source: VertexId
    predicate: PredicateId
    target: VertexId

    def __str__(self) -> str:
        return f"<{self.source}> <{self.predicate}> <{self.target}>"


__all__ = [
    "VertexId",
    "PredicateId",
    "ClosureSet",
    "ShortestPathMap",
    "Adjacency",
    "VertexType",
    "TAXONOMIC_TYPES",
    "Direction",
    "Vertex",
    "Edge",
]
