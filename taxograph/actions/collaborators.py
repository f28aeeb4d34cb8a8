"""
External collaborators of the action pipeline.

Reasoner          - entailment (RDFS/OWL) is never computed by taxograph itself
TypeInferencer    - assigns CLASS/INSTANCE tags to untyped vertices
IdentifierSource  - supplies identifier lists for pruning

TaxonomicTypeInferencer and FileIdentifierSource are the default
implementations of the last two.
"""

import logging
import os
from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from taxograph.errors import CollaboratorError
from taxograph.graph import GraphStore, PredicateRepository
from taxograph.localtypes import Edge, VertexId, VertexType

logger = logging.getLogger(__name__)


@runtime_checkable
class Reasoner(Protocol):
    def infer(self, edges: frozenset[Edge]) -> Iterable[Edge]:
        """Returns the edges entailed by the given ones."""
        ...


@runtime_checkable
class TypeInferencer(Protocol):
    def infer_types(self, graph: GraphStore, strict: bool) -> bool:
        """Types the vertices of graph; returns whether every vertex got a type."""
        ...


@runtime_checkable
class IdentifierSource(Protocol):
    def read(self, locations: Sequence[str]) -> list[str]:
        """Returns the identifiers listed at the given locations."""
        ...


class TaxonomicTypeInferencer:
    """
    Infers vertex types from the edges touching them.

    Endpoints of taxonomic edges and targets of type edges are classes;
    sources of type edges are instances. Vertices which already carry a type
    are left untouched. A vertex inferred to be both is a conflict: with
    strict=True it raises CollaboratorError before any vertex is retyped,
    otherwise that vertex stays untyped.
    """

    def __init__(self, predicates: PredicateRepository) -> None:
        self.predicates = predicates

    def infer_types(self, graph: GraphStore, strict: bool) -> bool:
        inferred: dict[VertexId, set[VertexType]] = {}

        for edge in graph.list_edges(self.predicates.taxonomic):
            inferred.setdefault(edge.source, set()).add(VertexType.CLASS)
            inferred.setdefault(edge.target, set()).add(VertexType.CLASS)
        for edge in graph.list_edges(self.predicates.type_predicate):
            inferred.setdefault(edge.source, set()).add(VertexType.INSTANCE)
            inferred.setdefault(edge.target, set()).add(VertexType.CLASS)

        untyped = graph.list_vertices(VertexType.UNDEFINED)
        assignments: dict[VertexId, VertexType] = {}
        conflicts: list[VertexId] = []
        for vertex in sorted(untyped):
            candidates = inferred.get(vertex, set())
            if len(candidates) > 1:
                conflicts.append(vertex)
            elif candidates:
                assignments[vertex] = next(iter(candidates))

        # Nothing is retyped when a strict inference fails
        if conflicts:
            message = (
                f"Conflicting types inferred for {len(conflicts)} vertices "
                f"(class and instance): {', '.join(conflicts[:10])}"
            )
            if strict:
                raise CollaboratorError(message)
            logger.warning(message)

        for vertex, vertex_type in assignments.items():
            graph.set_vertex_type(vertex, vertex_type)
        typed = len(assignments)

        remaining = len(graph.list_vertices(VertexType.UNDEFINED))
        logger.info(f"Typed {typed}/{len(untyped)} vertices, {remaining} remain untyped")
        return remaining == 0


class FileIdentifierSource:
    """Reads identifiers from text files, one per line; lines starting with '#' are skipped."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read(self, locations: Sequence[str]) -> list[str]:
        identifiers: list[str] = []
        for location in locations:
            path = os.path.expanduser(location.strip())
            logger.info(f"Reading identifiers from {path}")
            try:
                with open(path, "r", encoding=self.encoding) as file:
                    for line in file:
                        line = line.strip()
                        # IRIs may contain '#', only whole-line comments are skipped
                        if line and not line.startswith("#"):
                            identifiers.append(line)
            except OSError as e:
                raise CollaboratorError(f"Cannot read identifiers from {path}: {e}") from e
        return identifiers
