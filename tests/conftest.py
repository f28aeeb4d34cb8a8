"""
Shared graph builders for the test suite.
"""

from collections.abc import Iterable, Mapping

import pytest

from taxograph.closure import ClosureEngine
from taxograph.constants import RDF_TYPE, RDFS_SUBCLASSOF
from taxograph.graph import MemoryGraph, PredicateRepository
from taxograph.localtypes import Edge, VertexType


def iri(name: str) -> str:
    return f"http://x/{name}"


def build_taxonomy(
    subclass_of: Iterable[tuple[str, str]],
    instances: Mapping[str, Iterable[str]] | None = None,
    classes: Iterable[str] = (),
) -> MemoryGraph:
    """
    Graph from (child, parent) short names, instance -> class names, and
    isolated class names. Names are expanded with iri().
    """
    graph = MemoryGraph()
    for name in classes:
        graph.create_vertex(iri(name), VertexType.CLASS)
    graph.add_edges(
        (Edge(iri(child), RDFS_SUBCLASSOF, iri(parent)) for child, parent in subclass_of),
        VertexType.CLASS,
    )
    for instance, types in (instances or {}).items():
        graph.create_vertex(iri(instance), VertexType.INSTANCE)
        graph.add_edges(
            (Edge(iri(instance), RDF_TYPE, iri(c)) for c in types), VertexType.CLASS
        )
    return graph


@pytest.fixture
def predicates() -> PredicateRepository:
    return PredicateRepository()


@pytest.fixture
def taxonomy():
    """The build_taxonomy function."""
    return build_taxonomy


@pytest.fixture
def diamond() -> MemoryGraph:
    """
    root <- B, root <- C, B <- D, C <- D, plus the redundant D -> root.
    """
    return build_taxonomy(
        [("B", "root"), ("C", "root"), ("D", "B"), ("D", "C"), ("D", "root")]
    )


@pytest.fixture
def siblings() -> MemoryGraph:
    """root <- X <- A, root <- X <- B."""
    return build_taxonomy([("X", "root"), ("A", "X"), ("B", "X")])


@pytest.fixture
def closures_of(predicates):
    """Builds a ClosureEngine for a graph."""

    def make(graph: MemoryGraph) -> ClosureEngine:
        return ClosureEngine(graph, predicates)

    return make
