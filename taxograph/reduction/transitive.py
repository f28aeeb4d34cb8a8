"""
Transitive reduction of the taxonomy.

The transitive reduction of a DAG (its Hasse diagram) keeps an edge u -> v
only if v is a direct parent of u: no other parent of u has v among its
ancestors. Redundancy is decided against the closure computed before any
removal; since removing redundant edges never changes reachability, the
decision for one edge does not depend on the others and the result is the
unique minimal edge set, whatever the processing order.

Parallel edges joining the same two vertices under different taxonomic
predicates are reduced to one, the subsumption predicate being preferred.
"""

import logging
from collections.abc import Mapping, Set

from taxograph.closure import ClosureEngine
from taxograph.localtypes import Direction, Edge, PredicateId, VertexId

from .reports import ReductionReport

logger = logging.getLogger(__name__)


def redundant_taxonomic_edges(closures: ClosureEngine) -> frozenset[Edge]:
    """
    Taxonomic edges implied by a longer path.

    Raises:
        CycleDetected: If the taxonomy is not acyclic.
    """
    ancestors = closures.all_ancestors()
    edges = closures.graph.list_edges(closures.predicates.taxonomic)

    parents_of: dict[VertexId, frozenset[VertexId]] = {}
    redundant: set[Edge] = set()

    for edge in edges:
        if edge.source not in parents_of:
            parents_of[edge.source] = closures.neighbors(edge.source, Direction.OUT)

        if _is_covered(edge.target, parents_of[edge.source], ancestors):
            redundant.add(edge)

    redundant.update(_parallel_duplicates(edges - redundant, closures.predicates.subsumption))
    return frozenset(redundant)


def _parallel_duplicates(edges: Set[Edge], preferred: PredicateId) -> set[Edge]:
    by_pair: dict[tuple[VertexId, VertexId], list[Edge]] = {}
    for edge in edges:
        by_pair.setdefault((edge.source, edge.target), []).append(edge)

    duplicates: set[Edge] = set()
    for parallel in by_pair.values():
        if len(parallel) > 1:
            kept = min(parallel, key=lambda e: (e.predicate != preferred, e.predicate))
            duplicates.update(e for e in parallel if e != kept)
    return duplicates


def _is_covered(
    target: VertexId,
    parents: frozenset[VertexId],
    ancestors: Mapping[VertexId, frozenset[VertexId]],
) -> bool:
    # Same criterion as a Hasse diagram child: reachable through another parent
    return any(
        target in ancestors.get(parent, frozenset())
        for parent in parents
        if parent != target
    )


def transitive_reduce(closures: ClosureEngine) -> ReductionReport:
    """
    Removes every taxonomic edge (u, v) for which a path u -> ... -> v of
    length >= 2 exists. Idempotent.
    """
    edges_before = len(closures.graph.list_edges(closures.predicates.taxonomic))
    redundant = redundant_taxonomic_edges(closures)

    if logger.isEnabledFor(logging.DEBUG):
        for edge in sorted(redundant):
            logger.debug(f"Redundant edge: {edge}")
    removed = closures.graph.remove_edges(redundant)

    report = ReductionReport(edges_before, removed)
    logger.info(str(report))
    return report
