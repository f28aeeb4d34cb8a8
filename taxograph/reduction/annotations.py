"""
Removal of redundant instance annotations.

An instance typed by both C and one of C's descendants carries a redundant
annotation: the type edge to C is implied by the more specific one and is
removed.
"""

import logging

from taxograph.closure import ClosureEngine
from taxograph.localtypes import Direction, Edge, VertexId, VertexType

from .reports import AnnotationReport

logger = logging.getLogger(__name__)


def redundant_annotations(closures: ClosureEngine) -> dict[VertexId, frozenset[Edge]]:
    """
    Redundant type edges of every instance having at least one.

    The edge to Ci is redundant when another annotated class Cj is a
    descendant of Ci.
    """
    graph = closures.graph
    type_predicate = closures.predicates.type_predicate
    descendants = closures.all_descendants()

    redundant_by_instance: dict[VertexId, frozenset[Edge]] = {}
    for instance in sorted(graph.list_vertices(VertexType.INSTANCE)):
        type_edges = graph.list_edges(type_predicate, instance, Direction.OUT)
        classes = frozenset(edge.target for edge in type_edges)

        redundant = frozenset(
            edge
            for edge in type_edges
            if not descendants.get(edge.target, frozenset()).isdisjoint(classes)
        )
        if redundant:
            redundant_by_instance[instance] = redundant

    return redundant_by_instance


def reduce_instance_annotations(closures: ClosureEngine) -> AnnotationReport:
    """
    Removes redundant type edges of every instance.

    Raises:
        CycleDetected: If the taxonomy is not acyclic.
    """
    graph = closures.graph
    type_predicate = closures.predicates.type_predicate
    instances = graph.list_vertices(VertexType.INSTANCE)

    logger.info(f"Cleaning {type_predicate} annotations of {len(instances)} instances")

    annotations_before = sum(
        len(graph.list_edges(type_predicate, instance, Direction.OUT))
        for instance in instances
    )
    redundant_by_instance = redundant_annotations(closures)

    for instance, edges in redundant_by_instance.items():
        logger.debug(
            f"{instance}: dropping {', '.join(sorted(e.target for e in edges))}"
        )
    deleted = graph.remove_edges(
        edge for edges in redundant_by_instance.values() for edge in edges
    )

    report = AnnotationReport(
        instances=len(instances),
        instances_touched=len(redundant_by_instance),
        annotations_before=annotations_before,
        annotations_deleted=deleted,
    )
    logger.info(str(report))
    return report
