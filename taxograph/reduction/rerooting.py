"""
Rerooting of the taxonomy under a single root.
"""

import logging

from taxograph.closure import ClosureEngine
from taxograph.constants import SYNTHETIC_ROOT
from taxograph.errors import ConfigurationError
from taxograph.localtypes import Direction, Edge, VertexType

from .reports import RerootReport

logger = logging.getLogger(__name__)


def reroot(closures: ClosureEngine, root_id: str) -> RerootReport:
    """
    Attaches every taxonomic vertex without ancestors under root_id.

    The reserved synthetic root is created when absent; any other root must
    already be a vertex of the graph, with no ancestor of its own.

    Raises:
        ConfigurationError: If root_id is empty, malformed, unknown, or has ancestors.
    """
    graph = closures.graph
    if not root_id or not root_id.strip():
        raise ConfigurationError("A root identifier is required for rerooting")

    root = graph.resolve_identifier(root_id)
    logger.info(f"Rerooting under {root}")

    created = False
    if root == SYNTHETIC_ROOT and graph.get_vertex(root) is None:
        graph.create_vertex(root, VertexType.ROOT)
        created = True

    if graph.get_vertex(root) is None:
        raise ConfigurationError(f"Cannot resolve specified root: {root}")
    if closures.neighbors(root, Direction.OUT):
        raise ConfigurationError(
            f"{root} has ancestors and cannot root the taxonomy"
        )

    subsumption = closures.predicates.subsumption
    orphans = sorted(
        vertex
        for vertex in closures.taxonomic_vertices()
        if vertex != root and not closures.neighbors(vertex, Direction.OUT)
    )
    attached = graph.add_edges(
        (Edge(orphan, subsumption, root) for orphan in orphans), VertexType.CLASS
    )

    report = RerootReport(root, created, attached)
    logger.info(str(report))
    return report
