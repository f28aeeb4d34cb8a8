"""
ReductionEngine: the graph-mutating operations bound to one graph.
"""

from taxograph.closure import ClosureEngine
from taxograph.graph import GraphStore, PredicateRepository

from .annotations import reduce_instance_annotations
from .pruning import PruneCriterion, prune_vertices
from .reports import AnnotationReport, PruneReport, ReductionReport, RerootReport
from .rerooting import reroot
from .transitive import transitive_reduce


class ReductionEngine:
    """
    Transitive reduction, annotation cleanup, pruning and rerooting.

    Every operation mutates the graph, which invalidates the closures cached
    by the shared ClosureEngine.
    """

    def __init__(
        self,
        graph: GraphStore,
        predicates: PredicateRepository,
        closures: ClosureEngine | None = None,
    ) -> None:
        self.graph = graph
        self.predicates = predicates
        self.closures = closures or ClosureEngine(graph, predicates)

    def transitive_reduce(self) -> ReductionReport:
        return transitive_reduce(self.closures)

    def reduce_instance_annotations(self) -> AnnotationReport:
        return reduce_instance_annotations(self.closures)

    def prune_vertices(self, criterion: PruneCriterion) -> PruneReport:
        return prune_vertices(self.closures, criterion)

    def reroot(self, root_id: str) -> RerootReport:
        return reroot(self.closures, root_id)
