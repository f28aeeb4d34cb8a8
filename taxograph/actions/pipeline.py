"""
Execution of graph actions.

Actions run in order, one at a time. The pipeline stops at the first failing
action and does not roll back: the graph keeps the effects of every action
that completed before it.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from taxograph.closure import ClosureEngine
from taxograph.errors import CollaboratorError, ConfigurationError, TaxographError
from taxograph.graph import GraphStore, PredicateRepository
from taxograph.localtypes import VertexType
from taxograph.reduction import (
    AnnotationReport,
    IdentifierCriterion,
    PruneReport,
    ReductionEngine,
    ReductionReport,
    RerootReport,
)

from .collaborators import (
    FileIdentifierSource,
    IdentifierSource,
    Reasoner,
    TaxonomicTypeInferencer,
    TypeInferencer,
)
from .config import (
    GAction,
    RDFSInferenceAction,
    ReductionTarget,
    ReRootingAction,
    TransitiveReductionAction,
    TypeVerticesAction,
    VerticesReductionAction,
    as_actions,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class TypingReport:
    complete: bool
    untyped: int

    def __str__(self) -> str:
        state = "complete" if self.complete else f"incomplete, {self.untyped} untyped vertices"
        return f"Vertex typing {state}"


@dataclass(frozen=True, slots=True)
class InferenceReport:
    entailed: int
    added: int

    def __str__(self) -> str:
        return f"Entailed edges: {self.entailed}, new: {self.added}"


type ActionReport = (
    ReductionReport
    | AnnotationReport
    | PruneReport
    | RerootReport
    | TypingReport
    | InferenceReport
)


def _call_collaborator(name: str, call: Callable[[], R]) -> R:
    """Runs a collaborator call, reporting its failures as CollaboratorError."""
    try:
        return call()
    except TaxographError:
        raise
    except Exception as e:
        raise CollaboratorError(f"{name} failed: {e}") from e


class ActionPipeline:
    """
    Applies graph actions to one graph.

    Args:
        graph: The graph to transform.
        predicates: The session's predicate repository.
        reasoner: Needed by RDFS_INFERENCE only.
        type_inferencer: Defaults to TaxonomicTypeInferencer.
        identifier_source: Reads the files of VERTICES_REDUCTION file_uris,
            defaults to FileIdentifierSource.
    """

    def __init__(
        self,
        graph: GraphStore,
        predicates: PredicateRepository,
        reasoner: Reasoner | None = None,
        type_inferencer: TypeInferencer | None = None,
        identifier_source: IdentifierSource | None = None,
        closures: ClosureEngine | None = None,
    ) -> None:
        self.graph = graph
        self.predicates = predicates
        self.reductions = ReductionEngine(graph, predicates, closures)
        self.reasoner = reasoner
        self.type_inferencer = type_inferencer or TaxonomicTypeInferencer(predicates)
        self.identifier_source = identifier_source or FileIdentifierSource()

    def apply(self, action: GAction) -> ActionReport:
        """Applies one action and returns its report."""
        logger.info(f"Starting {action.kind.value}")

        match action:
            case TransitiveReductionAction(target=ReductionTarget.CLASSES):
                report = self.reductions.transitive_reduce()
            case TransitiveReductionAction(target=ReductionTarget.INSTANCES):
                report = self.reductions.reduce_instance_annotations()
            case ReRootingAction(root_uri=root_uri):
                report = self.reductions.reroot(root_uri)
            case TypeVerticesAction(stop_fail=stop_fail):
                report = self._type_vertices(stop_fail)
            case RDFSInferenceAction():
                report = self._rdfs_inference()
            case VerticesReductionAction():
                report = self._reduce_vertices(action)
            case _:
                raise ConfigurationError(f"Unknown action {action}")

        logger.debug(f"Ending {action.kind.value}")
        return report

    def run(self, actions: Sequence[GAction | Mapping[str, Any]]) -> list[ActionReport]:
        """
        Applies actions in order, stopping at the first error.

        String-keyed entries are validated before anything is applied.
        """
        parsed = as_actions(actions)
        reports: list[ActionReport] = []
        for i, action in enumerate(parsed):
            try:
                reports.append(self.apply(action))
            except TaxographError:
                logger.error(
                    f"Action n°{i} ({action.kind.value}) failed, "
                    f"{i} previous action(s) remain applied"
                )
                raise
        return reports

    def _type_vertices(self, stop_fail: bool) -> TypingReport:
        complete = _call_collaborator(
            "Type inference",
            lambda: self.type_inferencer.infer_types(self.graph, stop_fail),
        )
        report = TypingReport(
            complete, len(self.graph.list_vertices(VertexType.UNDEFINED))
        )
        if not complete:
            if stop_fail:
                raise CollaboratorError("Type inferencer fails to resolve all types")
            logger.warning(str(report))
        return report

    def _rdfs_inference(self) -> InferenceReport:
        if self.reasoner is None:
            raise ConfigurationError("RDFS_INFERENCE requires a reasoner")

        logger.info("Applying inference engine")
        edges = self.graph.list_edges()
        entailed = list(
            _call_collaborator("Reasoner", lambda: self.reasoner.infer(edges))
        )
        added = self.graph.add_edges(entailed, VertexType.UNDEFINED)

        report = InferenceReport(len(entailed), added)
        logger.info(str(report))
        return report

    def _reduce_vertices(self, action: VerticesReductionAction) -> PruneReport:
        criterion = action.criterion()
        if criterion is None:
            identifiers = _call_collaborator(
                "Identifier source",
                lambda: self.identifier_source.read(action.file_uris),
            )
            criterion = IdentifierCriterion(tuple(identifiers))
        return self.reductions.prune_vertices(criterion)


def apply_actions(
    config: Sequence[GAction | Mapping[str, Any]],
    graph: GraphStore,
    predicates: PredicateRepository | None = None,
    reasoner: Reasoner | None = None,
    type_inferencer: TypeInferencer | None = None,
    identifier_source: IdentifierSource | None = None,
) -> list[ActionReport]:
    """Runs an ordered list of actions on graph, failing fast on the first error."""
    pipeline = ActionPipeline(
        graph,
        predicates or PredicateRepository(),
        reasoner=reasoner,
        type_inferencer=type_inferencer,
        identifier_source=identifier_source,
    )
    return pipeline.run(config)
