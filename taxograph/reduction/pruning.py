"""
Vertex pruning.

Criteria:
    RegexCriterion(pattern)          - vertices whose lexical value matches
    VocabularyCriterion(flags)       - RDF, RDFS and/or OWL terms
    IdentifierCriterion(identifiers) - an explicit list of identifiers
    SubtreeCriterion(root)           - everything outside the subtree of root
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from taxograph.closure import ClosureEngine
from taxograph.errors import ConfigurationError
from taxograph.graph import VOCABULARIES, vocabulary_terms
from taxograph.localtypes import (
    TAXONOMIC_TYPES,
    Direction,
    VertexId,
    VertexType,
)

from .reports import PruneReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RegexCriterion:
    """Selects vertices whose lexical value contains a match of pattern."""

    pattern: str
    compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            compiled = re.compile(self.pattern)
        except re.error as e:
            raise ConfigurationError(f"The regex '{self.pattern}' is invalid: {e}") from e
        object.__setattr__(self, "compiled", compiled)


@dataclass(frozen=True, slots=True)
class VocabularyCriterion:
    """Selects the terms of the flagged vocabularies (RDF, RDFS, OWL)."""

    vocabularies: tuple[str, ...]

    def __post_init__(self):
        flags = tuple(flag.strip().upper() for flag in self.vocabularies)
        if not flags:
            raise ConfigurationError("At least one vocabulary must be specified")
        unknown = [flag for flag in flags if flag not in VOCABULARIES]
        if unknown:
            raise ConfigurationError(
                f"Unknown vocabulary {', '.join(unknown)}, accepted: {', '.join(VOCABULARIES)}"
            )
        object.__setattr__(self, "vocabularies", flags)


@dataclass(frozen=True, slots=True)
class IdentifierCriterion:
    """Selects the vertices named in a list of identifiers."""

    identifiers: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SubtreeCriterion:
    """Selects every class outside {root} and its descendants."""

    root: str


type PruneCriterion = (
    RegexCriterion | VocabularyCriterion | IdentifierCriterion | SubtreeCriterion
)


def _remove(
    closures: ClosureEngine, vertices: Iterable[VertexId], unmatched: int = 0
) -> PruneReport:
    graph = closures.graph
    vertices_before = len(graph.list_vertices())

    removed_classes = removed_instances = removed_other = 0
    to_remove: set[VertexId] = set()
    for vertex_id in vertices:
        vertex = graph.get_vertex(vertex_id)
        if vertex is None or vertex_id in to_remove:
            continue
        to_remove.add(vertex_id)
        if vertex.type in TAXONOMIC_TYPES:
            removed_classes += 1
        elif vertex.type is VertexType.INSTANCE:
            removed_instances += 1
        else:
            removed_other += 1

    graph.remove_vertices(to_remove)
    return PruneReport(
        vertices_before, removed_classes, removed_instances, removed_other, unmatched
    )


def _matching_regex(closures: ClosureEngine, criterion: RegexCriterion) -> list[VertexId]:
    logger.info(f"Applying regex: {criterion.pattern}")
    matches = sorted(
        v for v in closures.graph.list_vertices() if criterion.compiled.search(v)
    )
    for vertex in matches:
        logger.debug(f"regex matches: {vertex}")
    return matches


def _prune_subtree(closures: ClosureEngine, criterion: SubtreeCriterion) -> PruneReport:
    graph = closures.graph
    root = graph.resolve_identifier(criterion.root)
    if graph.get_vertex(root) is None:
        raise ConfigurationError(f"Cannot find vertex {root} in the graph")

    logger.info(f"Reducing the graph to the taxonomy induced by {root}")
    vertices_before = len(graph.list_vertices())

    kept = closures.descendants(root) | {root}
    classes_to_remove = closures.taxonomic_vertices() - kept
    removed_classes = graph.remove_vertices(classes_to_remove)
    logger.info(f"Removed {removed_classes} classes")

    # Must run after the class removal so that orphaned instances are caught
    type_predicate = closures.predicates.type_predicate
    instances_to_remove = {
        instance
        for instance in graph.list_vertices(VertexType.INSTANCE)
        if not graph.list_edges(type_predicate, instance, Direction.OUT)
    }
    removed_instances = graph.remove_vertices(instances_to_remove)
    logger.info(f"Removed {removed_instances} instances")

    return PruneReport(vertices_before, removed_classes, removed_instances)


def prune_vertices(closures: ClosureEngine, criterion: PruneCriterion) -> PruneReport:
    """
    Removes the vertices selected by criterion, with their incident edges.

    Raises:
        ConfigurationError: If an identifier is malformed or the subtree root
            is not in the graph.
    """
    graph = closures.graph

    match criterion:
        case SubtreeCriterion():
            report = _prune_subtree(closures, criterion)
        case RegexCriterion():
            report = _remove(closures, _matching_regex(closures, criterion))
        case VocabularyCriterion(vocabularies=flags):
            terms: set[VertexId] = set()
            for flag in flags:
                logger.info(f"Removing {flag} vocabulary")
                terms |= vocabulary_terms(flag)
            report = _remove(closures, terms & graph.list_vertices())
        case IdentifierCriterion(identifiers=identifiers):
            resolved = {graph.resolve_identifier(i) for i in identifiers if i.strip()}
            present = resolved & graph.list_vertices()
            report = _remove(closures, present, unmatched=len(resolved - present))
        case _:
            raise ConfigurationError(f"Unknown pruning criterion: {criterion}")

    logger.info(str(report))
    return report
