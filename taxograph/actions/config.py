"""
Graph actions.

Each kind of action is its own frozen dataclass carrying validated options.
String-keyed configurations (as found in configuration files) are turned
into actions by parse_action, which reports every unknown or invalid option.
"""

import os
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from taxograph.constants import FALSE_STRINGS, TRUE_STRINGS
from taxograph.errors import ConfigurationError
from taxograph.reduction import (
    PruneCriterion,
    RegexCriterion,
    SubtreeCriterion,
    VocabularyCriterion,
)
from taxograph.utils.loader import path_to_entries


class GActionKind(Enum):
    TRANSITIVE_REDUCTION = "TRANSITIVE_REDUCTION"
    REROOTING = "REROOTING"
    TYPE_VERTICES = "TYPE_VERTICES"
    RDFS_INFERENCE = "RDFS_INFERENCE"
    VERTICES_REDUCTION = "VERTICES_REDUCTION"


class ReductionTarget(Enum):
    CLASSES = "CLASSES"
    INSTANCES = "INSTANCES"


@dataclass(frozen=True, slots=True)
class TransitiveReductionAction:
    """Transitive reduction of class edges, or of instance annotations."""

    target: ReductionTarget
    kind: ClassVar[GActionKind] = GActionKind.TRANSITIVE_REDUCTION

    def __post_init__(self):
        if not isinstance(self.target, ReductionTarget):
            raise ConfigurationError(
                f"Unknown target {self.target}, admitted: {[t.value for t in ReductionTarget]}"
            )


@dataclass(frozen=True, slots=True)
class ReRootingAction:
    """Roots the taxonomy under root_uri (created if it is the synthetic root)."""

    root_uri: str
    kind: ClassVar[GActionKind] = GActionKind.REROOTING

    def __post_init__(self):
        if not self.root_uri or not self.root_uri.strip():
            raise ConfigurationError(
                "Please specify a 'root_uri' associated to the action REROOTING"
            )


@dataclass(frozen=True, slots=True)
class TypeVerticesAction:
    """Types untyped vertices; stop_fail turns an incomplete typing into an error."""

    stop_fail: bool = False
    kind: ClassVar[GActionKind] = GActionKind.TYPE_VERTICES


@dataclass(frozen=True, slots=True)
class RDFSInferenceAction:
    """Merges the edges entailed by the configured reasoner."""

    kind: ClassVar[GActionKind] = GActionKind.RDFS_INFERENCE


@dataclass(frozen=True, slots=True)
class VerticesReductionAction:
    """
    Removes vertices selected by exactly one criterion.

    Attributes:
        regex: Pattern searched in each vertex's lexical value.
        vocabulary: Vocabulary flags among RDF, RDFS, OWL.
        file_uris: Files listing the identifiers to remove.
        root_uri: Root whose subtree is kept, everything else is removed.
    """

    regex: str | None = None
    vocabulary: tuple[str, ...] = ()
    file_uris: tuple[str, ...] = ()
    root_uri: str | None = None
    kind: ClassVar[GActionKind] = GActionKind.VERTICES_REDUCTION

    def __post_init__(self):
        given = [
            name
            for name, value in (
                ("regex", self.regex),
                ("vocabulary", self.vocabulary),
                ("file_uris", self.file_uris),
                ("root_uri", self.root_uri),
            )
            if value
        ]
        if len(given) != 1:
            raise ConfigurationError(
                "VERTICES_REDUCTION requires exactly one of regex, vocabulary, "
                f"file_uris, root_uri; got {given or 'none'}"
            )
        # Validates the pattern and the vocabulary flags now
        self.criterion()

    def criterion(self) -> PruneCriterion | None:
        """The pruning criterion, None for file_uris which must be read first."""
        if self.regex:
            return RegexCriterion(self.regex)
        if self.vocabulary:
            return VocabularyCriterion(self.vocabulary)
        if self.root_uri:
            return SubtreeCriterion(self.root_uri)
        return None


type GAction = (
    TransitiveReductionAction
    | ReRootingAction
    | TypeVerticesAction
    | RDFSInferenceAction
    | VerticesReductionAction
)

ACTION_CLASSES: dict[GActionKind, type] = {
    GActionKind.TRANSITIVE_REDUCTION: TransitiveReductionAction,
    GActionKind.REROOTING: ReRootingAction,
    GActionKind.TYPE_VERTICES: TypeVerticesAction,
    GActionKind.RDFS_INFERENCE: RDFSInferenceAction,
    GActionKind.VERTICES_REDUCTION: VerticesReductionAction,
}

# Option names accepted in string-keyed configurations, per kind
ACCEPTED_OPTIONS: dict[GActionKind, frozenset[str]] = {
    GActionKind.TRANSITIVE_REDUCTION: frozenset({"target"}),
    GActionKind.REROOTING: frozenset({"root_uri"}),
    GActionKind.TYPE_VERTICES: frozenset({"stopfail"}),
    GActionKind.RDFS_INFERENCE: frozenset(),
    GActionKind.VERTICES_REDUCTION: frozenset(
        {"regex", "vocabulary", "file_uris", "root_uri"}
    ),
}


def parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_STRINGS:
        return True
    if text in FALSE_STRINGS:
        return False
    raise ConfigurationError(f"Option '{name}' expects a boolean, got '{value}'")


def parse_list(value: Any) -> tuple[str, ...]:
    """Comma separated string, or sequence of strings, to a tuple."""
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    else:
        items = value
    return tuple(str(item).strip() for item in items if str(item).strip())


def parse_kind(kind: str | GActionKind) -> GActionKind:
    if isinstance(kind, GActionKind):
        return kind
    try:
        return GActionKind(str(kind).strip().upper())
    except ValueError:
        raise ConfigurationError(
            f"Unknown action {kind}, admitted: {[k.value for k in GActionKind]}"
        ) from None


def parse_action(kind: str | GActionKind, options: Mapping[str, Any] | None = None) -> GAction:
    """
    Builds an action from its kind and string-keyed options.

    Raises:
        ConfigurationError: On unknown kind, unknown option, or invalid value.
    """
    action_kind = parse_kind(kind)
    options = dict(options or {})

    unknown = sorted(set(options) - ACCEPTED_OPTIONS[action_kind])
    if unknown:
        raise ConfigurationError(
            f"Unknown option(s) {', '.join(unknown)} for action {action_kind.value}"
        )

    match action_kind:
        case GActionKind.TRANSITIVE_REDUCTION:
            if "target" not in options:
                raise ConfigurationError(
                    "Please precise a target parameter for TRANSITIVE_REDUCTION "
                    f"{[t.value for t in ReductionTarget]}"
                )
            target = str(options["target"]).strip().upper()
            try:
                return TransitiveReductionAction(ReductionTarget(target))
            except ValueError:
                raise ConfigurationError(
                    f"Unknown target {options['target']}, admitted: "
                    f"{[t.value for t in ReductionTarget]}"
                ) from None
        case GActionKind.REROOTING:
            return ReRootingAction(str(options.get("root_uri") or ""))
        case GActionKind.TYPE_VERTICES:
            return TypeVerticesAction(parse_bool("stopfail", options.get("stopfail", False)))
        case GActionKind.RDFS_INFERENCE:
            return RDFSInferenceAction()
        case GActionKind.VERTICES_REDUCTION:
            return VerticesReductionAction(
                regex=options.get("regex") or None,
                vocabulary=parse_list(options.get("vocabulary", ())),
                file_uris=parse_list(options.get("file_uris", ())),
                root_uri=options.get("root_uri") or None,
            )


def actions_from_config(entries: Iterable[Mapping[str, Any]]) -> list[GAction]:
    """
    Builds actions from entries of the form {"type": kind, **options}.
    """
    actions: list[GAction] = []
    for i, entry in enumerate(entries):
        if "type" not in entry:
            raise ConfigurationError(f"Action n°{i} has no 'type'")
        options = {k: v for k, v in entry.items() if k != "type"}
        actions.append(parse_action(entry["type"], options))
    return actions


def load_pipeline_config(path: str | os.PathLike[str]) -> list[GAction]:
    """Reads a JSON list of action entries."""
    return actions_from_config(path_to_entries(path))


def as_actions(config: Sequence[GAction | Mapping[str, Any]]) -> list[GAction]:
    """Accepts already-built actions and string-keyed entries alike."""
    return [
        actions_from_config([item])[0] if isinstance(item, Mapping) else item
        for item in config
    ]
