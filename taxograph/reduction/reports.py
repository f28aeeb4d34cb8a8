"""
Counters reported by destructive or corrective graph operations.
"""

from dataclasses import dataclass

from taxograph.localtypes import VertexId


def percentage(part: int, whole: int) -> float:
    """part / whole scaled to 100, 0.0 for an empty whole."""
    if whole == 0:
        return 0.0
    return part * 100.0 / whole


@dataclass(frozen=True, slots=True)
class ReductionReport:
    """Outcome of a transitive reduction of the taxonomic edges."""

    edges_before: int
    edges_removed: int

    @property
    def edges_after(self) -> int:
        return self.edges_before - self.edges_removed

    def __str__(self) -> str:
        return (
            f"Taxonomic edges: {self.edges_before}, removed: {self.edges_removed} "
            f"({percentage(self.edges_removed, self.edges_before):.2f}%), "
            f"remaining: {self.edges_after}"
        )


@dataclass(frozen=True, slots=True)
class AnnotationReport:
    """Outcome of the removal of redundant instance annotations."""

    instances: int
    instances_touched: int
    annotations_before: int
    annotations_deleted: int

    @property
    def annotations_after(self) -> int:
        return self.annotations_before - self.annotations_deleted

    @property
    def touched_percentage(self) -> float:
        return percentage(self.instances_touched, self.instances)

    @property
    def deleted_percentage(self) -> float:
        return percentage(self.annotations_deleted, self.annotations_before)

    def __str__(self) -> str:
        return (
            f"Instances with redundant annotations: {self.instances_touched}/{self.instances} "
            f"({self.touched_percentage:.2f}%); annotations: {self.annotations_before}, "
            f"deleted: {self.annotations_deleted} ({self.deleted_percentage:.2f}%), "
            f"remaining: {self.annotations_after}"
        )


@dataclass(frozen=True, slots=True)
class PruneReport:
    """
    Outcome of a vertex pruning.

    Attributes:
        vertices_before: Number of vertices before pruning.
        removed_classes: Class and root vertices removed.
        removed_instances: Instance vertices removed.
        removed_other: Untyped vertices removed.
        unmatched: Requested identifiers absent from the graph.
    """

    vertices_before: int
    removed_classes: int = 0
    removed_instances: int = 0
    removed_other: int = 0
    unmatched: int = 0

    @property
    def removed(self) -> int:
        return self.removed_classes + self.removed_instances + self.removed_other

    @property
    def vertices_after(self) -> int:
        return self.vertices_before - self.removed

    def __str__(self) -> str:
        return (
            f"Vertices removed: {self.removed}/{self.vertices_before} "
            f"({percentage(self.removed, self.vertices_before):.2f}%) - "
            f"classes: {self.removed_classes}, instances: {self.removed_instances}, "
            f"other: {self.removed_other}, unmatched identifiers: {self.unmatched}"
        )


@dataclass(frozen=True, slots=True)
class RerootReport:
    """Outcome of a rerooting."""

    root: VertexId
    created: bool
    attached: int

    def __str__(self) -> str:
        origin = "created" if self.created else "existing"
        return f"Root {self.root} ({origin}), {self.attached} vertices attached"
