"""
Structural repairs of a taxonomic graph.

**Transitive reduction** (transitive.py)
    - transitive_reduce(closures): drop subsumption edges implied by longer paths

**Annotations** (annotations.py)
    - reduce_instance_annotations(closures): drop less specific type edges

**Pruning** (pruning.py)
    - prune_vertices(closures, criterion): regex, vocabulary, identifier list
      or subtree criterion

**Rerooting** (rerooting.py)
    - reroot(closures, root_id): attach every top-level class under one root

Every operation returns a report with the counts of affected elements.
"""

from .annotations import redundant_annotations, reduce_instance_annotations
from .engine import ReductionEngine
from .pruning import (
    IdentifierCriterion,
    PruneCriterion,
    RegexCriterion,
    SubtreeCriterion,
    VocabularyCriterion,
    prune_vertices,
)
from .reports import (
    AnnotationReport,
    PruneReport,
    ReductionReport,
    RerootReport,
    percentage,
)
from .rerooting import reroot
from .transitive import redundant_taxonomic_edges, transitive_reduce

__all__ = [
    "ReductionEngine",
    # Transitive reduction
    "redundant_taxonomic_edges",
    "transitive_reduce",
    # Annotations
    "redundant_annotations",
    "reduce_instance_annotations",
    # Pruning
    "PruneCriterion",
    "RegexCriterion",
    "VocabularyCriterion",
    "IdentifierCriterion",
    "SubtreeCriterion",
    "prune_vertices",
    # Rerooting
    "reroot",
    # Reports
    "ReductionReport",
    "AnnotationReport",
    "PruneReport",
    "RerootReport",
    "percentage",
]
