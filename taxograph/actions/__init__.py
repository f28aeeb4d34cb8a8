"""
Graph action pipeline.

Main entry points: apply_actions(), ActionPipeline

**Actions** (config.py)
    One frozen dataclass per action kind, and the parsers turning
    string-keyed configurations into them.

**Pipeline** (pipeline.py)
    Sequential execution, fail-fast, without rollback.

**Collaborators** (collaborators.py)
    Reasoner, TypeInferencer and IdentifierSource interfaces.
"""

from .collaborators import (
    FileIdentifierSource,
    IdentifierSource,
    Reasoner,
    TaxonomicTypeInferencer,
    TypeInferencer,
)
from .config import (
    GAction,
    GActionKind,
    RDFSInferenceAction,
    ReductionTarget,
    ReRootingAction,
    TransitiveReductionAction,
    TypeVerticesAction,
    VerticesReductionAction,
    actions_from_config,
    load_pipeline_config,
    parse_action,
)
from .pipeline import (
    ActionPipeline,
    ActionReport,
    InferenceReport,
    TypingReport,
    apply_actions,
)

__all__ = [
    # Pipeline
    "ActionPipeline",
    "apply_actions",
    "ActionReport",
    "InferenceReport",
    "TypingReport",
    # Actions
    "GAction",
    "GActionKind",
    "ReductionTarget",
    "TransitiveReductionAction",
    "ReRootingAction",
    "TypeVerticesAction",
    "RDFSInferenceAction",
    "VerticesReductionAction",
    "parse_action",
    "actions_from_config",
    "load_pipeline_config",
    # Collaborators
    "Reasoner",
    "TypeInferencer",
    "IdentifierSource",
    "TaxonomicTypeInferencer",
    "FileIdentifierSource",
]
