"""
taxograph: closures, reductions and semantic similarity over taxonomic graphs.

Pipeline:
1. Build or load a graph into a GraphStore (MemoryGraph)
2. apply_actions: reduce, prune, reroot and type the graph
3. ClosureEngine / SimilarityEngine: query ancestors, descendants and scores
"""

from taxograph.actions import ActionPipeline, apply_actions, parse_action
from taxograph.closure import ClosureEngine
from taxograph.errors import (
    CollaboratorError,
    ConfigurationError,
    CycleDetected,
    TaxographError,
)
from taxograph.graph import GraphStore, MemoryGraph, PredicateRepository
from taxograph.localtypes import Direction, Edge, Vertex, VertexType
from taxograph.reduction import ReductionEngine
from taxograph.similarity import SimilarityEngine, SMConf

__all__ = [
    # Graph
    "GraphStore",
    "MemoryGraph",
    "PredicateRepository",
    "Vertex",
    "VertexType",
    "Edge",
    "Direction",
    # Engines
    "ClosureEngine",
    "ReductionEngine",
    "SimilarityEngine",
    "SMConf",
    # Actions
    "ActionPipeline",
    "apply_actions",
    "parse_action",
    # Errors
    "TaxographError",
    "ConfigurationError",
    "CycleDetected",
    "CollaboratorError",
]
