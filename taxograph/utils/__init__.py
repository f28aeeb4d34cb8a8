"""
Pure algorithms with no domain-specific dependencies.

Modules:
    dag_functionals - DAG operations (topological sort, adjacency inversion)
    graph           - Breadth-first distances and reachability
    cache           - Generation-tagged memoization
    loader          - Pipeline configuration files
"""

from .cache import GenerationCache
from .dag_functionals import invert_adjacency, topological_sort
from .graph import breadth_first_distances, reachable_from

__all__ = [
    "GenerationCache",
    "invert_adjacency",
    "topological_sort",
    "breadth_first_distances",
    "reachable_from",
]
