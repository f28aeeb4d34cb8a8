"""
Groupwise similarity between two sets of concepts.

Strategies:
- best_match_average: mean of the best score of every concept in its
  counterpart group, averaged over both directions
- optimal_assignment: one-to-one matching maximizing the summed score
  (Hungarian algorithm), divided by the size of the larger group, so that
  unmatched concepts count as 0
"""

from collections.abc import Iterable
from typing import Literal

import numpy as np
from scipy.optimize import linear_sum_assignment

from taxograph.errors import ConfigurationError
from taxograph.localtypes import VertexId

from .engine import SimilarityEngine
from .measures import SimilarityMeasure, SMConf

type Strategy = Literal["best_match_average", "optimal_assignment"]


def best_match_average(matrix: np.ndarray) -> float:
    return float((matrix.max(axis=1).mean() + matrix.max(axis=0).mean()) / 2)


def optimal_assignment(matrix: np.ndarray) -> float:
    row_ind, col_ind = linear_sum_assignment(matrix, maximize=True)
    return float(matrix[row_ind, col_ind].sum() / max(matrix.shape))


STRATEGIES = {
    "best_match_average": best_match_average,
    "optimal_assignment": optimal_assignment,
}


def groupwise_similarity(
    engine: SimilarityEngine,
    group_a: Iterable[VertexId],
    group_b: Iterable[VertexId],
    conf: SMConf | SimilarityMeasure,
    strategy: Strategy = "best_match_average",
) -> float:
    """
    Aggregates the pairwise similarities between two groups of concepts.

    Raises:
        ConfigurationError: On empty group or unknown strategy.
    """
    aggregate = STRATEGIES.get(strategy)
    if aggregate is None:
        raise ConfigurationError(
            f"Unknown groupwise strategy '{strategy}', admitted: {sorted(STRATEGIES)}"
        )

    source = sorted(set(group_a))
    target = sorted(set(group_b))
    if not source or not target:
        raise ConfigurationError("Groupwise similarity requires two non-empty groups")

    return aggregate(engine.cross_similarity(source, target, conf))
