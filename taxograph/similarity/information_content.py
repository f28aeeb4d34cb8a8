"""
Intrinsic information content.

The IC of a concept measures its specificity from the taxonomy alone:
leaves are the most informative, the root the least. Both models below are
normalized to [0, 1].

seco_2004:     1 - log(|descendants(c)| + 1) / log(N)
sanchez_2011:  -log((leaves(c) / subsumers(c) + 1) / (max_leaves + 1))
               divided by log(max_leaves + 1)
"""

import math
from collections.abc import Callable

from taxograph.closure import ClosureEngine
from taxograph.localtypes import VertexId

type ICTable = dict[VertexId, float]


def seco_2004(closures: ClosureEngine) -> ICTable:
    descendants = closures.all_descendants()
    n = len(descendants)
    if n <= 1:
        return {vertex: 0.0 for vertex in descendants}

    log_n = math.log(n)
    return {
        vertex: 1.0 - math.log(len(desc) + 1) / log_n
        for vertex, desc in descendants.items()
    }


def sanchez_2011(closures: ClosureEngine) -> ICTable:
    descendants = closures.all_descendants()
    ancestors = closures.all_ancestors()
    leaves = closures.leaves(descendants.keys())
    max_leaves = len(leaves)
    if max_leaves == 0:
        return {}

    log_max = math.log(max_leaves + 1)
    table: ICTable = {}
    for vertex, desc in descendants.items():
        # A leaf counts itself
        leaf_count = len(desc & leaves) if desc else 1
        subsumers = len(ancestors[vertex]) + 1
        ratio = (leaf_count / subsumers + 1) / (max_leaves + 1)
        table[vertex] = max(0.0, -math.log(ratio) / log_max)
    return table


INTRINSIC_IC: dict[str, Callable[[ClosureEngine], ICTable]] = {
    "seco_2004": seco_2004,
    "sanchez_2011": sanchez_2011,
}
