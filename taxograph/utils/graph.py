"""
Functions related to graphs
"""

from collections import deque
from collections.abc import Iterable
from typing import Callable, TypeVar

T = TypeVar("T")


def breadth_first_distances(
    source: T, node_to_neighbours: Callable[[T], Iterable[T]]
) -> dict[T, int]:
    """
    Edge-count distance from a source to every node reachable from it.

    Args:
        source: The node the traversal starts from.
        node_to_neighbours: Function returning the nodes a given node points to.

    Returns:
        dict[T, int]: distance of each reached node, the source being at 0.
    """
    distances = {source: 0}
    queue = deque([source])
    while queue:
        current = queue.popleft()
        next_distance = distances[current] + 1
        for neighbour in node_to_neighbours(current):
            # First visit is the shortest in an unweighted graph
            if neighbour not in distances:
                distances[neighbour] = next_distance
                queue.append(neighbour)
    return distances


def reachable_from(
    source: T, node_to_neighbours: Callable[[T], Iterable[T]]
) -> tuple[frozenset[T], T | None]:
    """
    Nodes reachable from a source, exclusive of the source itself.

    Depth-first traversal keeping the current path, so that a cycle anywhere
    below the source is found, not only one returning to it.

    Returns:
        The reachable set, and a node lying on a cycle (None if acyclic).
    """
    seen: set[T] = set()
    on_path: set[T] = {source}
    stack = [(source, iter(node_to_neighbours(source)))]
    cycle_node: T | None = None
    while stack:
        node, neighbours = stack[-1]
        for neighbour in neighbours:
            if neighbour in on_path:
                if cycle_node is None:
                    cycle_node = neighbour
            elif neighbour not in seen:
                seen.add(neighbour)
                on_path.add(neighbour)
                stack.append((neighbour, iter(node_to_neighbours(neighbour))))
                break
        else:
            stack.pop()
            on_path.discard(node)
    return frozenset(seen), cycle_node
