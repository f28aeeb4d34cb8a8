"""
Generation-tagged memoization.

Derived structures (closures, shortest-path maps, information content
tables) are only valid for the graph state they were computed from.
GenerationCache records the generation it was filled at and drops every
entry as soon as the observed generation differs.
"""

from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

V = TypeVar("V")


class GenerationCache(Generic[V]):
    """
    Cache whose entries expire when a generation counter advances.

    Example:
        >>> cache = GenerationCache[int](lambda: graph.generation)
        >>> cache.get("answer", lambda: 42)
        42
    """

    def __init__(self, current_generation: Callable[[], int]) -> None:
        self._current_generation = current_generation
        self._generation: int | None = None
        self._entries: dict[Hashable, V] = {}

    @property
    def generation(self) -> int | None:
        """Generation the cached entries belong to, None when empty."""
        return self._generation

    def _sync(self) -> None:
        generation = self._current_generation()
        if generation != self._generation:
            self._entries.clear()
            self._generation = generation

    def get(self, key: Hashable, compute: Callable[[], V]) -> V:
        """Returns the cached value for key, computing it if absent or stale."""
        self._sync()
        if key not in self._entries:
            self._entries[key] = compute()
        return self._entries[key]

    def peek(self, key: Hashable) -> V | None:
        """Returns the cached value for key without computing it."""
        self._sync()
        return self._entries.get(key)

    def __contains__(self, key: Hashable) -> bool:
        self._sync()
        return key in self._entries

    def __len__(self) -> int:
        self._sync()
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._generation = None
