"""Fragment graphs represented as sorted lists of edge ids."""

from __future__ import annotations

from bisect import insort
from typing import Iterable


class SimpleFragmentGraph:
    """An immutable sorted collection of edge ids describing a molecule."""

    def __init__(self, edges: Iterable[int] = ()) -> None:
        self._edges = tuple(sorted(edges))

    @property
    def edges(self) -> tuple:
        return self._edges

    def copy_and_append(self, edge_id: int) -> "SimpleFragmentGraph":
        """Return a new graph with edge_id inserted in order."""
        edges = list(self._edges)
        insort(edges, edge_id)
        return SimpleFragmentGraph(edges)

    def is_isomorphic_to(self, other: "SimpleFragmentGraph") -> bool:
        """True when both graphs hold exactly the same edges."""
        return self._edges == other._edges

    def __len__(self) -> int:
        return len(self._edges)

    def __str__(self) -> str:
        return f"(#{len(self._edges)}): " + "".join(f"{edge} " for edge in self._edges)