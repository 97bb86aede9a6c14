"""A bounded list of (value, edge id) pairs kept sorted by value."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Iterator, List, Optional, Tuple


class CapacityError(Exception):
    """Raised when adding to a list that is already full."""


class FixedSortedList:
    """Sorted values, each tied to a unique edge id, with a fixed capacity."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self.capacity = capacity
        self._values: List[int] = []
        self._ids: List[int] = []

    def add(self, value: int, edge_id: int) -> int:
        """Insert value with edge_id; return the id stored for value.

        If the value is already present, its existing id is returned and
        nothing is inserted. The capacity is checked before containment.
        """
        if len(self._values) >= self.capacity:
            raise CapacityError("Capacity reached in FixedSortedList")
        existing = self.contains(value)
        if existing is not None:
            return existing
        index = bisect_right(self._values, value)
        self._values.insert(index, value)
        self._ids.insert(index, edge_id)
        return edge_id

    def contains(self, value: int) -> Optional[int]:
        """Return the edge id stored for value, or None if absent."""
        index = bisect_left(self._values, value)
        if index < len(self._values) and self._values[index] == value:
            return self._ids[index]
        return None

    def empty(self) -> bool:
        return not self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return iter(zip(self._values, self._ids))

    def __str__(self) -> str:
        return "".join(f"({value}, {edge_id}) " for value, edge_id in self)