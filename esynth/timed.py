"""A hash set of strings that forgets old entries once it fills up."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

_U64 = 0xFFFFFFFFFFFFFFFF


def djb2_hash(text: str, size: int) -> int:
    """The djb2 string hash reduced modulo size."""
    value = 5381
    for byte in text.encode("utf-8"):
        if byte == 0:
            break
        char = byte - 256 if byte >= 128 else byte
        value = (value * 33 + char) & _U64
    return value % size


@dataclass
class _TimedEntry:
    data: str
    time: int


class TimedLikeValueContainer:
    """A bucket of strings, each stamped with an insertion time."""

    def __init__(self, relative_bound: int, absolute_bound: int) -> None:
        self.relative_bound = relative_bound
        self.absolute_bound = absolute_bound
        self._entries: List[_TimedEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def empty(self) -> bool:
        return not self._entries

    def contains(self, value: str) -> bool:
        return any(entry.data == value for entry in self._entries)

    def add(self, value: str, time: int) -> None:
        """Append without checking for duplicates."""
        self._entries.append(_TimedEntry(value, time))

    def purge_and_renumber(self) -> None:
        """Drop entries older than the relative bound and shift the rest's times up."""
        shift = self.absolute_bound - self.relative_bound
        self._entries = [
            _TimedEntry(entry.data, entry.time + shift)
            for entry in self._entries
            if entry.time <= self.relative_bound
        ]

    def __str__(self) -> str:
        return "".join(f"{entry.data}({entry.time}) " for entry in self._entries)


class TimedHashMap:
    """A set of strings holding at most absolute_bound entries.

    When full, only the most recent relative_bound entries are kept.
    """

    def __init__(self, relative_bound: int, absolute_bound: int) -> None:
        if absolute_bound <= 0:
            raise ValueError("absolute_bound must be positive")
        if not 0 <= relative_bound <= absolute_bound:
            raise ValueError("relative_bound must lie between 0 and absolute_bound")
        self.relative_bound = relative_bound
        self.absolute_bound = absolute_bound
        self._buckets: Dict[int, TimedLikeValueContainer] = {}
        self._size = 0
        self._current_time = absolute_bound

    def __len__(self) -> int:
        return self._size

    def _purge_and_renumber(self) -> None:
        for index in list(self._buckets):
            bucket = self._buckets[index]
            bucket.purge_and_renumber()
            if bucket.empty():
                del self._buckets[index]
        self._size = self.relative_bound
        self._current_time = self.absolute_bound - self.relative_bound

    def add(self, value: str) -> bool:
        """Record value as the newest entry, purging old entries first if full."""
        if self._size == self.absolute_bound:
            self._purge_and_renumber()
        index = djb2_hash(value, self.absolute_bound)
        bucket = self._buckets.get(index)
        if bucket is None:
            bucket = TimedLikeValueContainer(self.relative_bound, self.absolute_bound)
            self._buckets[index] = bucket
        bucket.add(value, self._current_time)
        self._current_time -= 1
        self._size += 1
        return True

    def contains(self, value: str) -> bool:
        bucket = self._buckets.get(djb2_hash(value, self.absolute_bound))
        return bucket is not None and bucket.contains(value)

    def __contains__(self, value: str) -> bool:
        return self.contains(value)

    def __str__(self) -> str:
        return "".join(
            f"{index}: {self._buckets[index]}\n" for index in sorted(self._buckets)
        )