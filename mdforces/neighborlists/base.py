"""Neighbor list container consumed by the force engine."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import numpy as np
from numpy.typing import NDArray

NeighborEntry = tuple[int, int, bool]


class NeighborList:
    """
    Ordered (i, j, weight_14) records with a live count.

    The list is a reusable buffer: ``n`` counts the live entries at the
    front of ``entries`` and may be smaller than the allocated capacity.
    Only live entries take part in force calculations.

    Attributes:
        n: Number of live entries.
        entries: Allocated entries; those past ``n`` are stale.
    """

    def __init__(
        self, n: int | None = None, entries: Iterable[NeighborEntry] | None = None
    ) -> None:
        """
        Initialize a neighbor list.

        Args:
            n: Number of live entries. Defaults to all given entries.
            entries: Initial (i, j, weight_14) records.
        """
        self.entries: list[NeighborEntry] = [
            (int(i), int(j), bool(w)) for i, j, w in (entries or ())
        ]
        self.n = len(self.entries) if n is None else n
        if not 0 <= self.n <= len(self.entries):
            raise ValueError(
                f"live count {self.n} outside capacity {len(self.entries)}"
            )

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[int, int]],
        weights_14: Iterable[bool] | None = None,
    ) -> NeighborList:
        """
        Build a list from (i, j) pairs.

        Args:
            pairs: Atom index pairs.
            weights_14: Per-pair 1-4 flags. Defaults to all False.
        """
        pairs = list(pairs)
        if weights_14 is None:
            weights_14 = [False] * len(pairs)
        return cls(entries=[(i, j, w) for (i, j), w in zip(pairs, weights_14)])

    def __len__(self) -> int:
        return self.n

    def __iter__(self) -> Iterator[NeighborEntry]:
        return iter(self.entries[: self.n])

    def __getitem__(self, k: int) -> NeighborEntry:
        if not 0 <= k < self.n:
            raise IndexError(f"Neighbor index {k} out of range [0, {self.n})")
        return self.entries[k]

    @property
    def capacity(self) -> int:
        """Return number of allocated entries."""
        return len(self.entries)

    def append(self, i: int, j: int, weight_14: bool = False) -> None:
        """Add a live entry, reusing stale slots before growing."""
        entry = (int(i), int(j), bool(weight_14))
        if self.n < len(self.entries):
            self.entries[self.n] = entry
        else:
            self.entries.append(entry)
        self.n += 1

    def clear(self) -> None:
        """Mark all entries stale without releasing the buffer."""
        self.n = 0

    def as_arrays(
        self,
    ) -> tuple[NDArray[np.integer], NDArray[np.integer], NDArray[np.bool_]]:
        """
        Return the live entries as index and flag arrays.

        Returns:
            Tuple of (i_indices, j_indices, weights_14), each of length n.
        """
        if self.n == 0:
            empty = np.empty(0, dtype=np.int64)
            return empty, empty.copy(), np.empty(0, dtype=bool)
        live = self.entries[: self.n]
        i_indices = np.fromiter((e[0] for e in live), dtype=np.int64, count=self.n)
        j_indices = np.fromiter((e[1] for e in live), dtype=np.int64, count=self.n)
        weights_14 = np.fromiter((e[2] for e in live), dtype=bool, count=self.n)
        return i_indices, j_indices, weights_14
