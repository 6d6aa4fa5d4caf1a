"""Abstract base class for force backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ...errors import MissingNeighborListError

if TYPE_CHECKING:
    from ...interactions import PairwiseInteraction
    from ...neighborlists import NeighborList
    from ...system import System


class ParallelBackend(ABC):
    """
    Abstract base class for pairwise and specific force evaluation.

    Backends differ only in how the work is executed; all of them return
    the same forces up to floating point rounding. General interactions are
    not handled here since they already produce unit-tagged arrays.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return backend name."""
        ...

    @property
    @abstractmethod
    def n_workers(self) -> int:
        """Return number of parallel workers."""
        ...

    @abstractmethod
    def pairwise_specific_forces(
        self,
        system: System,
        neighbors: NeighborList | None = None,
        n_threads: int | None = None,
    ) -> NDArray[np.floating]:
        """
        Sum pairwise and specific forces without their unit tag.

        Args:
            system: System to evaluate.
            neighbors: Neighbor list, required if any pairwise interaction
                is neighbor-list-only.
            n_threads: Worker threads for backends that use them.

        Returns:
            Forces array of shape (N, D) in the system's force unit.

        Raises:
            UnitMismatchError: If an interaction returns a force in another unit.
            MissingNeighborListError: If a neighbor list is required but None.
        """
        ...


def split_pairwise_inters(
    inters: Sequence[PairwiseInteraction],
) -> tuple[list[PairwiseInteraction], list[PairwiseInteraction]]:
    """
    Partition pairwise interactions by neighbor list usage.

    Returns:
        Tuple of (dense, sparse) interactions, where dense ones apply to
        every pair and sparse ones only to neighbor list pairs.
    """
    dense = [inter for inter in inters if not inter.nl_only]
    sparse = [inter for inter in inters if inter.nl_only]
    return dense, sparse


def require_neighbors(
    sparse: Sequence[PairwiseInteraction], neighbors: NeighborList | None
) -> None:
    """Raise if neighbor-list-only interactions are present without a list."""
    if sparse and neighbors is None:
        raise MissingNeighborListError()


def partition_range(n_items: int, n_workers: int, rank: int) -> tuple[int, int]:
    """
    Get the contiguous item range owned by one worker.

    Ranges differ in length by at most one and cover ``range(n_items)``.

    Args:
        n_items: Total number of items.
        n_workers: Number of workers.
        rank: Index of this worker.

    Returns:
        Tuple of (start_index, end_index) for this worker.
    """
    items_per_worker = n_items // n_workers
    remainder = n_items % n_workers

    if rank < remainder:
        start = rank * (items_per_worker + 1)
        end = start + items_per_worker + 1
    else:
        start = rank * items_per_worker + remainder
        end = start + items_per_worker

    return start, end
