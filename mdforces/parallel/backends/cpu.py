"""Sequential CPU backend with optional thread-level partitioning."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ...units import check_force_units, ustrip
from .base import (
    ParallelBackend,
    partition_range,
    require_neighbors,
    split_pairwise_inters,
)

if TYPE_CHECKING:
    from ...interactions import PairwiseInteraction
    from ...neighborlists import NeighborList
    from ...system import System

logger = logging.getLogger(__name__)


class CPUBackend(ParallelBackend):
    """
    Reference backend evaluating one pair or entry at a time.

    With more than one thread, the pair and entry index spaces are split
    into contiguous ranges. Each thread accumulates into its own array and
    the partial arrays are summed in rank order, so no locking is needed.
    """

    def __init__(self, n_threads: int = 1) -> None:
        """
        Initialize CPU backend.

        Args:
            n_threads: Default number of threads when a call does not specify one.
        """
        if n_threads < 1:
            raise ValueError(f"n_threads must be at least 1, got {n_threads}")
        self._n_threads = n_threads

    @property
    def name(self) -> str:
        """Return backend name."""
        return "cpu"

    @property
    def n_workers(self) -> int:
        """Return default number of threads."""
        return self._n_threads

    def pairwise_specific_forces(
        self,
        system: System,
        neighbors: NeighborList | None = None,
        n_threads: int | None = None,
    ) -> NDArray[np.floating]:
        n_threads = self._n_threads if n_threads is None else n_threads
        if n_threads < 1:
            raise ValueError(f"n_threads must be at least 1, got {n_threads}")

        dense, sparse = split_pairwise_inters(system.pairwise_inters)
        require_neighbors(sparse, neighbors)
        logger.debug(
            f"CPU forces: {len(dense)} dense and {len(sparse)} neighbor list "
            f"pairwise interactions, {len(system.specific_inter_lists)} specific "
            f"lists, {n_threads} thread(s)"
        )

        shape = (system.n_atoms, system.n_dimensions)
        if n_threads == 1:
            fs = np.zeros(shape, dtype=np.float64)
            self._accumulate(fs, system, dense, sparse, neighbors, 0, 1)
            return fs

        partials = [np.zeros(shape, dtype=np.float64) for _ in range(n_threads)]
        with ThreadPoolExecutor(max_workers=n_threads) as executor:
            futures = [
                executor.submit(
                    self._accumulate,
                    partials[rank],
                    system,
                    dense,
                    sparse,
                    neighbors,
                    rank,
                    n_threads,
                )
                for rank in range(n_threads)
            ]
            for future in futures:
                future.result()

        fs = partials[0]
        for partial in partials[1:]:
            fs += partial
        return fs

    def _accumulate(
        self,
        fs: NDArray[np.floating],
        system: System,
        dense: list[PairwiseInteraction],
        sparse: list[PairwiseInteraction],
        neighbors: NeighborList | None,
        rank: int,
        n_parts: int,
    ) -> None:
        """Add the forces of this worker's share of pairs and entries to fs."""
        coords = system.coord_values
        atoms = system.atoms
        boundary = system.boundary
        force_units = system.force_units

        if dense:
            i_indices, j_indices = np.triu_indices(system.n_atoms, k=1)
            start, end = partition_range(len(i_indices), n_parts, rank)
            for i, j in zip(i_indices[start:end].tolist(), j_indices[start:end].tolist()):
                dr = boundary.vector(coords[i], coords[j])
                f = dense[0].force(dr, coords[i], coords[j], atoms[i], atoms[j], boundary)
                for inter in dense[1:]:
                    f = f + inter.force(
                        dr, coords[i], coords[j], atoms[i], atoms[j], boundary
                    )
                check_force_units(f, force_units)
                f_ustrip = ustrip(f)
                fs[i] -= f_ustrip
                fs[j] += f_ustrip

        if sparse:
            start, end = partition_range(len(neighbors), n_parts, rank)
            for ni in range(start, end):
                i, j, weight_14 = neighbors[ni]
                dr = boundary.vector(coords[i], coords[j])
                f = sparse[0].weighted_force(
                    dr, coords[i], coords[j], atoms[i], atoms[j], boundary, weight_14
                )
                for inter in sparse[1:]:
                    f = f + inter.weighted_force(
                        dr, coords[i], coords[j], atoms[i], atoms[j], boundary, weight_14
                    )
                check_force_units(f, force_units)
                f_ustrip = ustrip(f)
                fs[i] -= f_ustrip
                fs[j] += f_ustrip

        for inter_list in system.specific_inter_lists:
            start, end = partition_range(len(inter_list), n_parts, rank)
            for idx, inter in zip(
                inter_list.indices[start:end].tolist(), inter_list.inters[start:end]
            ):
                sf = inter.force(*coords[idx], boundary)
                for atom_index, f in zip(idx, sf):
                    check_force_units(f, force_units)
                    fs[atom_index] += ustrip(f)
