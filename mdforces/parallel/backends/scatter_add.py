"""Data-parallel backend accumulating forces by atomic scatter-add."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import NDArray

from ...units import Quantity, check_force_units, ustrip
from .base import ParallelBackend, require_neighbors, split_pairwise_inters

if TYPE_CHECKING:
    from ...interactions import InteractionList, PairwiseInteraction
    from ...neighborlists import NeighborList
    from ...system import AtomTable, System

logger = logging.getLogger(__name__)

# Units of work per group
WORK_GROUP_SIZE = 256


def work_groups(n_items: int, group_size: int = WORK_GROUP_SIZE) -> tuple[int, int]:
    """
    Size the launch grid for a number of work items.

    Returns:
        Tuple of (group_size, n_groups) with enough groups to cover n_items.
    """
    return group_size, -(-n_items // group_size)


class ScatterBuffer:
    """
    Flat force buffer and scalar virial shared by concurrent work groups.

    Every update goes through a lock, which makes each scatter-add atomic
    with respect to the others. The order of updates is unspecified.
    """

    def __init__(self, n_atoms: int, n_dimensions: int) -> None:
        self.n_dimensions = n_dimensions
        self.data = np.zeros(n_atoms * n_dimensions, dtype=np.float64)
        self.virial = np.zeros(1, dtype=np.float64)
        self._lock = threading.Lock()

    def add_forces(
        self, atom_indices: NDArray[np.integer], values: NDArray[np.floating]
    ) -> None:
        """
        Atomically add force vectors to atom slots.

        Args:
            atom_indices: Target atoms, shape (M,); repeats are summed.
            values: Force vectors, shape (M, D).
        """
        d = self.n_dimensions
        flat = (np.asarray(atom_indices)[:, np.newaxis] * d + np.arange(d)).ravel()
        with self._lock:
            np.add.at(self.data, flat, np.asarray(values).ravel())

    def add_virial(self, value: float) -> None:
        """Atomically add to the virial accumulator."""
        with self._lock:
            self.virial[0] += value

    def as_vectors(self) -> NDArray[np.floating]:
        """Reinterpret the flat buffer as force vectors, shape (N, D)."""
        return self.data.reshape(-1, self.n_dimensions)


class ScatterAddBackend(ParallelBackend):
    """
    Backend running fixed-size work groups concurrently.

    Dense pairwise work covers an explicit enumeration of all pairs i < j,
    sparse work covers the live neighbor list entries, and each specific
    interaction list gets its own pass with one unit of work per entry.
    Pairwise force laws are evaluated a work group at a time through
    ``force_batch``. All results are scatter-added into one shared buffer,
    so the summation order varies between runs.
    """

    def __init__(
        self, n_workers: int | None = None, group_size: int = WORK_GROUP_SIZE
    ) -> None:
        """
        Initialize scatter-add backend.

        Args:
            n_workers: Number of concurrent work groups. Defaults to CPU count.
            group_size: Units of work per group.
        """
        if group_size < 1:
            raise ValueError(f"group_size must be at least 1, got {group_size}")
        self._n_workers = n_workers or os.cpu_count() or 1
        self.group_size = group_size

    @property
    def name(self) -> str:
        """Return backend name."""
        return "scatter_add"

    @property
    def n_workers(self) -> int:
        """Return number of concurrent work groups."""
        return self._n_workers

    def pairwise_specific_forces(
        self,
        system: System,
        neighbors: NeighborList | None = None,
        n_threads: int | None = None,
    ) -> NDArray[np.floating]:
        # n_threads only applies to the CPU backend
        return self._run(system, neighbors).as_vectors()

    def forces_and_virial(
        self, system: System, neighbors: NeighborList | None = None
    ) -> tuple[Quantity, float]:
        """
        Compute pairwise and specific forces together with the pair virial.

        The virial is the sum over evaluated pairs of dr . F, where F is the
        force on the second atom of the pair.

        Returns:
            Tuple of (forces tagged with the system's force unit, virial).
        """
        buffer = self._run(system, neighbors)
        return Quantity(buffer.as_vectors(), system.force_units), float(buffer.virial[0])

    def _run(self, system: System, neighbors: NeighborList | None) -> ScatterBuffer:
        dense, sparse = split_pairwise_inters(system.pairwise_inters)
        require_neighbors(sparse, neighbors)

        buffer = ScatterBuffer(system.n_atoms, system.n_dimensions)
        atoms = system.atom_table

        with ThreadPoolExecutor(max_workers=self._n_workers) as executor:
            if dense:
                i_indices, j_indices = np.triu_indices(system.n_atoms, k=1)
                self._launch(
                    executor,
                    self._pairwise_kernel,
                    len(i_indices),
                    buffer, system, atoms, dense, i_indices, j_indices, None,
                )

            if sparse and len(neighbors) > 0:
                i_indices, j_indices, weights_14 = neighbors.as_arrays()
                self._launch(
                    executor,
                    self._pairwise_kernel,
                    len(neighbors),
                    buffer, system, atoms, sparse, i_indices, j_indices, weights_14,
                )

            for inter_list in system.specific_inter_lists:
                if len(inter_list) > 0:
                    self._launch(
                        executor,
                        self._specific_kernel,
                        len(inter_list),
                        buffer, system, inter_list,
                    )

        return buffer

    def _launch(
        self,
        executor: ThreadPoolExecutor,
        kernel: Callable[..., None],
        n_items: int,
        *args: Any,
    ) -> None:
        """Run a kernel over n_items in work groups and wait for all of them."""
        group_size, n_groups = work_groups(n_items, self.group_size)
        logger.debug(
            f"Launching {kernel.__name__} over {n_items} items in {n_groups} "
            f"group(s) of {group_size}"
        )
        futures = [
            executor.submit(
                kernel, g * group_size, min((g + 1) * group_size, n_items), *args
            )
            for g in range(n_groups)
        ]
        for future in futures:
            future.result()

    @staticmethod
    def _pairwise_kernel(
        start: int,
        end: int,
        buffer: ScatterBuffer,
        system: System,
        atoms: AtomTable,
        inters: list[PairwiseInteraction],
        i_indices: NDArray[np.integer],
        j_indices: NDArray[np.integer],
        weights_14: NDArray[np.bool_] | None,
    ) -> None:
        i = i_indices[start:end]
        j = j_indices[start:end]
        w = None if weights_14 is None else weights_14[start:end]

        coords = system.coord_values
        boundary = system.boundary
        coords_i = coords[i]
        coords_j = coords[j]
        dr = boundary.vector(coords_i, coords_j)
        atoms_i = atoms.take(i)
        atoms_j = atoms.take(j)

        f = inters[0].force_batch(dr, coords_i, coords_j, atoms_i, atoms_j, boundary, w)
        for inter in inters[1:]:
            f = f + inter.force_batch(
                dr, coords_i, coords_j, atoms_i, atoms_j, boundary, w
            )
        check_force_units(f, system.force_units)
        f_ustrip = ustrip(f)

        buffer.add_forces(i, -f_ustrip)
        buffer.add_forces(j, f_ustrip)
        buffer.add_virial(float(np.sum(dr * f_ustrip)))

    @staticmethod
    def _specific_kernel(
        start: int,
        end: int,
        buffer: ScatterBuffer,
        system: System,
        inter_list: InteractionList,
    ) -> None:
        coords = system.coord_values
        boundary = system.boundary
        values = np.empty((inter_list.n_atoms, system.n_dimensions), dtype=np.float64)

        for idx, inter in zip(
            inter_list.indices[start:end], inter_list.inters[start:end]
        ):
            sf = inter.force(*coords[idx], boundary)
            for m, f in enumerate(sf):
                check_force_units(f, system.force_units)
                values[m] = ustrip(f)
            buffer.add_forces(idx, values)
