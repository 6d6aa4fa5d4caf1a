"""Net forces and accelerations of a system."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from .parallel.dispatcher import get_backend
from .units import Quantity

if TYPE_CHECKING:
    from .neighborlists import NeighborList
    from .parallel import ParallelBackend
    from .parallel.dispatcher import BackendType
    from .system import System


def forces(
    system: System,
    neighbors: NeighborList | None = None,
    n_threads: int | None = None,
    backend: BackendType | ParallelBackend | None = None,
) -> Quantity:
    """
    Calculate the forces on all atoms from every interaction in the system.

    Pairwise and specific interactions are summed without units by the
    backend and tagged once with the system's force unit; general
    interactions are then added as unit-tagged arrays. If any interaction
    uses the neighbor list, the neighbors should be computed first and
    passed in.

    Args:
        system: System to evaluate.
        neighbors: Neighbor list for neighbor-list-only interactions.
        n_threads: Threads for the CPU backend; defaults to its setting.
        backend: Backend name or instance; defaults to the global default.

    Returns:
        Forces of shape (N, D) tagged with the system's force unit.

    Raises:
        UnitMismatchError: If an interaction returns a force in another unit.
        MissingNeighborListError: If a neighbor list is required but None.
    """
    engine = get_backend(backend)
    fs = Quantity(
        engine.pairwise_specific_forces(system, neighbors, n_threads),
        system.force_units,
    )

    for inter in system.general_inters:
        fs = fs + inter.forces(system, neighbors)

    return fs


def accelerations(
    system: System,
    neighbors: NeighborList | None = None,
    n_threads: int | None = None,
    backend: BackendType | ParallelBackend | None = None,
) -> Quantity:
    """
    Calculate the accelerations of all atoms using Newton's second law.

    Takes the same arguments as ``forces``. The unit of the result is the
    force unit divided by the system's mass unit.
    """
    fs = forces(system, neighbors, n_threads=n_threads, backend=backend)
    return fs / system.masses()[:, np.newaxis]
