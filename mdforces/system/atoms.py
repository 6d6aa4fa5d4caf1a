"""Atom records and their struct-of-arrays view."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray


@dataclass(frozen=True)
class Atom:
    """
    A single atom and its interaction parameters.

    Attributes:
        index: Position of the atom in the system; its identity.
        charge: Partial charge in elementary charges.
        mass: Mass in the system's mass unit.
        sigma: Lennard-Jones size parameter.
        epsilon: Lennard-Jones well depth.
    """

    index: int = 0
    charge: float = 0.0
    mass: float = 1.0
    sigma: float = 0.0
    epsilon: float = 0.0


@dataclass(frozen=True)
class AtomTable:
    """
    Per-atom parameters stored as arrays.

    Vectorized force laws index into these arrays rather than looping over
    ``Atom`` objects.
    """

    index: NDArray[np.integer]
    charge: NDArray[np.floating]
    mass: NDArray[np.floating]
    sigma: NDArray[np.floating]
    epsilon: NDArray[np.floating]

    @classmethod
    def from_atoms(cls, atoms: Sequence[Atom]) -> AtomTable:
        """Build a table from a sequence of atoms."""
        return cls(
            index=np.array([a.index for a in atoms], dtype=np.int64),
            charge=np.array([a.charge for a in atoms], dtype=np.float64),
            mass=np.array([a.mass for a in atoms], dtype=np.float64),
            sigma=np.array([a.sigma for a in atoms], dtype=np.float64),
            epsilon=np.array([a.epsilon for a in atoms], dtype=np.float64),
        )

    def __len__(self) -> int:
        return len(self.index)

    def __getitem__(self, k: int) -> Atom:
        return Atom(
            index=int(self.index[k]),
            charge=float(self.charge[k]),
            mass=float(self.mass[k]),
            sigma=float(self.sigma[k]),
            epsilon=float(self.epsilon[k]),
        )

    def take(self, indices: ArrayLike) -> AtomTable:
        """Return the rows at ``indices``, repeats allowed."""
        indices = np.asarray(indices, dtype=np.int64)
        return AtomTable(
            index=self.index[indices],
            charge=self.charge[indices],
            mass=self.mass[indices],
            sigma=self.sigma[indices],
            epsilon=self.epsilon[indices],
        )
