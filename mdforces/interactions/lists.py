"""Lists of specific interactions and the atoms they act on."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .base import SpecificInteraction


class InteractionList:
    """
    Specific interactions of one arity together with their atom indices.

    Attributes:
        indices: Atom indices per entry, shape (M, n_atoms).
        inters: Interaction instance per entry, length M.
    """

    n_atoms: int

    def __init__(
        self, indices: ArrayLike, inters: Sequence[SpecificInteraction]
    ) -> None:
        """
        Initialize an interaction list.

        Args:
            indices: Atom indices per entry, shape (M, n_atoms).
            inters: Interaction instance per entry.
        """
        self.indices: NDArray[np.integer] = np.asarray(
            indices, dtype=np.int64
        ).reshape(-1, self.n_atoms)
        self.inters: tuple[SpecificInteraction, ...] = tuple(inters)

        if len(self.inters) != len(self.indices):
            raise ValueError(
                f"number of interactions {len(self.inters)} != "
                f"number of index tuples {len(self.indices)}"
            )
        for inter in self.inters:
            if inter.n_atoms != self.n_atoms:
                raise ValueError(
                    f"{type(inter).__name__} acts on {inter.n_atoms} atoms but the "
                    f"list holds {self.n_atoms}-atom interactions"
                )

    def __len__(self) -> int:
        return len(self.inters)

    def __iter__(self):
        return zip((tuple(int(i) for i in row) for row in self.indices), self.inters)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n_entries={len(self)})"


class InteractionList1Atoms(InteractionList):
    """Interactions acting on single atoms, e.g. position restraints."""

    n_atoms = 1


class InteractionList2Atoms(InteractionList):
    """Interactions acting on atom pairs, e.g. bonds."""

    n_atoms = 2


class InteractionList3Atoms(InteractionList):
    """Interactions acting on atom triples, e.g. bond angles."""

    n_atoms = 3


class InteractionList4Atoms(InteractionList):
    """Interactions acting on atom quadruples, e.g. torsions."""

    n_atoms = 4
