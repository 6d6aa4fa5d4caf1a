"""Read-only view of a system as seen by the force engine."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..units import (
    DEFAULT_FORCE_UNITS,
    DEFAULT_LENGTH_UNITS,
    DEFAULT_MASS_UNITS,
    Quantity,
)
from .atoms import Atom, AtomTable
from .boundary import Boundary

if TYPE_CHECKING:
    from ..interactions import (
        GeneralInteraction,
        InteractionList,
        PairwiseInteraction,
    )


@dataclass(frozen=True)
class System:
    """
    Atoms, coordinates, boundary and interaction catalogs.

    The force engine only reads from a system; nothing here changes during a
    force call.

    Attributes:
        atoms: Atoms, indexed by their position in the sequence.
        coords: Positions, shape (N, D). Plain arrays are tagged with
            ``length_units``; a ``Quantity`` keeps its own unit.
        boundary: Boundary providing minimum-image displacements.
        pairwise_inters: Pairwise interactions, dense and neighbor-list-only.
        specific_inter_lists: Interaction lists of arity 1 to 4.
        general_inters: System-wide interactions.
        force_units: Declared unit of every force in the system.
        length_units: Unit of plain-array coordinates.
        mass_units: Unit of atom masses.
    """

    atoms: Sequence[Atom]
    coords: Quantity
    boundary: Boundary
    pairwise_inters: Sequence[PairwiseInteraction] = ()
    specific_inter_lists: Sequence[InteractionList] = ()
    general_inters: Sequence[GeneralInteraction] = ()
    force_units: str = DEFAULT_FORCE_UNITS
    length_units: str = DEFAULT_LENGTH_UNITS
    mass_units: str = DEFAULT_MASS_UNITS

    def __post_init__(self) -> None:
        """Validate shapes and freeze the catalogs."""
        coords = self.coords
        if not isinstance(coords, Quantity):
            coords = Quantity(np.asarray(coords, dtype=np.float64), self.length_units)
        object.__setattr__(self, "coords", coords)
        object.__setattr__(self, "atoms", tuple(self.atoms))
        object.__setattr__(self, "pairwise_inters", tuple(self.pairwise_inters))
        object.__setattr__(
            self, "specific_inter_lists", tuple(self.specific_inter_lists)
        )
        object.__setattr__(self, "general_inters", tuple(self.general_inters))

        n_atoms = len(self.atoms)
        if coords.value.ndim != 2 or coords.shape[0] != n_atoms:
            raise ValueError(
                f"coords shape {coords.shape} incompatible with {n_atoms} atoms"
            )
        if coords.shape[1] != self.boundary.n_dimensions:
            raise ValueError(
                f"coords have {coords.shape[1]} dimensions but boundary has "
                f"{self.boundary.n_dimensions}"
            )

    @property
    def n_atoms(self) -> int:
        """Return number of atoms."""
        return len(self.atoms)

    def __len__(self) -> int:
        return self.n_atoms

    @property
    def n_dimensions(self) -> int:
        """Return number of spatial dimensions."""
        return self.coords.shape[1]

    @property
    def coord_values(self) -> NDArray[np.floating]:
        """Return coordinates without their unit tag."""
        return self.coords.value

    @cached_property
    def atom_table(self) -> AtomTable:
        """Return per-atom parameters as arrays."""
        return AtomTable.from_atoms(self.atoms)

    def masses(self) -> Quantity:
        """Return atom masses, shape (N,), tagged with ``mass_units``."""
        return Quantity(self.atom_table.mass, self.mass_units)

    def replace_coords(self, coords: ArrayLike | Quantity) -> System:
        """Return a copy of this system with new coordinates."""
        return System(
            atoms=self.atoms,
            coords=coords,
            boundary=self.boundary,
            pairwise_inters=self.pairwise_inters,
            specific_inter_lists=self.specific_inter_lists,
            general_inters=self.general_inters,
            force_units=self.force_units,
            length_units=self.length_units,
            mass_units=self.mass_units,
        )
