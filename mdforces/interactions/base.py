"""Base interfaces for interactions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..errors import UnitMismatchError
from ..units import Quantity, unit_of, ustrip

if TYPE_CHECKING:
    from ..neighborlists import NeighborList
    from ..system import Atom, AtomTable, Boundary, System
    from .specific_forces import SpecificForce


class PairwiseInteraction(ABC):
    """
    Abstract base class for force laws between two atoms.

    A pairwise interaction returns the force exerted on atom j by atom i,
    given the displacement ``dr`` pointing from i to j. The engine applies
    the negated force to atom i.

    Interactions with ``nl_only`` set are only evaluated for pairs in the
    neighbor list; the others are evaluated for every pair of atoms.
    """

    nl_only: bool = False

    @abstractmethod
    def force(
        self,
        dr: NDArray[np.floating],
        coord_i: NDArray[np.floating],
        coord_j: NDArray[np.floating],
        atom_i: Atom,
        atom_j: Atom,
        boundary: Boundary,
    ) -> Quantity:
        """
        Compute the force on atom j due to atom i.

        Args:
            dr: Minimum image displacement from i to j, shape (D,).
            coord_i: Position of atom i, shape (D,).
            coord_j: Position of atom j, shape (D,).
            atom_i: First atom.
            atom_j: Second atom.
            boundary: Simulation boundary.

        Returns:
            Force vector of shape (D,) tagged with a force unit.
        """
        ...

    def weighted_force(
        self,
        dr: NDArray[np.floating],
        coord_i: NDArray[np.floating],
        coord_j: NDArray[np.floating],
        atom_i: Atom,
        atom_j: Atom,
        boundary: Boundary,
        weight_14: bool,
    ) -> Quantity:
        """
        Compute the force for a neighbor list entry.

        Interactions that scale 1-4 pairs override this; the default ignores
        the flag and uses the unweighted force law.
        """
        return self.force(dr, coord_i, coord_j, atom_i, atom_j, boundary)

    def force_batch(
        self,
        dr: NDArray[np.floating],
        coords_i: NDArray[np.floating],
        coords_j: NDArray[np.floating],
        atoms_i: AtomTable,
        atoms_j: AtomTable,
        boundary: Boundary,
        weights_14: NDArray[np.bool_] | None = None,
    ) -> Quantity:
        """
        Compute forces for many pairs at once.

        The default loops over ``force`` (or ``weighted_force`` when
        ``weights_14`` is given); vectorized force laws override this.

        Args:
            dr: Displacements from i to j, shape (M, D).
            coords_i: Positions of the first atoms, shape (M, D).
            coords_j: Positions of the second atoms, shape (M, D).
            atoms_i: Parameters of the first atoms, length M.
            atoms_j: Parameters of the second atoms, length M.
            boundary: Simulation boundary.
            weights_14: Per-pair 1-4 flags, or None for all-pairs evaluation.

        Returns:
            Forces on the second atoms, shape (M, D).

        Raises:
            UnitMismatchError: If the pairs produce forces in different units.
        """
        values = np.zeros(dr.shape, dtype=np.float64)
        unit = None
        for k in range(len(dr)):
            if weights_14 is None:
                f = self.force(
                    dr[k], coords_i[k], coords_j[k], atoms_i[k], atoms_j[k], boundary
                )
            else:
                f = self.weighted_force(
                    dr[k],
                    coords_i[k],
                    coords_j[k],
                    atoms_i[k],
                    atoms_j[k],
                    boundary,
                    bool(weights_14[k]),
                )
            if unit is None:
                unit = unit_of(f)
            elif unit_of(f) != unit:
                raise UnitMismatchError(unit, unit_of(f))
            values[k] = ustrip(f)
        return Quantity(values, unit if unit is not None else "")


class SpecificInteraction(ABC):
    """
    Abstract base class for force laws bound to a fixed tuple of atoms.

    Subclasses set ``n_atoms`` to their arity and implement ``force`` taking
    one position per atom followed by the boundary, e.g. a bond implements
    ``force(coord_i, coord_j, boundary)``.
    """

    n_atoms: int

    @abstractmethod
    def force(self, *args) -> SpecificForce:
        """
        Compute the forces on each atom of the interaction.

        Args:
            *args: One position per atom, then the boundary.

        Returns:
            Force tuple whose arity matches ``n_atoms``.
        """
        ...


class GeneralInteraction(ABC):
    """
    Abstract base class for system-wide force laws.

    General interactions compute the full per-atom force array themselves
    and may use the neighbor list.
    """

    @abstractmethod
    def forces(self, system: System, neighbors: NeighborList | None = None) -> Quantity:
        """
        Compute forces on all atoms.

        Args:
            system: System to evaluate.
            neighbors: Optional neighbor list.

        Returns:
            Forces of shape (N, D) tagged with the system's force unit.
        """
        ...
