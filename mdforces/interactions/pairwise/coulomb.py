"""Coulomb interaction between point charges."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ...units import DEFAULT_FORCE_UNITS, Quantity
from ..base import PairwiseInteraction

if TYPE_CHECKING:
    from ...system import Atom, AtomTable, Boundary

# kJ mol^-1 nm e^-2
COULOMB_CONSTANT = 138.935458


def coulomb_force_vectors(
    dr: NDArray[np.floating],
    qq: NDArray[np.floating],
    coulomb_const: float,
    cutoff: float | None = None,
) -> NDArray[np.floating]:
    """
    Coulomb forces on the second atom of each pair.

    F = k * q_i * q_j / r^3 * dr

    Args:
        dr: Displacements from i to j, shape (M, D).
        qq: Charge products, shape (M,).
        coulomb_const: Coulomb constant in the system's units.
        cutoff: Distance beyond which the force is zero.
    """
    r2 = np.sum(dr * dr, axis=-1)
    r2_safe = np.maximum(r2, 1e-20)
    force_over_r = coulomb_const * qq / (r2_safe * np.sqrt(r2_safe))

    if cutoff is not None:
        force_over_r = np.where(r2 < cutoff * cutoff, force_over_r, 0.0)

    return force_over_r[..., np.newaxis] * dr


class Coulomb(PairwiseInteraction):
    """
    Coulomb electrostatics with an optional hard cutoff.

    V(r) = k * q_i * q_j / r

    Like charges repel: the force on atom j points along the displacement
    from i to j.

    Attributes:
        cutoff: Distance beyond which the force is zero, or None.
        nl_only: Whether only neighbor list pairs are evaluated.
        weight_special: Scaling applied to 1-4 pairs.
        coulomb_const: Coulomb constant, default in kJ mol^-1 nm e^-2.
        force_units: Unit attached to computed forces.
    """

    def __init__(
        self,
        cutoff: float | None = None,
        nl_only: bool = False,
        weight_special: float = 1.0,
        coulomb_const: float = COULOMB_CONSTANT,
        force_units: str = DEFAULT_FORCE_UNITS,
    ) -> None:
        self.cutoff = cutoff
        self.nl_only = nl_only
        self.weight_special = weight_special
        self.coulomb_const = coulomb_const
        self.force_units = force_units

    def force(
        self,
        dr: NDArray[np.floating],
        coord_i: NDArray[np.floating],
        coord_j: NDArray[np.floating],
        atom_i: Atom,
        atom_j: Atom,
        boundary: Boundary,
    ) -> Quantity:
        f = coulomb_force_vectors(
            np.asarray(dr, dtype=np.float64),
            np.float64(atom_i.charge * atom_j.charge),
            self.coulomb_const,
            self.cutoff,
        )
        return Quantity(f, self.force_units)

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
        f = self.force(dr, coord_i, coord_j, atom_i, atom_j, boundary)
        return f * self.weight_special if weight_14 else f

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
        qq = atoms_i.charge * atoms_j.charge
        if weights_14 is not None:
            qq = qq * np.where(weights_14, self.weight_special, 1.0)
        f = coulomb_force_vectors(dr, qq, self.coulomb_const, self.cutoff)
        return Quantity(f, self.force_units)
