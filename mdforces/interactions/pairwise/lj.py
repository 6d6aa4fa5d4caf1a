"""Lennard-Jones interaction."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ...units import DEFAULT_FORCE_UNITS, Quantity
from ..base import PairwiseInteraction

if TYPE_CHECKING:
    from ...system import Atom, AtomTable, Boundary


def lj_force_vectors(
    dr: NDArray[np.floating],
    sigma: NDArray[np.floating],
    epsilon: NDArray[np.floating],
    cutoff: float | None = None,
) -> NDArray[np.floating]:
    """
    Lennard-Jones forces on the second atom of each pair.

    F = 24 * epsilon * [2*(sigma/r)^12 - (sigma/r)^6] / r^2 * dr

    Args:
        dr: Displacements from i to j, shape (M, D).
        sigma: Mixed size parameters, shape (M,).
        epsilon: Mixed well depths, shape (M,).
        cutoff: Distance beyond which the force is zero.

    Returns:
        Force vectors, shape (M, D).
    """
    r2 = np.sum(dr * dr, axis=-1)
    r2_safe = np.maximum(r2, 1e-20)

    sig_over_r_6 = (sigma * sigma / r2_safe) ** 3
    sig_over_r_12 = sig_over_r_6**2
    force_over_r = 24.0 * epsilon * (2.0 * sig_over_r_12 - sig_over_r_6) / r2_safe

    if cutoff is not None:
        force_over_r = np.where(r2 < cutoff * cutoff, force_over_r, 0.0)

    return force_over_r[..., np.newaxis] * dr


class LennardJones(PairwiseInteraction):
    """
    Lennard-Jones 12-6 potential.

    V(r) = 4 * epsilon * [(sigma/r)^12 - (sigma/r)^6]

    Per-pair parameters come from the atoms using Lorentz-Berthelot
    combining rules.

    Attributes:
        cutoff: Distance beyond which the force is zero, or None.
        nl_only: Whether only neighbor list pairs are evaluated.
        weight_special: Scaling applied to 1-4 pairs.
        force_units: Unit attached to computed forces.
    """

    def __init__(
        self,
        cutoff: float | None = None,
        nl_only: bool = False,
        weight_special: float = 1.0,
        force_units: str = DEFAULT_FORCE_UNITS,
    ) -> None:
        self.cutoff = cutoff
        self.nl_only = nl_only
        self.weight_special = weight_special
        self.force_units = force_units

    @staticmethod
    def mix(
        sigma_i: NDArray[np.floating] | float,
        sigma_j: NDArray[np.floating] | float,
        epsilon_i: NDArray[np.floating] | float,
        epsilon_j: NDArray[np.floating] | float,
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Lorentz-Berthelot combining rules; returns (sigma_ij, epsilon_ij)."""
        sigma_ij = 0.5 * (np.asarray(sigma_i) + np.asarray(sigma_j))
        epsilon_ij = np.sqrt(np.asarray(epsilon_i) * np.asarray(epsilon_j))
        return sigma_ij, epsilon_ij

    def force(
        self,
        dr: NDArray[np.floating],
        coord_i: NDArray[np.floating],
        coord_j: NDArray[np.floating],
        atom_i: Atom,
        atom_j: Atom,
        boundary: Boundary,
    ) -> Quantity:
        sigma, epsilon = self.mix(atom_i.sigma, atom_j.sigma, atom_i.epsilon, atom_j.epsilon)
        f = lj_force_vectors(np.asarray(dr, dtype=np.float64), sigma, epsilon, self.cutoff)
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
        sigma, epsilon = self.mix(
            atoms_i.sigma, atoms_j.sigma, atoms_i.epsilon, atoms_j.epsilon
        )
        f = lj_force_vectors(dr, sigma, epsilon, self.cutoff)
        if weights_14 is not None:
            f = f * np.where(weights_14, self.weight_special, 1.0)[:, np.newaxis]
        return Quantity(f, self.force_units)
