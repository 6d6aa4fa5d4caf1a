"""Purely repulsive soft-sphere interaction."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ...units import DEFAULT_FORCE_UNITS, Quantity
from ..base import PairwiseInteraction
from .lj import LennardJones

if TYPE_CHECKING:
    from ...system import Atom, AtomTable, Boundary


class SoftSphere(PairwiseInteraction):
    """
    Soft-sphere repulsion.

    V(r) = 4 * epsilon * (sigma/r)^12, so F = 48 * epsilon * (sigma/r)^12 / r^2 * dr.
    Parameters are mixed like Lennard-Jones. 1-4 pairs are not scaled.
    """

    def __init__(
        self,
        cutoff: float | None = None,
        nl_only: bool = False,
        force_units: str = DEFAULT_FORCE_UNITS,
    ) -> None:
        self.cutoff = cutoff
        self.nl_only = nl_only
        self.force_units = force_units

    def _force_vectors(self, dr, sigma, epsilon):
        r2 = np.sum(dr * dr, axis=-1)
        r2_safe = np.maximum(r2, 1e-20)
        sig_over_r_12 = (sigma * sigma / r2_safe) ** 6
        force_over_r = 48.0 * epsilon * sig_over_r_12 / r2_safe
        if self.cutoff is not None:
            force_over_r = np.where(r2 < self.cutoff**2, force_over_r, 0.0)
        return force_over_r[..., np.newaxis] * dr

    def force(
        self,
        dr: NDArray[np.floating],
        coord_i: NDArray[np.floating],
        coord_j: NDArray[np.floating],
        atom_i: Atom,
        atom_j: Atom,
        boundary: Boundary,
    ) -> Quantity:
        sigma, epsilon = LennardJones.mix(
            atom_i.sigma, atom_j.sigma, atom_i.epsilon, atom_j.epsilon
        )
        return Quantity(
            self._force_vectors(np.asarray(dr, dtype=np.float64), sigma, epsilon),
            self.force_units,
        )

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
        sigma, epsilon = LennardJones.mix(
            atoms_i.sigma, atoms_j.sigma, atoms_i.epsilon, atoms_j.epsilon
        )
        return Quantity(self._force_vectors(dr, sigma, epsilon), self.force_units)
