"""Harmonic bond angle interaction."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ...units import DEFAULT_FORCE_UNITS, Quantity
from ..base import SpecificInteraction
from ..specific_forces import SpecificForce3Atoms

if TYPE_CHECKING:
    from ...system import Boundary


class HarmonicAngle(SpecificInteraction):
    """
    Harmonic bond angle bending about the central (second) atom.

    V(theta) = 0.5 * k * (theta - theta0)^2

    Attributes:
        k: Force constant per radian squared.
        theta0: Equilibrium angle in radians.
        force_units: Unit attached to computed forces.
    """

    n_atoms = 3

    def __init__(
        self, k: float, theta0: float, force_units: str = DEFAULT_FORCE_UNITS
    ) -> None:
        self.k = float(k)
        self.theta0 = float(theta0)
        self.force_units = force_units

    def force(
        self,
        coord_i: NDArray[np.floating],
        coord_j: NDArray[np.floating],
        coord_k: NDArray[np.floating],
        boundary: Boundary,
    ) -> SpecificForce3Atoms:
        # Vectors from central atom j
        r_ji = boundary.vector(coord_j, coord_i)
        r_jk = boundary.vector(coord_j, coord_k)

        d_ji = max(float(np.linalg.norm(r_ji)), 1e-10)
        d_jk = max(float(np.linalg.norm(r_jk)), 1e-10)

        cos_theta = float(np.clip(np.dot(r_ji, r_jk) / (d_ji * d_jk), -1.0, 1.0))
        theta = np.arccos(cos_theta)
        sin_theta = max(float(np.sin(theta)), 1e-10)

        # -dV/dtheta / sin(theta)
        factor = -self.k * (theta - self.theta0) / sin_theta

        r_ji_hat = r_ji / d_ji
        r_jk_hat = r_jk / d_jk

        f_i = factor * (cos_theta * r_ji_hat - r_jk_hat) / d_ji
        f_k = factor * (cos_theta * r_jk_hat - r_ji_hat) / d_jk
        f_j = -(f_i + f_k)

        return SpecificForce3Atoms(
            Quantity(f_i, self.force_units),
            Quantity(f_j, self.force_units),
            Quantity(f_k, self.force_units),
        )
