"""Harmonic bond interaction."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ...units import DEFAULT_FORCE_UNITS, Quantity
from ..base import SpecificInteraction
from ..specific_forces import SpecificForce2Atoms

if TYPE_CHECKING:
    from ...system import Boundary


class HarmonicBond(SpecificInteraction):
    """
    Harmonic bond stretching.

    V(r) = 0.5 * k * (r - r0)^2

    Attributes:
        k: Spring constant.
        r0: Equilibrium bond length.
        force_units: Unit attached to computed forces.
    """

    n_atoms = 2

    def __init__(
        self, k: float, r0: float, force_units: str = DEFAULT_FORCE_UNITS
    ) -> None:
        self.k = float(k)
        self.r0 = float(r0)
        self.force_units = force_units

    def force(
        self,
        coord_i: NDArray[np.floating],
        coord_j: NDArray[np.floating],
        boundary: Boundary,
    ) -> SpecificForce2Atoms:
        dr = boundary.vector(coord_i, coord_j)
        r = max(float(np.linalg.norm(dr)), 1e-10)

        # Force on j from i: -k * (r - r0) * (r_j - r_i) / r
        f_j = -self.k * (r - self.r0) * dr / r

        return SpecificForce2Atoms(
            Quantity(-f_j, self.force_units), Quantity(f_j, self.force_units)
        )
