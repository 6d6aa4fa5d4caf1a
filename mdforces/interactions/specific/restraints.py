"""Single-atom position restraints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ...units import DEFAULT_FORCE_UNITS, Quantity
from ..base import SpecificInteraction
from ..specific_forces import SpecificForce1Atoms

if TYPE_CHECKING:
    from ...system import Boundary


class HarmonicPositionRestraint(SpecificInteraction):
    """
    Harmonic restraint of one atom to a reference position.

    V(x) = 0.5 * k * |x - x0|^2

    Attributes:
        k: Force constant.
        x0: Reference position, shape (D,).
        force_units: Unit attached to computed forces.
    """

    n_atoms = 1

    def __init__(
        self, k: float, x0: ArrayLike, force_units: str = DEFAULT_FORCE_UNITS
    ) -> None:
        self.k = float(k)
        self.x0 = np.asarray(x0, dtype=np.float64)
        self.force_units = force_units

    def force(
        self, coord_i: NDArray[np.floating], boundary: Boundary
    ) -> SpecificForce1Atoms:
        dr = boundary.vector(self.x0, coord_i)
        return SpecificForce1Atoms(Quantity(-self.k * dr, self.force_units))
