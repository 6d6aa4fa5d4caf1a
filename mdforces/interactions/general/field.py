"""Uniform external fields."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import numpy as np
from numpy.typing import ArrayLike

from ...units import Quantity
from ..base import GeneralInteraction

if TYPE_CHECKING:
    from ...neighborlists import NeighborList
    from ...system import System


class ExternalField(GeneralInteraction):
    """
    Uniform field acting on every atom.

    The force on atom i is ``coupling_i * field``, where the coupling is the
    atom's charge (an electric field) or its mass (a gravitational field).
    The field must be given in units such that the product is a force in the
    system's force unit.

    Attributes:
        field: Field vector, shape (D,).
        coupling: Per-atom property the field couples to.
    """

    def __init__(
        self,
        field: ArrayLike,
        coupling: Literal["charge", "mass"] = "charge",
    ) -> None:
        if coupling not in ("charge", "mass"):
            raise ValueError(f"coupling must be 'charge' or 'mass', got {coupling!r}")
        self.field = np.asarray(field, dtype=np.float64)
        self.coupling = coupling

    def forces(self, system: System, neighbors: NeighborList | None = None) -> Quantity:
        if len(self.field) != system.n_dimensions:
            raise ValueError(
                f"field has {len(self.field)} dimensions but system has "
                f"{system.n_dimensions}"
            )
        weights = getattr(system.atom_table, self.coupling)
        return Quantity(weights[:, np.newaxis] * self.field, system.force_units)
