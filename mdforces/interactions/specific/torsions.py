"""Periodic torsion interaction."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ...units import DEFAULT_FORCE_UNITS, Quantity
from ..base import SpecificInteraction
from ..specific_forces import SpecificForce4Atoms

if TYPE_CHECKING:
    from ...system import Boundary


def dihedral_angle(
    r_ij: NDArray[np.floating],
    r_kj: NDArray[np.floating],
    r_kl: NDArray[np.floating],
) -> float:
    """
    Signed dihedral angle in radians, IUPAC convention (trans = pi).

    Args:
        r_ij: x_i - x_j.
        r_kj: x_k - x_j.
        r_kl: x_k - x_l.
    """
    m = np.cross(r_ij, r_kj)
    n = np.cross(r_kj, r_kl)
    phi = np.arctan2(np.linalg.norm(np.cross(m, n)), np.dot(m, n))
    return float(-phi if np.dot(r_ij, n) < 0.0 else phi)


class PeriodicTorsion(SpecificInteraction):
    """
    Periodic (proper) torsion made of one or more cosine terms.

    V(phi) = sum_n k_n * (1 + cos(n * phi - phase_n))

    Attributes:
        periodicities: Multiplicity of each term.
        phases: Phase of each term in radians.
        ks: Force constant of each term.
        force_units: Unit attached to computed forces.
    """

    n_atoms = 4

    def __init__(
        self,
        periodicities: Sequence[int],
        phases: Sequence[float],
        ks: Sequence[float],
        force_units: str = DEFAULT_FORCE_UNITS,
    ) -> None:
        self.periodicities = np.asarray(periodicities, dtype=np.float64)
        self.phases = np.asarray(phases, dtype=np.float64)
        self.ks = np.asarray(ks, dtype=np.float64)
        self.force_units = force_units

        n_terms = len(self.periodicities)
        if len(self.phases) != n_terms or len(self.ks) != n_terms:
            raise ValueError(
                f"periodicities, phases and ks must have equal lengths, got "
                f"{n_terms}, {len(self.phases)}, {len(self.ks)}"
            )

    def force(
        self,
        coord_i: NDArray[np.floating],
        coord_j: NDArray[np.floating],
        coord_k: NDArray[np.floating],
        coord_l: NDArray[np.floating],
        boundary: Boundary,
    ) -> SpecificForce4Atoms:
        r_ij = boundary.vector(coord_j, coord_i)
        r_kj = boundary.vector(coord_j, coord_k)
        r_kl = boundary.vector(coord_l, coord_k)

        phi = dihedral_angle(r_ij, r_kj, r_kl)
        ddphi = float(
            np.sum(
                -self.ks
                * self.periodicities
                * np.sin(self.periodicities * phi - self.phases)
            )
        )

        m = np.cross(r_ij, r_kj)
        n = np.cross(r_kj, r_kl)
        m_sq = max(float(np.dot(m, m)), 1e-20)
        n_sq = max(float(np.dot(n, n)), 1e-20)
        r_kj_sq = max(float(np.dot(r_kj, r_kj)), 1e-20)
        r_kj_norm = np.sqrt(r_kj_sq)

        f_i = -ddphi * r_kj_norm / m_sq * m
        f_l = ddphi * r_kj_norm / n_sq * n

        # Distribute onto the middle atoms so that net force and torque vanish
        p = np.dot(r_ij, r_kj) / r_kj_sq
        q = np.dot(r_kl, r_kj) / r_kj_sq
        s = p * f_i - q * f_l
        f_j = -(f_i - s)
        f_k = -(f_l + s)

        return SpecificForce4Atoms(
            Quantity(f_i, self.force_units),
            Quantity(f_j, self.force_units),
            Quantity(f_k, self.force_units),
            Quantity(f_l, self.force_units),
        )
