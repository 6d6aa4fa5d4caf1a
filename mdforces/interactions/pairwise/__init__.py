"""Pairwise interactions."""

from .coulomb import COULOMB_CONSTANT, Coulomb
from .lj import LennardJones
from .soft_sphere import SoftSphere

__all__ = ["COULOMB_CONSTANT", "Coulomb", "LennardJones", "SoftSphere"]
