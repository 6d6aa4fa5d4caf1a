"""Specific (bonded and restraint) interactions."""

from .angles import HarmonicAngle
from .bonds import HarmonicBond
from .restraints import HarmonicPositionRestraint
from .torsions import PeriodicTorsion, dihedral_angle

__all__ = [
    "HarmonicAngle",
    "HarmonicBond",
    "HarmonicPositionRestraint",
    "PeriodicTorsion",
    "dihedral_angle",
]
