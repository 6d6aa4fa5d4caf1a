"""Interaction interfaces and force laws."""

from .base import GeneralInteraction, PairwiseInteraction, SpecificInteraction
from .general import ExternalField
from .lists import (
    InteractionList,
    InteractionList1Atoms,
    InteractionList2Atoms,
    InteractionList3Atoms,
    InteractionList4Atoms,
)
from .pairwise import Coulomb, LennardJones, SoftSphere
from .specific import (
    HarmonicAngle,
    HarmonicBond,
    HarmonicPositionRestraint,
    PeriodicTorsion,
)
from .specific_forces import (
    SpecificForce,
    SpecificForce1Atoms,
    SpecificForce2Atoms,
    SpecificForce3Atoms,
    SpecificForce4Atoms,
)

__all__ = [
    "PairwiseInteraction",
    "SpecificInteraction",
    "GeneralInteraction",
    "InteractionList",
    "InteractionList1Atoms",
    "InteractionList2Atoms",
    "InteractionList3Atoms",
    "InteractionList4Atoms",
    "SpecificForce",
    "SpecificForce1Atoms",
    "SpecificForce2Atoms",
    "SpecificForce3Atoms",
    "SpecificForce4Atoms",
    "LennardJones",
    "Coulomb",
    "SoftSphere",
    "HarmonicPositionRestraint",
    "HarmonicBond",
    "HarmonicAngle",
    "PeriodicTorsion",
    "ExternalField",
]
