"""
mdforces - Force and acceleration engine for molecular dynamics.

Combines pairwise, specific (bonded) and general interactions into one
unit-tagged force array, on a sequential CPU backend or a scatter-add
backend running work groups concurrently.

Quick Start:
    >>> import numpy as np
    >>> from mdforces import Atom, LennardJones, OpenBoundary, System, forces
    >>> atoms = [Atom(index=i, sigma=0.3, epsilon=0.2) for i in range(2)]
    >>> system = System(
    ...     atoms=atoms,
    ...     coords=np.array([[0.0, 0.0, 0.0], [0.4, 0.0, 0.0]]),
    ...     boundary=OpenBoundary(),
    ...     pairwise_inters=[LennardJones()],
    ... )
    >>> fs = forces(system)
"""

__version__ = "0.1.0"

from .errors import ForceComputationError, MissingNeighborListError, UnitMismatchError
from .forces import accelerations, forces
from .interactions import (
    Coulomb,
    ExternalField,
    GeneralInteraction,
    HarmonicAngle,
    HarmonicBond,
    HarmonicPositionRestraint,
    InteractionList1Atoms,
    InteractionList2Atoms,
    InteractionList3Atoms,
    InteractionList4Atoms,
    LennardJones,
    PairwiseInteraction,
    PeriodicTorsion,
    SoftSphere,
    SpecificForce1Atoms,
    SpecificForce2Atoms,
    SpecificForce3Atoms,
    SpecificForce4Atoms,
    SpecificInteraction,
)
from .neighborlists import NeighborList
from .parallel import CPUBackend, ScatterAddBackend, get_backend, set_default_backend
from .system import Atom, OpenBoundary, RectangularBoundary, System, TriclinicBoundary
from .units import NO_UNITS, Quantity, ustrip

__all__ = [
    "forces",
    "accelerations",
    "System",
    "Atom",
    "OpenBoundary",
    "RectangularBoundary",
    "TriclinicBoundary",
    "NeighborList",
    "Quantity",
    "NO_UNITS",
    "ustrip",
    "PairwiseInteraction",
    "SpecificInteraction",
    "GeneralInteraction",
    "InteractionList1Atoms",
    "InteractionList2Atoms",
    "InteractionList3Atoms",
    "InteractionList4Atoms",
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
    "CPUBackend",
    "ScatterAddBackend",
    "get_backend",
    "set_default_backend",
    "ForceComputationError",
    "UnitMismatchError",
    "MissingNeighborListError",
]
