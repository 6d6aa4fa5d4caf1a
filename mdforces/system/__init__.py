"""System description consumed by the force engine."""

from .atoms import Atom, AtomTable
from .boundary import Boundary, OpenBoundary, RectangularBoundary, TriclinicBoundary
from .system import System

__all__ = [
    "Atom",
    "AtomTable",
    "Boundary",
    "OpenBoundary",
    "RectangularBoundary",
    "TriclinicBoundary",
    "System",
]
