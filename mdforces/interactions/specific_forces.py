"""Force tuples returned by specific interactions."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any


class SpecificForce:
    """
    Forces on the atoms of one specific interaction.

    Tuples of the same arity add elementwise, so contributions from several
    interactions acting on the same atoms can be combined before they are
    applied.
    """

    n_atoms: int

    @property
    def components(self) -> tuple[Any, ...]:
        """Return the per-atom force vectors in interaction order."""
        return tuple(getattr(self, f.name) for f in fields(self))

    def __iter__(self):
        return iter(self.components)

    def __len__(self) -> int:
        return self.n_atoms

    def __add__(self, other: SpecificForce) -> SpecificForce:
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(*(a + b for a, b in zip(self.components, other.components)))


@dataclass(frozen=True, eq=False)
class SpecificForce1Atoms(SpecificForce):
    """Force on one atom arising from an interaction such as a position restraint."""

    f1: Any

    n_atoms = 1


@dataclass(frozen=True, eq=False)
class SpecificForce2Atoms(SpecificForce):
    """Forces on two atoms arising from an interaction such as a bond potential."""

    f1: Any
    f2: Any

    n_atoms = 2


@dataclass(frozen=True, eq=False)
class SpecificForce3Atoms(SpecificForce):
    """Forces on three atoms arising from an interaction such as a bond angle potential."""

    f1: Any
    f2: Any
    f3: Any

    n_atoms = 3


@dataclass(frozen=True, eq=False)
class SpecificForce4Atoms(SpecificForce):
    """Forces on four atoms arising from an interaction such as a torsion potential."""

    f1: Any
    f2: Any
    f3: Any
    f4: Any

    n_atoms = 4
