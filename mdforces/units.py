"""
Unit-tagged numeric arrays.

Physical units are carried as an explicit string tag next to the numeric
data, in the same spirit as a LAMMPS-style unit system: quantities in one
system share unit names such as ``"kJ * mol^-1 * nm^-1"`` and arithmetic
refuses to mix values whose tags differ. The tag is not parsed; two units are
equal only if their strings are equal.

Plain numbers and NumPy arrays are treated as unitless (``NO_UNITS``), which
lets systems without units run through the same code paths.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .errors import UnitMismatchError

NO_UNITS = ""

DEFAULT_FORCE_UNITS = "kJ * mol^-1 * nm^-1"
DEFAULT_LENGTH_UNITS = "nm"
DEFAULT_MASS_UNITS = "g * mol^-1"


@dataclass(frozen=True, eq=False)
class Quantity:
    """
    Numeric array with an attached unit tag.

    Attributes:
        value: Numeric data, any shape.
        unit: Unit tag; ``NO_UNITS`` for dimensionless data.
    """

    value: NDArray[np.floating]
    unit: str = NO_UNITS

    # Make NumPy defer to the reflected operators below
    __array_ufunc__ = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", np.asarray(self.value, dtype=np.float64))

    @property
    def shape(self) -> tuple[int, ...]:
        """Return shape of the numeric data."""
        return self.value.shape

    def __len__(self) -> int:
        return len(self.value)

    def __getitem__(self, key: Any) -> Quantity:
        return Quantity(self.value[key], self.unit)

    def __iter__(self):
        for v in self.value:
            yield Quantity(v, self.unit)

    def __repr__(self) -> str:
        if self.unit == NO_UNITS:
            return f"Quantity({self.value!r})"
        return f"Quantity({self.value!r}, {self.unit!r})"

    def _matching_value(self, other: Any) -> NDArray[np.floating]:
        other_unit = unit_of(other)
        if other_unit != self.unit:
            raise UnitMismatchError(self.unit, other_unit)
        return ustrip(other)

    def __add__(self, other: Any) -> Quantity:
        return Quantity(self.value + self._matching_value(other), self.unit)

    def __radd__(self, other: Any) -> Quantity:
        # Allows sum() over quantities, which starts from the integer 0
        if isinstance(other, int) and other == 0:
            return self
        return Quantity(self._matching_value(other) + self.value, self.unit)

    def __sub__(self, other: Any) -> Quantity:
        return Quantity(self.value - self._matching_value(other), self.unit)

    def __rsub__(self, other: Any) -> Quantity:
        return Quantity(self._matching_value(other) - self.value, self.unit)

    def __neg__(self) -> Quantity:
        return Quantity(-self.value, self.unit)

    def __mul__(self, other: Any) -> Quantity:
        if isinstance(other, Quantity):
            raise TypeError("Multiplying two quantities is not supported")
        return Quantity(self.value * np.asarray(other), self.unit)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> Quantity:
        if isinstance(other, Quantity):
            return Quantity(self.value / other.value, divide_units(self.unit, other.unit))
        return Quantity(self.value / np.asarray(other), self.unit)

    def allclose(self, other: Any, rtol: float = 1e-5, atol: float = 1e-8) -> bool:
        """Compare numerically with another value of the same unit."""
        return bool(np.allclose(self.value, self._matching_value(other), rtol=rtol, atol=atol))


def unit_of(x: Any) -> str:
    """Return the unit tag of a value; plain numbers are unitless."""
    if isinstance(x, Quantity):
        return x.unit
    return NO_UNITS


def ustrip(x: Any) -> NDArray[np.floating]:
    """Return the numeric data of a value without its unit tag."""
    if isinstance(x, Quantity):
        return x.value
    return np.asarray(x, dtype=np.float64)


def with_units(value: ArrayLike, unit: str) -> Quantity:
    """Attach a unit tag to numeric data."""
    return Quantity(np.asarray(value, dtype=np.float64), unit)


def divide_units(numerator: str, denominator: str) -> str:
    """Compose the unit tag of a quotient."""
    if denominator == NO_UNITS:
        return numerator
    if numerator == NO_UNITS:
        return f"({denominator})^-1"
    return f"{numerator} / ({denominator})"


def check_force_units(f: Any, force_units: str) -> None:
    """
    Check that a force value carries the declared force unit.

    Raises:
        UnitMismatchError: If the unit differs from ``force_units``.
    """
    found = unit_of(f)
    if found != force_units:
        raise UnitMismatchError(force_units, found)
