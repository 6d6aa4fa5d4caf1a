"""Exceptions raised during force computation."""

from __future__ import annotations


class ForceComputationError(Exception):
    """Base class for errors that abort a force computation."""


class UnitMismatchError(ForceComputationError, ValueError):
    """
    A force value does not carry the system's declared force unit.

    Attributes:
        expected: Declared force unit of the system.
        found: Unit attached to the offending value.
    """

    def __init__(self, expected: str, found: str) -> None:
        self.expected = expected
        self.found = found
        super().__init__(
            f"System force units are {expected!r} but encountered force units {found!r}"
        )


class MissingNeighborListError(ForceComputationError, RuntimeError):
    """A neighbor-list-only interaction is registered but no list was given."""

    def __init__(self) -> None:
        super().__init__(
            "An interaction uses the neighbor list but neighbors is None"
        )
