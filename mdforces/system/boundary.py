"""Simulation boundaries and minimum-image displacements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray


class Boundary(ABC):
    """
    Abstract base class for simulation boundaries.

    A boundary defines the displacement between two points, which is the
    only geometric operation the force engine needs.
    """

    @property
    @abstractmethod
    def n_dimensions(self) -> int:
        """Return the number of spatial dimensions."""
        ...

    @abstractmethod
    def vector(
        self, c1: NDArray[np.floating], c2: NDArray[np.floating]
    ) -> NDArray[np.floating]:
        """
        Compute the displacement c2 - c1 under the boundary convention.

        Args:
            c1: First position(s), shape (D,) or (N, D).
            c2: Second position(s), shape (D,) or (N, D).

        Returns:
            Displacement vector(s) pointing from c1 to c2.
        """
        ...

    @abstractmethod
    def wrap_coords(self, coords: NDArray[np.floating]) -> NDArray[np.floating]:
        """Map positions back into the primary cell."""
        ...

    def distance(
        self, c1: NDArray[np.floating], c2: NDArray[np.floating]
    ) -> float | NDArray[np.floating]:
        """Compute the minimum image distance between positions."""
        return np.linalg.norm(self.vector(c1, c2), axis=-1)


@dataclass(frozen=True)
class RectangularBoundary(Boundary):
    """
    Periodic orthorhombic boundary in any number of dimensions.

    Attributes:
        side_lengths: Box side lengths, shape (D,).
    """

    side_lengths: NDArray[np.floating]

    def __post_init__(self) -> None:
        """Validate and convert side lengths."""
        side_lengths = np.atleast_1d(np.asarray(self.side_lengths, dtype=np.float64))
        if side_lengths.ndim != 1:
            raise ValueError(
                f"Side lengths must be one-dimensional, got shape {side_lengths.shape}"
            )
        if not np.all(np.isfinite(side_lengths)) or np.any(side_lengths <= 0):
            raise ValueError(
                f"Side lengths must be finite and positive, got {side_lengths}; "
                "use OpenBoundary for an unbounded domain"
            )
        object.__setattr__(self, "side_lengths", side_lengths)

    @classmethod
    def cubic(cls, length: float, n_dimensions: int = 3) -> RectangularBoundary:
        """Create a cubic (or square) boundary with given side length."""
        return cls(np.full(n_dimensions, length, dtype=np.float64))

    @property
    def n_dimensions(self) -> int:
        return len(self.side_lengths)

    @property
    def volume(self) -> float:
        """Return box volume (area in 2D)."""
        return float(np.prod(self.side_lengths))

    def vector(
        self, c1: NDArray[np.floating], c2: NDArray[np.floating]
    ) -> NDArray[np.floating]:
        dr = np.asarray(c2) - np.asarray(c1)
        return dr - self.side_lengths * np.round(dr / self.side_lengths)

    def wrap_coords(self, coords: NDArray[np.floating]) -> NDArray[np.floating]:
        coords = np.asarray(coords)
        return coords - self.side_lengths * np.floor(coords / self.side_lengths)


@dataclass(frozen=True)
class TriclinicBoundary(Boundary):
    """
    Periodic triclinic boundary in three dimensions.

    Attributes:
        vectors: 3x3 array where rows are box vectors [a, b, c].
    """

    vectors: NDArray[np.floating]

    def __post_init__(self) -> None:
        """Validate vectors and cache the inverse matrix."""
        vectors = np.asarray(self.vectors, dtype=np.float64)
        if vectors.shape != (3, 3):
            raise ValueError(f"Box vectors must be (3, 3), got {vectors.shape}")
        object.__setattr__(self, "vectors", vectors)
        object.__setattr__(self, "_inv_vectors", np.linalg.inv(vectors))

    @property
    def n_dimensions(self) -> int:
        return 3

    @property
    def volume(self) -> float:
        """Return box volume."""
        return float(np.abs(np.linalg.det(self.vectors)))

    def vector(
        self, c1: NDArray[np.floating], c2: NDArray[np.floating]
    ) -> NDArray[np.floating]:
        dr = np.asarray(c2) - np.asarray(c1)
        fractional = dr @ self._inv_vectors
        fractional = fractional - np.round(fractional)
        return fractional @ self.vectors

    def wrap_coords(self, coords: NDArray[np.floating]) -> NDArray[np.floating]:
        fractional = np.asarray(coords) @ self._inv_vectors
        fractional = fractional - np.floor(fractional)
        return fractional @ self.vectors


@dataclass(frozen=True)
class OpenBoundary(Boundary):
    """
    Unbounded domain; displacements are plain coordinate differences.

    Attributes:
        dims: Number of spatial dimensions.
    """

    dims: int = 3

    @property
    def n_dimensions(self) -> int:
        return self.dims

    @property
    def volume(self) -> float:
        return float("inf")

    def vector(
        self, c1: NDArray[np.floating], c2: NDArray[np.floating]
    ) -> NDArray[np.floating]:
        return np.asarray(c2, dtype=np.float64) - np.asarray(c1, dtype=np.float64)

    def wrap_coords(self, coords: ArrayLike) -> NDArray[np.floating]:
        return np.asarray(coords, dtype=np.float64)
