"""Tests for boundary classes."""

from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from mdforces.system.boundary import OpenBoundary, RectangularBoundary, TriclinicBoundary


class TestRectangularBoundary:
    """Test periodic orthorhombic boundaries."""

    def test_cubic(self):
        """Test creating a cubic boundary."""
        boundary = RectangularBoundary.cubic(10.0)
        assert boundary.n_dimensions == 3
        np.testing.assert_allclose(boundary.side_lengths, [10.0, 10.0, 10.0])
        assert np.isclose(boundary.volume, 1000.0)

    def test_two_dimensional(self):
        """Test a square boundary."""
        boundary = RectangularBoundary.cubic(4.0, n_dimensions=2)
        assert boundary.n_dimensions == 2
        assert np.isclose(boundary.volume, 16.0)

    def test_invalid_lengths(self):
        """Test that non-positive or infinite sides are rejected."""
        with pytest.raises(ValueError):
            RectangularBoundary([1.0, -1.0, 1.0])
        with pytest.raises(ValueError):
            RectangularBoundary([1.0, np.inf, 1.0])

    def test_minimum_image(self):
        """Test displacement across the periodic boundary."""
        boundary = RectangularBoundary.cubic(10.0)
        c1 = np.array([0.5, 0.0, 0.0])
        c2 = np.array([9.5, 0.0, 0.0])

        dr = boundary.vector(c1, c2)

        # Shortest path crosses the boundary
        np.testing.assert_allclose(dr, [-1.0, 0.0, 0.0])

    def test_minimum_image_batch(self):
        """Test displacements for stacks of positions."""
        boundary = RectangularBoundary.cubic(10.0)
        c1 = np.zeros((2, 3))
        c2 = np.array([[1.0, 0.0, 0.0], [0.0, 8.0, 0.0]])

        dr = boundary.vector(c1, c2)

        np.testing.assert_allclose(dr, [[1.0, 0.0, 0.0], [0.0, -2.0, 0.0]])

    def test_antisymmetry(self):
        """Test that reversing the points negates the displacement."""
        boundary = RectangularBoundary([3.0, 4.0, 5.0])
        c1 = np.array([0.1, 3.9, 2.0])
        c2 = np.array([2.8, 0.2, 4.7])

        np.testing.assert_allclose(boundary.vector(c1, c2), -boundary.vector(c2, c1))

    def test_wrap_coords(self):
        """Test wrapping positions into the box."""
        boundary = RectangularBoundary.cubic(10.0)
        wrapped = boundary.wrap_coords(np.array([[11.0, -1.0, 5.0]]))
        np.testing.assert_allclose(wrapped, [[1.0, 9.0, 5.0]])

    def test_distance(self):
        """Test minimum image distance."""
        boundary = RectangularBoundary.cubic(10.0)
        d = boundary.distance(np.array([0.0, 0.0, 0.0]), np.array([9.0, 0.0, 0.0]))
        assert np.isclose(d, 1.0)

    def test_immutable(self):
        """Test that boundaries are frozen."""
        boundary = RectangularBoundary.cubic(10.0)
        with pytest.raises(FrozenInstanceError):
            boundary.side_lengths = np.ones(3)


class TestTriclinicBoundary:
    """Test triclinic boundaries."""

    def test_volume(self):
        """Test volume from the box matrix."""
        boundary = TriclinicBoundary(
            [[10.0, 0.0, 0.0], [2.0, 10.0, 0.0], [1.0, 1.0, 10.0]]
        )
        assert np.isclose(boundary.volume, 1000.0)

    def test_invalid_shape(self):
        """Test that non-3x3 matrices are rejected."""
        with pytest.raises(ValueError):
            TriclinicBoundary(np.eye(2))

    def test_matches_rectangular_for_diagonal_box(self):
        """Test that a diagonal box behaves like a rectangular one."""
        triclinic = TriclinicBoundary(np.diag([3.0, 4.0, 5.0]))
        rectangular = RectangularBoundary([3.0, 4.0, 5.0])
        c1 = np.array([0.1, 3.9, 2.0])
        c2 = np.array([2.8, 0.2, 4.7])

        np.testing.assert_allclose(
            triclinic.vector(c1, c2), rectangular.vector(c1, c2), atol=1e-12
        )

    def test_lattice_translation_is_zero_displacement(self):
        """Test that points one box vector apart coincide."""
        vectors = np.array([[10.0, 0.0, 0.0], [2.0, 10.0, 0.0], [1.0, 1.0, 10.0]])
        boundary = TriclinicBoundary(vectors)
        c1 = np.array([1.0, 2.0, 3.0])

        dr = boundary.vector(c1, c1 + vectors[1])

        np.testing.assert_allclose(dr, 0.0, atol=1e-12)


class TestOpenBoundary:
    """Test unbounded domains."""

    def test_vector_is_plain_difference(self):
        """Test that no wrapping is applied."""
        boundary = OpenBoundary()
        dr = boundary.vector(np.array([0.0, 0.0, 0.0]), np.array([100.0, -50.0, 1.0]))
        np.testing.assert_allclose(dr, [100.0, -50.0, 1.0])

    def test_dimensions(self):
        """Test configurable dimensionality."""
        assert OpenBoundary().n_dimensions == 3
        assert OpenBoundary(dims=2).n_dimensions == 2
        assert OpenBoundary().volume == float("inf")
