"""Tests for Box class."""

from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from vmmc.errors import ConfigurationError
from vmmc.system.box import Box


class TestBoxCreation:
    """Test box creation methods."""

    def test_square_box(self):
        """Test creating a square box."""
        box = Box.square(10.0)
        assert np.allclose(box.lengths, [10.0, 10.0])
        assert box.dimension == 2
        assert np.isclose(box.volume, 100.0)

    def test_cubic_box(self):
        """Test creating a cubic box."""
        box = Box.cubic(10.0)
        assert np.allclose(box.lengths, [10.0, 10.0, 10.0])
        assert box.dimension == 3
        assert np.isclose(box.volume, 1000.0)

    def test_orthorhombic_box(self):
        """Test creating an orthorhombic box."""
        box = Box.orthorhombic(10.0, 20.0, 30.0)
        assert np.allclose(box.lengths, [10.0, 20.0, 30.0])
        assert np.isclose(box.volume, 6000.0)

    def test_invalid_dimension(self):
        """Test that only two or three dimensions are accepted."""
        with pytest.raises(ConfigurationError):
            Box(np.array([1.0]))
        with pytest.raises(ConfigurationError):
            Box(np.array([1.0, 2.0, 3.0, 4.0]))

    def test_non_positive_length(self):
        """Test that lengths must be positive."""
        with pytest.raises(ConfigurationError):
            Box.square(0.0)
        with pytest.raises(ValueError):
            Box.orthorhombic(1.0, -2.0)


class TestBoxImmutability:
    """Test that boxes cannot change."""

    def test_frozen(self):
        """Test that attributes cannot be reassigned."""
        box = Box.square(5.0)
        with pytest.raises(FrozenInstanceError):
            box.lengths = np.array([1.0, 1.0])

    def test_lengths_read_only(self):
        """Test that the lengths array cannot be written in place."""
        box = Box.square(5.0)
        with pytest.raises(ValueError):
            box.lengths[0] = 1.0


class TestPeriodicBoundaries:
    """Test periodic boundary condition methods."""

    def test_wrap_positions(self):
        """Test position wrapping."""
        box = Box.square(10.0)
        positions = np.array([[11.0, -1.0], [5.0, 25.0]])
        wrapped = box.wrap_positions(positions)
        assert np.allclose(wrapped, [[1.0, 9.0], [5.0, 5.0]])

    def test_wrap_single_position(self):
        """Test wrapping a single vector keeps its shape."""
        box = Box.cubic(4.0)
        wrapped = box.wrap_positions([4.5, -0.5, 2.0])
        assert wrapped.shape == (3,)
        assert np.allclose(wrapped, [0.5, 3.5, 2.0])

    def test_wrap_tiny_negative(self):
        """Test that wrapped coordinates never equal the box length."""
        box = Box.square(10.0)
        wrapped = box.wrap_positions([-1e-18, 0.0])
        assert np.all(wrapped >= 0.0)
        assert np.all(wrapped < 10.0)

    def test_minimum_image(self):
        """Test minimum image displacement."""
        box = Box.square(10.0)
        dr = box.minimum_image([1.0, 1.0], [9.0, 2.0])
        assert np.allclose(dr, [-2.0, 1.0])

    def test_minimum_image_vectorized(self):
        """Test minimum image against many positions."""
        box = Box.square(10.0)
        others = np.array([[9.0, 1.0], [1.0, 6.5], [0.5, 0.5]])
        dr = box.minimum_image([0.5, 0.5], others)
        assert dr.shape == (3, 2)
        assert np.allclose(dr, [[-1.5, 0.5], [0.5, -4.0], [0.0, 0.0]])

    def test_minimum_image_distance(self):
        """Test minimum image distance."""
        box = Box.cubic(10.0)
        distance = box.minimum_image_distance([0.5, 0.5, 0.5], [9.5, 0.5, 0.5])
        assert np.isclose(distance, 1.0)
