"""Tests for ParticleState class."""

import numpy as np
import pytest

from vmmc.errors import ConfigurationError
from vmmc.system.box import Box
from vmmc.system.state import ParticleState


class TestParticleStateCreation:
    """Test ParticleState creation."""

    def test_basic_creation(self):
        """Test creating a state with all arrays."""
        n_particles = 10
        box = Box.square(5.0)
        rng = np.random.default_rng(0)

        state = ParticleState(
            positions=rng.random((n_particles, 2)) * 5.0,
            orientations=np.tile([0.0, 1.0], (n_particles, 1)),
            box=box,
            is_isotropic=np.zeros(n_particles, dtype=bool),
        )

        assert state.n_particles == n_particles
        assert state.dimension == 2
        assert state.positions.shape == (n_particles, 2)
        assert state.orientations.shape == (n_particles, 2)
        assert state.step == 0

    def test_create_factory(self):
        """Test ParticleState.create factory method."""
        positions = np.array([[1.0, 1.0, 1.0], [2.0, 2.0, 2.0]])
        state = ParticleState.create(positions, Box.cubic(10.0))

        assert np.allclose(state.positions, positions)
        assert np.allclose(state.orientations, [[1.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
        assert not state.is_isotropic.any()

    def test_create_isotropic_flag(self):
        """Test that a single isotropy flag applies to every particle."""
        state = ParticleState.create(np.zeros((4, 2)), Box.square(5.0), is_isotropic=True)
        assert state.is_isotropic.shape == (4,)
        assert state.is_isotropic.all()

    def test_create_per_particle_flags(self):
        """Test per-particle isotropy flags."""
        state = ParticleState.create(
            np.zeros((3, 2)), Box.square(5.0), is_isotropic=[True, False, True]
        )
        assert list(state.is_isotropic) == [True, False, True]

    def test_positions_wrapped(self):
        """Test that positions are wrapped into the box."""
        state = ParticleState.create([[6.0, -1.0]], Box.square(5.0))
        assert np.allclose(state.positions, [[1.0, 4.0]])

    def test_orientations_normalized(self):
        """Test that orientations are normalized."""
        state = ParticleState.create(
            np.zeros((1, 2)), Box.square(5.0), orientations=[[3.0, 4.0]]
        )
        assert np.allclose(state.orientations, [[0.6, 0.8]])


class TestParticleStateValidation:
    """Test ParticleState validation."""

    def test_empty_system(self):
        """Test that a system needs at least one particle."""
        with pytest.raises(ConfigurationError):
            ParticleState.create(np.zeros((0, 2)), Box.square(5.0))

    def test_dimension_mismatch(self):
        """Test that positions must match the box dimension."""
        with pytest.raises(ConfigurationError):
            ParticleState.create(np.zeros((3, 3)), Box.square(5.0))

    def test_orientation_shape(self):
        """Test that orientations must have one row per particle."""
        with pytest.raises(ConfigurationError):
            ParticleState.create(
                np.zeros((3, 2)), Box.square(5.0), orientations=np.ones((2, 2))
            )

    def test_zero_orientation(self):
        """Test that zero orientation vectors are rejected."""
        with pytest.raises(ConfigurationError):
            ParticleState.create(
                np.zeros((1, 2)), Box.square(5.0), orientations=[[0.0, 0.0]]
            )

    def test_isotropic_shape(self):
        """Test that isotropy flags must have one entry per particle."""
        with pytest.raises(ValueError):
            ParticleState.create(
                np.zeros((3, 2)), Box.square(5.0), is_isotropic=[True, False]
            )


class TestParticleStateOperations:
    """Test ParticleState accessors."""

    @pytest.fixture
    def state(self):
        """Create a small two-dimensional state."""
        return ParticleState.create(
            [[1.0, 1.0], [2.0, 3.0]],
            Box.square(5.0),
            orientations=[[0.0, 1.0], [1.0, 0.0]],
            is_isotropic=[False, True],
        )

    def test_particle_view(self, state):
        """Test reading one particle."""
        particle = state.particle(1)
        assert particle.index == 1
        assert np.allclose(particle.position, [2.0, 3.0])
        assert np.allclose(particle.orientation, [1.0, 0.0])
        assert particle.is_isotropic

    def test_particle_view_read_only(self, state):
        """Test that the particle view does not alias the state."""
        particle = state.particle(0)
        with pytest.raises(ValueError):
            particle.position[0] = 3.0
        assert np.allclose(state.positions[0], [1.0, 1.0])

    def test_particle_out_of_range(self, state):
        """Test that bad indices raise IndexError."""
        with pytest.raises(IndexError):
            state.particle(2)
        with pytest.raises(IndexError):
            state.particle(-1)

    def test_copy(self, state):
        """Test that copies are independent."""
        copy = state.copy()
        copy.positions[0] = [4.0, 4.0]
        copy.step = 10
        assert np.allclose(state.positions[0], [1.0, 1.0])
        assert state.step == 0
        assert copy.box is state.box
