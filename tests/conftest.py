"""Shared test doubles and fixtures."""

import numpy as np
import pytest

from vmmc.initialise import cell_list
from vmmc.models import OVERLAP, ModelAdapter, PairModel
from vmmc.system import Box, ParticleState


class ScriptedRandom:
    """Random source returning a fixed sequence of variates."""

    def __init__(self, values):
        self._values = list(values)
        self.n_draws = 0

    def random(self):
        if not self._values:
            raise AssertionError("scripted random source exhausted")
        self.n_draws += 1
        return self._values.pop(0)

    @property
    def remaining(self):
        return len(self._values)


class RigidBondModel(ModelAdapter):
    """
    Particles joined by rigid bonds.

    A bonded pair has zero energy at its committed separation and overlaps
    at any other separation, so every bond links with probability one.
    """

    def __init__(self, state, bonds):
        self.state = state
        self.box = state.box
        self.bonds = {tuple(sorted(bond)) for bond in bonds}
        self.interaction_calls = []
        self.commits = []

    def particle_energy(self, index):
        return 0.0

    def pair_energy(
        self, index1, position1, orientation1, index2, position2, orientation2
    ):
        if tuple(sorted((index1, index2))) not in self.bonds:
            return 0.0
        committed = self.box.minimum_image_distance(
            self.state.positions[index1], self.state.positions[index2]
        )
        current = self.box.minimum_image_distance(position1, position2)
        return 0.0 if np.isclose(current, committed) else OVERLAP

    def interactions(self, index, position, orientation):
        self.interaction_calls.append(index)
        partners = set()
        for bond in self.bonds:
            if index in bond:
                partners.update(bond)
        partners.discard(index)
        return sorted(partners)

    def commit(self, index, position, orientation):
        self.commits.append(index)

    def total_energy(self):
        return 0.0


class HarmonicPairModel(PairModel):
    """Every pair joined by a harmonic spring of stiffness 1 and rest length 1.15."""

    rest_length = 1.15

    def pair_energy(
        self, index1, position1, orientation1, index2, position2, orientation2
    ):
        r = float(self.box.minimum_image_distance(position1, position2))
        return (r - self.rest_length) ** 2


@pytest.fixture
def scripted_random():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def chain_state():
    """Three particles in a row, one diameter apart."""
    return ParticleState.create(
        [[1.0, 1.0], [2.0, 1.0], [3.0, 1.0]], Box.square(10.0), is_isotropic=True
    )


@pytest.fixture
def chain_model(chain_state):
    """Rigid chain 0-1-2."""
    return RigidBondModel(chain_state, [(0, 1), (1, 2)])


@pytest.fixture
def triangle_state():
    """Equilateral triangle of side 1.2."""
    height = 1.2 * np.sqrt(3.0) / 2.0
    return ParticleState.create(
        [[2.0, 5.0], [3.2, 5.0], [2.6, 5.0 + height]], Box.square(10.0)
    )


@pytest.fixture
def triangle_model(triangle_state):
    """Harmonic springs on every edge of the triangle."""
    return HarmonicPairModel(triangle_state, cell_list(triangle_state, 3.0), 3.0)


@pytest.fixture
def pair_state():
    """Two particles 1.2 apart."""
    return ParticleState.create([[2.0, 5.0], [3.2, 5.0]], Box.square(10.0))


@pytest.fixture
def pair_model(pair_state):
    """A single harmonic spring."""
    return HarmonicPairModel(pair_state, cell_list(pair_state, 3.0), 3.0)


@pytest.fixture
def rigid_bonds():
    """Factory for rigidly bonded models."""
    return RigidBondModel
