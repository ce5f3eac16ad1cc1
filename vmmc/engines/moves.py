"""Rigid trial moves."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from ..system import Box
    from .config import VMMCConfig


class RandomSource(Protocol):
    """Anything producing uniform variates in [0, 1), e.g. numpy.random.Generator."""

    def random(self) -> float: ...


class MoveType(Enum):
    """Kind of rigid perturbation."""

    TRANSLATION = "translation"
    ROTATION = "rotation"


def random_unit_vector(rng: RandomSource, dimension: int) -> NDArray[np.floating]:
    """
    Draw a unit vector uniformly distributed on the circle or sphere.

    Args:
        rng: Source of uniform variates.
        dimension: 2 or 3.

    Returns:
        Unit vector of shape (dimension,).
    """
    phi = 2.0 * math.pi * rng.random()
    if dimension == 2:
        return np.array([math.cos(phi), math.sin(phi)])

    # Archimedes: z is uniform on [-1, 1] for a uniform point on the sphere
    z = 2.0 * rng.random() - 1.0
    s = math.sqrt(max(0.0, 1.0 - z * z))
    return np.array([s * math.cos(phi), s * math.sin(phi), z])


def rotation_matrix(
    angle: float, axis: NDArray[np.floating] | None = None
) -> NDArray[np.floating]:
    """
    Build a rotation matrix.

    Args:
        angle: Rotation angle in radians.
        axis: Unit rotation axis for a 3D rotation, None for a 2D rotation.

    Returns:
        Rotation matrix of shape (2, 2) or (3, 3).
    """
    c, s = math.cos(angle), math.sin(angle)
    if axis is None:
        return np.array([[c, -s], [s, c]])

    # Rodrigues' formula
    kx, ky, kz = axis
    cross = np.array([[0.0, -kz, ky], [kz, 0.0, -kx], [-ky, kx, 0.0]])
    return c * np.eye(3) + s * cross + (1.0 - c) * np.outer(axis, axis)


@dataclass(frozen=True)
class Move:
    """
    A rigid perturbation applied identically to every cluster member.

    Rotations turn positions about a fixed center (the seed particle's
    position) and turn orientations by the same matrix.

    Attributes:
        move_type: Translation or rotation.
        vector: Displacement for translations, zeros for rotations.
        angle: Rotation angle, 0 for translations.
        axis: Rotation axis in 3D, None otherwise.
        center: Rotation center, None for translations.
        rotation: Rotation matrix, identity for translations.
    """

    move_type: MoveType
    vector: NDArray[np.floating]
    angle: float = 0.0
    axis: NDArray[np.floating] | None = None
    center: NDArray[np.floating] | None = None
    rotation: NDArray[np.floating] | None = None

    @classmethod
    def translation(cls, vector: NDArray[np.floating]) -> Move:
        """Create a translation by a displacement vector."""
        vector = np.asarray(vector, dtype=np.float64)
        return cls(
            move_type=MoveType.TRANSLATION,
            vector=vector,
            rotation=np.eye(len(vector)),
        )

    @classmethod
    def rotation_about(
        cls,
        angle: float,
        center: NDArray[np.floating],
        axis: NDArray[np.floating] | None = None,
    ) -> Move:
        """Create a rotation by angle about center (and axis in 3D)."""
        center = np.asarray(center, dtype=np.float64).copy()
        if axis is not None:
            axis = np.asarray(axis, dtype=np.float64)
        return cls(
            move_type=MoveType.ROTATION,
            vector=np.zeros_like(center),
            angle=float(angle),
            axis=axis,
            center=center,
            rotation=rotation_matrix(angle, axis),
        )

    @property
    def is_translation(self) -> bool:
        """Return True for translations."""
        return self.move_type is MoveType.TRANSLATION

    @property
    def motion_axis(self) -> NDArray[np.floating] | None:
        """
        Return the unit axis along which the cluster's extent is ignored
        by the mobility correction: the translation direction, or the 3D
        rotation axis. None for 2D rotations and null translations.
        """
        if self.is_translation:
            norm = np.linalg.norm(self.vector)
            return self.vector / norm if norm > 0 else None
        return self.axis

    def inverse(self) -> Move:
        """Return the move that undoes this one."""
        if self.is_translation:
            return Move.translation(-self.vector)
        return Move.rotation_about(-self.angle, self.center, self.axis)

    def apply(
        self,
        position: NDArray[np.floating],
        orientation: NDArray[np.floating],
        box: Box,
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        """
        Apply the move to one particle pose.

        Args:
            position: Committed position, shape (d,).
            orientation: Committed orientation, shape (d,).
            box: Simulation box used for wrapping.

        Returns:
            Tuple of (trial position wrapped into the box, trial orientation).
        """
        if self.is_translation:
            return box.wrap_positions(position + self.vector), orientation.copy()

        offset = box.minimum_image(self.center, position)
        new_position = box.wrap_positions(self.center + self.rotation @ offset)
        new_orientation = self.rotation @ orientation
        new_orientation /= np.linalg.norm(new_orientation)
        return new_position, new_orientation


def propose_move(
    rng: RandomSource,
    config: VMMCConfig,
    center: NDArray[np.floating],
) -> Move:
    """
    Draw a random trial move.

    Translations have a uniformly random direction and a magnitude uniform
    on [0, max_trial_translation]. Rotations have an angle uniform on
    [-max_trial_rotation, max_trial_rotation] about the given center, around
    a uniformly random axis in 3D. Every move is as likely as its inverse.

    Args:
        rng: Source of uniform variates.
        config: Engine configuration.
        center: Position of the seed particle, shape (d,).

    Returns:
        The proposed move.
    """
    dimension = len(center)
    if rng.random() < config.prob_translate:
        direction = random_unit_vector(rng, dimension)
        magnitude = config.max_trial_translation * rng.random()
        return Move.translation(magnitude * direction)

    angle = config.max_trial_rotation * (2.0 * rng.random() - 1.0)
    axis = random_unit_vector(rng, 3) if dimension == 3 else None
    return Move.rotation_about(angle, center, axis)
