"""Simulation box representation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..errors import ConfigurationError


@dataclass(frozen=True)
class Box:
    """
    Periodic orthorhombic simulation box in two or three dimensions.

    The box spans [0, L_a) along each axis a and is periodic in every
    direction. It is immutable for the lifetime of an engine.

    Attributes:
        lengths: Per-axis box lengths, shape (d,) with d in {2, 3}.
    """

    lengths: NDArray[np.floating]

    def __post_init__(self) -> None:
        """Validate and convert lengths to a float array."""
        lengths = np.asarray(self.lengths, dtype=np.float64)
        if lengths.ndim != 1 or lengths.shape[0] not in (2, 3):
            raise ConfigurationError(
                f"Box must have 2 or 3 lengths, got shape {lengths.shape}"
            )
        if np.any(lengths <= 0):
            raise ConfigurationError(f"Box lengths must be positive, got {lengths}")
        lengths.flags.writeable = False
        # Use object.__setattr__ since dataclass is frozen
        object.__setattr__(self, "lengths", lengths)

    @classmethod
    def orthorhombic(cls, *lengths: float) -> Box:
        """Create a box with the given side lengths (two or three of them)."""
        return cls(np.array(lengths))

    @classmethod
    def square(cls, length: float) -> Box:
        """Create a two-dimensional square box with given side length."""
        return cls.orthorhombic(length, length)

    @classmethod
    def cubic(cls, length: float) -> Box:
        """Create a three-dimensional cubic box with given side length."""
        return cls.orthorhombic(length, length, length)

    @property
    def dimension(self) -> int:
        """Return the number of spatial dimensions."""
        return len(self.lengths)

    @property
    def volume(self) -> float:
        """Return box volume (area in two dimensions)."""
        return float(np.prod(self.lengths))

    def wrap_positions(self, positions: ArrayLike) -> NDArray[np.floating]:
        """
        Wrap positions into the primary box using periodic boundary conditions.

        Args:
            positions: Positions array of shape (d,) or (N, d).

        Returns:
            Wrapped positions with the same shape.
        """
        positions = np.asarray(positions, dtype=np.float64)
        wrapped = positions - self.lengths * np.floor(positions / self.lengths)
        # Rounding can map a tiny negative coordinate onto L itself
        return np.where(wrapped >= self.lengths, 0.0, wrapped)

    def minimum_image(self, r1: ArrayLike, r2: ArrayLike) -> NDArray[np.floating]:
        """
        Compute minimum image displacement vector r2 - r1.

        Args:
            r1: First position(s), shape (d,) or (N, d).
            r2: Second position(s), shape (d,) or (N, d).

        Returns:
            Displacement vector(s) under minimum image convention.
        """
        dr = np.asarray(r2, dtype=np.float64) - np.asarray(r1, dtype=np.float64)
        return dr - self.lengths * np.round(dr / self.lengths)

    def minimum_image_distance(
        self, r1: ArrayLike, r2: ArrayLike
    ) -> float | NDArray[np.floating]:
        """
        Compute minimum image distance between positions.

        Args:
            r1: First position(s), shape (d,) or (N, d).
            r2: Second position(s), shape (d,) or (N, d).

        Returns:
            Distance(s) under minimum image convention.
        """
        dr = self.minimum_image(r1, r2)
        return np.linalg.norm(dr, axis=-1)
