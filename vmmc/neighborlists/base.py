"""Base interface for neighbor indices."""

from __future__ import annotations

from abc import ABC, abstractmethod

from numpy.typing import ArrayLike


class NeighborIndex(ABC):
    """
    Abstract base class for spatial neighbor indices.

    A neighbor index answers "which particles might be near this point?"
    with a superset of the true interacting neighbors. Callers filter the
    candidates with an exact interaction test. The index is updated
    incrementally as particles move, one particle at a time.
    """

    @abstractmethod
    def initialise(self, box_size: ArrayLike, minimum_cell_size: float) -> None:
        """
        Partition the box and clear all particles from the index.

        Args:
            box_size: Per-axis periodic box lengths, shape (d,).
            minimum_cell_size: Smallest allowed cell edge, usually the
                interaction cutoff.
        """
        ...

    @abstractmethod
    def build(self, positions: ArrayLike) -> None:
        """
        Insert every particle, replacing any previous contents.

        Args:
            positions: Particle positions, shape (N, d).
        """
        ...

    @abstractmethod
    def relocate(self, index: int, position: ArrayLike) -> None:
        """
        Move a particle to the cell containing a new position.

        Args:
            index: Index of the particle to move.
            position: New committed position, shape (d,).
        """
        ...

    @abstractmethod
    def candidates(self, position: ArrayLike) -> set[int]:
        """
        Get candidate neighbors of a point.

        Args:
            position: Query position, shape (d,).

        Returns:
            Set of particle indices that may lie within one cell of the point.
        """
        ...
