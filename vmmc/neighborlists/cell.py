"""Cell list neighbor index implementation."""

from __future__ import annotations

import itertools

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..errors import ConfigurationError
from .base import NeighborIndex


class CellList(NeighborIndex):
    """
    Cell list (linked cell) neighbor index.

    Divides the periodic box into cells of side >= the minimum cell size.
    Only particles in the same or neighboring cells are considered as
    potential neighbors, so a query touches 3^d cells regardless of the
    number of particles.

    The per-cell neighborhoods are precomputed when the grid is initialised
    so that relocation and queries are O(1) in the number of cells.

    Attributes:
        _box_size: Per-axis box lengths.
        _n_cells: Number of cells along each axis.
        _cell_size: Edge length of the cells along each axis.
        _cells: Set of particle indices held by each cell.
        _neighbor_cells: Linear indices of the 3^d neighborhood of each cell.
        _particle_cell: Current cell of each particle, -1 if not inserted.
    """

    def __init__(self) -> None:
        """Initialize an empty cell list. Call initialise() before use."""
        self._box_size: NDArray[np.floating] | None = None
        self._n_cells: NDArray[np.integer] = np.zeros(0, dtype=np.int64)
        self._cell_size: NDArray[np.floating] = np.zeros(0, dtype=np.float64)
        self._cells: list[set[int]] = []
        self._neighbor_cells: list[tuple[int, ...]] = []
        self._particle_cell: list[int] = []

    @property
    def dimension(self) -> int:
        """Return the dimension of the partitioned box."""
        return len(self._n_cells)

    @property
    def n_cells(self) -> tuple[int, ...]:
        """Return number of cells in each dimension."""
        return tuple(int(n) for n in self._n_cells)

    @property
    def cell_size(self) -> NDArray[np.floating]:
        """Return the cell edge length along each axis."""
        return self._cell_size.copy()

    def __len__(self) -> int:
        """Return the number of particles in the index."""
        return sum(1 for cell in self._particle_cell if cell >= 0)

    def initialise(self, box_size: ArrayLike, minimum_cell_size: float) -> None:
        """
        Partition the box into cells.

        Args:
            box_size: Per-axis box lengths, shape (d,) with d in {2, 3}.
            minimum_cell_size: Smallest allowed cell edge.

        Raises:
            ConfigurationError: If the dimension is not 2 or 3, or the cell
                size is not positive or exceeds half the shortest box edge.
        """
        box_size = np.asarray(box_size, dtype=np.float64)
        if box_size.ndim != 1 or box_size.shape[0] not in (2, 3):
            raise ConfigurationError(
                f"Cell list requires a 2 or 3 dimensional box, got {box_size.shape}"
            )
        if minimum_cell_size <= 0:
            raise ConfigurationError(
                f"Minimum cell size must be positive, got {minimum_cell_size}"
            )
        if minimum_cell_size > 0.5 * box_size.min():
            raise ConfigurationError(
                f"Minimum cell size {minimum_cell_size} exceeds half the "
                f"shortest box edge {box_size.min()}"
            )

        self._box_size = box_size
        self._n_cells = np.floor(box_size / minimum_cell_size).astype(np.int64)
        self._cell_size = box_size / self._n_cells

        total_cells = int(np.prod(self._n_cells))
        self._cells = [set() for _ in range(total_cells)]
        self._particle_cell = []

        # Precompute the periodic 3^d neighborhood of every cell. With only
        # two cells along an axis the -1 and +1 offsets coincide, hence the set.
        offsets = list(itertools.product((-1, 0, 1), repeat=self.dimension))
        self._neighbor_cells = []
        for cell in itertools.product(*(range(n) for n in self._n_cells)):
            neighborhood = {
                self._linear_index(np.add(cell, offset)) for offset in offsets
            }
            self._neighbor_cells.append(tuple(sorted(neighborhood)))

    def _linear_index(self, cell: ArrayLike) -> int:
        """Convert a d-dimensional cell index to a linear index, wrapping."""
        cell = np.mod(cell, self._n_cells)
        return int(np.ravel_multi_index(tuple(cell), tuple(self._n_cells)))

    def _cell_index(self, position: ArrayLike) -> int:
        """
        Get the linear cell index for a position.

        Args:
            position: Position vector, shape (d,).

        Returns:
            Linear index of the cell containing the wrapped position.
        """
        if self._box_size is None:
            raise RuntimeError("Cell list has not been initialised yet")

        position = np.asarray(position, dtype=np.float64)
        wrapped = position - self._box_size * np.floor(position / self._box_size)
        cell = (wrapped / self._cell_size).astype(np.int64)

        # Handle edge cases
        cell = np.clip(cell, 0, self._n_cells - 1)

        return int(np.ravel_multi_index(tuple(cell), tuple(self._n_cells)))

    def build(self, positions: ArrayLike) -> None:
        """
        Assign every particle to its cell.

        Args:
            positions: Particle positions, shape (N, d).
        """
        positions = np.asarray(positions, dtype=np.float64)
        if self._box_size is None:
            raise RuntimeError("Cell list has not been initialised yet")
        if positions.ndim != 2 or positions.shape[1] != self.dimension:
            raise ValueError(
                f"positions shape {positions.shape} incompatible with "
                f"{self.dimension}-dimensional cell list"
            )

        for cell in self._cells:
            cell.clear()
        self._particle_cell = [-1] * len(positions)

        for i, position in enumerate(positions):
            cell = self._cell_index(position)
            self._cells[cell].add(i)
            self._particle_cell[i] = cell

    def insert(self, position: ArrayLike) -> int:
        """
        Append a new particle to the index.

        Args:
            position: Position of the new particle, shape (d,).

        Returns:
            Index assigned to the particle.
        """
        index = len(self._particle_cell)
        cell = self._cell_index(position)
        self._cells[cell].add(index)
        self._particle_cell.append(cell)
        return index

    def relocate(self, index: int, position: ArrayLike) -> None:
        """
        Move a particle to the cell containing its new position.

        Relocating a particle to the cell it already occupies is a no-op,
        so repeated calls with the same arguments are harmless.
        """
        old_cell = self.cell_of(index)
        new_cell = self._cell_index(position)
        if new_cell == old_cell:
            return

        self._cells[old_cell].discard(index)
        self._cells[new_cell].add(index)
        self._particle_cell[index] = new_cell

    def cell_of(self, index: int) -> int:
        """Return the linear index of the cell holding a particle."""
        if not 0 <= index < len(self._particle_cell):
            raise IndexError(f"Particle {index} is not in the cell list")
        return self._particle_cell[index]

    def candidates(self, position: ArrayLike) -> set[int]:
        """Get indices of all particles in the cells around a position."""
        found: set[int] = set()
        for cell in self._neighbor_cells[self._cell_index(position)]:
            found.update(self._cells[cell])
        return found

    def get_neighbors(self, index: int) -> set[int]:
        """Get candidate neighbors of a particle, excluding itself."""
        found: set[int] = set()
        for cell in self._neighbor_cells[self.cell_of(index)]:
            found.update(self._cells[cell])
        found.discard(index)
        return found
