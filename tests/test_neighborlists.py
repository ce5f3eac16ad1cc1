"""Tests for neighbor index implementations."""

import numpy as np
import pytest

from vmmc.errors import ConfigurationError
from vmmc.neighborlists import CellList, NeighborIndex
from vmmc.system.box import Box


class TestCellListInitialisation:
    """Test cell grid construction."""

    def test_is_neighbor_index(self):
        """Test that the cell list implements the neighbor index interface."""
        assert isinstance(CellList(), NeighborIndex)

    def test_cell_counts(self):
        """Test number and size of cells."""
        cells = CellList()
        cells.initialise([10.0, 7.5], 1.2)
        assert cells.n_cells == (8, 6)
        assert np.allclose(cells.cell_size, [1.25, 1.25])
        assert cells.dimension == 2

    def test_three_dimensions(self):
        """Test a three-dimensional grid."""
        cells = CellList()
        cells.initialise([6.0, 6.0, 9.0], 2.0)
        assert cells.n_cells == (3, 3, 4)

    def test_cell_size_too_large(self):
        """Test that cells larger than half the box are rejected."""
        cells = CellList()
        with pytest.raises(ConfigurationError):
            cells.initialise([4.0, 10.0], 2.5)

    def test_cell_size_non_positive(self):
        """Test that the cell size must be positive."""
        cells = CellList()
        with pytest.raises(ConfigurationError):
            cells.initialise([10.0, 10.0], 0.0)

    def test_bad_dimension(self):
        """Test that only two or three dimensions are accepted."""
        cells = CellList()
        with pytest.raises(ConfigurationError):
            cells.initialise([10.0], 1.0)
        with pytest.raises(ValueError):
            cells.initialise([10.0, 10.0, 10.0, 10.0], 1.0)

    def test_query_before_initialise(self):
        """Test that using an uninitialised list raises."""
        with pytest.raises(RuntimeError):
            CellList().build(np.zeros((2, 2)))


class TestCellList:
    """Test cell list queries and updates."""

    @pytest.fixture
    def positions(self):
        """Three particles: 0 and 1 are close, 2 is far."""
        return np.array(
            [
                [0.2, 0.2],
                [0.7, 0.2],
                [5.0, 5.0],
            ]
        )

    @pytest.fixture
    def cells(self, positions):
        """Cell list of unit cells in a 10 x 10 box."""
        cells = CellList()
        cells.initialise([10.0, 10.0], 1.0)
        cells.build(positions)
        return cells

    def test_build(self, cells):
        """Test that every particle is assigned a cell."""
        assert len(cells) == 3
        assert cells.cell_of(0) == cells.cell_of(1)
        assert cells.cell_of(0) != cells.cell_of(2)

    def test_build_bad_shape(self, cells):
        """Test that positions must match the grid dimension."""
        with pytest.raises(ValueError):
            cells.build(np.zeros((3, 3)))

    def test_candidates(self, cells):
        """Test candidates around a point."""
        assert cells.candidates([0.5, 0.5]) == {0, 1}
        assert cells.candidates([5.5, 5.5]) == {2}
        assert cells.candidates([3.0, 8.0]) == set()

    def test_candidates_periodic(self, cells):
        """Test that the neighborhood wraps around the box."""
        assert cells.candidates([9.5, 9.5]) == {0, 1}

    def test_get_neighbors_excludes_self(self, cells):
        """Test neighbor lookup by particle."""
        assert cells.get_neighbors(0) == {1}
        assert cells.get_neighbors(2) == set()

    def test_relocate(self, cells):
        """Test moving a particle to a new cell."""
        cells.relocate(2, [0.4, 9.8])
        assert cells.candidates([0.5, 0.5]) == {0, 1, 2}
        assert cells.candidates([5.0, 5.0]) == set()

    def test_relocate_idempotent(self, cells):
        """Test that relocating twice to the same place changes nothing."""
        cells.relocate(2, [3.5, 3.5])
        cell = cells.cell_of(2)
        cells.relocate(2, [3.5, 3.5])
        assert cells.cell_of(2) == cell
        assert len(cells) == 3

    def test_relocate_same_cell(self, cells):
        """Test that a move within a cell keeps the particle in place."""
        cell = cells.cell_of(0)
        cells.relocate(0, [0.9, 0.9])
        assert cells.cell_of(0) == cell

    def test_cell_of_out_of_range(self, cells):
        """Test that unknown particles raise IndexError."""
        with pytest.raises(IndexError):
            cells.cell_of(3)

    def test_insert(self, cells):
        """Test appending a particle."""
        index = cells.insert([5.2, 5.2])
        assert index == 3
        assert len(cells) == 4
        assert cells.candidates([5.0, 5.0]) == {2, 3}


class TestCellListCoverage:
    """Test candidates against brute force."""

    @pytest.mark.parametrize("dimension", [2, 3])
    def test_superset_of_neighbors(self, dimension):
        """Test that candidates include every particle within the cell size."""
        rng = np.random.default_rng(12)
        box = Box.orthorhombic(*([7.0] * dimension))
        positions = rng.random((150, dimension)) * 7.0

        cells = CellList()
        cells.initialise(box.lengths, 1.5)
        cells.build(positions)

        for point in rng.random((30, dimension)) * 7.0:
            distances = box.minimum_image_distance(point, positions)
            within = set(np.flatnonzero(distances < 1.5).tolist())
            assert within <= cells.candidates(point)

    def test_two_cells_per_axis(self):
        """Test that a 2 x 2 grid does not report duplicates."""
        cells = CellList()
        cells.initialise([4.0, 4.0], 2.0)
        cells.build(np.array([[0.5, 0.5], [3.5, 3.5]]))
        assert cells.candidates([0.5, 0.5]) == {0, 1}
