"""XYZ trajectory format implementation."""

from __future__ import annotations

import re
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from ..base import TrajectoryReader, TrajectoryWriter

if TYPE_CHECKING:
    from ...system import ParticleState


class XYZWriter(TrajectoryWriter):
    """
    XYZ format trajectory writer.

    XYZ is a simple text format:
        N
        comment line
        element x y z
        element x y z
        ...

    Two-dimensional systems are written with z = 0 so that standard viewers
    such as VMD can read them. The box lengths are stored in the comment
    line as Box="Lx Ly [Lz]". Orientation vectors, padded the same way,
    can be appended as three extra columns.
    """

    def __init__(
        self,
        filename: str | Path,
        elements: list[str] | None = None,
        precision: int = 8,
        include_orientations: bool = False,
    ) -> None:
        """
        Initialize XYZ writer.

        Args:
            filename: Output file path.
            elements: Element symbols for each particle. If None, uses "X".
            precision: Decimal places for coordinates.
            include_orientations: Append orientation columns.
        """
        super().__init__(filename)
        self.elements = elements
        self.precision = precision
        self.include_orientations = include_orientations

    def write(self, state: ParticleState, comment: str = "", **kwargs) -> None:
        """
        Write a single frame in XYZ format.

        Args:
            state: Particle state to write.
            comment: Free text appended to the comment line.
        """
        if self._file is None:
            raise RuntimeError("File not open. Use context manager or call open().")

        n_particles = state.n_particles
        elements = self.elements if self.elements is not None else ["X"] * n_particles

        columns = [_pad(state.positions)]
        if self.include_orientations:
            columns.append(_pad(state.orientations))
        data = np.hstack(columns)

        box_str = " ".join(f"{length:.6f}" for length in state.box.lengths)
        if not comment:
            comment = f"Frame {self._n_frames}"

        self._file.write(f"{n_particles}\n")
        self._file.write(f'Box="{box_str}" {comment}\n')

        fmt = " ".join([f"{{:.{self.precision}f}}"] * data.shape[1])
        for i in range(n_particles):
            self._file.write(f"{elements[i]} {fmt.format(*data[i])}\n")

        self._n_frames += 1


def _pad(vectors: np.ndarray) -> np.ndarray:
    """Pad two-dimensional vectors with a zero z component."""
    if vectors.shape[1] == 3:
        return vectors
    return np.hstack([vectors, np.zeros((len(vectors), 1))])


class XYZReader(TrajectoryReader):
    """
    XYZ format trajectory reader.

    Reads files written by XYZWriter as well as plain XYZ files. When the
    comment line carries a two-dimensional Box, the padded z components are
    dropped.
    """

    def __init__(self, filename: str | Path) -> None:
        """
        Initialize XYZ reader.

        Args:
            filename: Input file path.
        """
        super().__init__(filename)
        self._frame_offsets: list[int] = []

    def open(self) -> None:
        """Open file and index frame positions."""
        super().open()
        self._index_frames()

    def _index_frames(self) -> None:
        """Build index of frame positions in file."""
        self._frame_offsets = []

        if self._file is None:
            return

        self._file.seek(0)
        while True:
            offset = self._file.tell()
            line = self._file.readline()

            if not line:
                break

            try:
                n_particles = int(line.strip())
            except ValueError:
                break

            self._frame_offsets.append(offset)

            # Skip comment and particle lines
            self._file.readline()
            for _ in range(n_particles):
                self._file.readline()

    def read_frame(self, index: int) -> dict:
        """
        Read a specific frame.

        Args:
            index: Frame index (0-based).

        Returns:
            Dictionary with 'positions', 'elements', 'comment', 'n_particles'
            and, when present, 'box' and 'orientations'.
        """
        if self._file is None:
            raise RuntimeError("File not open.")

        if index < 0 or index >= len(self._frame_offsets):
            raise IndexError(f"Frame index {index} out of range")

        self._file.seek(self._frame_offsets[index])

        n_particles = int(self._file.readline().strip())
        comment = self._file.readline().strip()

        box = None
        match = re.search(r'Box="([^"]+)"', comment)
        if match:
            box = np.array([float(x) for x in match.group(1).split()])
        dimension = len(box) if box is not None else 3

        elements = []
        rows = []
        for _ in range(n_particles):
            parts = self._file.readline().split()
            elements.append(parts[0])
            rows.append([float(x) for x in parts[1:]])
        data = np.array(rows, dtype=np.float64).reshape(n_particles, -1)

        result = {
            "positions": data[:, :dimension],
            "elements": elements,
            "comment": comment,
            "n_particles": n_particles,
        }

        if box is not None:
            result["box"] = box
        if data.shape[1] >= 6:
            result["orientations"] = data[:, 3 : 3 + dimension]

        return result

    def __iter__(self) -> Iterator[dict]:
        """Iterate over all frames."""
        for i in range(len(self)):
            yield self.read_frame(i)

    def __len__(self) -> int:
        """Return number of frames."""
        return len(self._frame_offsets)

    def __getitem__(self, index: int) -> dict:
        """Get frame by index."""
        return self.read_frame(index)
