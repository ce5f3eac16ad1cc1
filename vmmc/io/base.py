"""Base classes for trajectory I/O."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..system import ParticleState


class TrajectoryWriter(ABC):
    """
    Abstract base class for trajectory writers.

    Trajectory writers serialize particle states frame by frame. Output is
    for visualization and analysis only; nothing here restores an engine.

    Example:
        with XYZWriter("trajectory.xyz") as writer:
            for _ in range(100):
                engine.run(10)
                writer.write(engine.state)
    """

    def __init__(self, filename: str | Path) -> None:
        """
        Initialize trajectory writer.

        Args:
            filename: Output file path.
        """
        self.filename = Path(filename)
        self._file = None
        self._n_frames = 0

    @abstractmethod
    def write(self, state: ParticleState, **kwargs) -> None:
        """
        Write a single frame.

        Args:
            state: Particle state to write.
            **kwargs: Format-specific options.
        """
        ...

    def open(self) -> None:
        """Open file for writing."""
        self._file = self.filename.open("w")

    def close(self) -> None:
        """Close file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> TrajectoryWriter:
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    @property
    def n_frames(self) -> int:
        """Number of frames written."""
        return self._n_frames


class TrajectoryReader(ABC):
    """
    Abstract base class for trajectory readers.

    Example:
        with XYZReader("trajectory.xyz") as reader:
            for frame in reader:
                analyze(frame["positions"])
    """

    def __init__(self, filename: str | Path) -> None:
        """
        Initialize trajectory reader.

        Args:
            filename: Input file path.
        """
        self.filename = Path(filename)
        self._file = None

    @abstractmethod
    def read_frame(self, index: int) -> dict:
        """
        Read a specific frame.

        Args:
            index: Frame index (0-based).

        Returns:
            Dictionary with frame data (positions, orientations, box, etc.).
        """
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[dict]:
        """Iterate over all frames."""
        ...

    @abstractmethod
    def __len__(self) -> int:
        """Return number of frames."""
        ...

    def open(self) -> None:
        """Open file for reading."""
        self._file = self.filename.open()

    def close(self) -> None:
        """Close file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> TrajectoryReader:
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    @property
    def n_frames(self) -> int:
        """Number of frames in trajectory."""
        return len(self)
