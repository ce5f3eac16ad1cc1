"""Reporter implementations for simulation output."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

import numpy as np

if TYPE_CHECKING:
    from ..io import XYZWriter
    from ..system import ParticleState


class Reporter(ABC):
    """
    Abstract base class for simulation reporters.

    Reporters are called after every sweep in which they are due and
    receive the committed state along with the sweep number, the total
    energy and the move statistics.
    """

    @abstractmethod
    def report(self, state: ParticleState, sweep: int, **kwargs: Any) -> None:
        """
        Generate report for current state.

        Args:
            state: Committed particle state.
            sweep: Number of completed sweeps.
            **kwargs: Additional information ('energy', 'statistics').
        """
        ...

    @property
    @abstractmethod
    def frequency(self) -> int:
        """Return reporting frequency (every N sweeps)."""
        ...

    def should_report(self, sweep: int) -> bool:
        """Check if reporter should run after this sweep."""
        return sweep % self.frequency == 0

    def initialize(self, state: ParticleState) -> None:
        """Initialize reporter (called before simulation)."""
        pass

    def finalize(self, state: ParticleState) -> None:
        """Finalize reporter (called after simulation)."""
        pass


class ReporterGroup:
    """
    Collection of reporters with automatic frequency handling.
    """

    def __init__(self, reporters: list[Reporter] | None = None) -> None:
        """
        Initialize reporter group.

        Args:
            reporters: List of reporters to manage.
        """
        self._reporters: list[Reporter] = reporters if reporters else []

    def __len__(self) -> int:
        return len(self._reporters)

    def add(self, reporter: Reporter) -> None:
        """Add a reporter to the group."""
        self._reporters.append(reporter)

    def remove(self, reporter: Reporter) -> None:
        """Remove a reporter from the group."""
        self._reporters.remove(reporter)

    def due(self, sweep: int) -> bool:
        """Check if any reporter should run after this sweep."""
        return any(reporter.should_report(sweep) for reporter in self._reporters)

    def initialize(self, state: ParticleState) -> None:
        """Initialize all reporters."""
        for reporter in self._reporters:
            reporter.initialize(state)

    def report(self, state: ParticleState, sweep: int, **kwargs: Any) -> None:
        """Run all reporters that should fire after this sweep."""
        for reporter in self._reporters:
            if reporter.should_report(sweep):
                reporter.report(state, sweep, **kwargs)

    def finalize(self, state: ParticleState) -> None:
        """Finalize all reporters."""
        for reporter in self._reporters:
            reporter.finalize(state)


class StateReporter(Reporter):
    """
    Reporter that prints simulation progress to console or file.

    Outputs sweep, trial moves, total energy and acceptance ratio.
    """

    def __init__(
        self,
        frequency: int = 100,
        file: TextIO | None = None,
        separator: str = "\t",
    ) -> None:
        """
        Initialize state reporter.

        Args:
            frequency: Reporting frequency (every N sweeps).
            file: Output file (defaults to stdout).
            separator: Field separator.
        """
        self._frequency = frequency
        self._file = file if file is not None else sys.stdout
        self._separator = separator
        self._header_written = False

    @property
    def frequency(self) -> int:
        return self._frequency

    def initialize(self, state: ParticleState) -> None:
        """Write header."""
        if not self._header_written:
            headers = ["Sweep", "Steps", "Energy", "Acceptance"]
            self._file.write(self._separator.join(headers) + "\n")
            self._header_written = True

    def report(self, state: ParticleState, sweep: int, **kwargs: Any) -> None:
        """
        Report current state.

        Args:
            state: Committed particle state.
            sweep: Number of completed sweeps.
            **kwargs: Should include 'energy' and 'statistics' if available.
        """
        energy = kwargs.get("energy", 0.0)
        statistics = kwargs.get("statistics")
        acceptance = statistics.acceptance_ratio if statistics is not None else 0.0

        values = [
            f"{sweep}",
            f"{state.step}",
            f"{energy:.4f}",
            f"{acceptance:.4f}",
        ]

        self._file.write(self._separator.join(values) + "\n")
        self._file.flush()


class TrajectoryReporter(Reporter):
    """
    Reporter that keeps a trajectory of positions in memory.

    Use XYZReporter to stream frames to disk instead.
    """

    def __init__(
        self,
        frequency: int = 10,
        include_orientations: bool = False,
    ) -> None:
        """
        Initialize trajectory reporter.

        Args:
            frequency: Reporting frequency.
            include_orientations: Also store orientations.
        """
        self._frequency = frequency
        self._include_orientations = include_orientations

        self._positions: list[np.ndarray] = []
        self._orientations: list[np.ndarray] = []
        self._sweeps: list[int] = []

    @property
    def frequency(self) -> int:
        return self._frequency

    def report(self, state: ParticleState, sweep: int, **kwargs: Any) -> None:
        """Store current frame."""
        self._positions.append(state.positions.copy())
        self._sweeps.append(sweep)

        if self._include_orientations:
            self._orientations.append(state.orientations.copy())

    @property
    def n_frames(self) -> int:
        """Return number of stored frames."""
        return len(self._positions)

    @property
    def positions(self) -> np.ndarray:
        """Return positions as (n_frames, n_particles, d) array."""
        return np.array(self._positions)

    @property
    def orientations(self) -> np.ndarray | None:
        """Return orientations if stored."""
        if not self._include_orientations:
            return None
        return np.array(self._orientations)

    @property
    def sweeps(self) -> np.ndarray:
        """Return sweep numbers of the stored frames."""
        return np.array(self._sweeps)

    def clear(self) -> None:
        """Clear stored trajectory."""
        self._positions.clear()
        self._orientations.clear()
        self._sweeps.clear()


class XYZReporter(Reporter):
    """
    Reporter that appends frames to an XYZ trajectory file.
    """

    def __init__(
        self,
        filename: str | Path,
        frequency: int = 10,
        include_orientations: bool = False,
    ) -> None:
        """
        Initialize XYZ reporter.

        Args:
            filename: Output file path, overwritten when the run starts.
            frequency: Reporting frequency.
            include_orientations: Also write orientation vectors.
        """
        self._filename = Path(filename)
        self._frequency = frequency
        self._include_orientations = include_orientations
        self._writer: XYZWriter | None = None

    @property
    def frequency(self) -> int:
        return self._frequency

    def initialize(self, state: ParticleState) -> None:
        """Open the trajectory file."""
        from ..io import XYZWriter

        if self._writer is None:
            self._writer = XYZWriter(
                self._filename, include_orientations=self._include_orientations
            )
            self._writer.open()

    def report(self, state: ParticleState, sweep: int, **kwargs: Any) -> None:
        """Append current frame."""
        if self._writer is None:
            raise RuntimeError("Reporter not initialized.")
        self._writer.write(state, comment=f"sweep {sweep}")

    def finalize(self, state: ParticleState) -> None:
        """Close the trajectory file."""
        if self._writer is not None:
            self._writer.close()
            self._writer = None


class CallbackReporter(Reporter):
    """
    Reporter that calls a user-defined function.

    Allows arbitrary custom reporting logic.
    """

    def __init__(
        self,
        callback: Callable[[ParticleState, int, dict[str, Any]], None],
        frequency: int = 1,
    ) -> None:
        """
        Initialize callback reporter.

        Args:
            callback: Function to call with (state, sweep, kwargs).
            frequency: Reporting frequency.
        """
        self._callback = callback
        self._frequency = frequency

    @property
    def frequency(self) -> int:
        return self._frequency

    def report(self, state: ParticleState, sweep: int, **kwargs: Any) -> None:
        """Call the callback function."""
        self._callback(state, sweep, kwargs)


class EnergyReporter(Reporter):
    """
    Reporter that tracks energy and acceptance over time.
    """

    def __init__(self, frequency: int = 1) -> None:
        """
        Initialize energy reporter.

        Args:
            frequency: Reporting frequency.
        """
        self._frequency = frequency
        self._sweeps: list[int] = []
        self._energy: list[float] = []
        self._acceptance: list[float] = []
        self._cluster_size: list[float] = []

    @property
    def frequency(self) -> int:
        return self._frequency

    def report(self, state: ParticleState, sweep: int, **kwargs: Any) -> None:
        """Record energy and move statistics."""
        statistics = kwargs.get("statistics")

        self._sweeps.append(sweep)
        self._energy.append(kwargs.get("energy", 0.0))
        if statistics is not None:
            self._acceptance.append(statistics.acceptance_ratio)
            self._cluster_size.append(statistics.mean_cluster_size)
        else:
            self._acceptance.append(0.0)
            self._cluster_size.append(0.0)

    @property
    def sweeps(self) -> np.ndarray:
        """Return sweep numbers."""
        return np.array(self._sweeps)

    @property
    def energy(self) -> np.ndarray:
        """Return total energy time series."""
        return np.array(self._energy)

    @property
    def acceptance(self) -> np.ndarray:
        """Return running acceptance ratio time series."""
        return np.array(self._acceptance)

    @property
    def cluster_size(self) -> np.ndarray:
        """Return running mean accepted cluster size time series."""
        return np.array(self._cluster_size)

    def clear(self) -> None:
        """Clear stored data."""
        self._sweeps.clear()
        self._energy.clear()
        self._acceptance.clear()
        self._cluster_size.clear()
