"""VMMC move engine implementation."""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from ..errors import ConfigurationError
from .cluster import Cluster, ClusterBuilder, ClusterStatus
from .config import VMMCConfig
from .moves import Move, RandomSource, propose_move
from .reporters import Reporter, ReporterGroup

if TYPE_CHECKING:
    from ..models import ModelAdapter
    from ..neighborlists import NeighborIndex
    from ..system import ParticleState

# Rejection reasons, in the order the acceptance pipeline can hit them
REJECTION_REASONS = ("overlap", "frustrated", "cluster_cap", "hydrodynamic", "energy")

_STATUS_REASONS = {
    ClusterStatus.OVERLAP_DETECTED: "overlap",
    ClusterStatus.FRUSTRATED: "frustrated",
    ClusterStatus.CAP_EXCEEDED: "cluster_cap",
}


@dataclass
class MoveStatistics:
    """
    Running counters of trial moves.

    Attributes:
        attempts: Number of trial moves.
        accepts: Number of accepted trial moves.
        translations: Number of proposed translations.
        rotations: Number of proposed rotations.
        rejections: Rejected moves keyed by reason.
        accepted_members: Total number of particles moved by accepted moves.
    """

    attempts: int = 0
    accepts: int = 0
    translations: int = 0
    rotations: int = 0
    rejections: dict[str, int] = field(
        default_factory=lambda: dict.fromkeys(REJECTION_REASONS, 0)
    )
    accepted_members: int = 0

    @property
    def rejects(self) -> int:
        """Return number of rejected trial moves."""
        return self.attempts - self.accepts

    @property
    def acceptance_ratio(self) -> float:
        """Return the fraction of accepted trial moves."""
        if self.attempts == 0:
            return 0.0
        return self.accepts / self.attempts

    @property
    def mean_cluster_size(self) -> float:
        """Return the mean size of accepted clusters."""
        if self.accepts == 0:
            return 0.0
        return self.accepted_members / self.accepts


@dataclass
class StepResult:
    """
    Outcome of one trial move.

    Attributes:
        seed: Index of the seed particle.
        move: The proposed rigid move.
        status: How cluster growth ended.
        members: Cluster members in joining order.
        accepted: Whether the move was committed.
        reason: Rejection reason, None if accepted.
        frustrated_energy: Net cost of unformed links.
        hydrodynamic_factor: Cluster mobility factor, 0 if growth rejected.
    """

    seed: int
    move: Move
    status: ClusterStatus
    members: list[int]
    accepted: bool
    reason: str | None = None
    frustrated_energy: float = 0.0
    hydrodynamic_factor: float = 0.0


class VMMC:
    """
    Virtual-move Monte Carlo engine.

    Each trial move picks a seed particle uniformly, draws a rigid
    translation or rotation, grows a cluster of particles that follow the
    seed through virtual moves, and accepts the collective move with a
    probability that satisfies detailed balance. The engine owns no physics:
    energies come from the model adapter.

    The particle state is shared, not copied: the model adapter reads
    committed poses from the same object, and the engine writes into it only
    when a move is accepted.

    Example usage:
        box = Box.square(20.0)
        state = random_configuration(100, box, seed=42)
        cells = CellList()
        cells.initialise(box.lengths, 1.5)
        cells.build(state.positions)
        model = SquareWell(state, cells, interaction_energy=2.0)
        engine = VMMC(state, model, VMMCConfig(max_interactions=20), seed=42)
        engine.add_reporter(StateReporter(frequency=100))
        engine.run(n_sweeps=1000)

    Attributes:
        state: Committed particle state.
        model: Model adapter providing energies.
        config: Trial move parameters.
    """

    def __init__(
        self,
        state: ParticleState,
        model: ModelAdapter,
        config: VMMCConfig | None = None,
        rng: RandomSource | None = None,
        seed: int | None = None,
        neighbor_index: NeighborIndex | None = None,
    ) -> None:
        """
        Initialize VMMC engine.

        Args:
            state: Committed particle state, shared with the model.
            model: Model adapter.
            config: Trial move parameters. Defaults to VMMCConfig().
            rng: Source of uniform variates. Defaults to a numpy Generator.
            seed: Seed for the default generator (ignored if rng is given).
            neighbor_index: Optional index relocated on every commit, for
                callers keeping their own index in step with the state.

        Raises:
            ConfigurationError: If the cluster cap exceeds the number of
                particles or the model's box differs from the state's.
        """
        self.state = state
        self.model = model
        self.config = config if config is not None else VMMCConfig()
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._neighbor_index = neighbor_index

        max_cluster_size = self.config.max_cluster_size
        if max_cluster_size is not None and max_cluster_size > state.n_particles:
            raise ConfigurationError(
                f"max_cluster_size {max_cluster_size} exceeds the number of "
                f"particles {state.n_particles}"
            )
        model_box = getattr(model, "box", None)
        if model_box is not None and not np.array_equal(
            model_box.lengths, state.box.lengths
        ):
            raise ConfigurationError(
                f"Model box {model_box.lengths} does not match state box "
                f"{state.box.lengths}"
            )

        self._builder = ClusterBuilder(state, model, self.config)
        self._statistics = MoveStatistics()
        self._last_result: StepResult | None = None
        self._reporters = ReporterGroup()

        # Tracking
        self._running = False
        self._sweeps = 0
        self._wall_time = 0.0
        self._timed_steps = 0

    @property
    def rng(self) -> RandomSource:
        """Return the random source."""
        return self._rng

    @property
    def statistics(self) -> MoveStatistics:
        """Return move statistics since construction or the last reset."""
        return self._statistics

    @property
    def last_result(self) -> StepResult | None:
        """Return the outcome of the most recent trial move."""
        return self._last_result

    @property
    def sweeps(self) -> int:
        """Return number of sweeps completed by run()."""
        return self._sweeps

    @property
    def energy(self) -> float:
        """Return total energy of the committed configuration."""
        return self.model.total_energy()

    @property
    def performance(self) -> dict[str, float]:
        """Return performance statistics."""
        if self._wall_time == 0:
            return {"steps_per_second": 0.0, "sweeps_per_second": 0.0}

        steps_per_second = self._timed_steps / self._wall_time
        return {
            "steps_per_second": steps_per_second,
            "sweeps_per_second": steps_per_second / self.state.n_particles,
            "wall_time": self._wall_time,
            "total_steps": self._timed_steps,
        }

    def add_reporter(self, reporter: Reporter) -> None:
        """Add a reporter."""
        self._reporters.add(reporter)

    def remove_reporter(self, reporter: Reporter) -> None:
        """Remove a reporter."""
        self._reporters.remove(reporter)

    def reset_statistics(self) -> None:
        """Zero the move statistics, e.g. after equilibration."""
        self._statistics = MoveStatistics()

    def hydrodynamic_factor(self, cluster: Cluster, move: Move) -> float:
        """
        Compute the mobility correction for a cluster move.

        The cluster is treated as a sphere of effective radius
        R = reference_radius + sqrt(<|r_perp|^2>), where r_perp are member
        offsets from the centroid with their component along the motion axis
        removed. Translational mobility scales as 1/R and rotational
        mobility as 1/R^3.

        Args:
            cluster: Cluster built for the move.
            move: The rigid move.

        Returns:
            Factor in (0, 1], exactly 1 for a single particle.
        """
        if len(cluster) == 1:
            return 1.0

        positions = self.state.positions[cluster.members]
        offsets = self.state.box.minimum_image(positions[0], positions)
        offsets -= offsets.mean(axis=0)

        axis = move.motion_axis
        if axis is not None:
            offsets -= np.outer(offsets @ axis, axis)

        radius = self.config.reference_radius + math.sqrt(
            float(np.mean(np.sum(offsets**2, axis=1)))
        )
        ratio = self.config.reference_radius / radius
        return ratio if move.is_translation else ratio**3

    def _attempt(self) -> StepResult:
        """Perform one trial move."""
        n_particles = self.state.n_particles
        seed = min(int(self._rng.random() * n_particles), n_particles - 1)
        move = propose_move(self._rng, self.config, self.state.positions[seed])

        stats = self._statistics
        stats.attempts += 1
        if move.is_translation:
            stats.translations += 1
        else:
            stats.rotations += 1

        built = self._builder.build(seed, move, self._rng)
        result = StepResult(
            seed=seed,
            move=move,
            status=built.status,
            members=built.cluster.members,
            accepted=False,
            frustrated_energy=built.frustrated_energy,
        )

        if built.rejected:
            result.reason = _STATUS_REASONS[built.status]
        else:
            factor = self.hydrodynamic_factor(built.cluster, move)
            result.hydrodynamic_factor = factor

            # Separate draws so each rejection can be attributed
            if factor < 1.0 and self._rng.random() >= factor:
                result.reason = "hydrodynamic"
            elif built.frustrated_energy > 0 and self._rng.random() >= math.exp(
                -built.frustrated_energy
            ):
                result.reason = "energy"
            else:
                result.accepted = True
                self._commit(built.cluster)

        if result.accepted:
            stats.accepts += 1
            stats.accepted_members += len(result.members)
        else:
            stats.rejections[result.reason] += 1

        self.state.step += 1
        self._last_result = result
        return result

    def _commit(self, cluster: Cluster) -> None:
        """Write trial poses into the state and notify the model."""
        for index in cluster:
            self.state.positions[index] = cluster.trial_position(index)
            self.state.orientations[index] = cluster.trial_orientation(index)

        for index in cluster:
            self.model.commit(
                index, self.state.positions[index], self.state.orientations[index]
            )
            if self._neighbor_index is not None:
                self._neighbor_index.relocate(index, self.state.positions[index])

    def step(self, count: int = 1) -> None:
        """
        Perform trial moves.

        Args:
            count: Number of trial moves.

        Raises:
            InteractionOverflow: If a model reports too many interactions.
                The committed state is left as it was before that move.
        """
        for _ in range(count):
            self._attempt()

    def __iadd__(self, count: int) -> VMMC:
        """Perform count trial moves: ``engine += 1000``."""
        self.step(count)
        return self

    def run(
        self,
        n_sweeps: int,
        callback: Callable[[VMMC], bool] | None = None,
    ) -> ParticleState:
        """
        Run the simulation for a number of sweeps.

        A sweep is one trial move per particle on average. Reporters fire
        after each sweep according to their frequency.

        Args:
            n_sweeps: Number of sweeps to run.
            callback: Optional callback called each sweep.
                     Return True to stop simulation early.

        Returns:
            Final particle state.
        """
        self._running = True
        self._reporters.initialize(self.state)

        start_time = time.perf_counter()
        start_step = self.state.step

        try:
            for _ in range(n_sweeps):
                if not self._running:
                    break

                self.step(self.state.n_particles)
                self._sweeps += 1

                if self._reporters.due(self._sweeps):
                    self._reporters.report(
                        self.state,
                        self._sweeps,
                        energy=self.energy,
                        statistics=self._statistics,
                    )

                if callback is not None and callback(self):
                    break
        finally:
            self._wall_time += time.perf_counter() - start_time
            self._timed_steps += self.state.step - start_step
            self._reporters.finalize(self.state)
            self._running = False

        return self.state

    def stop(self) -> None:
        """Signal simulation to stop."""
        self._running = False
