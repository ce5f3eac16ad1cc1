"""Virtual-move cluster construction."""

from __future__ import annotations

import math
from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..errors import InteractionOverflow
from ..models.base import OVERLAP

if TYPE_CHECKING:
    from ..models import ModelAdapter
    from ..system import ParticleState
    from .config import VMMCConfig
    from .moves import Move, RandomSource


class ClusterStatus(Enum):
    """How cluster growth ended."""

    STABLE = "stable"
    FRUSTRATED = "frustrated"
    OVERLAP_DETECTED = "overlap_detected"
    CAP_EXCEEDED = "cap_exceeded"


def link_weight(delta_energy: float) -> float:
    """
    Probability that a virtual move links a pair.

    Whitelam-Geissler link weight, 1 - exp(min(0, -dE)) with dE in units
    of kBT. Pairs whose energy rises under the virtual move link with a
    probability approaching one; pairs whose energy falls never link.
    """
    return 1.0 - math.exp(min(0.0, -delta_energy))


class Cluster:
    """
    Particles under a trial move together with their trial poses.

    Members are kept in the order they joined, the seed first. A particle
    can join only once.
    """

    def __init__(self) -> None:
        self._members: list[int] = []
        self._positions: dict[int, NDArray[np.floating]] = {}
        self._orientations: dict[int, NDArray[np.floating]] = {}

    def add(
        self,
        index: int,
        position: NDArray[np.floating],
        orientation: NDArray[np.floating],
    ) -> None:
        """Add a particle with its trial pose."""
        if index in self._positions:
            raise ValueError(f"Particle {index} is already in the cluster")
        self._members.append(index)
        self._positions[index] = position
        self._orientations[index] = orientation

    @property
    def members(self) -> list[int]:
        """Return member indices in joining order."""
        return list(self._members)

    def trial_position(self, index: int) -> NDArray[np.floating]:
        """Return a member's trial position."""
        return self._positions[index]

    def trial_orientation(self, index: int) -> NDArray[np.floating]:
        """Return a member's trial orientation."""
        return self._orientations[index]

    def __contains__(self, index: object) -> bool:
        return index in self._positions

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[int]:
        return iter(self._members)


@dataclass
class FrustratedLink:
    """
    A pair tested during growth that did not link.

    Attributes:
        mover: Cluster member whose virtual move was tested.
        partner: Particle the mover was tested against.
        energy_before: Pair energy at committed poses.
        delta_energy: Pair energy change under the mover's virtual move.
    """

    mover: int
    partner: int
    energy_before: float
    delta_energy: float


@dataclass
class ClusterResult:
    """
    Outcome of one cluster build.

    Attributes:
        cluster: Members and their trial poses.
        status: How growth ended. Anything other than STABLE is a rejection.
        frustrated_links: Pairs that did not link, keyed by the sorted pair.
        frustrated_energy: Net energetic cost of the unformed links, used
            in the acceptance test. Meaningful only for STABLE results.
    """

    cluster: Cluster
    status: ClusterStatus
    frustrated_links: dict[tuple[int, int], FrustratedLink] = field(
        default_factory=dict
    )
    frustrated_energy: float = 0.0

    @property
    def rejected(self) -> bool:
        """Return True if growth itself rejected the move."""
        return self.status is not ClusterStatus.STABLE


class ClusterBuilder:
    """
    Grows a trial cluster from a seed particle by virtual moves.

    Starting from the seed, every cluster member's virtual move is tested
    against each of its interaction partners. A partner whose pair energy
    would rise is recruited with the Whitelam-Geissler link weight, provided
    the reverse virtual move would have linked them with at least the same
    weight (otherwise the link is frustrated and the move is rejected).
    Recruited partners receive the same rigid move and are tested in turn.

    Growth uses an explicit FIFO queue rather than recursion, so cluster size
    is bounded only by max_cluster_size.

    Attributes:
        state: Committed particle state (read only).
        model: Energy callbacks.
        config: Engine configuration.
    """

    def __init__(
        self,
        state: ParticleState,
        model: ModelAdapter,
        config: VMMCConfig,
    ) -> None:
        """
        Initialize cluster builder.

        Args:
            state: Committed particle state.
            model: Model adapter providing energies and interactions.
            config: Engine configuration.
        """
        self.state = state
        self.model = model
        self.config = config

        self._max_cluster_size = (
            config.max_cluster_size
            if config.max_cluster_size is not None
            else state.n_particles
        )

    def interactions(
        self,
        index: int,
        position: NDArray[np.floating],
        orientation: NDArray[np.floating],
    ) -> list[int]:
        """
        Get a particle's interaction partners, enforcing the interaction cap.

        Raises:
            InteractionOverflow: If the model reports more partners than
                max_interactions.
        """
        partners = self.model.interactions(index, position, orientation)
        if len(partners) > self.config.max_interactions:
            raise InteractionOverflow(
                index, len(partners), self.config.max_interactions
            )
        return partners

    def build(self, seed: int, move: Move, rng: RandomSource) -> ClusterResult:
        """
        Grow a cluster around a seed particle.

        Args:
            seed: Index of the seed particle.
            move: Rigid move applied to every member.
            rng: Source of uniform variates for the link tests.

        Returns:
            ClusterResult with trial poses and the frustrated energy.
        """
        positions = self.state.positions
        orientations = self.state.orientations
        box = self.state.box
        inverse = move.inverse()

        cluster = Cluster()
        frustrated: dict[tuple[int, int], FrustratedLink] = {}

        trial_position, trial_orientation = move.apply(
            positions[seed], orientations[seed], box
        )
        cluster.add(seed, trial_position, trial_orientation)
        queue = deque([seed])

        while queue:
            mover = queue.popleft()
            position = positions[mover]
            orientation = orientations[mover]
            trial_position = cluster.trial_position(mover)
            trial_orientation = cluster.trial_orientation(mover)

            neighbors = set(self.interactions(mover, position, orientation))

            # An isotropic particle turning about its own center changes no
            # pair energy, so nothing can link to it.
            if self.state.is_isotropic[mover] and np.array_equal(
                trial_position, position
            ):
                continue

            neighbors.update(
                self.interactions(mover, trial_position, trial_orientation)
            )
            reverse_position, reverse_orientation = inverse.apply(
                position, orientation, box
            )

            for partner in sorted(neighbors):
                pair = (min(mover, partner), max(mover, partner))
                if partner in cluster or pair in frustrated:
                    continue

                partner_position = positions[partner]
                partner_orientation = orientations[partner]

                energy_before = self.model.pair_energy(
                    mover,
                    position,
                    orientation,
                    partner,
                    partner_position,
                    partner_orientation,
                )
                energy_after = self.model.pair_energy(
                    mover,
                    trial_position,
                    trial_orientation,
                    partner,
                    partner_position,
                    partner_orientation,
                )

                energy_reverse = self.model.pair_energy(
                    mover,
                    reverse_position,
                    reverse_orientation,
                    partner,
                    partner_position,
                    partner_orientation,
                )
                reverse_weight = link_weight(energy_reverse - energy_before)

                # An overlap always links. If the reverse move could never
                # form that link, the move cannot stand.
                if (
                    energy_after == OVERLAP
                    and self.config.hard_overlap
                    and reverse_weight == 0.0
                ):
                    return ClusterResult(
                        cluster, ClusterStatus.OVERLAP_DETECTED, frustrated
                    )

                delta_energy = energy_after - energy_before
                forward_weight = link_weight(delta_energy)

                # Variates are drawn only when the outcome is uncertain
                if forward_weight == 0.0 or rng.random() >= forward_weight:
                    frustrated[pair] = FrustratedLink(
                        mover, partner, energy_before, delta_energy
                    )
                    continue

                # The link formed. Accept it with min(1, reverse / forward)
                # so that the reverse move could rebuild the same cluster.
                if reverse_weight < forward_weight:
                    if (
                        reverse_weight == 0.0
                        or rng.random() >= reverse_weight / forward_weight
                    ):
                        return ClusterResult(
                            cluster, ClusterStatus.FRUSTRATED, frustrated
                        )

                partner_trial = move.apply(partner_position, partner_orientation, box)
                cluster.add(partner, *partner_trial)
                if len(cluster) > self._max_cluster_size:
                    return ClusterResult(
                        cluster, ClusterStatus.CAP_EXCEEDED, frustrated
                    )
                queue.append(partner)

        frustrated_energy = self._frustrated_energy(
            cluster, frustrated.values(), inverse
        )
        return ClusterResult(
            cluster, ClusterStatus.STABLE, frustrated, frustrated_energy
        )

    def _frustrated_energy(
        self,
        cluster: Cluster,
        links: Iterable[FrustratedLink],
        inverse: Move,
    ) -> float:
        """
        Sum the net cost of the links that did not form.

        Each unlinked pair contributes its energy change plus the log ratio
        of the forward and reverse probabilities of not linking. For a pair
        still straddling the cluster boundary the reverse virtual move simply
        restores the committed pair energy. A pair whose partner joined later
        moved rigidly, so its energy is unchanged, but its reverse no-link
        probability comes from the inverse virtual move.
        """
        positions = self.state.positions
        orientations = self.state.orientations

        energy = 0.0
        for link in links:
            log_forward = min(0.0, -link.delta_energy)

            if link.partner in cluster:
                reverse_position, reverse_orientation = inverse.apply(
                    positions[link.mover], orientations[link.mover], self.state.box
                )
                energy_reverse = self.model.pair_energy(
                    link.mover,
                    reverse_position,
                    reverse_orientation,
                    link.partner,
                    positions[link.partner],
                    orientations[link.partner],
                )
                log_reverse = min(0.0, -(energy_reverse - link.energy_before))
                energy += log_forward - log_reverse
            else:
                log_reverse = min(0.0, link.delta_energy)
                energy += link.delta_energy + log_forward - log_reverse

        return energy
