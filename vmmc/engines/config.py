"""Move-engine configuration."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..errors import ConfigurationError


@dataclass(frozen=True)
class VMMCConfig:
    """
    Trial-move parameters of a VMMC engine.

    The number of particles, the dimension, the box size and the per-particle
    isotropy flags are properties of the ParticleState handed to the engine
    and are not repeated here.

    Attributes:
        max_trial_translation: Largest trial displacement.
        max_trial_rotation: Largest trial rotation angle in radians.
        prob_translate: Probability of proposing a translation rather than
            a rotation.
        reference_radius: Radius of a single particle for the cluster
            mobility correction.
        max_interactions: Largest number of partners a model may report for
            one particle before InteractionOverflow is raised.
        hard_overlap: Whether pair energies can be OVERLAP. An overlapping
            pair always links. When set, an overlap whose link the inverse
            move could never form rejects the move without further draws.
        max_cluster_size: Largest cluster allowed before the move is
            rejected. None means no limit beyond the number of particles.
    """

    max_trial_translation: float = 0.15
    max_trial_rotation: float = 0.2
    prob_translate: float = 0.5
    reference_radius: float = 0.5
    max_interactions: int = 12
    hard_overlap: bool = False
    max_cluster_size: int | None = None

    def __post_init__(self) -> None:
        """Validate parameters."""
        if not self.max_trial_translation >= 0:
            raise ConfigurationError(
                f"max_trial_translation must be >= 0, got {self.max_trial_translation}"
            )
        if not 0 <= self.max_trial_rotation <= math.pi:
            raise ConfigurationError(
                f"max_trial_rotation must be in [0, pi], got {self.max_trial_rotation}"
            )
        if not 0 <= self.prob_translate <= 1:
            raise ConfigurationError(
                f"prob_translate must be in [0, 1], got {self.prob_translate}"
            )
        if not self.reference_radius > 0:
            raise ConfigurationError(
                f"reference_radius must be positive, got {self.reference_radius}"
            )
        if self.max_interactions < 1:
            raise ConfigurationError(
                f"max_interactions must be >= 1, got {self.max_interactions}"
            )
        if self.max_cluster_size is not None and self.max_cluster_size < 1:
            raise ConfigurationError(
                f"max_cluster_size must be >= 1, got {self.max_cluster_size}"
            )
