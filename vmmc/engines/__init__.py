"""Virtual-move Monte Carlo engine."""

from .cluster import (
    Cluster,
    ClusterBuilder,
    ClusterResult,
    ClusterStatus,
    FrustratedLink,
    link_weight,
)
from .config import VMMCConfig
from .engine import REJECTION_REASONS, VMMC, MoveStatistics, StepResult
from .moves import Move, MoveType, RandomSource, propose_move
from .reporters import (
    CallbackReporter,
    EnergyReporter,
    Reporter,
    ReporterGroup,
    StateReporter,
    TrajectoryReporter,
    XYZReporter,
)

__all__ = [
    # Engine
    "VMMC",
    "VMMCConfig",
    "MoveStatistics",
    "StepResult",
    "REJECTION_REASONS",
    # Cluster construction
    "Cluster",
    "ClusterBuilder",
    "ClusterResult",
    "ClusterStatus",
    "FrustratedLink",
    "link_weight",
    # Moves
    "Move",
    "MoveType",
    "RandomSource",
    "propose_move",
    # Reporters
    "Reporter",
    "ReporterGroup",
    "StateReporter",
    "TrajectoryReporter",
    "XYZReporter",
    "CallbackReporter",
    "EnergyReporter",
]
