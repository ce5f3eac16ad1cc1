"""
vmmc - Virtual-move Monte Carlo for strongly interacting particles.

Design Principles:
- Collective cluster moves that respect detailed balance
- Physics supplied by pluggable model adapters
- Deterministic + reproducible for a given random source
- Cell lists for O(1) neighbor queries

Quick Start:
    >>> from vmmc import simulate
    >>> result = simulate.patchy_discs(n_particles=100, n_sweeps=50)
    >>> print(f"Acceptance ratio: {result.acceptance_ratio:.3f}")
"""

__version__ = "0.1.0"

# High-level APIs
from . import plotting, simulate
from .engines import VMMC, VMMCConfig
from .errors import ConfigurationError, InteractionOverflow
from .initialise import random_configuration
from .models import OVERLAP, ModelAdapter, PairModel, PatchyDisc, SquareWell
from .neighborlists import CellList

# Core components for advanced users
from .system import Box, Particle, ParticleState

__all__ = [
    "simulate",
    "plotting",
    "VMMC",
    "VMMCConfig",
    "Box",
    "Particle",
    "ParticleState",
    "CellList",
    "ModelAdapter",
    "PairModel",
    "PatchyDisc",
    "SquareWell",
    "OVERLAP",
    "random_configuration",
    "ConfigurationError",
    "InteractionOverflow",
]
