"""System state and box management."""

from .box import Box
from .state import Particle, ParticleState

__all__ = ["Box", "Particle", "ParticleState"]
