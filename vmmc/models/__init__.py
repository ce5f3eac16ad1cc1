"""Model adapters: the energy callbacks consumed by the engine."""

from .base import OVERLAP, ModelAdapter, PairModel
from .patchy_disc import PatchyDisc
from .square_well import SquareWell

__all__ = ["OVERLAP", "ModelAdapter", "PairModel", "PatchyDisc", "SquareWell"]
