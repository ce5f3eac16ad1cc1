"""Neighbor index implementations."""

from .base import NeighborIndex
from .cell import CellList

__all__ = ["NeighborIndex", "CellList"]
