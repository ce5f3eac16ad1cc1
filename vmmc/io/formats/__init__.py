"""Trajectory format implementations."""

from .xyz import XYZReader, XYZWriter

__all__ = [
    "XYZReader",
    "XYZWriter",
]
