"""I/O layer for trajectories and visualization scripts."""

from .base import TrajectoryReader, TrajectoryWriter
from .formats.xyz import XYZReader, XYZWriter
from .vmd import box_edges, write_vmd_script

__all__ = [
    # Base classes
    "TrajectoryReader",
    "TrajectoryWriter",
    # Formats
    "XYZReader",
    "XYZWriter",
    # Visualization
    "box_edges",
    "write_vmd_script",
]
