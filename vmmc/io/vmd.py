"""VMD visualization script."""

from __future__ import annotations

import itertools
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..system import Box


def box_edges(box: Box) -> list[tuple[tuple[float, ...], tuple[float, ...]]]:
    """
    Get the edges of the simulation box as pairs of 3D corner points.

    Two-dimensional boxes lie in the z = 0 plane.

    Args:
        box: Simulation box.

    Returns:
        List of (start, end) corners: 4 edges in 2D, 12 edges in 3D.
    """
    lengths = [float(length) for length in box.lengths]
    corners = list(itertools.product(*[(0.0, length) for length in lengths]))

    edges = []
    for start, end in itertools.combinations(corners, 2):
        # Edges join corners differing along exactly one axis
        if sum(a != b for a, b in zip(start, end)) == 1:
            if box.dimension == 2:
                start, end = (*start, 0.0), (*end, 0.0)
            edges.append((start, end))
    return edges


def write_vmd_script(
    box: Box,
    filename: str | Path = "vmd_script.tcl",
    trajectory: str | Path | None = "trajectory.xyz",
    radius: float = 0.5,
) -> Path:
    """
    Write a Tcl script that draws the simulation box in VMD.

    Run with ``vmd -e vmd_script.tcl``.

    Args:
        box: Simulation box.
        filename: Output script path.
        trajectory: XYZ trajectory to load, or None to only draw the box.
        radius: Particle radius for the VDW representation.

    Returns:
        Path of the written script.
    """
    filename = Path(filename)

    lines = []
    if trajectory is not None:
        lines.append(f"mol load xyz {trajectory}")
        lines.append(f"mol modstyle 0 0 VDW {radius} 20")
        lines.append("display projection orthographic")
    lines.append("draw materials off")
    lines.append("draw color white")
    for start, end in box_edges(box):
        start_str = " ".join(f"{x:.6f}" for x in start)
        end_str = " ".join(f"{x:.6f}" for x in end)
        lines.append(f"draw line {{{start_str}}} {{{end_str}}} width 2")
    lines.append("axes location off")

    filename.write_text("\n".join(lines) + "\n")
    return filename
