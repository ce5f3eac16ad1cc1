#!/usr/bin/env python
"""
Example: Self-assembly of patchy discs with virtual-move Monte Carlo.

This script demonstrates how to:
1. Create a random configuration of hard discs in a periodic box
2. Set up a cell list and the patchy disc model
3. Configure the VMMC engine
4. Advance the simulation with `vmmc += n_moves`
5. Write an XYZ trajectory and a VMD script to view it

Units:
- Length: particle diameter
- Energy: kBT

Usage:
    python examples/run_patchy_discs.py
    vmd -e vmd_script.tcl
"""

from vmmc.engines import VMMC, VMMCConfig
from vmmc.initialise import box_length_for_density, cell_list, random_configuration
from vmmc.io import XYZWriter, write_vmd_script
from vmmc.models import PatchyDisc
from vmmc.system import Box


def main():
    # Simulation parameters
    n_particles = 1000  # number of particles
    interaction_energy = 8.0  # bond energy (in units of kBT)
    patch_range = 0.1  # patch diameter (in units of particle diameter)
    density = 0.2  # area fraction
    n_patches = 3  # patches per disc
    n_blocks = 1000  # number of reports
    sweeps_per_block = 10  # sweeps between reports

    box = Box.square(box_length_for_density(n_particles, density, dimension=2))
    write_vmd_script(box, "vmd_script.tcl", trajectory="trajectory.xyz")

    state = random_configuration(n_particles, box, seed=42)
    cells = cell_list(state, 1.0 + patch_range)
    model = PatchyDisc(
        state,
        cells,
        n_patches=n_patches,
        interaction_energy=interaction_energy,
        patch_range=patch_range,
    )

    config = VMMCConfig(
        max_trial_translation=0.15,
        max_trial_rotation=0.2,
        prob_translate=0.5,
        reference_radius=0.5,
        max_interactions=12,
    )
    vmmc = VMMC(state, model, config, seed=42)

    with XYZWriter("trajectory.xyz", include_orientations=True) as writer:
        for block in range(n_blocks):
            vmmc += sweeps_per_block * n_particles

            writer.write(state)

            sweeps = (block + 1) * sweeps_per_block
            energy = vmmc.energy / n_particles
            print(f"sweeps = {sweeps:9.4e}, energy = {energy:5.4f}")

    stats = vmmc.statistics
    print(f"\nAcceptance ratio: {stats.acceptance_ratio:.3f}")
    print(f"Mean accepted cluster size: {stats.mean_cluster_size:.3f}")
    print("\nComplete!")


if __name__ == "__main__":
    main()
