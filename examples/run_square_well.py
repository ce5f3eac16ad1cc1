#!/usr/bin/env python
"""
Example: Square-well fluid with reporters.

This script demonstrates how to:
1. Build a three-dimensional square-well system
2. Attach reporters to the engine
3. Equilibrate, reset the move statistics, then run production
4. Plot the energy series (requires matplotlib)

Usage:
    python examples/run_square_well.py
"""

from vmmc import plotting
from vmmc.engines import VMMC, EnergyReporter, StateReporter, VMMCConfig
from vmmc.initialise import box_length_for_density, cell_list, random_configuration
from vmmc.models import SquareWell
from vmmc.system import Box


def main():
    n_particles = 125
    density = 0.15
    interaction_energy = 2.5
    interaction_range = 1.5

    box = Box.cubic(box_length_for_density(n_particles, density, dimension=3))
    state = random_configuration(n_particles, box, seed=7, is_isotropic=True)
    cells = cell_list(state, interaction_range)
    model = SquareWell(
        state,
        cells,
        interaction_energy=interaction_energy,
        interaction_range=interaction_range,
    )
    engine = VMMC(state, model, VMMCConfig(max_interactions=60), seed=7)

    print(f"Square-well fluid: N={n_particles}, box={box.lengths[0]:.3f}")

    # Equilibration
    print("Equilibrating (100 sweeps)...", end=" ", flush=True)
    engine.run(100)
    engine.reset_statistics()
    print("done")

    # Production
    energies = EnergyReporter(frequency=5)
    engine.add_reporter(energies)
    engine.add_reporter(StateReporter(frequency=50))
    engine.run(500)

    stats = engine.statistics
    print("\nRejections by reason:")
    for reason, count in stats.rejections.items():
        print(f"  {reason:>12}: {count}")
    print(f"Performance: {engine.performance['sweeps_per_second']:.1f} sweeps/s")

    if plotting.HAS_MATPLOTLIB:
        import matplotlib.pyplot as plt

        plt.plot(energies.sweeps, energies.energy / n_particles)
        plt.xlabel("Sweeps")
        plt.ylabel("Energy per particle (kBT)")
        plotting.save("square_well_energy.png")


if __name__ == "__main__":
    main()
