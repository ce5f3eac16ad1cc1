#!/usr/bin/env python
"""
Quick start example - the simplest way to run a simulation.

This demonstrates the high-level API for users who just want results
without dealing with the internal details.

Usage:
    python examples/quickstart.py
"""

from vmmc import simulate


def main():
    print("=" * 60)
    print("VMMC Quick Start")
    print("=" * 60)

    # 1. Simplest possible simulation - just 1 line!
    print("\n1. Patchy discs (simplest usage):")
    print("-" * 40)
    result = simulate.patchy_discs(n_sweeps=100)
    print(f"   Bonds formed: {result.mean_energy_per_particle < 0}")

    # 2. Customize parameters
    print("\n2. Patchy discs with two patches (chains):")
    print("-" * 40)
    result = simulate.patchy_discs(
        n_particles=100,
        n_patches=2,
        interaction_energy=10.0,
        n_sweeps=100,
    )

    # 3. Isotropic square-well fluid
    print("\n3. Square-well fluid (2D):")
    print("-" * 40)
    result = simulate.square_well_fluid(n_sweeps=100)

    # 4. Three dimensions
    print("\n4. Square-well fluid (3D):")
    print("-" * 40)
    result = simulate.square_well_fluid(
        n_particles=64,
        dimension=3,
        density=0.2,
        n_sweeps=50,
    )
    print(f"   Mean accepted cluster size: {result.mean_cluster_size:.2f}")

    print("\n" + "=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
