#!/usr/bin/env python
"""
Quick start example - forces and accelerations for a small molecule.

This demonstrates building a system with pairwise, bonded and external
interactions and evaluating it on both backends.

Usage:
    python examples/quickstart.py
"""

import numpy as np

from mdforces import Atom, RectangularBoundary, System, accelerations, forces
from mdforces.interactions import (
    Coulomb,
    ExternalField,
    HarmonicAngle,
    HarmonicBond,
    InteractionList2Atoms,
    InteractionList3Atoms,
    LennardJones,
)
from mdforces.neighborlists import NeighborList
from mdforces.parallel import ScatterAddBackend


def main():
    print("=" * 60)
    print("Force Engine Quick Start")
    print("=" * 60)

    # A water-like triatomic and a free ion in a 3 nm box
    atoms = [
        Atom(index=0, charge=-0.8, mass=16.0, sigma=0.315, epsilon=0.636),
        Atom(index=1, charge=0.4, mass=1.008),
        Atom(index=2, charge=0.4, mass=1.008),
        Atom(index=3, charge=1.0, mass=22.99, sigma=0.333, epsilon=0.012),
    ]
    coords = np.array(
        [
            [1.00, 1.00, 1.00],
            [1.10, 1.00, 1.00],
            [0.97, 1.09, 1.00],
            [1.40, 1.20, 1.10],
        ]
    )

    system = System(
        atoms=atoms,
        coords=coords,
        boundary=RectangularBoundary.cubic(3.0),
        pairwise_inters=[
            LennardJones(cutoff=1.2, nl_only=True),
            Coulomb(cutoff=1.2, nl_only=True),
        ],
        specific_inter_lists=[
            InteractionList2Atoms(
                [(0, 1), (0, 2)], [HarmonicBond(k=345000.0, r0=0.1)] * 2
            ),
            InteractionList3Atoms([(1, 0, 2)], [HarmonicAngle(k=383.0, theta0=1.91)]),
        ],
        general_inters=[ExternalField([0.0, 0.0, 0.5])],
    )

    # Bonded pairs are excluded from the neighbor list
    neighbors = NeighborList.from_pairs([(1, 2), (0, 3), (1, 3), (2, 3)])

    print("\n1. Forces (CPU backend):")
    print("-" * 40)
    fs = forces(system, neighbors)
    print(f"   unit: {fs.unit}")
    print(np.array2string(fs.value, precision=3))

    print("\n2. Forces (scatter-add backend):")
    print("-" * 40)
    fs_scatter = forces(system, neighbors, backend=ScatterAddBackend(n_workers=2))
    print(f"   agree with CPU: {fs_scatter.allclose(fs, rtol=1e-8)}")

    print("\n3. Accelerations:")
    print("-" * 40)
    acc = accelerations(system, neighbors)
    print(f"   unit: {acc.unit}")
    print(np.array2string(acc.value, precision=3))

    print("\n" + "=" * 60)
    print("Done.")
    print("=" * 60)


if __name__ == "__main__":
    main()
