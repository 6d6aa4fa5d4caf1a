"""Shared fixtures for force engine tests."""

import numpy as np
import pytest

from mdforces.interactions import (
    Coulomb,
    ExternalField,
    HarmonicAngle,
    HarmonicBond,
    HarmonicPositionRestraint,
    InteractionList1Atoms,
    InteractionList2Atoms,
    InteractionList3Atoms,
    InteractionList4Atoms,
    LennardJones,
    PeriodicTorsion,
    SoftSphere,
)
from mdforces.neighborlists import NeighborList
from mdforces.parallel.dispatcher import reset_default_backend
from mdforces.system import Atom, RectangularBoundary, System


@pytest.fixture(autouse=True)
def clean_default_backend(monkeypatch):
    """Isolate tests from the environment and the global default backend."""
    monkeypatch.delenv("MDFORCES_BACKEND", raising=False)
    monkeypatch.delenv("MDFORCES_NUM_THREADS", raising=False)
    reset_default_backend()
    yield
    reset_default_backend()


def build_neighbors(coords, boundary, cutoff, bonded_pairs=(), pairs_14=()):
    """All pairs within cutoff, minus bonded pairs, with 1-4 flags."""
    nlist = NeighborList()
    excluded = {tuple(sorted(p)) for p in bonded_pairs}
    flagged = {tuple(sorted(p)) for p in pairs_14}
    n_atoms = len(coords)
    for i in range(n_atoms):
        for j in range(i + 1, n_atoms):
            if (i, j) in excluded:
                continue
            if boundary.distance(coords[i], coords[j]) < cutoff:
                nlist.append(i, j, (i, j) in flagged)
    return nlist


@pytest.fixture
def mixed_system():
    """
    A periodic system using every kind of interaction.

    Returns:
        Tuple of (system, neighbor list).
    """
    rng = np.random.default_rng(42)
    n_atoms = 40
    boundary = RectangularBoundary.cubic(2.0)

    # Random positions at least 0.3 apart
    placed = []
    while len(placed) < n_atoms:
        c = rng.uniform(0.0, 2.0, size=3)
        if all(boundary.distance(c, other) >= 0.3 for other in placed):
            placed.append(c)
    coords = np.array(placed)

    atoms = [
        Atom(
            index=i,
            charge=float(rng.uniform(-0.5, 0.5)),
            mass=float(rng.uniform(1.0, 16.0)),
            sigma=float(rng.uniform(0.25, 0.35)),
            epsilon=float(rng.uniform(0.1, 0.5)),
        )
        for i in range(n_atoms)
    ]

    bonds = [(i, i + 1) for i in range(0, 12)]
    angles = [(i, i + 1, i + 2) for i in range(0, 10)]
    torsions = [(i, i + 1, i + 2, i + 3) for i in range(0, 9)]
    restrained = [(i,) for i in range(20, 25)]

    specific_inter_lists = [
        InteractionList2Atoms(bonds, [HarmonicBond(1000.0, 0.5) for _ in bonds]),
        InteractionList3Atoms(angles, [HarmonicAngle(200.0, 2.0) for _ in angles]),
        InteractionList4Atoms(
            torsions,
            [PeriodicTorsion([1, 3], [0.0, np.pi], [2.0, 0.5]) for _ in torsions],
        ),
        InteractionList1Atoms(
            restrained,
            [HarmonicPositionRestraint(50.0, coords[i]) for (i,) in restrained],
        ),
        # Second bond list on overlapping atoms
        InteractionList2Atoms([(0, 5), (5, 30)], [HarmonicBond(300.0, 0.6)] * 2),
    ]

    system = System(
        atoms=atoms,
        coords=coords,
        boundary=boundary,
        pairwise_inters=[
            SoftSphere(cutoff=0.9),
            LennardJones(cutoff=0.9, nl_only=True, weight_special=0.5),
            Coulomb(cutoff=0.9, nl_only=True, weight_special=0.8333),
        ],
        specific_inter_lists=specific_inter_lists,
        general_inters=[ExternalField([0.0, 0.0, -1.5])],
    )

    pairs_14 = [(i, l) for i, _, _, l in torsions]
    neighbors = build_neighbors(coords, boundary, 0.9, bonded_pairs=bonds, pairs_14=pairs_14)
    return system, neighbors
