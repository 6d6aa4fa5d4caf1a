"""Tests for force backends and the backend dispatcher."""

import threading

import numpy as np
import pytest

from mdforces import forces
from mdforces.errors import MissingNeighborListError, UnitMismatchError
from mdforces.interactions import (
    HarmonicBond,
    InteractionList2Atoms,
    LennardJones,
    PairwiseInteraction,
)
from mdforces.neighborlists import NeighborList
from mdforces.parallel import (
    WORK_GROUP_SIZE,
    CPUBackend,
    ParallelBackend,
    ScatterAddBackend,
    create_backend,
    get_backend,
    partition_range,
    set_default_backend,
)
from mdforces.parallel.backends.scatter_add import ScatterBuffer, work_groups
from mdforces.parallel.dispatcher import default_n_threads
from mdforces.system import Atom, OpenBoundary, System
from mdforces.units import DEFAULT_FORCE_UNITS, Quantity


class LinearSpring(PairwiseInteraction):
    """Force of magnitude k * (1 - r) along the pair displacement."""

    def __init__(self, k, nl_only=False, force_units=DEFAULT_FORCE_UNITS):
        self.k = k
        self.nl_only = nl_only
        self.force_units = force_units

    def force(self, dr, coord_i, coord_j, atom_i, atom_j, boundary):
        r = np.linalg.norm(dr)
        return Quantity(self.k * (1.0 - r) * dr / r, self.force_units)


def spring_system(separation, **kwargs):
    return System(
        atoms=[Atom(index=0), Atom(index=1)],
        coords=[[0.0, 0.0, 0.0], [separation, 0.0, 0.0]],
        boundary=OpenBoundary(),
        pairwise_inters=[LinearSpring(100.0, **kwargs)],
    )


class TestPartitionRange:
    """Tests for work partitioning."""

    @pytest.mark.parametrize("n_items,n_workers", [(10, 3), (7, 7), (3, 5), (0, 2)])
    def test_ranges_cover_items(self, n_items, n_workers):
        """Test that ranges are contiguous and cover every item once."""
        ranges = [partition_range(n_items, n_workers, r) for r in range(n_workers)]

        assert ranges[0][0] == 0
        assert ranges[-1][1] == n_items
        for (_, end), (start, _) in zip(ranges, ranges[1:]):
            assert end == start

        sizes = [end - start for start, end in ranges]
        assert max(sizes) - min(sizes) <= 1

    def test_remainder_goes_to_first_ranks(self):
        """Test partition of 10 items over 3 workers."""
        assert [partition_range(10, 3, r) for r in range(3)] == [(0, 4), (4, 7), (7, 10)]


class TestCPUBackend:
    """Tests for the CPU backend."""

    def test_properties(self):
        """Test CPU backend basic properties."""
        backend = CPUBackend(n_threads=2)

        assert backend.name == "cpu"
        assert backend.n_workers == 2
        assert isinstance(backend, ParallelBackend)

    def test_invalid_threads(self):
        """Test that zero threads are rejected."""
        with pytest.raises(ValueError):
            CPUBackend(n_threads=0)

    def test_returns_raw_array(self):
        """Test that the backend returns an untagged array."""
        fs = CPUBackend().pairwise_specific_forces(spring_system(0.9))

        assert isinstance(fs, np.ndarray)
        np.testing.assert_allclose(fs, [[-10.0, 0.0, 0.0], [10.0, 0.0, 0.0]])

    @pytest.mark.parametrize("n_threads", [2, 3, 8])
    def test_thread_counts_agree(self, mixed_system, n_threads):
        """Test that any thread count matches the single-thread result."""
        system, neighbors = mixed_system
        backend = CPUBackend()

        reference = backend.pairwise_specific_forces(system, neighbors, 1)
        threaded = backend.pairwise_specific_forces(system, neighbors, n_threads)

        np.testing.assert_allclose(
            threaded, reference, rtol=1e-10, atol=1e-10 * np.abs(reference).max()
        )

    def test_more_threads_than_items(self):
        """Test that idle threads contribute nothing."""
        fs = CPUBackend(n_threads=16).pairwise_specific_forces(spring_system(0.9))

        np.testing.assert_allclose(fs, [[-10.0, 0.0, 0.0], [10.0, 0.0, 0.0]])


class TestWorkGroups:
    """Tests for launch grid sizing."""

    def test_default_group_size(self):
        """Test default group size."""
        assert WORK_GROUP_SIZE == 256
        assert work_groups(1000) == (256, 4)

    @pytest.mark.parametrize(
        "n_items,expected", [(0, 0), (1, 1), (256, 1), (257, 2), (512, 2)]
    )
    def test_group_count_rounds_up(self, n_items, expected):
        """Test that groups cover all items."""
        assert work_groups(n_items)[1] == expected


class TestScatterBuffer:
    """Tests for the shared scatter-add buffer."""

    def test_repeated_indices_summed(self):
        """Test that repeated atoms accumulate instead of overwriting."""
        buffer = ScatterBuffer(3, 2)

        buffer.add_forces(np.array([0, 2, 0]), np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]))

        np.testing.assert_array_equal(
            buffer.as_vectors(), [[6.0, 8.0], [0.0, 0.0], [3.0, 4.0]]
        )

    def test_concurrent_adds(self):
        """Test that concurrent updates to the same slots are not lost."""
        buffer = ScatterBuffer(2, 3)
        n_threads, n_adds = 8, 200

        def work():
            for _ in range(n_adds):
                buffer.add_forces(np.array([0, 1]), np.ones((2, 3)))
                buffer.add_virial(1.0)

        threads = [threading.Thread(target=work) for _ in range(n_threads)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        np.testing.assert_array_equal(buffer.as_vectors(), n_threads * n_adds)
        assert buffer.virial[0] == n_threads * n_adds


class TestScatterAddBackend:
    """Tests for the scatter-add backend."""

    def test_properties(self):
        """Test scatter-add backend basic properties."""
        backend = ScatterAddBackend(n_workers=4, group_size=32)

        assert backend.name == "scatter_add"
        assert backend.n_workers == 4
        assert backend.group_size == 32

    def test_default_workers(self):
        """Test that the worker count defaults to at least one."""
        assert ScatterAddBackend().n_workers >= 1

    def test_invalid_group_size(self):
        """Test that empty work groups are rejected."""
        with pytest.raises(ValueError):
            ScatterAddBackend(group_size=0)

    @pytest.mark.parametrize("group_size", [1, 8, 256])
    def test_matches_cpu(self, mixed_system, group_size):
        """Test that both backends agree on a system using every interaction."""
        system, neighbors = mixed_system

        cpu = forces(system, neighbors, backend=CPUBackend())
        scatter = forces(
            system, neighbors, backend=ScatterAddBackend(n_workers=4, group_size=group_size)
        )

        assert scatter.unit == cpu.unit
        np.testing.assert_allclose(
            scatter.value, cpu.value, rtol=1e-5, atol=1e-8 * np.abs(cpu.value).max()
        )

    def test_spring_scenario(self):
        """Test the two-atom spring on the scatter-add backend."""
        fs = forces(spring_system(0.9), backend=ScatterAddBackend(n_workers=2))

        np.testing.assert_allclose(fs.value, [[-10.0, 0.0, 0.0], [10.0, 0.0, 0.0]])

    def test_virial(self):
        """Test the pair virial of the spring scenario."""
        fs, virial = ScatterAddBackend().forces_and_virial(spring_system(0.9))

        assert fs.unit == DEFAULT_FORCE_UNITS
        assert virial == pytest.approx(9.0)

    def test_virial_from_neighbor_list(self):
        """Test that neighbor list pairs contribute to the virial."""
        _, virial = ScatterAddBackend().forces_and_virial(
            spring_system(0.9, nl_only=True), NeighborList.from_pairs([(0, 1)])
        )

        assert virial == pytest.approx(9.0)

    def test_unit_mismatch(self):
        """Test that unit errors from a work group reach the caller."""
        system = spring_system(0.9, force_units="N")

        with pytest.raises(UnitMismatchError):
            forces(system, backend=ScatterAddBackend(n_workers=2))

    def test_missing_neighbor_list(self):
        """Test that a neighbor list is required for sparse interactions."""
        with pytest.raises(MissingNeighborListError):
            forces(spring_system(0.9, nl_only=True), backend=ScatterAddBackend())

    def test_empty_neighbor_list(self):
        """Test that an empty neighbor list gives zero pair forces."""
        fs = forces(
            spring_system(0.9, nl_only=True), NeighborList(), backend=ScatterAddBackend()
        )

        np.testing.assert_array_equal(fs.value, 0.0)

    def test_stale_entries_ignored(self):
        """Test that entries past the live count are never evaluated."""
        system = System(
            atoms=[Atom(index=i, sigma=0.3, epsilon=0.2) for i in range(3)],
            coords=[[0.0, 0.0, 0.0], [0.35, 0.0, 0.0], [0.0, 0.4, 0.0]],
            boundary=OpenBoundary(),
            pairwise_inters=[LennardJones(nl_only=True)],
        )
        stale = NeighborList(n=1, entries=[(0, 1, False), (0, 2, False)])

        scatter = forces(system, stale, backend=ScatterAddBackend(group_size=1))
        cpu = forces(system, NeighborList.from_pairs([(0, 1)]), backend="cpu")

        np.testing.assert_allclose(scatter.value, cpu.value)

    def test_specific_list_entries(self):
        """Test that every specific entry is evaluated across groups."""
        n_atoms = 10
        system = System(
            atoms=[Atom(index=i) for i in range(n_atoms)],
            coords=[[0.2 * i, 0.0, 0.0] for i in range(n_atoms)],
            boundary=OpenBoundary(),
            specific_inter_lists=[
                InteractionList2Atoms(
                    [(i, i + 1) for i in range(n_atoms - 1)],
                    [HarmonicBond(10.0, 0.1)] * (n_atoms - 1),
                )
            ],
        )

        scatter = forces(system, backend=ScatterAddBackend(n_workers=3, group_size=2))
        cpu = forces(system, backend="cpu")

        np.testing.assert_allclose(scatter.value, cpu.value)
        # Interior atoms feel equal and opposite bonds
        np.testing.assert_allclose(scatter.value[1:-1], 0.0, atol=1e-12)
        np.testing.assert_allclose(scatter.value[0], [1.0, 0.0, 0.0])


class TestDispatcher:
    """Tests for backend selection."""

    def test_default_is_cpu(self):
        """Test that the default backend is the CPU backend."""
        backend = get_backend()

        assert backend.name == "cpu"
        assert get_backend() is backend

    def test_get_by_name(self):
        """Test creating backends by name."""
        assert isinstance(get_backend("cpu"), CPUBackend)
        assert isinstance(get_backend("scatter_add", n_workers=2), ScatterAddBackend)

    def test_instance_passthrough(self):
        """Test that backend instances are returned unchanged."""
        backend = ScatterAddBackend(n_workers=2)

        assert get_backend(backend) is backend

    def test_set_default(self):
        """Test replacing the default backend."""
        backend = set_default_backend("scatter_add", n_workers=2)

        assert get_backend() is backend
        assert backend.name == "scatter_add"

    def test_set_default_instance(self):
        """Test setting a backend instance as the default."""
        backend = CPUBackend(n_threads=3)
        set_default_backend(backend)

        assert get_backend() is backend

    def test_unknown_backend(self):
        """Test that unknown names raise."""
        with pytest.raises(ValueError, match="Unknown backend"):
            create_backend("gpu")

    def test_backend_from_environment(self, monkeypatch):
        """Test that the default backend can be chosen by environment."""
        monkeypatch.setenv("MDFORCES_BACKEND", "scatter_add")

        assert get_backend().name == "scatter_add"

    def test_threads_from_environment(self, monkeypatch):
        """Test that the CPU thread count can be set by environment."""
        monkeypatch.setenv("MDFORCES_NUM_THREADS", "4")

        assert default_n_threads() == 4
        assert create_backend("cpu").n_workers == 4

    @pytest.mark.parametrize("value", ["zero", "0", "-2"])
    def test_invalid_threads_from_environment(self, monkeypatch, value):
        """Test that invalid thread counts in the environment raise."""
        monkeypatch.setenv("MDFORCES_NUM_THREADS", value)

        with pytest.raises(ValueError):
            default_n_threads()
