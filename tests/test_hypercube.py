import math

import pytest

from invariants import checks
from Quantum_Walks.engine import HypercubeWalk
from Quantum_Walks.engine.base import PositionOutOfRangeError
from tests.reference_walk import ReferenceWalk, hypercube_neighbours


def test_single_dimension_scenario():
    sim = HypercubeWalk(1)
    assert sim.N == 2
    assert sim.n == 1
    assert sim.get_vertex_amplitude(0, 0) == pytest.approx(1 / math.sqrt(2))
    assert sim.get_vertex_amplitude(1, 0) == pytest.approx(0.70710678)
    sim.mark_vertex(0)
    sim.run(1)
    assert sim.T == 1
    assert sim.get_vertex_amplitude(0, 0) == pytest.approx(1 / math.sqrt(2))
    assert sim.get_vertex_amplitude(1, 0) == pytest.approx(-1 / math.sqrt(2))
    assert sim.get_scalar_product() == pytest.approx(0.0, abs=1e-12)
    assert sim.get_vertex_probability(0) == pytest.approx(0.5)


def test_shift_flips_one_bit():
    sim = HypercubeWalk(3)
    sim._state[:] = 0.0
    sim._state[5, 1] = 1.0
    sim._shift()
    assert sim.get_vertex_amplitude(7, 1) == 1.0
    assert sim.get_total_probability() == 1.0


@pytest.mark.parametrize("weight", [0.0, 0.5])
def test_fixed_point_and_unitarity(weight):
    free = HypercubeWalk(6, self_loop_weight=weight)
    free.run(15)
    assert checks.fixed_point(free.get_scalar_product(), 1e-9)

    sim = HypercubeWalk(6, coin="akr", self_loop_weight=weight)
    sim.mark_vertices([0, 17, 63])
    for _ in range(20):
        sim.run(1)
        assert checks.unitarity(sim.get_total_probability(), 1e-9)


def test_zero_weight_matches_reference_walk():
    sim = HypercubeWalk(5)
    sim.mark_vertex(9)
    ref = ReferenceWalk(range(32), hypercube_neighbours(5))
    ref.marked.add(9)
    for _ in range(15):
        sim.run(1)
        ref.run(1)
        assert sim.get_vertex_probability(9) == pytest.approx(
            ref.vertex_probability(9), abs=1e-9
        )
        assert sim.get_scalar_product() == pytest.approx(ref.scalar_product(), abs=1e-9)


def test_search_amplifies_marked_vertex():
    sim = HypercubeWalk(8, coin="akr")
    sim.mark_vertex(0)
    best = 0.0
    for _ in range(60):
        sim.run(1)
        best = max(best, sim.get_marked_vertex_probability())
    assert best > 0.3


def test_invalid_arguments():
    with pytest.raises(ValueError):
        HypercubeWalk(0)
    sim = HypercubeWalk(2)
    with pytest.raises(PositionOutOfRangeError):
        sim.mark_vertex(4)
    with pytest.raises(IndexError):
        sim.get_vertex_amplitude(0, 3)
    assert sim.get_vertex_amplitude(0, 2) == 0.0
