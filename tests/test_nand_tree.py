import math

import numpy as np
import pytest

from invariants import checks
from Quantum_Walks.engine import NandTreeWalk
from Quantum_Walks.engine.base import PositionOutOfRangeError


def test_layout_and_initial_state():
    sim = NandTreeWalk(3)
    assert sim.N == 16
    assert sim.leaf_count == 8
    assert sim.leaf_index(0) == 8
    assert sim.leaf_index(7) == 15
    assert sim.get_scalar_product() == 1.0
    assert sim.get_tail_probability() == 1.0
    assert sim.get_tree_probability() == 0.0


@pytest.mark.parametrize("depth", [0, 1, 2, 5, 8])
def test_tail_root_reflection_is_orthogonal(depth):
    a, b = NandTreeWalk(depth).tail_root_coefficients
    m = np.array([[a, b], [b, -a]])
    assert np.allclose(m @ m.T, np.eye(2))


def test_first_step_on_depth_two_tree():
    sim = NandTreeWalk(2)
    a, b = sim.tail_root_coefficients
    assert a == pytest.approx(0.0)
    assert b == pytest.approx(1.0)
    sim.run(1)
    assert sim.get_scalar_product() == pytest.approx(0.0, abs=1e-12)
    assert sim.get_vertex_amplitude(1) == pytest.approx(-1 / 3)
    assert sim.get_vertex_amplitude(2) == pytest.approx(2 / 3)
    assert sim.get_vertex_amplitude(3) == pytest.approx(2 / 3)
    assert sim.get_tree_probability() == pytest.approx(1.0)


@pytest.mark.parametrize("depth", [1, 4, 7])
def test_unitarity_with_marked_leaves(depth):
    sim = NandTreeWalk(depth)
    for leaf in range(0, sim.leaf_count, 3):
        sim.mark_leaf(leaf)
    for _ in range(3 * sim.leaf_count):
        sim.run(1)
        assert checks.unitarity(sim.get_total_probability(), 1e-9)


def test_marked_leaves_change_tail_trajectory():
    plain = NandTreeWalk(6)
    marked = NandTreeWalk(6)
    marked.mark_leaf(5)
    tails_plain, tails_marked = [], []
    for _ in range(2 * int(math.sqrt(plain.leaf_count)) + 4):
        plain.run(1)
        marked.run(1)
        tails_plain.append(plain.get_tail_probability())
        tails_marked.append(marked.get_tail_probability())
    assert not np.allclose(tails_plain, tails_marked)


def test_marking_any_node_and_range_checks():
    sim = NandTreeWalk(2)
    sim.mark_vertex(3)
    sim.mark_leaf(1)
    assert sim.marked_vertices == [3, 5]
    assert sim.get_marked_vertex_probability() == 0.0
    sim.unmark_leaf(1)
    assert not sim.is_vertex_marked(5)
    with pytest.raises(PositionOutOfRangeError):
        sim.mark_leaf(4)
    with pytest.raises(PositionOutOfRangeError):
        sim.mark_vertex(8)
    with pytest.raises(ValueError):
        NandTreeWalk(-1)
