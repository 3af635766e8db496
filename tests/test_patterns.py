import numpy as np
import pytest

from Quantum_Walks import patterns
from Quantum_Walks.engine.base import Vertex


@pytest.mark.parametrize("k", [2, 3, 6])
def test_perimeter_lists_each_border_vertex_once(k):
    pts = patterns.perimeter(k, 2, 5)
    assert len(pts) == 4 * (k - 1)
    assert len(set(pts)) == len(pts)
    assert pts[0] == Vertex(2, 5)
    for x, y in pts:
        assert x in (2, 2 + k - 1) or y in (5, 5 + k - 1)


def test_perimeter_is_clockwise():
    assert patterns.perimeter(3) == [
        (0, 0), (1, 0), (2, 0), (2, 1), (2, 2), (1, 2), (0, 2), (0, 1),
    ]
    assert patterns.perimeter(1, 4, 4) == [Vertex(4, 4)]
    with pytest.raises(ValueError):
        patterns.perimeter(0)


def test_dashed_perimeter_needs_even_side():
    dashed = patterns.dashed_perimeter(4)
    assert dashed == patterns.perimeter(4)[::2]
    assert len(dashed) == 6
    with pytest.raises(ValueError):
        patterns.dashed_perimeter(5)


def test_rect_and_square():
    block = patterns.rect(2, 3, x_step=2, y_step=3, x0=1, y0=1)
    assert block == [(1, 1), (1, 4), (1, 7), (3, 1), (3, 4), (3, 7)]
    assert len(patterns.square(4, 1, 1)) == 16
    assert patterns.rect(0, 5) == []
    with pytest.raises(ValueError):
        patterns.rect(-1, 2)


def test_random_vertices_distinct_and_reproducible():
    a = patterns.random_vertices(8, 5, 12, rng=3)
    b = patterns.random_vertices(8, 5, 12, rng=np.random.default_rng(3))
    assert a == b
    assert len(set(a)) == 12
    assert all(0 <= v.x < 8 and 0 <= v.y < 5 for v in a)
    assert len(patterns.random_vertices(2, 2, 4, rng=0)) == 4
    with pytest.raises(ValueError):
        patterns.random_vertices(2, 2, 5)
