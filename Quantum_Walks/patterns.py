"""Helpers producing sets of lattice vertices to mark."""

from __future__ import annotations

from typing import List

import numpy as np

from .engine.base import Vertex


def perimeter(k: int, x0: int = 0, y0: int = 0) -> List[Vertex]:
    """Return the perimeter of the ``k x k`` square anchored at ``(x0, y0)``.

    Vertices are listed clockwise starting at the anchor, each corner once.
    """

    if k < 1:
        raise ValueError(f"k must be positive, got {k}")
    if k == 1:
        return [Vertex(x0, y0)]
    last = k - 1
    points = [Vertex(x, y0) for x in range(x0, x0 + last)]
    points += [Vertex(x0 + last, y) for y in range(y0, y0 + last)]
    points += [Vertex(x, y0 + last) for x in range(x0 + last, x0, -1)]
    points += [Vertex(x0, y) for y in range(y0 + last, y0, -1)]
    return points


def dashed_perimeter(k: int, x0: int = 0, y0: int = 0) -> List[Vertex]:
    """Every second vertex of :func:`perimeter`, starting with the anchor.

    ``k`` must be even so that the dashes close up around the corners.
    """

    if k % 2 != 0:
        raise ValueError(f"k must be even, got {k}")
    return perimeter(k, x0, y0)[::2]


def rect(
    kx: int,
    ky: int,
    x_step: int = 1,
    y_step: int = 1,
    x0: int = 0,
    y0: int = 0,
) -> List[Vertex]:
    """Return a ``kx x ky`` block of vertices spaced by ``(x_step, y_step)``."""

    if kx < 0 or ky < 0:
        raise ValueError("rectangle sides must be non-negative")
    return [
        Vertex(x0 + i * x_step, y0 + j * y_step) for i in range(kx) for j in range(ky)
    ]


def square(k: int, x0: int = 0, y0: int = 0) -> List[Vertex]:
    """Return the filled ``k x k`` square anchored at ``(x0, y0)``."""
    return rect(k, k, 1, 1, x0, y0)


def random_vertices(
    width: int,
    height: int,
    m: int,
    rng: np.random.Generator | int | None = None,
) -> List[Vertex]:
    """Return ``m`` distinct vertices drawn uniformly from a ``width x height`` lattice.

    ``rng`` may be a :class:`numpy.random.Generator` or a seed.
    """

    total = width * height
    if m < 0 or m > total:
        raise ValueError(f"cannot pick {m} distinct vertices out of {total}")
    if not isinstance(rng, np.random.Generator):
        rng = np.random.default_rng(rng)
    picks = rng.choice(total, size=m, replace=False)
    return [Vertex(int(p) // height, int(p) % height) for p in picks]
