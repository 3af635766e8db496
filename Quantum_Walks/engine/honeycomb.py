"""Coined and lackadaisical quantum walk on the honeycomb torus.

A honeycomb lattice is a "brick wall" rectangular lattice with three edges per
vertex::

       * - *       * - *
      /     \\      |   |
     *       *  =  *   *
      \\     /      |   |
       * - *       * - *

which tiles as::

     * - *   * - *
     |   |   |   |
     *   * - *   *
     |   |   |   |
     * - *   * - *

Vertices with even ``x + y`` own the Left, UpRight and DownRight edges, the
odd ones Right, DownLeft and UpLeft. Both kinds store their three edges in
slots 0..2, so the state layout matches the other lattices. The shift is::

    |x,y,Left>      <-> |x-1,y,Right>
    |x,y,UpRight>   <-> |x,y+1,DownLeft>
    |x,y,DownRight> <-> |x,y-1,UpLeft>

for every even vertex. The coin is Grover's diffusion ``D_3``.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

import numpy as np

from .base import Vertex
from .lattice import CoinedLatticeWalk, _roll


class HoneycombDirection(IntEnum):
    """Edge directions of a honeycomb vertex; three exist at each vertex."""

    LEFT = 0
    RIGHT = 1
    UP_RIGHT = 2
    DOWN_LEFT = 3
    DOWN_RIGHT = 4
    UP_LEFT = 5
    SELF = 6


_EVEN_SLOTS = {
    HoneycombDirection.LEFT: 0,
    HoneycombDirection.UP_RIGHT: 1,
    HoneycombDirection.DOWN_RIGHT: 2,
    HoneycombDirection.SELF: 3,
}

_ODD_SLOTS = {
    HoneycombDirection.RIGHT: 0,
    HoneycombDirection.DOWN_LEFT: 1,
    HoneycombDirection.UP_LEFT: 2,
    HoneycombDirection.SELF: 3,
}


class HoneycombWalk(CoinedLatticeWalk):
    """Walk on a honeycomb (bipartite) torus with three edge slots per vertex.

    Width and height must be even so that vertex parity survives the
    wrap-around.
    """

    topology = "honeycomb"
    direction_count = 3
    Direction = HoneycombDirection

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        x, y = np.indices((self.width, self.height))
        self._even = (x + y) % 2 == 0

    @staticmethod
    def _validate_size(height: int, width: int) -> None:
        if height % 2 != 0:
            raise ValueError(f"honeycomb height must be even, got {height}")
        if width % 2 != 0:
            raise ValueError(f"honeycomb width must be even, got {width}")

    def _shift(self) -> None:
        s = self._state
        even = self._even
        out = s.copy()
        # Left (even) <-> Right of the odd vertex at x-1
        out[:, :, 0] = np.where(even, _roll(s[:, :, 0], 1, 0), _roll(s[:, :, 0], -1, 0))
        # UpRight (even) <-> DownLeft of the odd vertex at y+1
        out[:, :, 1] = np.where(even, _roll(s[:, :, 1], 0, -1), _roll(s[:, :, 1], 0, 1))
        # DownRight (even) <-> UpLeft of the odd vertex at y-1
        out[:, :, 2] = np.where(even, _roll(s[:, :, 2], 0, 1), _roll(s[:, :, 2], 0, -1))
        self._state = out

    def _slot(self, vertex: Vertex, direction: Any) -> int:
        direction = HoneycombDirection(direction)
        slots = _EVEN_SLOTS if (vertex.x + vertex.y) % 2 == 0 else _ODD_SLOTS
        if direction not in slots:
            raise ValueError(
                f"vertex {tuple(vertex)} has no {direction.name} edge in a honeycomb lattice"
            )
        return slots[direction]
