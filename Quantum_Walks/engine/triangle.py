"""Coined and lackadaisical quantum walk on the triangular torus.

A triangular lattice is equivalent to a rectangular one with an extra
diagonal::

       *       *
      / \\   =  | \\
     * - *     * - *

so the grid looks like::

     * - * - * - *
     | \\ | \\ | \\ |
     * - * - * - *
     | \\ | \\ | \\ |
     * - * - * - *

and the shift works as follows::

    S|x,y,Right>     => |x+1,y,Left>
    S|x,y,Left>      => |x-1,y,Right>
    S|x,y,UpRight>   => |x,y+1,DownLeft>
    S|x,y,DownLeft>  => |x,y-1,UpRight>
    S|x,y,DownRight> => |x+1,y-1,UpLeft>
    S|x,y,UpLeft>    => |x-1,y+1,DownRight>

The coin is Grover's diffusion ``D_6`` (plus the self-loop when ``l > 0``).
"""

from __future__ import annotations

from enum import IntEnum

from .lattice import CoinedLatticeWalk, _roll


class TriangleDirection(IntEnum):
    """Slots of a triangular lattice vertex."""

    LEFT = 0
    RIGHT = 1
    DOWN_LEFT = 2
    UP_RIGHT = 3
    DOWN_RIGHT = 4
    UP_LEFT = 5
    SELF = 6


class TriangleWalk(CoinedLatticeWalk):
    """Walk on a triangular torus with six edge slots per vertex."""

    topology = "triangle"
    direction_count = 6
    Direction = TriangleDirection

    def _shift(self) -> None:
        d = TriangleDirection
        s = self._state
        out = s.copy()
        out[:, :, d.RIGHT] = _roll(s[:, :, d.LEFT], -1, 0)
        out[:, :, d.LEFT] = _roll(s[:, :, d.RIGHT], 1, 0)
        out[:, :, d.UP_RIGHT] = _roll(s[:, :, d.DOWN_LEFT], 0, -1)
        out[:, :, d.DOWN_LEFT] = _roll(s[:, :, d.UP_RIGHT], 0, 1)
        out[:, :, d.DOWN_RIGHT] = _roll(s[:, :, d.UP_LEFT], -1, 1)
        out[:, :, d.UP_LEFT] = _roll(s[:, :, d.DOWN_RIGHT], 1, -1)
        self._state = out
