"""Coined and lackadaisical quantum walk on the rectangular torus.

The lackadaisical variant follows https://arxiv.org/pdf/1706.06939: every
vertex carries an extra self-loop of weight ``l``.
"""

from __future__ import annotations

from enum import IntEnum

from .lattice import CoinedLatticeWalk, _roll


class Direction(IntEnum):
    """Slots of a rectangular lattice vertex."""

    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3
    SELF = 4


LEFT, RIGHT, UP, DOWN = Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN


class RectangleWalk(CoinedLatticeWalk):
    """Walk on a rectangular torus with four edge slots per vertex."""

    topology = "rectangle"
    direction_count = 4
    Direction = Direction

    def _shift(self) -> None:
        """Flip-flop shift.

        ``|x, y, Right> <-> |x+1, y, Left>`` and ``|x, y, Up> <-> |x, y+1, Down>``.
        """

        s = self._state
        out = s.copy()
        out[:, :, RIGHT] = _roll(s[:, :, LEFT], -1, 0)
        out[:, :, LEFT] = _roll(s[:, :, RIGHT], 1, 0)
        out[:, :, UP] = _roll(s[:, :, DOWN], 0, -1)
        out[:, :, DOWN] = _roll(s[:, :, UP], 0, 1)
        self._state = out
