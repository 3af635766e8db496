"""Coined walks on toroidal two-dimensional lattices.

The rectangle, triangle and honeycomb engines share the state layout
``(width, height, directions + 1)``, where the last slot is the lackadaisical
self-loop, and differ only in how the shift pairs slots of neighbouring
vertices.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any, ClassVar

import numpy as np

from .base import (
    LatticeMixin,
    MeasurementMixin,
    StepMixin,
    Vertex,
    check_self_loop_weight,
)
from .coin import Coin, grover_reflect, slot_weights, uniform_state

logger = logging.getLogger(__name__)


class CoinedLatticeWalk(StepMixin, LatticeMixin, MeasurementMixin):
    """Query/Coin/Shift walk on a ``width x height`` torus.

    Parameters
    ----------
    height, width:
        Lattice dimensions.
    coin:
        :class:`Coin` policy or its name.
    self_loop_weight:
        Weight ``l`` of the self-loop. ``0`` gives the plain coined walk.
    """

    topology: ClassVar[str] = "lattice"
    direction_count: ClassVar[int]
    Direction: ClassVar[type[IntEnum]]

    def __init__(
        self,
        height: int,
        width: int,
        coin: Coin | str = Coin.GROVER,
        self_loop_weight: float = 0.0,
    ) -> None:
        height, width = int(height), int(width)
        if height < 1 or width < 1:
            raise ValueError(f"lattice size must be positive, got {height}x{width}")
        self._validate_size(height, width)
        self._height = height
        self._width = width
        self._coin = Coin.parse(coin)
        self._self_loop_weight = check_self_loop_weight(self_loop_weight)

        self._weights = slot_weights(self.direction_count, self._self_loop_weight)
        self._divisor = self.direction_count + self._self_loop_weight
        self._state = uniform_state(
            (width, height), self.direction_count, self._self_loop_weight
        )
        self._initial = self._state.copy()
        self._t = 0
        self._init_marks()
        self._mask = np.zeros((width, height), dtype=bool)
        logger.debug(
            "%s walk %dx%d coin=%s l=%g",
            self.topology,
            width,
            height,
            self._coin.value,
            self._self_loop_weight,
        )

    @staticmethod
    def _validate_size(height: int, width: int) -> None:
        """Hook for topologies with extra size constraints."""

    # ------------------------------------------------------------------
    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def coin(self) -> Coin:
        return self._coin

    @property
    def self_loop_weight(self) -> float:
        return self._self_loop_weight

    def _on_marks_changed(self) -> None:
        self._mask = self._marked_mask()

    # ------------------------------------------------------------------
    def _step(self) -> None:
        self._query()
        self._coin_flip()
        self._shift()

    def _query(self) -> None:
        if self._marked:
            self._state[self._mask] *= -1.0

    def _coin_flip(self) -> None:
        # D for unmarked, I for marked
        keep = self._mask if self._coin is Coin.AKR else None
        self._state = grover_reflect(self._state, self._weights, self._divisor, keep)

    def _shift(self) -> None:  # pragma: no cover - abstract
        raise NotImplementedError

    # ------------------------------------------------------------------
    def _slot(self, vertex: Vertex, direction: Any) -> int:
        return int(self.Direction(direction))

    def get_vertex_amplitude(self, vertex: Any, direction: Any) -> float:
        """Return the amplitude of ``vertex`` in ``direction``."""

        v = self._normalize_position(vertex)
        return float(self._state[v.x, v.y, self._slot(v, direction)])


def _roll(a: np.ndarray, dx: int, dy: int) -> np.ndarray:
    """Return ``b`` with ``b[x, y] = a[x - dx, y - dy]`` on the torus."""

    return np.roll(a, (dx, dy), axis=(0, 1))
