"""Coined quantum walk on the ``n``-dimensional hypercube."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .base import IndexedMixin, MeasurementMixin, StepMixin, check_self_loop_weight
from .coin import Coin, grover_reflect, slot_weights, uniform_state

logger = logging.getLogger(__name__)


class HypercubeWalk(StepMixin, IndexedMixin, MeasurementMixin):
    """Walk on the hypercube ``{0, 1}^n`` with ``N = 2**n`` vertices.

    Vertex ``i`` stores one amplitude per dimension ``j``; the shift exchanges
    ``(i, j)`` with ``(i XOR 2**j, j)``. A self-loop slot of weight ``l`` is
    appended after the ``n`` dimension slots.
    """

    topology = "hypercube"

    def __init__(
        self,
        n: int,
        coin: Coin | str = Coin.GROVER,
        self_loop_weight: float = 0.0,
    ) -> None:
        n = int(n)
        if n < 1:
            raise ValueError(f"hypercube dimension must be at least 1, got {n}")
        self._n = n
        self._vertex_count = 2**n
        self._coin = Coin.parse(coin)
        self._self_loop_weight = check_self_loop_weight(self_loop_weight)
        self._weights = slot_weights(n, self._self_loop_weight)
        self._divisor = n + self._self_loop_weight

        self._state = uniform_state((self._vertex_count,), n, self._self_loop_weight)
        self._initial = self._state.copy()
        # partner[i, j] = i XOR 2**j
        index = np.arange(self._vertex_count)
        self._partners = index[:, None] ^ (1 << np.arange(n))[None, :]
        self._dimensions = np.broadcast_to(np.arange(n), (self._vertex_count, n))
        self._t = 0
        self._init_marks()
        self._mask = np.zeros(self._vertex_count, dtype=bool)
        logger.debug(
            "hypercube walk n=%d coin=%s l=%g", n, self._coin.value, self._self_loop_weight
        )

    @property
    def n(self) -> int:
        """Dimension of the hypercube."""
        return self._n

    @property
    def N(self) -> int:
        return self._vertex_count

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
        keep = self._mask if self._coin is Coin.AKR else None
        self._state = grover_reflect(self._state, self._weights, self._divisor, keep)

    def _shift(self) -> None:
        out = self._state.copy()
        out[:, : self._n] = self._state[self._partners, self._dimensions]
        self._state = out

    # ------------------------------------------------------------------
    def get_vertex_amplitude(self, vertex: Any, dimension: int) -> float:
        """Return the amplitude of ``vertex`` along ``dimension``.

        ``dimension == n`` addresses the self-loop slot.
        """

        i = self._normalize_position(vertex)
        j = int(dimension)
        if j < 0 or j > self._n:
            raise IndexError(f"dimension {j} outside [0, {self._n}]")
        return float(self._state[i, j])
