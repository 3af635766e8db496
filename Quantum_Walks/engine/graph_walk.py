"""Coined and lackadaisical quantum walk on an arbitrary undirected graph.

The state is a flat array. Edge ``k = (v1, v2)`` owns slots ``2k`` (the
amplitude at ``v1`` pointing to ``v2``) and ``2k + 1`` (at ``v2`` pointing to
``v1``); the ``N`` self-loop slots follow the ``2|E|`` edge slots. The shift
swaps the two slots of every edge and leaves the self slots in place.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

import numpy as np

from ..graph.model import Graph
from .base import IndexedMixin, MeasurementMixin, StepMixin, check_self_loop_weight
from .coin import Coin

logger = logging.getLogger(__name__)


class GraphWalk(StepMixin, IndexedMixin, MeasurementMixin):
    """Walk on ``graph`` with a Grover coin sized by each vertex degree.

    Parameters
    ----------
    graph:
        Graph to walk on. Edits made to it after construction, directly or
        through :meth:`add_edge`/:meth:`remove_edge`, are picked up by the next
        :meth:`run` or measurement, which re-initialises the walk.
    coin:
        :class:`Coin` policy or its name.
    self_loop_weight:
        Weight ``l`` of the self-loop added to every vertex.
    """

    topology = "graph"

    def __init__(
        self,
        graph: Graph,
        coin: Coin | str = Coin.GROVER,
        self_loop_weight: float = 0.0,
    ) -> None:
        self._graph = graph
        self._coin = Coin.parse(coin)
        self._self_loop_weight = check_self_loop_weight(self_loop_weight)
        self._init_marks()
        self._mask = np.zeros(graph.number_of_vertices, dtype=bool)
        self.initialize()

    @property
    def graph(self) -> Graph:
        return self._graph

    @property
    def N(self) -> int:
        return self._graph.number_of_vertices

    @property
    def coin(self) -> Coin:
        return self._coin

    @property
    def self_loop_weight(self) -> float:
        return self._self_loop_weight

    @property
    def is_dirty(self) -> bool:
        """``True`` when the graph changed since the last :meth:`initialize`."""
        return self._version != self._graph.version

    def _on_marks_changed(self) -> None:
        self._mask = self._marked_mask()
        self._slot_mask = self._mask[self._owner]

    # ------------------------------------------------------------------
    def initialize(self) -> None:
        """Rebuild the slot layout from the graph and reset to the uniform state.

        Resets ``T`` to 0. Raises :class:`ValueError` if the graph has no edges.
        """

        edges = self._graph.edges
        if not edges:
            raise ValueError("the graph has no edges")
        n = self._graph.number_of_vertices
        l = self._self_loop_weight
        edge_slots = 2 * len(edges)

        endpoints = np.array([(e.v1, e.v2) for e in edges], dtype=np.intp).ravel()
        self._owner = np.concatenate([endpoints, np.arange(n, dtype=np.intp)])
        self._weights = np.ones(edge_slots + n)
        self._weights[edge_slots:] = math.sqrt(l)
        degrees = np.bincount(endpoints, minlength=n).astype(np.float64)
        divisor = degrees + l
        # isolated vertices without a self-loop have no amplitude to reflect
        self._divisor = np.where(divisor > 0, divisor, 1.0)
        self._edge_slots = edge_slots

        self._state = self._weights / math.sqrt(edge_slots + l * n)
        self._initial = self._state.copy()
        self._slot_mask = self._mask[self._owner]
        self._t = 0
        self._version = self._graph.version
        logger.debug(
            "graph walk initialised N=%d edges=%d coin=%s l=%g",
            n,
            len(edges),
            self._coin.value,
            l,
        )

    def _ensure_initialized(self) -> None:
        if self.is_dirty:
            logger.debug("graph changed; re-initialising walk")
            self.initialize()

    def add_edge(self, i: int, j: int) -> bool:
        """Add edge ``(i, j)`` to the graph; the walk re-initialises lazily."""
        return self._graph.add_edge(i, j)

    def remove_edge(self, i: int, j: int) -> bool:
        """Remove edge ``(i, j)`` from the graph; the walk re-initialises lazily."""
        return self._graph.remove_edge(i, j)

    def has_edge(self, i: int, j: int) -> bool:
        return self._graph.has_edge(i, j)

    # ------------------------------------------------------------------
    def _before_run(self) -> None:
        self._ensure_initialized()

    def _step(self) -> None:
        self._query()
        self._coin_flip()
        self._shift()

    def _query(self) -> None:
        if self._marked:
            self._state[self._slot_mask] *= -1.0

    def _coin_flip(self) -> None:
        weighted = np.bincount(
            self._owner, weights=self._state * self._weights, minlength=self.N
        )
        scaled = 2.0 * weighted / self._divisor
        out = scaled[self._owner] * self._weights - self._state
        if self._coin is Coin.AKR and self._marked:
            out[self._slot_mask] = self._state[self._slot_mask]
        self._state = out

    def _shift(self) -> None:
        pairs = self._state[: self._edge_slots].reshape(-1, 2)
        self._state[: self._edge_slots] = pairs[:, ::-1].ravel()

    # ------------------------------------------------------------------
    def _vertex_slots(self, position: int) -> np.ndarray:
        return self._state[self._owner == position]

    def get_vertex_amplitude(self, vertex: Any, neighbour: Optional[Any] = None) -> float:
        """Return the amplitude of ``vertex`` on edge ``(vertex, neighbour)``.

        ``neighbour=None`` returns the self-loop slot. A missing edge raises
        :class:`KeyError`.
        """

        self._ensure_initialized()
        i = self._normalize_position(vertex)
        if neighbour is None:
            return float(self._state[self._edge_slots + i])
        k = self._graph.edge_index(i, neighbour)
        slot = 2 * k if self._graph.edges[k].v1 == i else 2 * k + 1
        return float(self._state[slot])

    def get_scalar_product(self) -> float:
        self._ensure_initialized()
        return super().get_scalar_product()

    def get_vertex_probability(self, position: Any) -> float:
        self._ensure_initialized()
        return super().get_vertex_probability(position)

    def get_marked_vertex_probability(self) -> float:
        self._ensure_initialized()
        marked = self._state[self._slot_mask]
        return float(np.dot(marked, marked))

    def get_total_probability(self) -> float:
        self._ensure_initialized()
        return super().get_total_probability()
