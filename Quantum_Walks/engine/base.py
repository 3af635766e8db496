"""Shared contract and mixins for the quantum walk engines.

Every topology keeps its own amplitude layout and step math. What they have in
common lives here: the step counter and ``run`` loop, marked-vertex
bookkeeping and the measurements that only need the state array, the initial
state and a way to find the slots belonging to a vertex.
"""

from __future__ import annotations

import logging
from typing import Any, Hashable, Iterable, NamedTuple, Protocol, runtime_checkable

import numpy as np

from ..config import Config
from ..errors import PositionOutOfRangeError, UnitarityError

logger = logging.getLogger(__name__)

__all__ = [
    "IndexedMixin",
    "LatticeMixin",
    "MarkingMixin",
    "MeasurementMixin",
    "PositionOutOfRangeError",
    "QuantumWalkSimulator",
    "StepMixin",
    "UnitarityError",
    "Vertex",
    "check_self_loop_weight",
]


class Vertex(NamedTuple):
    """A vertex of a two-dimensional lattice."""

    x: int
    y: int


@runtime_checkable
class QuantumWalkSimulator(Protocol):
    """Operations shared by every engine."""

    @property
    def N(self) -> int: ...

    @property
    def T(self) -> int: ...

    def run(self, step_count: int = 1) -> None: ...

    def mark_vertex(self, position: Any) -> None: ...

    def unmark_vertex(self, position: Any) -> None: ...

    def is_vertex_marked(self, position: Any) -> bool: ...

    def get_scalar_product(self) -> float: ...

    def get_vertex_probability(self, position: Any) -> float: ...

    def get_marked_vertex_probability(self) -> float: ...

    def get_total_probability(self) -> float: ...


def check_self_loop_weight(weight: float) -> float:
    """Return ``weight`` as ``float`` or raise for negative values."""

    weight = float(weight)
    if weight < 0 or not np.isfinite(weight):
        raise ValueError(f"self_loop_weight must be a finite non-negative number, got {weight}")
    return weight


class StepMixin:
    """Provide the step counter and the Query/Coin/Shift ``run`` loop.

    Subclasses implement :meth:`_step`; the mixin keeps ``T`` and performs the
    optional unitarity check configured by :attr:`Config.diagnostics`.
    """

    _t: int = 0

    @property
    def T(self) -> int:
        """Number of completed steps."""
        return self._t

    def run(self, step_count: int = 1) -> None:
        """Advance the walk by ``step_count`` steps."""

        step_count = int(step_count)
        if step_count < 0:
            raise ValueError("step_count must be non-negative")
        self._before_run()
        for _ in range(step_count):
            self._step()
            self._t += 1
            if Config.diagnostics:
                self._check_unitarity()

    def _before_run(self) -> None:
        """Hook executed once before a batch of steps."""

    def _step(self) -> None:  # pragma: no cover - abstract
        raise NotImplementedError

    def _check_unitarity(self) -> None:
        total = self.get_total_probability()
        residual = abs(total - 1.0)
        if residual > Config.tolerance:
            logger.error(
                "unitarity violated at T=%d: total probability %.15f", self._t, total
            )
            raise UnitarityError(
                f"total probability {total!r} deviates from 1 by {residual:.3e} at T={self._t}"
            )


class MarkingMixin:
    """Marked-vertex bookkeeping shared by all topologies.

    Subclasses implement :meth:`_normalize_position`, which returns the
    canonical hashable form of a position or raises
    :class:`PositionOutOfRangeError`, and may override :meth:`_on_marks_changed`
    to refresh cached masks.
    """

    def _init_marks(self) -> None:
        self._marked: set[Hashable] = set()

    def _normalize_position(self, position: Any) -> Hashable:  # pragma: no cover
        raise NotImplementedError

    def _on_marks_changed(self) -> None:
        """Hook called after the marked set changed."""

    def mark_vertex(self, position: Any) -> None:
        """Add ``position`` to the marked set."""

        p = self._normalize_position(position)
        if p not in self._marked:
            self._marked.add(p)
            self._on_marks_changed()

    def mark_vertices(self, positions: Iterable[Any]) -> None:
        """Mark every position in ``positions``.

        All positions are validated before any of them is marked.
        """

        normalized = [self._normalize_position(p) for p in positions]
        added = [p for p in normalized if p not in self._marked]
        if added:
            self._marked.update(added)
            self._on_marks_changed()

    def unmark_vertex(self, position: Any) -> None:
        """Remove ``position`` from the marked set."""

        p = self._normalize_position(position)
        if p in self._marked:
            self._marked.remove(p)
            self._on_marks_changed()

    def is_vertex_marked(self, position: Any) -> bool:
        """Return ``True`` if ``position`` is marked."""

        return self._normalize_position(position) in self._marked

    @property
    def marked_vertices(self) -> list:
        """Sorted list of marked positions."""
        return sorted(self._marked)


class LatticeMixin(MarkingMixin):
    """Positions and masks for ``width x height`` toroidal lattices."""

    height: int
    width: int

    @property
    def N(self) -> int:
        """Number of vertices."""
        return self.width * self.height

    def _normalize_position(self, position: Any) -> Vertex:
        x, y = position
        x, y = int(x), int(y)
        if x < 0 or x >= self.width:
            raise PositionOutOfRangeError(f"x={x} outside [0, {self.width})")
        if y < 0 or y >= self.height:
            raise PositionOutOfRangeError(f"y={y} outside [0, {self.height})")
        return Vertex(x, y)

    def _marked_mask(self) -> np.ndarray:
        """Boolean ``(width, height)`` array flagging marked vertices."""

        mask = np.zeros((self.width, self.height), dtype=bool)
        for v in self._marked:
            mask[v.x, v.y] = True
        return mask


class IndexedMixin(MarkingMixin):
    """Positions given as integer indices in ``[0, N)``."""

    def _normalize_position(self, position: Any) -> int:
        i = int(position)
        if i < 0 or i >= self.N:
            raise PositionOutOfRangeError(f"vertex {i} outside [0, {self.N})")
        return i

    def _marked_mask(self) -> np.ndarray:
        mask = np.zeros(self.N, dtype=bool)
        if self._marked:
            mask[list(self._marked)] = True
        return mask


class MeasurementMixin:
    """Measurements for engines storing one state block per vertex.

    The state has shape ``(*vertex_shape, slots)`` and ``_initial`` holds the
    initial state with the same shape.
    """

    _state: np.ndarray
    _initial: np.ndarray

    def _vertex_slots(self, position: Hashable) -> np.ndarray:
        return self._state[tuple(position) if isinstance(position, tuple) else position]

    def get_scalar_product(self) -> float:
        """Inner product of the current state with the initial state."""
        return float(np.dot(self._state.ravel(), self._initial.ravel()))

    def get_vertex_probability(self, position: Any) -> float:
        """Probability of measuring ``position``."""
        p = self._normalize_position(position)
        block = self._vertex_slots(p)
        return float(np.dot(block, block))

    def get_marked_vertex_probability(self) -> float:
        """Total probability of all marked vertices."""
        return float(sum(self.get_vertex_probability(p) for p in self._marked))

    def get_total_probability(self) -> float:
        """Sum of all probabilities; equals 1 for a unitary evolution."""
        return float(np.dot(self._state.ravel(), self._state.ravel()))
