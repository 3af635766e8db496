"""Staggered quantum walk on the rectangular torus (according to [Fal13]).

The walk has no coin register. The lattice is covered by two tessellations of
``d x d`` blocks, the second shifted by ``d / 2`` along both axes, and one
step applies the oracle followed by Grover's diffusion on every block of the
first tessellation, then the oracle again and the diffusion on the second.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np

from .base import LatticeMixin, MeasurementMixin, StepMixin

logger = logging.getLogger(__name__)


class StaggeredRectangleWalk(StepMixin, LatticeMixin, MeasurementMixin):
    """Staggered walk with one amplitude per vertex.

    Parameters
    ----------
    height, width:
        Lattice dimensions; both must be divisible by ``region_size``.
    region_size:
        Side ``d`` of a tessellation block.
    """

    topology = "staggered"

    def __init__(self, height: int, width: int, region_size: int = 2) -> None:
        height, width, region_size = int(height), int(width), int(region_size)
        if region_size < 2:
            raise ValueError("region_size must be at least 2")
        if height < 1 or height % region_size != 0:
            raise ValueError(f"height {height} is not a positive multiple of {region_size}")
        if width < 1 or width % region_size != 0:
            raise ValueError(f"width {width} is not a positive multiple of {region_size}")
        self._height = height
        self._width = width
        self._region_size = region_size

        self._state = np.full((width, height), 1.0 / math.sqrt(width * height))
        self._initial = self._state.copy()
        self._t = 0
        self._init_marks()
        self._mask = np.zeros((width, height), dtype=bool)
        logger.debug("staggered walk %dx%d d=%d", width, height, region_size)

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def region_size(self) -> int:
        return self._region_size

    def _on_marks_changed(self) -> None:
        self._mask = self._marked_mask()

    # ------------------------------------------------------------------
    def _step(self) -> None:
        d = self._region_size
        self._query()
        self._diffusion(0, 0)
        self._query()
        self._diffusion(d // 2, d // 2)

    def _query(self) -> None:
        if self._marked:
            self._state[self._mask] *= -1.0

    def _diffusion(self, x_start: int, y_start: int) -> None:
        """Grover diffusion on every block anchored at ``(x_start, y_start)``."""

        d = self._region_size
        w, h = self._width, self._height
        aligned = np.roll(self._state, (-x_start, -y_start), axis=(0, 1))
        blocks = aligned.reshape(w // d, d, h // d, d)
        average = blocks.mean(axis=(1, 3), keepdims=True)
        reflected = (2.0 * average - blocks).reshape(w, h)
        self._state = np.roll(reflected, (x_start, y_start), axis=(0, 1))

    # ------------------------------------------------------------------
    def get_vertex_amplitude(self, vertex: Any) -> float:
        """Return the amplitude of ``vertex``."""

        v = self._normalize_position(vertex)
        return float(self._state[v.x, v.y])
