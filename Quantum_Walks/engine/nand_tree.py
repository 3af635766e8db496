"""Staggered quantum walk on a binary NAND tree with a tail.

The tree has depth ``D``: the root sits at depth 0 and the ``2**D`` leaves at
depth ``D``. An extra tail node hangs above the root and the walk starts there.
Nodes are stored in heap order in a single array::

    index 0            tail
    index 1            root
    index k            children 2k and 2k+1
    [2**d, 2**(d+1))   nodes at depth d

One step is the oracle followed by two tessellations. The odd tessellation
couples the tail with the root through

.. math::
   \\begin{pmatrix} a & b \\\\ b & -a \\end{pmatrix}, \\quad
   a = \\frac{2}{\\sqrt{n}} - 1, \\quad
   b = 2\\sqrt{\\frac{1}{\\sqrt{n}} - \\frac{1}{n}}

(``n`` is the number of leaves) and reflects every node at odd depth together
with its two children about their average. The even tessellation does the
same for the nodes at even depth. There is no separate coin.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np

from .base import IndexedMixin, PositionOutOfRangeError, StepMixin

logger = logging.getLogger(__name__)


class NandTreeWalk(StepMixin, IndexedMixin):
    """Walk on a NAND tree of depth ``tree_depth`` plus its tail node."""

    topology = "nand_tree"

    def __init__(self, tree_depth: int) -> None:
        tree_depth = int(tree_depth)
        if tree_depth < 0:
            raise ValueError(f"tree depth must be non-negative, got {tree_depth}")
        self._depth = tree_depth
        self._node_count = 2 ** (tree_depth + 1)

        n = self.leaf_count
        self._a = 2.0 / math.sqrt(n) - 1.0
        self._b = 2.0 * math.sqrt(max(1.0 / math.sqrt(n) - 1.0 / n, 0.0))

        self._state = np.zeros(self._node_count)
        self._state[0] = 1.0
        self._t = 0
        self._init_marks()
        self._mask = np.zeros(self._node_count, dtype=bool)
        logger.debug("nand tree walk depth=%d N=%d", tree_depth, self._node_count)

    @property
    def tree_depth(self) -> int:
        """Depth of the leaves; the root has depth 0."""
        return self._depth

    @property
    def N(self) -> int:
        """Number of nodes including the tail."""
        return self._node_count

    @property
    def leaf_count(self) -> int:
        return 2**self._depth

    @property
    def tail_root_coefficients(self) -> tuple[float, float]:
        """``(a, b)`` of the tail-root reflection."""
        return self._a, self._b

    def _on_marks_changed(self) -> None:
        self._mask = self._marked_mask()

    def leaf_index(self, leaf: int) -> int:
        """Return the node index of leaf number ``leaf``."""

        leaf = int(leaf)
        if leaf < 0 or leaf >= self.leaf_count:
            raise PositionOutOfRangeError(f"leaf {leaf} outside [0, {self.leaf_count})")
        return self.leaf_count + leaf

    def mark_leaf(self, leaf: int) -> None:
        """Mark leaf number ``leaf`` (``0 <= leaf < 2**tree_depth``)."""

        self.mark_vertex(self.leaf_index(leaf))

    def unmark_leaf(self, leaf: int) -> None:
        self.unmark_vertex(self.leaf_index(leaf))

    # ------------------------------------------------------------------
    def _step(self) -> None:
        self._query()
        self._odd_level_tessellation()
        self._even_level_tessellation()

    def _query(self) -> None:
        if self._marked:
            self._state[self._mask] *= -1.0

    def _odd_level_tessellation(self) -> None:
        self._tessellate_tail()
        for depth in range(1, self._depth, 2):
            self._tessellate(depth)

    def _even_level_tessellation(self) -> None:
        for depth in range(0, self._depth, 2):
            self._tessellate(depth)

    def _tessellate_tail(self) -> None:
        a, b = self._a, self._b
        tail, root = self._state[0], self._state[1]
        self._state[0] = a * tail + b * root
        self._state[1] = b * tail - a * root

    def _tessellate(self, depth: int) -> None:
        """Reflect each node at ``depth`` and its two children about their mean."""

        lo, mid, hi = 2**depth, 2 ** (depth + 1), 2 ** (depth + 2)
        parents = self._state[lo:mid]
        children = self._state[mid:hi].reshape(-1, 2)
        avg = (parents + children[:, 0] + children[:, 1]) / 3.0
        self._state[lo:mid] = 2.0 * avg - parents
        self._state[mid:hi] = (2.0 * avg[:, None] - children).ravel()

    # ------------------------------------------------------------------
    def get_scalar_product(self) -> float:
        """Overlap with the initial state, i.e. the tail amplitude."""
        return float(self._state[0])

    def get_vertex_amplitude(self, vertex: Any) -> float:
        return float(self._state[self._normalize_position(vertex)])

    def get_vertex_probability(self, vertex: Any) -> float:
        return self.get_vertex_amplitude(vertex) ** 2

    def get_marked_vertex_probability(self) -> float:
        return float(np.sum(self._state[self._mask] ** 2))

    def get_tail_probability(self) -> float:
        """Probability of finding the walker on the tail."""
        return float(self._state[0] ** 2)

    def get_tree_probability(self) -> float:
        """Probability of finding the walker anywhere in the tree."""
        tree = self._state[1:]
        return float(np.dot(tree, tree))

    def get_total_probability(self) -> float:
        return float(np.dot(self._state, self._state))
