r"""Coin policies and the weighted Grover reflection.

The Grover coin of a vertex with ``d`` edge slots and a self-loop of weight
``l`` is

.. math::
   C = 2|s_c\rangle\langle s_c| - I, \qquad
   |s_c\rangle = \frac{1}{\sqrt{d + l}}
   \left(\sum_{k<d} |k\rangle + \sqrt{l}\,|\mathrm{self}\rangle\right).

With ``l = 0`` this is the plain Grover diffusion ``D_d``. The helpers operate
on whole numpy arrays whose last axis holds the slots of one vertex, so a
single call applies the coin to every vertex of a lattice or hypercube.
"""

from __future__ import annotations

import math
from enum import Enum

import numpy as np


class Coin(str, Enum):
    """Coin selection policy."""

    #: [AKR05] coin: Grover diffusion on unmarked vertices, identity on marked.
    AKR = "akr"
    #: Grover diffusion on every vertex.
    GROVER = "grover"

    @classmethod
    def parse(cls, value: "Coin | str") -> "Coin":
        """Return the :class:`Coin` named by ``value`` (case-insensitive)."""

        if isinstance(value, Coin):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"unknown coin {value!r}; expected one of {[c.value for c in cls]}"
            ) from None


def slot_weights(directions: int, self_loop_weight: float) -> np.ndarray:
    """Return ``[1, ..., 1, sqrt(l)]`` for ``directions`` edge slots."""

    weights = np.ones(directions + 1, dtype=np.float64)
    weights[-1] = math.sqrt(self_loop_weight)
    return weights


def uniform_state(
    vertex_shape: tuple[int, ...], directions: int, self_loop_weight: float
) -> np.ndarray:
    """Return the normalised uniform initial state.

    Every edge slot holds ``1 / sqrt((d + l) * N)`` and every self slot that
    value times ``sqrt(l)``.
    """

    vertices = int(np.prod(vertex_shape))
    amplitude = 1.0 / math.sqrt((directions + self_loop_weight) * vertices)
    block = amplitude * slot_weights(directions, self_loop_weight)
    return np.broadcast_to(block, (*vertex_shape, directions + 1)).copy()


def grover_reflect(
    state: np.ndarray,
    weights: np.ndarray,
    divisor: float,
    keep: np.ndarray | None = None,
) -> np.ndarray:
    """Reflect every vertex block of ``state`` about its weighted average.

    Parameters
    ----------
    state:
        Array whose last axis holds the slots of one vertex.
    weights:
        Slot weights from :func:`slot_weights`.
    divisor:
        ``d + l``.
    keep:
        Optional boolean mask over the vertex axes. Masked vertices keep their
        amplitudes (identity coin).

    Returns
    -------
    numpy.ndarray
        New state array.
    """

    scaled = 2.0 * (state @ weights) / divisor
    out = scaled[..., None] * weights - state
    if keep is not None and keep.any():
        out[keep] = state[keep]
    return out
