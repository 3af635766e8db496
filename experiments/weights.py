"""Self-loop weight formulas for lackadaisical search with ``k`` marked vertices.

All formulas refer to the rectangular lattice (degree 4) with ``N`` vertices.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

import numpy as np

from Quantum_Walks.engine.base import QuantumWalkSimulator

from .search import run_search

logger = logging.getLogger(__name__)


def wong(N: int, k: int = 1) -> float:
    """``l = 4 / N``, optimal for a single marked vertex."""
    return 4.0 / N


def saha(N: int, k: int) -> float:
    """``l = 4 / (N (k + floor(sqrt(k) / 2)))``."""
    return 4.0 / (N * (k + math.floor(math.sqrt(k) / 2.0)))


def nn1(N: int, k: int) -> float:
    """``l = 4 k / N``."""
    return 4.0 * k / N


def nn2(N: int, k: int) -> float:
    """``l = max(4 (k - sqrt(k)) / N, 0)``."""
    return max(4.0 * (k - math.sqrt(k)) / N, 0.0)


FORMULAS: dict[str, Callable[[int, int], float]] = {
    "wong": wong,
    "saha": saha,
    "nn1": nn1,
    "nn2": nn2,
}


def weight_grid(
    degree: int, N: int, start: float, stop: float, step: float
) -> List[float]:
    """Return ``degree * a / N`` for ``a`` in ``[start, stop]`` spaced by ``step``."""

    count = int(round((stop - start) / step)) + 1
    return [degree * float(a) / N for a in np.linspace(start, stop, max(count, 1))]


@dataclass(frozen=True)
class OptimalWeight:
    """Best self-loop weight found by :func:`find_optimal_weight`."""

    weight: float
    step: int
    probability: float
    overlap: float


def find_optimal_weight(
    factory: Callable[[float], QuantumWalkSimulator],
    candidates: Iterable[float],
    max_steps: Optional[int] = None,
) -> OptimalWeight:
    """Run a search for every candidate weight and keep the most successful one.

    Parameters
    ----------
    factory:
        Callable returning a freshly marked engine for a given weight.
    candidates:
        Weights to try.
    max_steps:
        Step limit forwarded to :func:`~experiments.search.run_search`.

    Raises
    ------
    ValueError
        If ``candidates`` is empty.
    """

    best: Optional[OptimalWeight] = None
    for weight in candidates:
        sim = factory(weight)
        final = run_search(sim, max_steps=max_steps).final
        logger.debug(
            "l=%g: T=%d Pr=%.6f overlap=%.6f",
            weight,
            final.step,
            final.probability,
            final.overlap,
        )
        if best is None or final.probability > best.probability:
            best = OptimalWeight(weight, final.step, final.probability, final.overlap)
    if best is None:
        raise ValueError("no candidate weights given")
    logger.info("optimal self-loop weight %g (Pr=%.6f)", best.weight, best.probability)
    return best
