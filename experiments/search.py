"""Search drivers built on the public engine contract.

The drivers only call ``run``, ``T``, ``N``, ``get_scalar_product`` and
``get_marked_vertex_probability``, so they work with every topology.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from Quantum_Walks.config import Config
from Quantum_Walks.engine.base import QuantumWalkSimulator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepRecord:
    """Measurements taken after step ``step``."""

    step: int
    probability: float
    overlap: float

    @classmethod
    def capture(cls, sim: QuantumWalkSimulator) -> "StepRecord":
        return cls(sim.T, sim.get_marked_vertex_probability(), sim.get_scalar_product())


@dataclass
class SearchResult:
    """Outcome of :func:`run_search`.

    ``records`` starts with the state before the first step. ``reason`` is
    ``"overlap_negative"``, ``"overlap_rising"`` or ``"max_steps"``.
    """

    records: List[StepRecord] = field(default_factory=list)
    reason: str = "max_steps"

    @property
    def final(self) -> StepRecord:
        return self.records[-1]

    @property
    def best(self) -> StepRecord:
        """Record with the highest marked probability."""
        return max(self.records, key=lambda r: r.probability)


def _default_max_steps(sim: QuantumWalkSimulator) -> int:
    return int(Config.search["max_steps_factor"]) * sim.N


def run_search(
    sim: QuantumWalkSimulator,
    max_steps: Optional[int] = None,
    rise_after: Optional[int] = None,
    on_step: Optional[Callable[[StepRecord], None]] = None,
) -> SearchResult:
    """Step ``sim`` until the overlap with the initial state flips sign.

    The run also ends once the overlap starts growing again after
    ``rise_after`` steps, or when ``T`` reaches ``max_steps``.

    Parameters
    ----------
    sim:
        Engine with its marked vertices already set.
    max_steps:
        Upper bound on ``T``; defaults to ``Config.search["max_steps_factor"] * N``.
    rise_after:
        Step after which a rising overlap stops the run; defaults to
        ``Config.search["rise_after"]``.
    on_step:
        Callback receiving the :class:`StepRecord` of every completed step.
    """

    if max_steps is None:
        max_steps = _default_max_steps(sim)
    if rise_after is None:
        rise_after = int(Config.search["rise_after"])

    result = SearchResult(records=[StepRecord.capture(sim)])
    previous = result.records[0].overlap
    while True:
        overlap = sim.get_scalar_product()
        if overlap < 0:
            result.reason = "overlap_negative"
            break
        if overlap > previous and sim.T > rise_after:
            result.reason = "overlap_rising"
            break
        if sim.T >= max_steps:
            result.reason = "max_steps"
            break
        previous = overlap
        sim.run(1)
        record = StepRecord.capture(sim)
        result.records.append(record)
        if on_step is not None:
            on_step(record)

    logger.info(
        "search stopped at T=%d (%s): Pr=%.6f overlap=%.6f",
        sim.T,
        result.reason,
        result.final.probability,
        result.final.overlap,
    )
    return result


def find_max_probability(
    sim: QuantumWalkSimulator,
    steps: Optional[int] = None,
    drop_threshold: Optional[float] = None,
) -> StepRecord:
    """Return the step with the highest marked probability.

    Steps until the probability falls ``drop_threshold`` below the best value
    seen so far (default ``Config.search["probability_drop"]``) or ``T``
    reaches ``steps``.
    """

    if steps is None:
        steps = _default_max_steps(sim)
    if drop_threshold is None:
        drop_threshold = float(Config.search["probability_drop"])

    best = StepRecord.capture(sim)
    while sim.T < steps:
        sim.run(1)
        probability = sim.get_marked_vertex_probability()
        if probability > best.probability:
            best = StepRecord(sim.T, probability, sim.get_scalar_product())
        if best.probability - probability > drop_threshold:
            break
    logger.debug("max probability %.6f at T=%d", best.probability, best.step)
    return best


def min_overlap_max_probability(
    sim: QuantumWalkSimulator, steps: Optional[int] = None
) -> tuple[float, float]:
    """Return ``(min overlap, max marked probability)`` before the overlap turns negative.

    Stops after the first step with a negative overlap or once ``T`` exceeds
    ``steps``.
    """

    min_overlap = 1.0
    max_probability = 0.0
    while True:
        if steps is not None and sim.T > steps:
            break
        if sim.get_scalar_product() < 0:
            break
        sim.run(1)
        min_overlap = min(min_overlap, sim.get_scalar_product())
        max_probability = max(max_probability, sim.get_marked_vertex_probability())
    return min_overlap, max_probability


def compare_trajectories(
    a: QuantumWalkSimulator,
    b: QuantumWalkSimulator,
    steps: int,
    tolerance: Optional[float] = None,
) -> bool:
    """Step ``a`` and ``b`` together and compare their measurements.

    Returns ``True`` when the marked probability and the overlap agree within
    ``tolerance`` (default ``Config.tolerance``) after every step.
    """

    if tolerance is None:
        tolerance = Config.tolerance
    for _ in range(steps):
        a.run(1)
        b.run(1)
        ra, rb = StepRecord.capture(a), StepRecord.capture(b)
        if abs(ra.probability - rb.probability) > tolerance:
            logger.warning("probabilities diverge at T=%d: %r vs %r", ra.step, ra, rb)
            return False
        if abs(ra.overlap - rb.overlap) > tolerance:
            logger.warning("overlaps diverge at T=%d: %r vs %r", ra.step, ra, rb)
            return False
    return True
