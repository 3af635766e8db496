"""Invariant checks used by tests and experiment sweeps."""

from __future__ import annotations

from typing import Any, Dict, Sequence


def unitarity(total_probability: float, tolerance: float) -> bool:
    """Check that the total probability equals 1 within ``tolerance``."""

    return abs(total_probability - 1.0) <= tolerance


def fixed_point(overlap: float, tolerance: float) -> bool:
    """Check that the state still coincides with the initial state."""

    return abs(overlap - 1.0) <= tolerance


def trajectories_match(
    a: Sequence[Sequence[float]], b: Sequence[Sequence[float]], tolerance: float
) -> bool:
    """Compare two step-by-step measurement sequences element-wise."""

    if len(a) != len(b):
        return False
    return all(
        len(ra) == len(rb) and all(abs(x - y) <= tolerance for x, y in zip(ra, rb))
        for ra, rb in zip(a, b)
    )


def zero_crossings(values: Sequence[float]) -> int:
    """Count sign changes between consecutive non-zero values."""

    signs = [v > 0 for v in values if v != 0]
    return sum(1 for prev, cur in zip(signs, signs[1:]) if prev != cur)


def single_zero_crossing(overlaps: Sequence[float]) -> bool:
    """Overlap starts positive and changes sign exactly once."""

    return bool(overlaps) and overlaps[0] > 0 and zero_crossings(overlaps) == 1


def from_simulator(sim: Any, tolerance: float) -> Dict[str, float | bool]:
    """Extract invariant fields from a simulator after a run."""

    total = sim.get_total_probability()
    overlap = sim.get_scalar_product()
    return {
        "inv_unitarity_residual": float(total - 1.0),
        "inv_unitarity_ok": unitarity(total, tolerance),
        "inv_overlap_bounded": abs(overlap) <= 1.0 + tolerance,
    }
