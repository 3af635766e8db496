"""Experiment helpers and runners."""

from .search import (
    SearchResult,
    StepRecord,
    compare_trajectories,
    find_max_probability,
    min_overlap_max_probability,
    run_search,
)
from .weights import FORMULAS, OptimalWeight, find_optimal_weight, nn1, nn2, saha, wong

__all__ = [
    "FORMULAS",
    "OptimalWeight",
    "SearchResult",
    "StepRecord",
    "compare_trajectories",
    "find_max_probability",
    "find_optimal_weight",
    "min_overlap_max_probability",
    "nn1",
    "nn2",
    "run_search",
    "saha",
    "wong",
]
