"""Sweep runner for quantum walk search experiments.

An experiment file (YAML or TOML) names a topology, a list of sizes, a list of
self-loop weights and a number of repetitions. The runner expands the
cartesian product into samples, builds an independent engine for each,
searches until the overlap flips sign, checks invariants and logs metrics.

Example::

    topology: rectangle
    sizes: [16, 32]
    weights: [0.0, wong]
    repetitions: 2
    seed: 7
    marks:
      pattern: random
      count: 3
"""

from __future__ import annotations

import argparse
import itertools
import logging
import pathlib
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

from invariants import checks
from Quantum_Walks import patterns
from Quantum_Walks.config import Config
from Quantum_Walks.engine import TOPOLOGIES, build_simulator
from Quantum_Walks.engine.base import QuantumWalkSimulator
from Quantum_Walks.graph import generators
from telemetry.metrics import MetricsLogger

from .search import run_search
from .weights import FORMULAS

logger = logging.getLogger(__name__)

_LATTICES = {"rectangle", "triangle", "honeycomb", "staggered"}
_WEIGHTLESS = {"staggered", "nand_tree"}


@dataclass
class ExperimentConfig:
    """Container for experiment configuration."""

    topology: str
    sizes: List[int]
    weights: List[float | str] = field(default_factory=lambda: [0.0])
    repetitions: int = 1
    seed: int = 0
    coin: str = "grover"
    max_steps: Optional[int] = None
    marks: Dict[str, Any] = field(default_factory=dict)
    graph: Dict[str, Any] = field(
        default_factory=lambda: {"generator": "erdos_renyi", "p": 0.5}
    )

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "ExperimentConfig":
        """Construct an :class:`ExperimentConfig` from a generic mapping.

        Raises
        ------
        KeyError
            If required keys are missing or the topology is unknown.
        ValueError
            If a weight is neither a number nor a known formula name.
        """

        required = {"topology", "sizes"}
        missing = required - data.keys()
        if missing:
            raise KeyError(
                f"Experiment configuration missing keys: {', '.join(sorted(missing))}"
            )
        topology = str(data["topology"]).lower()
        if topology not in TOPOLOGIES:
            raise KeyError(f"unknown topology {topology!r}")

        weights: List[float | str] = []
        for w in data.get("weights", [0.0]):
            if isinstance(w, str):
                if w not in FORMULAS:
                    raise ValueError(
                        f"unknown weight formula {w!r}; expected one of {sorted(FORMULAS)}"
                    )
                weights.append(w)
            else:
                weights.append(float(w))
        if topology in _WEIGHTLESS and any(w != 0.0 for w in weights):
            raise ValueError(f"{topology} walks do not take a self-loop weight")

        return cls(
            topology=topology,
            sizes=[int(s) for s in data["sizes"]],
            weights=weights,
            repetitions=int(data.get("repetitions", 1)),
            seed=int(data.get("seed", 0)),
            coin=str(data.get("coin", Config.coin)),
            max_steps=data.get("max_steps"),
            marks=dict(data.get("marks", {})),
            graph=dict(data.get("graph", {"generator": "erdos_renyi", "p": 0.5})),
        )

    def samples(self) -> List[Tuple[int, float | str, int]]:
        """Return ``(size, weight, repetition)`` for every sample in order."""
        return list(
            itertools.product(self.sizes, self.weights, range(self.repetitions))
        )


def _mix(seed: int, i: int) -> int:
    x = (seed ^ (i + 0x9E3779B9)) & 0xFFFFFFFF
    x ^= x >> 16
    x = (x * 0x7FEB352D) & 0xFFFFFFFF
    x ^= x >> 15
    x = (x * 0x846CA68B) & 0xFFFFFFFF
    return x


def _build(cfg: ExperimentConfig, size: int, weight: float, seed: int) -> QuantumWalkSimulator:
    topology = cfg.topology
    params: Dict[str, Any] = {}
    if topology not in _WEIGHTLESS:
        params["coin"] = cfg.coin
        params["self_loop_weight"] = weight
    if topology in _LATTICES:
        return build_simulator(topology, height=size, width=size, **params)
    if topology == "hypercube":
        return build_simulator(topology, n=size, **params)
    if topology == "nand_tree":
        return build_simulator(topology, tree_depth=size)
    options = dict(cfg.graph)
    name = options.pop("generator")
    generator = getattr(generators, name, None)
    if generator is None or name.startswith("_") or name == "max_equal_degree_edge":
        raise KeyError(f"unknown graph generator {name!r}")
    graph = generator(size, seed=seed, **options)
    return build_simulator(topology, graph=graph, **params)


def _select_marks(
    cfg: ExperimentConfig, sim: QuantumWalkSimulator, size: int, seed: int
) -> List[Any]:
    """Return the positions to mark for one sample."""

    marking = cfg.marks
    if "vertices" in marking:
        return [tuple(v) if isinstance(v, list) else v for v in marking["vertices"]]
    pattern = marking.get("pattern", "single")
    rng = np.random.default_rng(seed)
    if cfg.topology == "nand_tree":
        if pattern == "random":
            leaves = rng.choice(sim.leaf_count, size=int(marking.get("count", 1)), replace=False)
        else:
            leaves = marking.get("leaves", [0])
        return [sim.leaf_index(int(leaf)) for leaf in leaves]
    if pattern == "single":
        return [(0, 0)] if cfg.topology in _LATTICES else [0]
    if pattern == "random":
        count = int(marking.get("count", 1))
        if cfg.topology in _LATTICES:
            return patterns.random_vertices(size, size, count, rng)
        return [int(i) for i in rng.choice(sim.N, size=count, replace=False)]
    if pattern == "max_equal_degree_edge" and cfg.topology == "graph":
        found = generators.max_equal_degree_edge(sim.graph)
        if found is None:
            raise ValueError("graph has no edge with equal endpoint degrees")
        edge, _ = found
        return [edge.v1, edge.v2]
    if cfg.topology in _LATTICES and pattern in {
        "square",
        "perimeter",
        "dashed_perimeter",
        "rect",
    }:
        args = {k: v for k, v in marking.items() if k != "pattern"}
        return getattr(patterns, pattern)(**args)
    raise ValueError(f"pattern {pattern!r} is not available for {cfg.topology}")


def _process_sample(
    i: int,
    size: int,
    weight: float | str,
    repetition: int,
    cfg: ExperimentConfig,
) -> Tuple[int, Dict[str, Any], int, Dict[str, float | int], Dict[str, float | bool]]:
    """Build, mark and search one sample, then check its invariants."""

    sample_seed = _mix(cfg.seed, i)
    value = 0.0 if isinstance(weight, str) else float(weight)
    sim = _build(cfg, size, value, sample_seed)
    marks = _select_marks(cfg, sim, size, sample_seed)
    if isinstance(weight, str):
        # formula weights depend on N and the number of marked vertices
        value = FORMULAS[weight](sim.N, len(set(marks)))
        sim = _build(cfg, size, value, sample_seed)
        label = weight
    else:
        label = f"{value:g}"
    sim.mark_vertices(marks)

    result = run_search(sim, max_steps=cfg.max_steps)
    final = result.final
    metrics = {
        "metric_N": sim.N,
        "metric_steps": final.step,
        "metric_probability": final.probability,
        "metric_overlap": final.overlap,
        "metric_max_probability": result.best.probability,
        "stop_reason": result.reason,
    }
    inv = checks.from_simulator(sim, Config.tolerance)
    if not inv["inv_unitarity_ok"]:
        raise ValueError(f"unitarity check failed for sample {i}")
    params = {
        "topology": cfg.topology,
        "size": size,
        "weight": value,
        "weight_label": label,
        "repetition": repetition,
        "marked": len(sim.marked_vertices),
    }
    return i, params, sample_seed, metrics, inv


def run(exp_path: pathlib.Path, out_dir: pathlib.Path, parallel: int = 1) -> None:
    """Execute an experiment sweep.

    Parameters
    ----------
    exp_path, out_dir:
        Paths to the experiment configuration and the output directory.
    parallel:
        Number of worker threads. Every sample owns its engine, so samples
        run independently; results are logged in sample order.
    """

    cfg = _load_config(exp_path)
    samples = cfg.samples()
    out_dir.mkdir(parents=True, exist_ok=True)
    metrics_logger = MetricsLogger(out_dir)
    logger.info("running %d samples of %s", len(samples), cfg.topology)

    if parallel > 1 and samples:
        with ThreadPoolExecutor(max_workers=parallel) as ex:
            futs = [
                ex.submit(_process_sample, i, size, weight, rep, cfg)
                for i, (size, weight, rep) in enumerate(samples)
            ]
            results = [fut.result() for fut in futs]
    else:
        results = [
            _process_sample(i, size, weight, rep, cfg)
            for i, (size, weight, rep) in enumerate(samples)
        ]

    for i, params, seed, metrics, inv in sorted(results, key=lambda x: x[0]):
        metrics_logger.log(i, params, seed, metrics, inv)

    metrics_logger.flush(
        {
            "topology": cfg.topology,
            "sizes": cfg.sizes,
            "weights": cfg.weights,
            "repetitions": cfg.repetitions,
            "seed": cfg.seed,
            "coin": cfg.coin,
            "samples": len(samples),
        }
    )


def _load_config(path: pathlib.Path) -> ExperimentConfig:
    if path.suffix in {".yaml", ".yml"}:
        import yaml

        data = yaml.safe_load(path.read_text())
    elif path.suffix == ".toml":
        import tomllib

        data = tomllib.loads(path.read_text())
    else:
        raise ValueError(f"Unsupported config extension: {path.suffix}")
    return ExperimentConfig.from_mapping(data)


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run quantum walk search sweeps")
    parser.add_argument("--exp", type=pathlib.Path, required=True)
    parser.add_argument(
        "--out",
        type=pathlib.Path,
        default=None,
        help="output directory (default: Config.output_dir)",
    )
    parser.add_argument("--parallel", type=int, default=1)
    parser.add_argument(
        "--config",
        type=pathlib.Path,
        default=None,
        help="JSON file overriding Config defaults",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.config is not None:
        Config.load_from_file(str(args.config))
    out = args.out if args.out is not None else pathlib.Path(Config.output_dir)
    run(args.exp, out, args.parallel)


if __name__ == "__main__":  # pragma: no cover
    main()
