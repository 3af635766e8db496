# main.py

"""Command line entry point for running a single quantum walk search."""

from __future__ import annotations

import argparse
import csv
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from Quantum_Walks.config import Config
from Quantum_Walks.engine import TOPOLOGIES, build_simulator
from Quantum_Walks.engine.base import QuantumWalkSimulator

logger = logging.getLogger(__name__)

_LATTICES = {"rectangle", "triangle", "honeycomb", "staggered"}


def _configure_logging(level: str) -> None:
    """Configure application logging and capture uncaught exceptions."""

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    def _log_excepthook(exc_type, exc, tb) -> None:
        logging.getLogger(__name__).exception(
            "Uncaught exception", exc_info=(exc_type, exc, tb)
        )

    sys.excepthook = _log_excepthook


def _parse_position(text: str) -> Any:
    """Parse ``"x,y"`` into a tuple and ``"i"`` into an ``int``."""

    parts = [p.strip() for p in text.split(",")]
    try:
        values = [int(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid position {text!r}") from None
    if len(values) == 1:
        return values[0]
    if len(values) == 2:
        return tuple(values)
    raise argparse.ArgumentTypeError(f"invalid position {text!r}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate a quantum walk search and print its trajectory"
    )
    parser.add_argument("--config", help="JSON file overriding Config defaults")
    parser.add_argument("--topology", choices=TOPOLOGIES, default="rectangle")
    parser.add_argument("--size", type=int, help="Side of a square lattice")
    parser.add_argument("--height", type=int, default=16)
    parser.add_argument("--width", type=int, default=16)
    parser.add_argument("--dimension", type=int, default=4, help="Hypercube dimension")
    parser.add_argument("--tree-depth", type=int, default=4, dest="tree_depth")
    parser.add_argument("--graph", help="Graph JSON file for --topology graph")
    parser.add_argument(
        "--random-graph",
        choices=["erdos_renyi", "barabasi_albert"],
        dest="random_graph",
        help="Generate the graph instead of loading it",
    )
    parser.add_argument("--vertices", type=int, default=64)
    parser.add_argument("--edge-probability", type=float, default=0.2, dest="edge_probability")
    parser.add_argument("--attachments", type=int, default=2)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--coin", default=None, help="grover or akr")
    parser.add_argument(
        "--self-loop-weight", type=float, default=None, dest="self_loop_weight"
    )
    parser.add_argument(
        "--mark",
        type=_parse_position,
        action="append",
        default=[],
        help="Vertex to mark: 'x,y' on lattices, an index otherwise. Repeatable.",
    )
    parser.add_argument(
        "--mark-leaf", type=int, action="append", default=[], dest="mark_leaf"
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=None,
        help="Run exactly this many steps instead of searching",
    )
    parser.add_argument("--csv", help="Also write the trajectory to this CSV file")
    parser.add_argument("--diagnostics", action="store_true", default=None)
    parser.add_argument("--log-level", default=None, dest="log_level")
    return parser


@dataclass
class MainService:
    """Handle CLI parsing and the walk."""

    argv: Optional[Sequence[str]] = None
    rows: List[tuple[int, float, float]] = field(default_factory=list)

    def run(self) -> None:
        args = _build_parser().parse_args(
            list(self.argv) if self.argv is not None else None
        )
        if args.config:
            Config.load_from_file(args.config)
        if args.diagnostics:
            Config.diagnostics = True
        _configure_logging(args.log_level or Config.log_verbosity)

        sim = self._build(args)
        self._mark(sim, args)
        self._walk(sim, args.steps)
        self._report(args.csv)

    # ------------------------------------------------------------------
    @staticmethod
    def _build(args: argparse.Namespace) -> QuantumWalkSimulator:
        topology = args.topology
        coin = args.coin or Config.coin
        weight = (
            args.self_loop_weight
            if args.self_loop_weight is not None
            else Config.self_loop_weight
        )
        coined = {"coin": coin, "self_loop_weight": weight}
        if topology in _LATTICES:
            height = args.size or args.height
            width = args.size or args.width
            if topology == "staggered":
                return build_simulator(topology, height=height, width=width)
            return build_simulator(topology, height=height, width=width, **coined)
        if topology == "hypercube":
            return build_simulator(topology, n=args.dimension, **coined)
        if topology == "nand_tree":
            return build_simulator(topology, tree_depth=args.tree_depth)
        if args.random_graph is not None:
            from Quantum_Walks.graph import generators

            if args.random_graph == "erdos_renyi":
                graph = generators.erdos_renyi(
                    args.vertices, args.edge_probability, seed=args.seed
                )
            else:
                graph = generators.barabasi_albert(
                    args.vertices, args.attachments, seed=args.seed
                )
        elif args.graph:
            graph = args.graph
        else:
            raise SystemExit("--topology graph needs --graph or --random-graph")
        return build_simulator(topology, graph=graph, **coined)

    @staticmethod
    def _mark(sim: QuantumWalkSimulator, args: argparse.Namespace) -> None:
        marks = list(args.mark)
        for leaf in args.mark_leaf:
            if not hasattr(sim, "leaf_index"):
                raise SystemExit("--mark-leaf only applies to --topology nand_tree")
            marks.append(sim.leaf_index(leaf))
        if not marks:
            if args.topology == "nand_tree":
                marks = [sim.leaf_index(0)]
            else:
                marks = [(0, 0) if args.topology in _LATTICES else 0]
        sim.mark_vertices(marks)
        logger.info("marked %s", sim.marked_vertices)

    def _walk(self, sim: QuantumWalkSimulator, steps: Optional[int]) -> None:
        print("Step; Pr; Overlap")

        def _emit(step: int, probability: float, overlap: float) -> None:
            self.rows.append((step, probability, overlap))
            print(f"{step}; {probability}; {overlap}")

        if steps is not None:
            for _ in range(steps):
                sim.run(1)
                _emit(sim.T, sim.get_marked_vertex_probability(), sim.get_scalar_product())
            return

        from experiments.search import run_search

        run_search(
            sim, on_step=lambda r: _emit(r.step, r.probability, r.overlap)
        )

    def _report(self, path: Optional[str]) -> None:
        if not path:
            return
        with open(path, "w", newline="") as fh:
            writer = csv.writer(fh)
            writer.writerow(["step", "probability", "overlap"])
            writer.writerows(self.rows)
        logger.info("wrote %d rows to %s", len(self.rows), path)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point for the ``quantum-walks`` console script."""

    MainService(argv).run()


if __name__ == "__main__":
    main()
