import json

import pytest

from experiments.runner import ExperimentConfig
from Quantum_Walks import build_simulator as lazy_build
from Quantum_Walks.config import Config
from Quantum_Walks.engine import (
    TOPOLOGIES,
    Coin,
    GraphWalk,
    HoneycombWalk,
    HypercubeWalk,
    NandTreeWalk,
    QuantumWalkSimulator,
    RectangleWalk,
    StaggeredRectangleWalk,
    TriangleWalk,
    build_simulator,
)


@pytest.mark.parametrize(
    "name, params, cls",
    [
        ("rectangle", {"height": 4, "width": 6}, RectangleWalk),
        ("triangle", {"height": 4, "width": 4}, TriangleWalk),
        ("honeycomb", {"height": 4, "width": 4}, HoneycombWalk),
        ("staggered", {"height": 4, "width": 4}, StaggeredRectangleWalk),
        ("hypercube", {"n": 3}, HypercubeWalk),
        ("graph", {"graph": {"number_of_vertices": 3, "edges": [[0, 1]]}}, GraphWalk),
        ("nand_tree", {"tree_depth": 2}, NandTreeWalk),
    ],
)
def test_every_topology_builds(name, params, cls):
    sim = build_simulator(name, **params)
    assert isinstance(sim, cls)
    assert isinstance(sim, QuantumWalkSimulator)
    assert sim.T == 0
    assert sim.get_total_probability() == pytest.approx(1.0)


def test_registry_names():
    assert set(TOPOLOGIES) == {
        "rectangle",
        "triangle",
        "honeycomb",
        "staggered",
        "hypercube",
        "graph",
        "nand_tree",
    }


def test_names_are_case_insensitive():
    sim = lazy_build(" Rectangle ", height=2, width=2, coin="AKR")
    assert isinstance(sim, RectangleWalk)
    assert sim.coin is Coin.AKR


def test_unknown_topology():
    with pytest.raises(KeyError):
        build_simulator("moebius")


def test_graph_from_json_path(tmp_path):
    path = tmp_path / "g.json"
    path.write_text(json.dumps({"number_of_vertices": 4, "edges": [[0, 1], [1, 2], [2, 3]]}))
    sim = build_simulator("graph", graph=str(path), self_loop_weight=0.5)
    assert sim.N == 4
    assert sim.graph.number_of_edges == 3


def test_factory_ignores_config_coin():
    Config.coin = "akr"
    Config.self_loop_weight = 0.5
    sim = build_simulator("rectangle", height=2, width=2)
    assert sim.coin is Coin.GROVER
    assert sim.self_loop_weight == 0.0
    assert ExperimentConfig.from_mapping({"topology": "rectangle", "sizes": [2]}).coin == "akr"
