import json

import pytest

from Quantum_Walks.graph import Graph
from Quantum_Walks.graph.io import load_graph, save_graph


def test_load_and_save_roundtrip(tmp_path):
    data = {"number_of_vertices": 4, "edges": [[0, 1], [1, 2], [3, 2]]}
    path = tmp_path / "g.json"
    path.write_text(json.dumps(data))

    graph = load_graph(str(path))
    assert graph.number_of_edges == 3
    assert graph.has_edge(2, 3)

    out = tmp_path / "out.json"
    save_graph(str(out), graph)
    saved = json.loads(out.read_text())
    assert saved["number_of_vertices"] == 4
    assert saved["edges"] == [[0, 1], [1, 2], [3, 2]]
    assert load_graph(str(out)) == graph


def test_edges_key_optional(tmp_path):
    path = tmp_path / "g.json"
    path.write_text(json.dumps({"number_of_vertices": 2}))
    assert load_graph(str(path)) == Graph(2)


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"edges": []},
        {"number_of_vertices": "3"},
        {"number_of_vertices": 3, "edges": {"0": 1}},
        {"number_of_vertices": 3, "edges": [[0, 1, 2]]},
    ],
)
def test_malformed_files_rejected(tmp_path, data):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(data))
    with pytest.raises(ValueError):
        load_graph(str(path))
