import csv
import json

import pytest

from Quantum_Walks.config import Config
from Quantum_Walks.main import MainService, _parse_position, main


def _output_rows(text: str) -> list:
    lines = text.strip().splitlines()
    assert lines[0] == "Step; Pr; Overlap"
    return [tuple(float(v) for v in line.split("; ")) for line in lines[1:]]


def test_fixed_number_of_steps(capsys):
    main(["--topology", "rectangle", "--size", "8", "--mark", "3,4", "--steps", "5"])
    rows = _output_rows(capsys.readouterr().out)
    assert [int(r[0]) for r in rows] == [1, 2, 3, 4, 5]
    assert all(0.0 <= r[1] <= 1.0 for r in rows)


def test_search_until_overlap_flips(tmp_path, capsys):
    out = tmp_path / "traj.csv"
    service = MainService(
        ["--topology", "hypercube", "--dimension", "6", "--coin", "akr", "--csv", str(out)]
    )
    service.run()
    rows = _output_rows(capsys.readouterr().out)
    assert rows[-1][2] < 0
    assert len(service.rows) == len(rows)
    with out.open() as fh:
        written = list(csv.reader(fh))
    assert written[0] == ["step", "probability", "overlap"]
    assert len(written) == len(rows) + 1


def test_nand_tree_leaf_marks(capsys):
    service = MainService(
        ["--topology", "nand_tree", "--tree-depth", "3", "--mark-leaf", "2", "--steps", "2"]
    )
    service.run()
    assert len(service.rows) == 2
    assert _output_rows(capsys.readouterr().out)[0][0] == 1


def test_random_graph(capsys):
    main(
        [
            "--topology", "graph", "--random-graph", "barabasi_albert",
            "--vertices", "20", "--seed", "4", "--mark", "0", "--steps", "3",
            "--self-loop-weight", "0.5",
        ]
    )
    assert len(_output_rows(capsys.readouterr().out)) == 3


def test_graph_file(tmp_path, capsys):
    path = tmp_path / "g.json"
    path.write_text(json.dumps({"number_of_vertices": 3, "edges": [[0, 1], [1, 2]]}))
    main(["--topology", "graph", "--graph", str(path), "--steps", "1"])
    assert len(_output_rows(capsys.readouterr().out)) == 1


def test_config_file_supplies_defaults(tmp_path, capsys):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"coin": "akr", "self_loop_weight": 0.25}))
    main(["--config", str(cfg), "--size", "4", "--steps", "1"])
    assert Config.coin == "akr"
    assert Config.self_loop_weight == 0.25
    capsys.readouterr()


def test_usage_errors():
    with pytest.raises(SystemExit):
        main(["--topology", "graph", "--steps", "1"])
    with pytest.raises(SystemExit):
        main(["--topology", "rectangle", "--mark-leaf", "0", "--steps", "1"])
    with pytest.raises(SystemExit):
        main(["--mark", "1,2,3"])


def test_parse_position():
    assert _parse_position("4, 5") == (4, 5)
    assert _parse_position("7") == 7
