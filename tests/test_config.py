import json
import os

import pytest

from Quantum_Walks.config import Config
from Quantum_Walks.engine import RectangleWalk


def test_load_from_file_merges_search_settings(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"coin": "akr", "search": {"rise_after": 12}}))
    Config.load_from_file(str(cfg))
    assert Config.coin == "akr"
    assert Config.search["rise_after"] == 12
    assert Config.search["max_steps_factor"] == 5
    assert Config.config_file == str(cfg)


def test_unknown_keys_ignored(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"no_such_option": 1, "_private": 2}))
    Config.load_from_file(str(cfg))
    assert not hasattr(Config, "no_such_option")


def test_output_dir_resolved_relative_to_config(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"output_dir": "results"}))
    Config.load_from_file(str(cfg))
    assert Config.output_dir == os.path.join(str(tmp_path), "results")


@pytest.mark.parametrize(
    "data",
    [
        {"self_loop_weight": -0.5, "tolerance": 1.0},
        {"self_loop_weight": "heavy", "tolerance": 1.0},
        {"coin": "hadamard", "tolerance": 1.0},
        {"tolerance": "tiny"},
        {"tolerance": -1e-9, "diagnostics": False},
        {"tolerance": True},
        {"diagnostics": "yes", "tolerance": 1.0},
        {"search": {"rise_after": "soon"}, "tolerance": 1.0},
        {"search": {"probability_drop": -0.1}, "tolerance": 1.0},
        {"search": {"max_steps_factor": 0}, "tolerance": 1.0},
        {"search": 5, "tolerance": 1.0},
    ],
)
def test_invalid_values_leave_config_untouched(tmp_path, data):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps(data))
    before = Config.tolerance
    search_before = dict(Config.search)
    diagnostics_before = Config.diagnostics
    with pytest.raises(ValueError):
        Config.load_from_file(str(cfg))
    assert Config.tolerance == before
    assert Config.search == search_before
    assert Config.diagnostics == diagnostics_before
    assert Config.config_file != str(cfg)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load_from_file(str(tmp_path / "missing.json"))


def test_valid_tolerance_and_diagnostics_load(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"tolerance": 1e-6, "diagnostics": False}))
    Config.load_from_file(str(cfg))
    assert Config.tolerance == 1e-6
    assert Config.diagnostics is False


def test_rejected_tolerance_does_not_break_later_runs(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"tolerance": "tiny"}))
    with pytest.raises(ValueError):
        Config.load_from_file(str(cfg))
    sim = RectangleWalk(2, 2)
    sim.run(1)
    assert sim.get_total_probability() == pytest.approx(1.0)
