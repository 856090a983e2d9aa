import json

import pytest
import yaml

from Gray_Layout.config import Config, load_config


def test_load_from_file_merges_nested_groups(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"eades": {"c1": 3.0}, "default_iterations": 40}))
    Config.load_from_file(str(cfg))
    assert Config.eades["c1"] == 3.0
    assert Config.eades["c2"] == 1.0
    assert Config.default_iterations == 40
    assert Config.config_file == str(cfg)


def test_load_from_file_resolves_relative_paths(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"graph_file": "g.json", "output_dir": "out"}))
    Config.load_from_file(str(cfg))
    assert Config.graph_file == str(tmp_path / "g.json")
    assert Config.output_dir == str(tmp_path / "out")


def test_unknown_and_method_keys_are_ignored(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"no_such_key": 1, "load_from_file": 2}))
    Config.load_from_file(str(cfg))
    assert not hasattr(Config, "no_such_key")
    assert callable(Config.load_from_file)


def test_load_yaml_config(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(yaml.safe_dump({"default_method": "fruchterman_reingold"}))
    data = load_config(str(cfg))
    assert data == {"default_method": "fruchterman_reingold"}
    assert Config.default_method == "fruchterman_reingold"


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load_from_file(str(tmp_path / "missing.json"))


def test_config_must_be_a_mapping(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text("[1, 2]")
    with pytest.raises(ValueError):
        Config.load_from_file(str(cfg))


def test_packaged_config_matches_defaults():
    load_config()
    assert Config.default_method == "eades"
    assert Config.default_iterations == 100
    assert Config.normalize_mins == [0.05, 0.05]
