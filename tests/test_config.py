import json

from relped.config import load_config, Config, _load_json_file


def test_defaults(monkeypatch):
    for var in ("RELPED_CONFIG", "RELPED_MAX_DISTANCE", "RELPED_SHORTEST_PATH", "RELPED_DIRECTED"):
        monkeypatch.delenv(var, raising=False)
    assert load_config() == Config()


def test_load_config_from_file(tmp_path):
    cfgfile = tmp_path / "cfg.json"
    data = {"max_distance": 4, "directed": False, "keep_self_loops": "yes", "shortest_path": "bellman-ford"}
    cfgfile.write_text(json.dumps(data))
    cfg = load_config(str(cfgfile))
    assert cfg.max_distance == 4
    assert cfg.directed is False
    assert cfg.keep_self_loops is True
    assert cfg.shortest_path == "bellman-ford"


def test_env_overrides(monkeypatch):
    monkeypatch.delenv("RELPED_CONFIG", raising=False)
    monkeypatch.setenv("RELPED_MAX_DISTANCE", "3")
    monkeypatch.setenv("RELPED_SHORTEST_PATH", "bellman-ford")
    monkeypatch.setenv("RELPED_DIRECTED", "false")
    cfg = load_config(None)
    assert cfg.max_distance == 3
    assert cfg.shortest_path == "bellman-ford"
    assert cfg.directed is False


def test_explicit_file_ignores_env(tmp_path, monkeypatch):
    cfgfile = tmp_path / "cfg.json"
    cfgfile.write_text(json.dumps({"max_distance": 5}))
    monkeypatch.setenv("RELPED_MAX_DISTANCE", "2")
    assert load_config(str(cfgfile)).max_distance == 5


def test_env_config_file(tmp_path, monkeypatch):
    cfgfile = tmp_path / "cfg.json"
    cfgfile.write_text(json.dumps({"normalize": True}))
    monkeypatch.setenv("RELPED_CONFIG", str(cfgfile))
    monkeypatch.delenv("RELPED_MAX_DISTANCE", raising=False)
    assert load_config().normalize is True


def test_clamps_and_resets(tmp_path, caplog):
    cfgfile = tmp_path / "cfg.json"
    cfgfile.write_text(json.dumps({"max_distance": 12, "shortest_path": "astar"}))
    cfg = load_config(str(cfgfile))
    assert cfg.max_distance == 9
    assert cfg.shortest_path == "dijkstra"
    assert "ill-advised" in caplog.text


def test_unreadable_file_falls_back(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    assert _load_json_file(bad) is None
    assert _load_json_file(tmp_path / "missing.json") is None
    assert load_config(str(bad)) == Config()
