from pathlib import Path
import json
from genealogie_py.config import load_config, Config


def test_load_config_from_file(tmp_path):
    cfgfile = tmp_path / "cfg.json"
    data = {"data_file": "mydata/p.json", "legacy_prefix": "old_", "suggest_limit": 5, "port": 9001}
    cfgfile.write_text(json.dumps(data))
    cfg = load_config(str(cfgfile))
    assert cfg.data_file == Path("mydata/p.json")
    assert cfg.legacy_prefix == "old_"
    assert cfg.suggest_limit == 5
    assert cfg.port == 9001


def test_env_overrides(monkeypatch):
    monkeypatch.delenv("GENEALOGIE_CONFIG", raising=False)
    monkeypatch.setenv("GENEALOGIE_DATA_FILE", "env/personnes.json")
    monkeypatch.setenv("GENEALOGIE_SUGGEST_LIMIT", "3")
    monkeypatch.setenv("GENEALOGIE_LEGACY_PREFIX", "")
    cfg = load_config(None)
    assert cfg.data_file == Path("env/personnes.json")
    assert cfg.suggest_limit == 3
    assert cfg.legacy_prefix == ""


def test_explicit_file_wins_over_env(tmp_path, monkeypatch):
    cfgfile = tmp_path / "cfg.json"
    cfgfile.write_text(json.dumps({"data_file": "file.json"}))
    monkeypatch.setenv("GENEALOGIE_DATA_FILE", "env.json")
    assert load_config(str(cfgfile)).data_file == Path("file.json")


def test_bad_values_keep_defaults(tmp_path, monkeypatch):
    cfgfile = tmp_path / "cfg.json"
    cfgfile.write_text("not json at all")
    assert load_config(str(cfgfile)) == Config()
    cfgfile.write_text(json.dumps({"suggest_limit": "many"}))
    assert load_config(str(cfgfile)).suggest_limit == Config().suggest_limit
