import json

from jtoa.config import DEFAULT_CONFIG, Config


def test_missing_file_gives_defaults(tmp_path):
    cfg = Config.load(str(tmp_path / "nope.json"))
    assert cfg["render"]["width"] == DEFAULT_CONFIG["render"]["width"]
    assert cfg["render"]["chars"] == DEFAULT_CONFIG["render"]["chars"]
    assert not (tmp_path / "nope.json").exists()


def test_user_values_merged_and_coerced(tmp_path):
    path = tmp_path / "jtoa.json"
    path.write_text(json.dumps({
        "render": {"width": "40", "invert": "yes", "chars": "x"},
        "logging": {"level": "debug"},
    }))
    cfg = Config.load(str(path))
    assert cfg["render"]["width"] == 40
    assert cfg["render"]["invert"] is True
    assert cfg["render"]["flipx"] is False
    # too short, falls back
    assert cfg["render"]["chars"] == DEFAULT_CONFIG["render"]["chars"]
    assert cfg["logging"]["level"] == "DEBUG"


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "jtoa.json"
    path.write_text("{not json")
    cfg = Config.load(str(path))
    assert cfg["render"] == Config()["render"]


def test_env_override(tmp_path, monkeypatch):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"render": {"flipy": True}}))
    monkeypatch.setenv("JTOA_CONFIG", str(path))
    assert Config.load()["render"]["flipy"] is True


def test_width_clamped(tmp_path):
    path = tmp_path / "jtoa.json"
    path.write_text(json.dumps({"render": {"width": 0}}))
    assert Config.load(str(path))["render"]["width"] == 1
