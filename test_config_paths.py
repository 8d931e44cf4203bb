import json
import logging

import config_paths


def test_load_config_defaults_without_json(tmp_path, monkeypatch):
    monkeypatch.setattr(config_paths, "CONFIG_DIR", str(tmp_path))
    monkeypatch.setattr(config_paths, "CONFIG_JSON", str(tmp_path / "config.json"))
    cfg = config_paths.load_config()
    assert cfg["COLUMN_WIDTH"] == {"default": 10, "step": 2, "min": 3, "max": 50}
    assert cfg["CLIPBOARD_INTERFACE_COMMAND"] is None
    assert cfg["LOG_LEVEL"] == "INFO"
    assert cfg["LOG_PATH"] == config_paths.LOG_PATH


def test_load_config_reads_json_overrides(tmp_path, monkeypatch):
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(
        json.dumps(
            {
                "column_width": {"default": 12, "step": 3, "min": 4, "max": 30},
                "clipboard_interface_command": ["wl-copy"],
                "log_level": "debug",
                "log_path": str(tmp_path / "custom.log"),
            }
        )
    )
    monkeypatch.setattr(config_paths, "CONFIG_JSON", str(cfg_path))
    cfg = config_paths.load_config()
    assert cfg["COLUMN_WIDTH"] == {"default": 12, "step": 3, "min": 4, "max": 30}
    assert cfg["CLIPBOARD_INTERFACE_COMMAND"] == ["wl-copy"]
    assert cfg["LOG_LEVEL"] == "DEBUG"
    assert cfg["LOG_PATH"] == str(tmp_path / "custom.log")


def test_partial_column_width_merges_with_defaults(tmp_path):
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps({"column_width": {"max": 80}}))
    cfg = config_paths.load_config(str(cfg_path))
    assert cfg["COLUMN_WIDTH"] == {"default": 10, "step": 2, "min": 3, "max": 80}


def test_invalid_values_fall_back(tmp_path):
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(
        json.dumps(
            {
                "column_width": {"default": 100, "min": 3, "max": 50},
                "clipboard_interface_command": "xclip",
                "log_level": "LOUD",
            }
        )
    )
    cfg = config_paths.load_config(str(cfg_path))
    assert cfg["COLUMN_WIDTH"]["default"] == 10
    assert cfg["CLIPBOARD_INTERFACE_COMMAND"] is None
    assert cfg["LOG_LEVEL"] == "INFO"


def test_broken_json_logs_warning(tmp_path, caplog):
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text("{not json")
    with caplog.at_level(logging.WARNING, logger="config_paths"):
        cfg = config_paths.load_config(str(cfg_path))
    assert cfg["LOG_LEVEL"] == "INFO"
    assert "Could not read" in caplog.text


def test_ensure_config_dirs(tmp_path, monkeypatch):
    target = tmp_path / "a" / "gridedit"
    monkeypatch.setattr(config_paths, "CONFIG_DIR", str(target))
    config_paths.ensure_config_dirs()
    config_paths.ensure_config_dirs()
    assert target.is_dir()
