import logging

import pytest

import main
from logging_utils import configure_logging


@pytest.mark.parametrize(
    "args, expected",
    [
        (["book.xlsx"], {"help": False, "version": False, "debug": False, "path": "book.xlsx"}),
        (["--debug", "a.csv"], {"help": False, "version": False, "debug": True, "path": "a.csv"}),
        (["-v"], {"help": False, "version": True, "debug": False, "path": None}),
        (["-h"], {"help": True, "version": False, "debug": False, "path": None}),
        (["a.xlsx", "b.xlsx"], {"help": True, "version": False, "debug": False, "path": None}),
    ],
)
def test_parse_args(args, expected):
    assert main.parse_args(args) == expected


def test_version_flag(capsys):
    assert main.main(["-v"]) == 0
    assert capsys.readouterr().out.strip() == main.__version__


def test_missing_path_prints_usage(capsys):
    assert main.main([]) == 2
    assert "Usage" in capsys.readouterr().out


def _isolate(monkeypatch, tmp_path):
    monkeypatch.setattr(
        main.config_paths,
        "load_config",
        lambda: {"LOG_LEVEL": "INFO", "LOG_PATH": str(tmp_path / "g.log")},
    )
    monkeypatch.setattr(main, "configure_logging", lambda **kwargs: None)
    monkeypatch.setattr(main.curses, "wrapper", lambda fn: pytest.fail("curses started"))


def test_unsupported_file_exits_1(tmp_path, monkeypatch, capsys):
    _isolate(monkeypatch, tmp_path)
    assert main.main([str(tmp_path / "data.json")]) == 1
    assert "Unsupported file type" in capsys.readouterr().err


def test_malformed_file_exits_1(tmp_path, monkeypatch, capsys):
    _isolate(monkeypatch, tmp_path)
    bad = tmp_path / "bad.xlsx"
    bad.write_bytes(b"garbage")
    assert main.main([str(bad)]) == 1
    assert "Failed to read file" in capsys.readouterr().err


def test_configure_logging_is_idempotent(tmp_path, monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    log_path = str(tmp_path / "logs" / "gridedit.log")

    try:
        assert configure_logging(level="DEBUG", log_path=log_path) == log_path
        assert configure_logging(level="DEBUG", log_path=log_path) == log_path
        assert len(root.handlers) == 1

        logging.getLogger("workbook").debug("hello from test")
        root.handlers[0].flush()
        with open(log_path, encoding="utf-8") as f:
            line = f.read().strip()
        assert line.endswith("DEBUG workbook: hello from test")
    finally:
        for handler in root.handlers:
            handler.close()
        for attr in ("_gridedit_configured", "_gridedit_log_path"):
            if hasattr(root, attr):
                delattr(root, attr)
