import json
import logging
import os

from workbook import (
    COLUMN_WIDTH_STEP,
    DEFAULT_COLUMN_WIDTH,
    MAX_COLUMN_WIDTH,
    MIN_COLUMN_WIDTH,
)

logger = logging.getLogger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "gridedit")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "gridedit.log")

# default settings
COLUMN_WIDTH_DEFAULT = {
    "default": DEFAULT_COLUMN_WIDTH,
    "step": COLUMN_WIDTH_STEP,
    "min": MIN_COLUMN_WIDTH,
    "max": MAX_COLUMN_WIDTH,
}
CLIPBOARD_INTERFACE_COMMAND_DEFAULT = None
LOG_LEVEL_DEFAULT = "INFO"
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def _column_width(raw) -> dict:
    widths = dict(COLUMN_WIDTH_DEFAULT)
    if not isinstance(raw, dict):
        return widths
    for key in widths:
        value = raw.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            widths[key] = value

    if not (
        1 <= widths["min"] <= widths["default"] <= widths["max"]
        and widths["step"] >= 1
    ):
        logger.warning("Ignoring invalid column_width settings: %r", raw)
        return dict(COLUMN_WIDTH_DEFAULT)
    return widths


def load_config(path: str | None = None) -> dict:
    path = path or CONFIG_JSON
    cfg = {
        "COLUMN_WIDTH": dict(COLUMN_WIDTH_DEFAULT),
        "CLIPBOARD_INTERFACE_COMMAND": CLIPBOARD_INTERFACE_COMMAND_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
        "LOG_PATH": LOG_PATH,
    }

    if not os.path.exists(path):
        return cfg

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Could not read %s, using defaults: %s", path, exc)
        return cfg

    if not isinstance(data, dict):
        logger.warning("Ignoring %s: top level is not an object", path)
        return cfg

    if "column_width" in data:
        cfg["COLUMN_WIDTH"] = _column_width(data.get("column_width"))

    clip_cmd = data.get("clipboard_interface_command")
    if isinstance(clip_cmd, list) and clip_cmd and all(
        isinstance(item, str) for item in clip_cmd
    ):
        cfg["CLIPBOARD_INTERFACE_COMMAND"] = clip_cmd

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    log_path = data.get("log_path")
    if isinstance(log_path, str) and log_path.strip():
        cfg["LOG_PATH"] = os.path.expanduser(log_path)

    return cfg
