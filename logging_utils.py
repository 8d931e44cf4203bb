import logging
import os
from logging.handlers import RotatingFileHandler


def configure_logging(*, level: str = "INFO", log_path: str | None = None) -> str | None:
    """Send app-wide logging to a rotating file.

    The terminal belongs to curses, so there is never a console handler.
    Returns the log file path in use, or None when it could not be opened.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # Avoid duplicating handlers if called more than once.
    if getattr(root, "_gridedit_configured", False):
        for handler in root.handlers:
            handler.setLevel(root.level)
        return getattr(root, "_gridedit_log_path", None)

    if log_path is None:
        import config_paths

        config_paths.ensure_config_dirs()
        log_path = config_paths.LOG_PATH

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        os.makedirs(os.path.dirname(os.path.abspath(log_path)), exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
        )
    except OSError:
        # nowhere to write; keep the root quiet instead of printing over the grid
        root.addHandler(logging.NullHandler())
        log_path = None
    else:
        file_handler.setLevel(root.level)
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)

    setattr(root, "_gridedit_configured", True)
    setattr(root, "_gridedit_log_path", log_path)
    return log_path
