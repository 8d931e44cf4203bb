import curses
import logging
import os
import sys

import config_paths
import file_type_handler
from file_type_handler import LoadError, UnsupportedFileType
from logging_utils import configure_logging
from session import GridSession

__version__ = "0.1.0"

USAGE = (
    "gridedit - terminal spreadsheet editor for .xlsx and .csv files\n\n"
    "Usage:\n  gridedit PATH\n  gridedit --debug PATH\n  gridedit -v\n"
)

logger = logging.getLogger(__name__)


def parse_args(args: list[str]) -> dict:
    opts = {"help": False, "version": False, "debug": False, "path": None}
    rest = []
    for arg in args:
        if arg in ("-h", "--help"):
            opts["help"] = True
        elif arg in ("-v", "-V", "--version"):
            opts["version"] = True
        elif arg == "--debug":
            opts["debug"] = True
        else:
            rest.append(arg)
    if len(rest) == 1:
        opts["path"] = rest[0]
    elif len(rest) > 1:
        opts["help"] = True
    return opts


def main(argv: list[str] | None = None) -> int:
    opts = parse_args(sys.argv[1:] if argv is None else argv)

    if opts["version"]:
        print(__version__)
        return 0

    if opts["help"] or not opts["path"]:
        print(USAGE)
        return 0 if opts["help"] else 2

    cfg = config_paths.load_config()
    level = "DEBUG" if opts["debug"] else cfg["LOG_LEVEL"]
    configure_logging(level=level, log_path=cfg["LOG_PATH"])

    path = opts["path"]
    try:
        workbook = file_type_handler.load(path)
    except (UnsupportedFileType, LoadError) as exc:
        logger.error("Cannot open %s: %s", path, exc)
        print(f"gridedit: {path}: {exc}", file=sys.stderr)
        return 1

    session = GridSession(workbook, path=path, persistence=file_type_handler, config=cfg)

    # Make ESC snappy
    os.environ.setdefault("ESCDELAY", "25")
    from orchestrator import Orchestrator

    def curses_main(stdscr):
        Orchestrator(stdscr, session).run()

    curses.wrapper(curses_main)
    return 0


if __name__ == "__main__":
    sys.exit(main())
