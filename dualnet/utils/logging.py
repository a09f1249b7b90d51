"""A print-based logger for interactive simulation sessions.

Standard Python logging disappears in Jupyter notebooks unless carefully
configured. This module prints to stdout with timestamps and level labels
instead. Messages below the module-wide level are dropped, so per-tick
debug chatter stays quiet unless asked for.

Usage:
    from dualnet.utils import get_logger
    log = get_logger("my_module")
    log.info("Built state with %s nodes", 4)
"""

import sys
from datetime import datetime

LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}

_LEVEL = {"threshold": LEVELS["INFO"]}


def set_level(level):
    """Set the minimum level printed by every dualnet logger.

    Parameters
    ----------
    level : str
        One of DEBUG, INFO, WARNING, ERROR (case-insensitive).
    """
    key = level.upper()
    if key not in LEVELS:
        raise ValueError(f"Unknown log level '{level}'. "
                         f"Choose from: {list(LEVELS)}")
    _LEVEL["threshold"] = LEVELS[key]


def get_level():
    """Name of the current minimum level."""
    for name, value in LEVELS.items():
        if value == _LEVEL["threshold"]:
            return name
    return None


def get_logger(name, out=None):
    """Create a print-based logger.

    Parameters
    ----------
    name : str
        Logger name, displayed in every message header.
    out : file-like, optional
        Additional output stream (e.g., an open log file).

    Returns
    -------
    callable
        A log function with .debug, .info, .warning, .error methods.
    """
    prefix = f"dualnet:{name}"
    line_length = 72
    extra = [out] if out else []

    def _outputs():
        # sys.stdout is looked up per message so captured streams see output
        return [sys.stdout] + extra

    def _header(level, outputs):
        now = datetime.now().strftime("%H:%M:%S")
        for dest in outputs:
            print(f"{'_' * line_length}", file=dest)
            print(f"{prefix} {level} [{now}]", file=dest)

    def log(level, msg, args):
        if LEVELS[level] < _LEVEL["threshold"]:
            return
        outputs = _outputs()
        _header(level, outputs)
        for dest in outputs:
            try:
                print(msg % args, file=dest)
            except TypeError:
                print(msg, file=dest)

    log.debug = lambda msg, *args: log("DEBUG", msg, args)
    log.info = lambda msg, *args: log("INFO", msg, args)
    log.warning = lambda msg, *args: log("WARNING", msg, args)
    log.error = lambda msg, *args: log("ERROR", msg, args)

    return log
