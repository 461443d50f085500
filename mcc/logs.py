from __future__ import annotations

import logging
import sys


ROOT_LOGGER = "mcc"


def get_level(debug: bool, quiet: bool, verbosity: int) -> int:
    if debug:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    if verbosity <= 0:
        return logging.INFO
    return logging.DEBUG


class ConsoleFilter(logging.Filter):
    """Pass records at or above `level`; outside our namespace only in debug mode."""

    def __init__(self, level: int, debug: bool = False, below: int | None = None):
        super().__init__()
        self.level = level
        self.debug = debug
        self.below = below

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno < self.level:
            return False
        if self.below is not None and record.levelno >= self.below:
            return False
        if self.debug:
            return True
        return record.name == ROOT_LOGGER or record.name.startswith(ROOT_LOGGER + ".")


def init_logging(debug: bool = False, quiet: bool = False, verbosity: int = 0) -> None:
    """Send warnings and errors to stderr and everything else to stdout, message text only."""
    level = get_level(debug, quiet, verbosity)

    out = logging.StreamHandler(sys.stdout)
    out.addFilter(ConsoleFilter(level, debug, below=logging.WARNING))
    err = logging.StreamHandler(sys.stderr)
    err.addFilter(ConsoleFilter(max(level, logging.WARNING), debug))

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in (out, err):
        h.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(h)
    root.setLevel(logging.DEBUG)
