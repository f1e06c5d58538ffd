"""
log_utils.py - Logging setup with icons

Every Inkwell module logs through ``logging.getLogger(__name__)``; the CLI
calls ``setup_logging`` once so messages come out prefixed with a status
icon and without per-line timestamps.
"""

import logging
import sys

from inkwell import icons


# Message-only; no per-line timestamps
LOG_FORMAT = "%(message)s"


def _level_icons() -> dict:
    return {
        logging.DEBUG: icons.icons.DEBUG,
        logging.INFO: icons.icons.INFO,
        logging.WARNING: icons.icons.WARNING,
        logging.ERROR: icons.icons.ERROR,
        logging.CRITICAL: icons.icons.CRITICAL,
    }


class IconLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        icon = getattr(record, "icon", None) or _level_icons().get(record.levelno, icons.icons.INFO)
        base = super().format(record)
        return f"{icon} {base}"


def setup_logging(verbosity: int = 0) -> None:
    level = logging.INFO
    if verbosity >= 1:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(IconLogFormatter(LOG_FORMAT))

    root = logging.getLogger("inkwell")
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)
