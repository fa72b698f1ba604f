from __future__ import annotations

import logging
import os

import coloredlogs  # type: ignore[import]

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
QUIET_LOGGERS = ("zeroconf", "aiohttp")


def setup_logging(level: str | None = None) -> str:
    """Install colored console logging and return the level in use.

    ``level`` wins over the ``LOGLEVEL`` environment variable, then INFO.
    Library loggers in ``QUIET_LOGGERS`` only report warnings and above.
    """
    resolved = (level or os.environ.get("LOGLEVEL") or "INFO").upper()
    coloredlogs.install(
        level=resolved, fmt=LOG_FORMAT, datefmt="%H:%M:%S", milliseconds=True
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return resolved
