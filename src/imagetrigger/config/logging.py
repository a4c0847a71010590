"""Shared logging helpers."""

from __future__ import annotations

import logging

# HTTP client libraries that log one line per request at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once, in a terse format for CLI output.

    Per-request logging of the HTTP stack only shows up at DEBUG. Pass
    ``force=True`` to reconfigure an already configured root logger.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)
