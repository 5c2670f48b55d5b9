from __future__ import annotations

import logging
import os
import sys

LOG_ENV_VAR = "GETSET_LOG"

_setup_done = False


def setup_logging(level: str | None = None) -> None:
    """Send ``getset`` log records to stderr at the ``GETSET_LOG`` level."""
    global _setup_done

    name = (level or os.environ.get(LOG_ENV_VAR) or "WARNING").upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        resolved = logging.WARNING

    logger = logging.getLogger("getset")
    logger.setLevel(resolved)

    if _setup_done:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    _setup_done = True
