"""Package-wide logger helpers."""

from __future__ import annotations

import logging
import os
from typing import Optional

LOGGER_NAME = "sigmaSettings"
_LEVEL_ENV = "SIGMA_SETTINGS_LOG_LEVEL"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or a child of it when *name* is given.

    The root package logger gets a single stream handler the first time it is
    requested so command line usage shows warnings without extra setup.
    """

    base = logging.getLogger(LOGGER_NAME)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        base.addHandler(handler)
        level = os.environ.get(_LEVEL_ENV, "WARNING").upper()
        base.setLevel(getattr(logging, level, logging.WARNING))
    if not name:
        return base
    return base.getChild(name)


logger = get_logger()

__all__ = ["LOGGER_NAME", "get_logger", "logger"]
