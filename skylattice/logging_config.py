"""
Logging setup for scripts and examples.

Library modules only create module-level loggers; handlers are attached here
so that importing SkyLattice never changes the host application's logging.
"""

import logging
import os
from typing import Optional, Union

_LOG_FORMAT = "%(asctime)s | %(levelname)s | skylattice.%(module)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_ENV_LEVEL = "SKYLATTICE_LOG_LEVEL"


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = os.getenv(_ENV_LEVEL, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    # getLevelName returns "Level X" for unknown names
    if isinstance(resolved, str):
        return logging.INFO
    return resolved


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Attach a stream handler to the ``skylattice`` logger.

    Calling this more than once only updates the level.

    Args:
        level: Logging level name or number. Defaults to the
            SKYLATTICE_LOG_LEVEL environment variable, then INFO.

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("skylattice")
    logger.setLevel(_resolve_level(level))

    if not any(getattr(h, "_skylattice", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
        handler._skylattice = True
        logger.addHandler(handler)

    return logger
