"""
Logger factory for scansplit.

Every module logger is a child of the ``scansplit`` package logger, which
owns the one stream handler. Library modules log at WARNING and above; the
CLI and the pipeline also report progress at INFO. SCANSPLIT_LOG_LEVEL
overrides both, and ``set_verbose`` lowers everything to DEBUG.
"""

import logging
import os
from typing import Optional

PACKAGE_LOGGER = "scansplit"
LOG_LEVEL_ENV = "SCANSPLIT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

PROGRESS_MODULES = ("cli", "pipeline")


def _env_level() -> Optional[int]:
    value = os.getenv(LOG_LEVEL_ENV, "").strip().upper()
    if not value:
        return None
    level = logging.getLevelName(value)
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else None


def default_level(name: str) -> int:
    """Level a scansplit logger starts at, before any verbosity change."""
    env = _env_level()
    if env is not None:
        return env
    if name.rsplit(".", 1)[-1] in PROGRESS_MODULES:
        return logging.INFO
    return logging.WARNING


def _package_logger() -> logging.Logger:
    package = logging.getLogger(PACKAGE_LOGGER)
    if not package.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package.addHandler(handler)
    return package


def get_logger(name: str) -> logging.Logger:
    _package_logger()
    logger = logging.getLogger(name)
    if logger.level == logging.NOTSET:
        logger.setLevel(default_level(name))
    return logger


def set_verbose(enabled: bool = True) -> None:
    """Switch every scansplit logger to DEBUG, or back to its default level."""
    prefix = PACKAGE_LOGGER + "."
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if not isinstance(logger, logging.Logger):
            continue
        if name == PACKAGE_LOGGER or name.startswith(prefix):
            logger.setLevel(logging.DEBUG if enabled else default_level(name))
