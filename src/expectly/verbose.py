"""Debug logging for the expectly package loggers."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

PACKAGE_LOGGER = "expectly"

_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _attach(logger: logging.Logger, handler: logging.Handler) -> None:
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
    logger.addHandler(handler)


def reset_logger(logger_name: str = PACKAGE_LOGGER) -> None:
    """Close and detach every handler on *logger_name*."""
    logger = logging.getLogger(logger_name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logger(
    debug_file: Path, verbose: bool = False, logger_name: str = PACKAGE_LOGGER
) -> logging.Logger:
    """
    Send debug output of *logger_name* and its children to *debug_file*.

    Folds, captured exceptions and failed expectations are logged by the
    ``expectly.*`` module loggers, which propagate to the package logger.
    With ``verbose=True`` the same lines also go to stderr.

    Raises:
        RuntimeError: if the logger already has handlers attached, so two
            setups never write into each other's files. Call
            :func:`reset_logger` first to replace them.
    """
    logger = logging.getLogger(logger_name)
    if logger.handlers:
        raise RuntimeError(
            f"Logger '{logger_name}' already exists with handlers attached; "
            "call reset_logger() first or use a unique logger name"
        )

    logger.disabled = False
    logger.setLevel(logging.DEBUG)

    debug_file.parent.mkdir(parents=True, exist_ok=True)
    _attach(logger, logging.FileHandler(debug_file, mode="a", encoding="utf-8"))
    if verbose:
        _attach(logger, logging.StreamHandler(sys.stderr))

    return logger
