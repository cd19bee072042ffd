# linecomp/log_manager.py
"""
Logger setup for linecomp.

Every logger below ``linecomp.`` shares a single stderr handler installed on
the package root. Loggers outside that tree get a handler of their own and
stop propagating. Output is colored by `colorlog` when stderr is a terminal.

Environment variables
---------------------
LINECOMP_FORCE_COLOR=true|false
    Color on or off regardless of the terminal check.

stdout is left alone: the CLI prints candidates there.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Dict, Optional

import colorlog

__all__ = ["get_logger", "set_level"]

ROOT_LOGGER_NAME = "linecomp"

_RECORD_FMT = "%(levelname)-8s %(name)s: %(message)s"
_FILE_FMT = "%(asctime)s " + _RECORD_FMT
_FILE_DATEFMT = "%Y-%m-%dT%H:%M:%S"

_PALETTE: Dict[str, str] = {
    "DEBUG": "blue",
    "INFO": "white",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}

_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Set on a logger once its stderr handler is in place.
_MARKER = "_linecomp_stream_handler_attached"


def _color_wanted() -> bool:
    forced = os.getenv("LINECOMP_FORCE_COLOR")
    if forced is not None:
        return forced.strip().lower() in ("1", "true", "yes", "on")
    isatty = getattr(sys.stderr, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:  # closed stream
        return False


def _stderr_formatter() -> logging.Formatter:
    if _color_wanted():
        return colorlog.ColoredFormatter("%(log_color)s" + _RECORD_FMT, log_colors=_PALETTE)
    return logging.Formatter(_RECORD_FMT)


def _ensure_stderr_handler(logger: logging.Logger) -> None:
    if getattr(logger, _MARKER, False):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_stderr_formatter())
    logger.addHandler(handler)
    setattr(logger, _MARKER, True)


def _ensure_file_handler(logger: logging.Logger, path: str) -> None:
    """Add a UTF-8 file handler for ``path`` unless one already writes there."""
    target = os.path.abspath(path)
    if any(getattr(h, "baseFilename", None) == target for h in logger.handlers):
        return
    try:
        handler = logging.FileHandler(target, encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to open log file '%s': %s", target, exc)
        return
    handler.setFormatter(logging.Formatter(_FILE_FMT, datefmt=_FILE_DATEFMT))
    logger.addHandler(handler)


def _in_package_tree(name: str) -> bool:
    return name.startswith(ROOT_LOGGER_NAME + ".")


def get_logger(
    name: str = ROOT_LOGGER_NAME,
    level: Optional[int] = None,
    log_to_file: Optional[str] = None,
) -> logging.Logger:
    """
    Fetch a logger and make sure its records reach stderr exactly once.

    Parameters
    ----------
    name : str, default "linecomp"
        ``linecomp.*`` names only trigger setup of the package root and keep
        propagating to it. Any other name is configured on its own.
    level : Optional[int]
        New level, or ``None`` to keep the current one.
    log_to_file : Optional[str]
        Also append records to this file.
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)

    if _in_package_tree(name):
        get_logger(ROOT_LOGGER_NAME, log_to_file=log_to_file)
        return logger

    _ensure_stderr_handler(logger)
    if log_to_file:
        _ensure_file_handler(logger, log_to_file)
    logger.propagate = False
    return logger


def set_level(level: str, log_to_file: Optional[str] = None) -> logging.Logger:
    """Set the package root level from a name such as ``"debug"``.

    Raises
    ------
    ValueError
        ``level`` is not a standard level name.
    """
    key = level.strip().upper()
    if key not in _LEVELS:
        raise ValueError(f"Unknown log level: {level!r}")
    return get_logger(ROOT_LOGGER_NAME, level=_LEVELS[key], log_to_file=log_to_file)
