#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdmindmap/logging_utils.py
"""Logging setup for applications embedding mdmindmap.

Every mdmindmap module logs through ``logging.getLogger(__name__)``, so all
records flow through the ``mdmindmap`` package logger. The library never
installs handlers on import. :func:`configure_logging` attaches handlers to
the package logger only; the root logger and any handlers the host
application installed there are left untouched.

Calling :func:`configure_logging` again replaces the handlers installed by
the previous call instead of stacking new ones.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, Optional, Union

PACKAGE_LOGGER_NAME = "mdmindmap"

# Attribute set on handlers installed by configure_logging
_HANDLER_MARKER = "_mdmindmap_handler"

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_FORMAT = "%(levelname)s: %(message)s"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    resolved = logging.getLevelName(str(log_level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _remove_installed_handlers(package_logger: logging.Logger) -> None:
    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            package_logger.removeHandler(handler)
            handler.close()


def _install(package_logger: logging.Logger, handler: logging.Handler, formatter: logging.Formatter) -> None:
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_MARKER, True)
    package_logger.addHandler(handler)


def configure_logging(
    log_level: int | str,
    log_file: Optional[Union[str, os.PathLike]] = None,
    trace_mode: bool = False,
    stream: Optional[IO[str]] = None,
    propagate: bool = False,
) -> logging.Logger:
    """Configure the ``mdmindmap`` package logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "INFO"). Unknown names
        resolve to INFO.
    log_file : str or PathLike, optional
        Also append records to this file.
    trace_mode : bool, default False
        Include timestamps and logger names in each record.
    stream : file-like, optional
        Console stream for records. Defaults to ``sys.stderr``.
    propagate : bool, default False
        Whether package records also reach the root logger's handlers.

    Returns
    -------
    logging.Logger
        The configured package logger.

    """
    resolved_level = _resolve_level(log_level)

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(resolved_level)
    package_logger.propagate = propagate
    _remove_installed_handlers(package_logger)

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(DEFAULT_FORMAT)

    _install(package_logger, logging.StreamHandler(stream or sys.stderr), formatter)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            _install(package_logger, file_handler, formatter)
            package_logger.debug("Logging to file: %s", log_file)

    return package_logger


__all__ = [
    "PACKAGE_LOGGER_NAME",
    "configure_logging",
]
