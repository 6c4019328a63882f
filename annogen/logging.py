"""Logging utilities for annogen commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "annogen"
_CONSOLE_FORMAT = "[annogen] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the annogen hierarchy."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route annogen progress to the console and, optionally, a log file.

    ``quiet`` keeps only warnings and errors on the console; the file sink
    always records at the effective run level.
    """
    level = _resolve_level(verbose=verbose, quiet=quiet)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(min(level, logging.INFO) if log_file is not None else level)
    logger.propagate = False

    # Drop handlers from a previous invocation in the same process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG if verbose else logging.INFO)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)

    return logger


def _resolve_level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


__all__ = ["configure_logging", "get_logger"]
