"""Logging utilities for l10n-extract commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "l10n_extract"


class ConsoleFormatter(logging.Formatter):
    """Print progress lines bare and prefix problems with their level.

    Verbose runs also show the emitting component, e.g. ``[orchestrator]``.
    """

    def __init__(self, *, show_component: bool = False) -> None:
        super().__init__()
        self.show_component = show_component

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        if self.show_component:
            component = record.name.rpartition(".")[2]
            message = f"[{component}] {message}"
        if record.levelno >= logging.WARNING:
            return f"{record.levelname.lower()}: {message}"
        return message


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the l10n_extract hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure console output and an optional file sink.

    ``quiet`` limits the console to warnings; ``verbose`` wins when both are
    set. The file sink always records DEBUG so a quiet run can still be
    diagnosed afterwards.
    """
    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.WARNING
    else:
        console_level = logging.INFO

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations in one process do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(ConsoleFormatter(show_component=verbose))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["ConsoleFormatter", "configure_logging", "get_logger"]
