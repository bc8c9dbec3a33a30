"""
=================
Logging Utilities
=================

This module contains utilities for configuring logging.

"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import loguru
from loguru import logger


def configure_logging_to_terminal(verbosity: int, long_format: bool = True) -> None:
    """Configure logging to print to sys.stderr.

    Parameters
    ----------
    verbosity
        The verbosity level of the logging. 0 logs at the WARNING level, 1 logs
        at the INFO level, and 2 logs at the DEBUG level.
    long_format
        Whether to use the long format for logging messages, which includes
        the level and the name of the stream a message is about.
    """
    _clear_default_configuration()
    _add_logging_sink(
        sink=sys.stderr,
        verbosity=verbosity,
        long_format=long_format,
        colorize=True,
        serialize=False,
    )


def configure_logging_to_file(output_directory: Path) -> Path:
    """Configure logging to write to a file in the provided output directory.

    Parameters
    ----------
    output_directory
        The directory to write the log file to.

    Returns
    -------
        The path of the log file.
    """
    log_file = Path(output_directory) / "mwcrandom.log"
    _add_logging_sink(
        log_file,
        verbosity=2,
        long_format=True,
        colorize=False,
        serialize=False,
    )
    return log_file


def get_logger(stream_name: str | None = None) -> loguru.Logger:
    """Gets a logger bound to a stream name."""
    if stream_name:
        return logger.bind(stream=stream_name)
    return logger


def _clear_default_configuration() -> None:
    try:
        logger.remove(0)  # Clear default configuration
    except ValueError:
        pass


def _add_logging_sink(
    sink: Path | TextIO,
    verbosity: int,
    long_format: bool,
    colorize: bool,
    serialize: bool,
) -> int:
    """Add a logging sink to the logger.

    Parameters
    ----------
    sink
        The sink to add. Can be a file path or a file object.
    verbosity
        The verbosity level. 0 is the default and will only log warnings and errors.
        1 will log info messages. 2 will log debug messages.
    long_format
        Whether to use the long format for logging messages.
    colorize
        Whether to colorize the log messages.
    serialize
        Whether to serialize log messages.
    """
    log_formatter = _LogFormatter(long_format)
    logging_level = _get_log_level(verbosity)
    return logger.add(
        sink,
        colorize=colorize,
        level=logging_level,
        format=log_formatter.format,
        serialize=serialize,
    )


class _LogFormatter:
    time = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green>"
    level = "<level>{level: <8}</level>"
    stream = "<cyan>{extra[stream]}</cyan> - <cyan>{name}</cyan>:<cyan>{line}</cyan>"
    short_name_and_line = "<cyan>{name}</cyan>:<cyan>{line}</cyan>"
    message = "<level>{message}</level>"

    def __init__(self, long_format: bool = False):
        self.long_format = long_format

    if TYPE_CHECKING:
        from loguru import Record

    def format(self, record: Record) -> str:
        fmt = self.time + " | "

        if self.long_format:
            fmt += self.level + " | "

        if self.long_format and "stream" in record["extra"]:
            fmt += self.stream + " - "
        else:
            fmt += self.short_name_and_line + " - "

        fmt += self.message + "\n{exception}"
        return fmt


def _get_log_level(verbosity: int) -> str:
    if verbosity == 0:
        return "WARNING"
    elif verbosity == 1:
        return "INFO"
    elif verbosity >= 2:
        return "DEBUG"
    else:
        raise ValueError(f"Invalid verbosity level: {verbosity}")
