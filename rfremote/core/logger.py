# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
#
# See LICENSE for more details.
#
# Copyright: Red Hat Inc. 2025

import logging
import logging.handlers
import os
import sys

DEFAULT_LOG_NAME = "rfremote"
DEFAULT_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)-5.5s| %(message)s"
DEFAULT_CONSOLE_LEVEL = logging.INFO
DEFAULT_FILE_LEVEL = logging.DEBUG

MAX_LOG_FILE_SIZE = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

_LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
}


def validate_log_level(level):
    """
    Validate and convert log level to logging constant.

    :param level: Log level as string or int
    :type level: str or int
    :return: Validated log level
    :rtype: int
    :raises ValueError: If log level is invalid
    """
    if isinstance(level, bool):
        raise ValueError(f"Log level must be string or int, got: {type(level)}")

    if isinstance(level, int):
        if level in _LEVEL_NAMES.values():
            return level
        raise ValueError(f"Invalid numeric log level: {level}")

    if isinstance(level, str):
        try:
            return _LEVEL_NAMES[level.upper()]
        except KeyError:
            raise ValueError(f"Invalid log level string: {level}") from None

    raise ValueError(f"Log level must be string or int, got: {type(level)}")


def _create_file_handler(
    log_file, level=DEFAULT_FILE_LEVEL, format_str=DEFAULT_LOG_FORMAT
):
    """
    Create a rotating file handler for logging.

    :param log_file: Path to the log file
    :type log_file: str
    :param level: Log level for the file handler
    :type level: int
    :param format_str: Log format string
    :type format_str: str
    :return: Configured file handler
    :rtype: logging.handlers.RotatingFileHandler
    :raises OSError: If log file cannot be created
    """
    log_dir = os.path.dirname(log_file)
    if not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir, exist_ok=True)
        except OSError as e:
            raise OSError(f"Cannot create log directory {log_dir}: {e}") from e

    if not os.access(log_dir, os.W_OK):
        raise OSError(f"Log directory is not writable: {log_dir}")

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file,
        maxBytes=MAX_LOG_FILE_SIZE,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(fmt=format_str))
    return file_handler


def _create_console_handler(level=DEFAULT_CONSOLE_LEVEL, format_str=DEFAULT_LOG_FORMAT):
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt=format_str))
    return console_handler


def init_logger(log_file, console_level=None, file_level=None, log_format=None):
    """
    Initialize the server logger.

    Sets up a logger named $DEFAULT_LOG_NAME with both console and file
    output. Every module logs through a child of this logger, so keyword
    invocations and transport events end up in the same rotating file.
    When the file cannot be opened, logging falls back to the console only.

    :param log_file: Path of the rotating log file
    :type log_file: str
    :param console_level: Log level for console output (default: INFO)
    :type console_level: str or int or None
    :param file_level: Log level for file output (default: DEBUG)
    :type file_level: str or int or None
    :param log_format: Custom log format string (default: standard format)
    :type log_format: str or None
    :return: The configured logger object
    :rtype: logging.Logger
    :raises ValueError: If log levels are invalid
    """
    console_level = (
        validate_log_level(console_level) if console_level else DEFAULT_CONSOLE_LEVEL
    )
    file_level = validate_log_level(file_level) if file_level else DEFAULT_FILE_LEVEL
    log_format = log_format if log_format else DEFAULT_LOG_FORMAT

    logger = logging.getLogger(DEFAULT_LOG_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(min(console_level, file_level))
    logger.addHandler(_create_console_handler(console_level, log_format))

    try:
        logger.addHandler(_create_file_handler(log_file, file_level, log_format))
    except OSError as e:
        print(f"Warning: Failed to initialize file logging: {e}", file=sys.stderr)
        print("Falling back to console-only logging", file=sys.stderr)
        logger.setLevel(console_level)
        logger.warning("File logging disabled due to initialization failure: %s", e)

    return logger
