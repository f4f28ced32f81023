# midiout - Diagnostics
# Copyright (C) 2025 maigre - Hemisphere Project
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Logging setup and the process-wide verbose switch.

Diagnostics come out as ``[ERROR midiout.output.open_port] ...`` and
``[VERBOSE midiout.output.close_port] ...``. Nothing is printed until either
:func:`setup_logging` is called or the host application configures logging.
"""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = 'midiout'

# Between DEBUG and INFO
VERBOSE = 15
logging.addLevelName(VERBOSE, 'VERBOSE')

DIAGNOSTIC_FORMAT = '[%(levelname)s %(name)s.%(funcName)s] %(message)s'

_verbose = False


def set_verbose(on: bool) -> None:
    """Turn verbose port diagnostics on or off for every Output."""
    global _verbose
    _verbose = bool(on)


def is_verbose() -> bool:
    return _verbose


def setup_logging(level: int = VERBOSE, stream: Optional[TextIO] = None,
                  log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Logging level for the package logger and its handlers
        stream: Stream for the console handler (stderr when omitted)
        log_file: Optional file path to write diagnostics to

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Clear any existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(DIAGNOSTIC_FORMAT)

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child of the package logger, e.g. ``midiout.output``."""
    return logging.getLogger(f'{LOGGER_NAME}.{name}')
