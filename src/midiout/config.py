# midiout - Configuration
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

import json
import logging
import os

from .errors import ConfigError
from .log import VERBOSE, get_logger

logger = get_logger('config')

LOG_LEVELS = {
    'DEBUG': logging.DEBUG,
    'VERBOSE': VERBOSE,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
}


def get_default_config():
    """Return default configuration"""
    return {
        "client_name": "midiout",
        "verbose": False,
        "mask_data_bytes": False,
        "log_level": "INFO",
        "port": None,
        "virtual_port": None,
    }


def load_config(path):
    """Load configuration from a JSON file, filling in defaults.

    A missing file gives the defaults. The file is never written back.

    Raises:
        ConfigError: the file isn't valid JSON, isn't an object, or a key
            has the wrong type
    """
    if not os.path.exists(path):
        logger.info(f"No config file at {path}, using defaults")
        return get_default_config()

    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Error loading config {path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")

    # Apply defaults for missing keys
    for key, value in get_default_config().items():
        config.setdefault(key, value)

    validate_config(config)
    logger.info(f"Config loaded from {path}")
    return config


def validate_config(config):
    if not isinstance(config['client_name'], str):
        raise ConfigError("client_name must be a string")
    for key in ('verbose', 'mask_data_bytes'):
        if not isinstance(config[key], bool):
            raise ConfigError(f"{key} must be true or false")
    if config['log_level'] not in LOG_LEVELS:
        raise ConfigError(
            f"log_level must be one of {', '.join(LOG_LEVELS)}, got {config['log_level']!r}")

    port = config['port']
    if port is not None and (isinstance(port, bool) or not isinstance(port, int) or port < 0):
        raise ConfigError(f"port must be a non-negative integer or null, got {port!r}")

    virtual_port = config['virtual_port']
    if virtual_port is not None and not isinstance(virtual_port, str):
        raise ConfigError("virtual_port must be a string or null")


def log_level(config):
    return LOG_LEVELS[config.get('log_level', 'INFO')]
