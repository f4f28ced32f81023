# midiout - MIDI output facade over python-rtmidi
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

from .config import get_default_config, load_config, log_level
from .errors import ConfigError, MidiOutError, OutputReleasedError
from .log import VERBOSE, get_logger, is_verbose, set_verbose, setup_logging
from .messages import (
    CHANNEL_AFTERTOUCH,
    CONTROL_CHANGE,
    NOTE_OFF,
    NOTE_ON,
    PITCH_BEND,
    PITCH_BEND_CENTER,
    PITCH_BEND_MAX,
    POLY_AFTERTOUCH,
    PROGRAM_CHANGE,
    SYSEX_END,
    SYSEX_START,
    format_message,
    join_pitch_bend,
    split_pitch_bend,
    status_byte,
)
from .output import Output
from .ports import Closed, NumericPort, VirtualPort

__version__ = '1.0.0'

__all__ = [
    "CHANNEL_AFTERTOUCH",
    "CONTROL_CHANGE",
    "Closed",
    "ConfigError",
    "MidiOutError",
    "NOTE_OFF",
    "NOTE_ON",
    "NumericPort",
    "Output",
    "OutputReleasedError",
    "PITCH_BEND",
    "PITCH_BEND_CENTER",
    "PITCH_BEND_MAX",
    "POLY_AFTERTOUCH",
    "PROGRAM_CHANGE",
    "SYSEX_END",
    "SYSEX_START",
    "VERBOSE",
    "VirtualPort",
    "format_message",
    "get_default_config",
    "get_logger",
    "is_verbose",
    "join_pitch_bend",
    "load_config",
    "log_level",
    "set_verbose",
    "setup_logging",
    "split_pitch_bend",
    "status_byte",
]
