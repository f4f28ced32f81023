# midiout - Errors
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

import rtmidi


# Failures raised by the transport when a port can't be opened. Negative or
# oversized indices never reach RtMidi: the unsigned conversion overflows first.
TRANSPORT_OPEN_ERRORS = (rtmidi.RtMidiError, OverflowError)


class MidiOutError(Exception):
    """Base class for errors raised by midiout itself."""


class OutputReleasedError(MidiOutError):
    """The Output's transport handle has already been released."""


class ConfigError(MidiOutError):
    """A configuration file could not be read or has invalid values."""
