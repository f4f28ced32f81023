# midiout - MIDI Messages
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

"""MIDI wire constants and byte helpers.

Number ranges accepted by the send methods:

    channel         1 - 16
    pitch           0 - 127
    velocity        0 - 127
    control value   0 - 127
    program value   0 - 127
    bend value      0 - 16383
    touch value     0 - 127

A note on with velocity 0 is equivalent to a note off. Most synths ignore
the velocity of a note off; send 64 if you don't use it.
"""

from typing import Iterable, Sequence, Tuple

# Channel voice messages (high nibble of the status byte)
NOTE_OFF = 0x80
NOTE_ON = 0x90
POLY_AFTERTOUCH = 0xA0
CONTROL_CHANGE = 0xB0
PROGRAM_CHANGE = 0xC0
CHANNEL_AFTERTOUCH = 0xD0
PITCH_BEND = 0xE0

# System common messages
SYSEX_START = 0xF0
SYSEX_END = 0xF7

STATUS_BIT = 0x80
DATA_MASK = 0x7F
CHANNEL_MASK = 0x0F

PITCH_BEND_BITS = 14
PITCH_BEND_MAX = (1 << PITCH_BEND_BITS) - 1
PITCH_BEND_CENTER = 1 << (PITCH_BEND_BITS - 1)

DEFAULT_NOTE_OFF_VELOCITY = 64

# Number of bytes in each channel voice message, status byte included
MESSAGE_LENGTHS = {
    NOTE_OFF: 3,
    NOTE_ON: 3,
    POLY_AFTERTOUCH: 3,
    CONTROL_CHANGE: 3,
    PROGRAM_CHANGE: 2,
    CHANNEL_AFTERTOUCH: 2,
    PITCH_BEND: 3,
}

MESSAGE_NAMES = {
    NOTE_OFF: "note_off",
    NOTE_ON: "note_on",
    POLY_AFTERTOUCH: "poly_aftertouch",
    CONTROL_CHANGE: "control_change",
    PROGRAM_CHANGE: "program_change",
    CHANNEL_AFTERTOUCH: "channel_aftertouch",
    PITCH_BEND: "pitch_bend",
}


def status_byte(kind: int, channel: int) -> int:
    """Compose a channel voice status byte.

    Args:
        kind: Message class, one of the constants above (e.g. NOTE_ON)
        channel: 1-based MIDI channel (1 - 16)

    Returns:
        Status byte with the 0-based channel in the low nibble
    """
    return (kind & 0xF0) | ((channel - 1) & CHANNEL_MASK)


def data_byte(value: int, mask: bool = False) -> int:
    """Truncate a data value to a byte, or to 7 bits when ``mask`` is set."""
    return value & (DATA_MASK if mask else 0xFF)


def split_pitch_bend(value: int) -> Tuple[int, int]:
    """Split a 14-bit bend value into its (lsb, msb) 7-bit halves."""
    return value & DATA_MASK, (value >> 7) & DATA_MASK


def join_pitch_bend(lsb: int, msb: int) -> int:
    return (lsb & DATA_MASK) | ((msb & DATA_MASK) << 7)


def is_pitch_bend_in_range(value: int) -> bool:
    return value >> PITCH_BEND_BITS == 0


def hex_bytes(message: Iterable[int]) -> str:
    return ' '.join(f'{b & 0xFF:02X}' for b in message)


def format_message(message: Sequence[int]) -> str:
    """Format a MIDI message for human-readable logging.

    Channel numbers are shown 1-based, the way they're passed to the send
    methods.
    """
    if not message:
        return "EMPTY"

    status = message[0]
    if status == SYSEX_START:
        return f"SYSEX {hex_bytes(message)}"

    kind = status & 0xF0
    if not status & STATUS_BIT or kind not in MESSAGE_NAMES:
        return f"RAW {hex_bytes(message)}"

    expected = MESSAGE_LENGTHS[kind]
    if len(message) != expected:
        return f"{MESSAGE_NAMES[kind].upper()} (malformed) {hex_bytes(message)}"

    parts = [MESSAGE_NAMES[kind].upper(), f"ch={(status & CHANNEL_MASK) + 1}"]
    data = message[1:]

    if kind in (NOTE_ON, NOTE_OFF):
        parts.append(f"note={data[0]}")
        parts.append(f"vel={data[1]}")
    elif kind == POLY_AFTERTOUCH:
        parts.append(f"note={data[0]}")
        parts.append(f"value={data[1]}")
    elif kind == CONTROL_CHANGE:
        parts.append(f"cc={data[0]}")
        parts.append(f"value={data[1]}")
    elif kind == PROGRAM_CHANGE:
        parts.append(f"program={data[0]}")
    elif kind == CHANNEL_AFTERTOUCH:
        parts.append(f"value={data[0]}")
    elif kind == PITCH_BEND:
        parts.append(f"value={join_pitch_bend(data[0], data[1])}")

    return " ".join(parts)
