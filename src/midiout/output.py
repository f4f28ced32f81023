# midiout - MIDI Output
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

import logging
from typing import List, Optional, Sequence

import rtmidi

from .errors import TRANSPORT_OPEN_ERRORS, OutputReleasedError
from .log import VERBOSE, get_logger, is_verbose, set_verbose
from .messages import (
    CHANNEL_AFTERTOUCH,
    CONTROL_CHANGE,
    DEFAULT_NOTE_OFF_VELOCITY,
    NOTE_OFF,
    NOTE_ON,
    PITCH_BEND,
    POLY_AFTERTOUCH,
    PROGRAM_CHANGE,
    data_byte,
    format_message,
    is_pitch_bend_in_range,
    split_pitch_bend,
    status_byte,
)
from .ports import CLOSED, MidiTransport, NumericPort, PortState, VirtualPort

logger = get_logger('output')

SCRATCH_SIZE = 3


class Output:
    """A connection to one MIDI output port, numbered or virtual.

    An Output starts closed. ``open_port`` and ``open_virtual_port`` always
    close the current port first, so a failed open leaves it closed rather
    than on the previous port.

    Send methods share one scratch buffer and are not reentrant: use an
    Output from one thread at a time.
    """

    def __init__(self, client_name: str = "", transport: Optional[MidiTransport] = None,
                 mask_data_bytes: bool = False):
        """
        Args:
            client_name: Name announced to the OS, used in each port's name
            transport: Object with the rtmidi.MidiOut API; a new
                rtmidi.MidiOut is created when omitted
            mask_data_bytes: Clear the top bit of every data byte so out of
                range values can't be read as a status byte
        """
        self.client_name = client_name
        self.mask_data_bytes = mask_data_bytes
        self._state: PortState = CLOSED
        self._scratch = bytearray(SCRATCH_SIZE)
        if transport is None:
            transport = rtmidi.MidiOut(name=client_name or None)
        self._midi_out: Optional[MidiTransport] = transport

    @classmethod
    def from_config(cls, config, transport: Optional[MidiTransport] = None) -> 'Output':
        """Create an Output from a config dict (see midiout.config).

        Applies the ``verbose`` setting and opens ``virtual_port`` or
        ``port`` when one is given. A failed open is logged and the Output is
        returned closed.
        """
        set_verbose(config.get('verbose', False))
        output = cls(config.get('client_name', ""), transport=transport,
                     mask_data_bytes=config.get('mask_data_bytes', False))
        if config.get('virtual_port') is not None:
            output.open_virtual_port(config['virtual_port'])
        elif config.get('port') is not None:
            output.open_port(config['port'])
        return output

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.delete()

    def __del__(self):
        if getattr(self, '_midi_out', None) is not None:
            self.close_port()

    def __repr__(self):
        return f"<Output client={self.client_name!r} state={self._state!r}>"

    @property
    def _transport(self) -> MidiTransport:
        if self._midi_out is None:
            raise OutputReleasedError(f"Output {self.client_name!r} has been deleted")
        return self._midi_out

    def delete(self):
        """Close the port and release the transport handle.

        Safe to call more than once. Any other call afterwards raises
        OutputReleasedError.
        """
        if self._midi_out is None:
            return
        self.close_port()
        midi_out, self._midi_out = self._midi_out, None
        midi_out.delete()

    # Ports

    def enumerate(self) -> List[str]:
        """Get list of available MIDI output port names.

        The list index is the port number accepted by open_port. The order
        may change when devices are added or removed.
        """
        return [self.port_name(i) for i in range(self.count_ports())]

    def count_ports(self) -> int:
        return self._transport.get_port_count()

    def port_name(self, port_number: int) -> str:
        """Get the name of an output port by its number ("" if invalid)"""
        if not 0 <= port_number < self.count_ports():
            return ""
        return self._transport.get_port_name(port_number) or ""

    def open_port(self, port_number: int = 0) -> bool:
        """Connect to an output port. Port 0 is the first available."""
        transport = self._transport
        self.close_port()
        try:
            transport.open_port(port_number, self._announce_name(port_number))
        except TRANSPORT_OPEN_ERRORS as e:
            logger.error(f"couldn't open port {port_number} {e}")
            return False

        self._state = NumericPort(port_number, self.port_name(port_number))
        if is_verbose():
            logger.log(VERBOSE, f"opened port {port_number} {self._state.name}")
        return True

    def open_port_by_name(self, port_name: str) -> bool:
        """Open a MIDI output port by name"""
        ports = self.enumerate()
        if port_name not in ports:
            self.close_port()
            logger.error(f"couldn't open port {port_name!r}: no such port")
            return False
        return self.open_port(ports.index(port_name))

    def open_virtual_port(self, port_name: str) -> bool:
        """Create and connect to a virtual output port (macOS and Linux ALSA only).

        Other applications can connect to it; this Output's own enumerate()
        doesn't list it, and ``port`` stays -1 while it is open.
        """
        transport = self._transport
        self.close_port()
        try:
            transport.open_virtual_port(port_name)
        except TRANSPORT_OPEN_ERRORS as e:
            logger.error(f"couldn't open virtual port {port_name} {e}")
            return False

        self._state = VirtualPort(port_name)
        if is_verbose():
            logger.log(VERBOSE, f"opened virtual port {port_name}")
        return True

    def close_port(self):
        """Close the port connection. Does nothing when already closed."""
        state = self._state
        if is_verbose():
            if isinstance(state, VirtualPort):
                logger.log(VERBOSE, f"closed virtual port {state.name}")
            elif isinstance(state, NumericPort):
                logger.log(VERBOSE, f"closed port {state.number}: {state.name}")
        if self._midi_out is not None:
            self._midi_out.close_port()
        self._state = CLOSED

    def _announce_name(self, port_number: int) -> str:
        if self.client_name:
            return f"{self.client_name} Output {port_number}"
        return f"Output {port_number}"

    @property
    def state(self) -> PortState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    @property
    def is_virtual(self) -> bool:
        return self._state.is_virtual

    @property
    def port(self) -> int:
        """Port number, -1 if not connected or this is a virtual port"""
        return self._state.number

    @property
    def name(self) -> str:
        """Connected port name, "" if not connected"""
        return self._state.name

    # Sending

    def send_raw(self, message: Sequence[int]):
        """Send any byte sequence as one MIDI event, e.g. a SysEx message.

        Nothing checks that a port is open; that is left to the transport.
        """
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"sending {format_message(message)}")
        self._transport.send_message(message)

    def _send(self, status: int, one: int, two: int):
        scratch = self._scratch
        scratch[0] = status
        scratch[1] = data_byte(one, self.mask_data_bytes)
        scratch[2] = data_byte(two, self.mask_data_bytes)
        self.send_raw(scratch)

    def _send_short(self, status: int, one: int):
        scratch = self._scratch
        del scratch[2:]
        try:
            scratch[0] = status
            scratch[1] = data_byte(one, self.mask_data_bytes)
            self.send_raw(scratch)
        finally:
            # restore the 3 byte buffer
            scratch.append(0)

    def send_note_on(self, channel: int, pitch: int, velocity: int):
        self._send(status_byte(NOTE_ON, channel), pitch, velocity)

    def send_note_off(self, channel: int, pitch: int, velocity: int = DEFAULT_NOTE_OFF_VELOCITY):
        self._send(status_byte(NOTE_OFF, channel), pitch, velocity)

    def send_control_change(self, channel: int, control: int, value: int):
        self._send(status_byte(CONTROL_CHANGE, channel), control, value)

    def send_program_change(self, channel: int, program: int):
        self._send_short(status_byte(PROGRAM_CHANGE, channel), program)

    def send_pitch_bend(self, channel: int, value: int):
        """Send a 14 bit pitch bend (0 - 16383, centre 8192).

        Larger values are logged and sent with the extra bits dropped.
        """
        if not is_pitch_bend_in_range(value):
            logger.error(f"Pitch bend values must be less than {1 << 14}")
        lsb, msb = split_pitch_bend(value)
        self.send_pitch_bend_raw(channel, lsb, msb)

    def send_pitch_bend_raw(self, channel: int, lsb: int, msb: int):
        """Send a pitch bend from its 7 bit halves; masking is up to the caller."""
        self._send(status_byte(PITCH_BEND, channel), lsb, msb)

    def send_aftertouch(self, channel: int, value: int):
        self._send_short(status_byte(CHANNEL_AFTERTOUCH, channel), value)

    def send_poly_aftertouch(self, channel: int, pitch: int, value: int):
        self._send(status_byte(POLY_AFTERTOUCH, channel), pitch, value)
