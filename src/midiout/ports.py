# midiout - Port State
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

"""Connection state of an Output: closed, a numbered port, or a virtual port."""

from dataclasses import dataclass
from typing import Protocol, Sequence, Union

NO_PORT = -1


class MidiTransport(Protocol):
    """Subset of the ``rtmidi.MidiOut`` API used by Output."""

    def get_port_count(self) -> int:
        ...

    def get_port_name(self, port: int):
        ...

    def open_port(self, port: int = 0, name=None):
        ...

    def open_virtual_port(self, name=None):
        ...

    def close_port(self) -> None:
        ...

    def send_message(self, message: Sequence[int]) -> None:
        ...

    def delete(self) -> None:
        ...


@dataclass(frozen=True)
class Closed:
    is_open = False
    is_virtual = False
    number = NO_PORT
    name = ""


@dataclass(frozen=True)
class NumericPort:
    number: int
    name: str
    is_open = True
    is_virtual = False


@dataclass(frozen=True)
class VirtualPort:
    name: str
    is_open = True
    is_virtual = True
    number = NO_PORT


PortState = Union[Closed, NumericPort, VirtualPort]

CLOSED = Closed()
