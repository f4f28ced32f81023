from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pytest
import rtmidi

from midiout import Output, set_verbose


@dataclass
class FakeMidiOut:
    """Stand-in for rtmidi.MidiOut that records what it's asked to do."""

    ports: list = field(default_factory=lambda: ["Synth A", "Synth B", "Drum Machine"])
    sent: list = field(default_factory=list)
    opened: list = field(default_factory=list)
    virtual_supported: bool = True
    fail_open: bool = False
    fail_send: bool = False
    port_open: bool = False
    close_calls: int = 0
    deleted: bool = False

    def get_port_count(self) -> int:
        return len(self.ports)

    def get_port_name(self, port):
        if 0 <= port < len(self.ports):
            return self.ports[port]
        return None

    def open_port(self, port=0, name=None):
        if self.port_open:
            raise rtmidi.InvalidUseError("MidiOut already opened.")
        if port < 0:
            raise OverflowError("can't convert negative value to unsigned int")
        if self.fail_open:
            raise rtmidi.SystemError("device busy")
        if port >= len(self.ports):
            raise rtmidi.InvalidPortError(f"Invalid port number: {port}")
        self.port_open = True
        self.opened.append((port, name))

    def open_virtual_port(self, name=None):
        if self.port_open:
            raise rtmidi.InvalidUseError("MidiOut already opened.")
        if not self.virtual_supported:
            raise rtmidi.UnsupportedOperationError(
                "Virtual ports are not supported by the Windows MultiMedia API.")
        self.port_open = True
        self.opened.append(("virtual", name))

    def close_port(self) -> None:
        self.close_calls += 1
        self.port_open = False

    def send_message(self, message) -> None:
        if self.fail_send:
            raise ValueError("message must not be empty")
        # copy: Output reuses its buffer between sends
        self.sent.append(list(message))

    def delete(self) -> None:
        self.deleted = True


@pytest.fixture(autouse=True)
def reset_verbose():
    set_verbose(False)
    yield
    set_verbose(False)


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("midiout")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def transport() -> FakeMidiOut:
    return FakeMidiOut()


@pytest.fixture
def output(transport) -> Output:
    return Output("Test", transport=transport)


@pytest.fixture
def check_invariants():
    def check(out: Output) -> None:
        if out.is_virtual:
            assert out.port == -1
        if out.port >= 0:
            assert not out.is_virtual
        assert out.is_open == (out.port >= 0 or out.is_virtual)
        if not out.is_open:
            assert out.name == ""
        assert len(out._scratch) == 3

    return check
