"""Tests for port enumeration and the open/close lifecycle."""

from __future__ import annotations

import pytest

from midiout import VERBOSE, Closed, NumericPort, Output, OutputReleasedError, VirtualPort, set_verbose

from conftest import FakeMidiOut


def test_new_output_is_closed(output: Output, check_invariants) -> None:
    assert not output.is_open
    assert not output.is_virtual
    assert output.port == -1
    assert output.name == ""
    assert output.state == Closed()
    check_invariants(output)


def test_enumerate_lists_ports_in_transport_order(output: Output) -> None:
    assert output.enumerate() == ["Synth A", "Synth B", "Drum Machine"]
    assert output.count_ports() == 3


def test_enumerate_with_no_ports() -> None:
    out = Output("Test", transport=FakeMidiOut(ports=[]))
    assert out.enumerate() == []
    assert out.count_ports() == 0


@pytest.mark.parametrize("index", [-1, 3, 100])
def test_port_name_out_of_range_is_empty(output: Output, index: int) -> None:
    assert output.port_name(index) == ""


def test_port_name(output: Output) -> None:
    assert output.port_name(1) == "Synth B"


def test_open_then_close_lifecycle(output: Output, transport: FakeMidiOut, check_invariants) -> None:
    assert output.open_port(0) is True
    assert output.is_open
    assert output.port == 0
    assert output.name == "Synth A"
    assert not output.is_virtual
    assert output.state == NumericPort(0, "Synth A")
    check_invariants(output)

    output.close_port()
    assert not output.is_open
    assert output.name == ""
    assert output.port == -1
    assert output.state == Closed()
    assert not transport.port_open
    check_invariants(output)


def test_open_announces_client_name(output: Output, transport: FakeMidiOut) -> None:
    output.open_port(2)
    assert transport.opened == [(2, "Test Output 2")]


def test_open_without_client_name(transport: FakeMidiOut) -> None:
    out = Output(transport=transport)
    out.open_port(1)
    assert transport.opened == [(1, "Output 1")]


def test_open_closes_previous_port_first(output: Output, transport: FakeMidiOut) -> None:
    output.open_port(0)
    assert output.open_port(1) is True
    assert output.port == 1
    assert output.name == "Synth B"
    assert transport.opened == [(0, "Test Output 0"), (1, "Test Output 1")]


def test_reopening_same_port_closes_and_reopens(output: Output, transport: FakeMidiOut) -> None:
    output.open_port(0)
    closes = transport.close_calls
    assert output.open_port(0) is True
    assert transport.close_calls == closes + 1
    assert len(transport.opened) == 2


@pytest.mark.parametrize("index", [3, -1])
def test_open_invalid_port_fails_closed(output: Output, index: int, check_invariants, caplog) -> None:
    caplog.set_level(VERBOSE, logger="midiout")
    assert output.open_port(index) is False
    assert not output.is_open
    assert output.port == -1
    check_invariants(output)
    errors = [r for r in caplog.records if r.levelname == "ERROR"]
    assert len(errors) == 1
    assert errors[0].getMessage().startswith(f"couldn't open port {index} ")


def test_failed_open_erases_previous_connection(output: Output, transport: FakeMidiOut,
                                                check_invariants) -> None:
    output.open_port(0)
    transport.fail_open = True
    assert output.open_port(1) is False
    assert not output.is_open
    assert output.name == ""
    check_invariants(output)


def test_transport_message_is_logged(output: Output, transport: FakeMidiOut, caplog) -> None:
    transport.fail_open = True
    output.open_port(0)
    assert "device busy" in caplog.text


def test_open_virtual_port(output: Output, transport: FakeMidiOut, check_invariants) -> None:
    assert output.open_virtual_port("Loopback") is True
    assert output.is_open
    assert output.is_virtual
    assert output.port == -1
    assert output.name == "Loopback"
    assert output.state == VirtualPort("Loopback")
    assert transport.opened == [("virtual", "Loopback")]
    check_invariants(output)


def test_virtual_port_not_in_own_enumeration(output: Output) -> None:
    output.open_virtual_port("Loopback")
    assert "Loopback" not in output.enumerate()


def test_open_virtual_port_unsupported(output: Output, transport: FakeMidiOut,
                                       check_invariants, caplog) -> None:
    transport.virtual_supported = False
    output.open_port(0)
    assert output.open_virtual_port("Loopback") is False
    assert not output.is_open
    assert not output.is_virtual
    check_invariants(output)
    assert "couldn't open virtual port Loopback" in caplog.text


def test_switch_numeric_to_virtual_and_back(output: Output, check_invariants) -> None:
    output.open_port(1)
    output.open_virtual_port("Loopback")
    assert output.is_virtual
    assert output.port == -1
    check_invariants(output)

    output.open_port(2)
    assert not output.is_virtual
    assert output.port == 2
    assert output.name == "Drum Machine"
    check_invariants(output)


def test_close_port_is_idempotent(output: Output, check_invariants) -> None:
    output.close_port()
    output.close_port()
    assert not output.is_open
    check_invariants(output)


def test_open_by_name(output: Output) -> None:
    assert output.open_port_by_name("Drum Machine") is True
    assert output.port == 2


def test_open_by_unknown_name(output: Output, check_invariants, caplog) -> None:
    output.open_port(0)
    assert output.open_port_by_name("Nowhere") is False
    assert not output.is_open
    check_invariants(output)
    assert "Nowhere" in caplog.text


def test_close_logs_when_verbose(output: Output, caplog) -> None:
    caplog.set_level(VERBOSE, logger="midiout")
    set_verbose(True)

    output.open_port(0)
    output.close_port()
    output.open_virtual_port("Loopback")
    output.close_port()

    messages = [r.getMessage() for r in caplog.records if r.levelname == "VERBOSE"]
    assert messages == [
        "opened port 0 Synth A",
        "closed port 0: Synth A",
        "opened virtual port Loopback",
        "closed virtual port Loopback",
    ]


def test_quiet_when_not_verbose(output: Output, caplog) -> None:
    caplog.set_level(VERBOSE, logger="midiout")
    output.open_port(0)
    output.close_port()
    assert not [r for r in caplog.records if r.levelname == "VERBOSE"]


def test_closing_already_closed_port_logs_nothing(output: Output, caplog) -> None:
    caplog.set_level(VERBOSE, logger="midiout")
    set_verbose(True)
    output.close_port()
    assert caplog.records == []


def test_delete_closes_and_releases(output: Output, transport: FakeMidiOut) -> None:
    output.open_port(0)
    output.delete()
    assert transport.deleted
    assert not transport.port_open
    assert not output.is_open
    output.delete()
    output.close_port()
    with pytest.raises(OutputReleasedError):
        output.open_port(0)
    with pytest.raises(OutputReleasedError):
        output.send_note_on(1, 60, 100)


def test_context_manager_releases_transport(transport: FakeMidiOut) -> None:
    with Output("Test", transport=transport) as out:
        out.open_virtual_port("Loopback")
    assert transport.deleted
    assert not transport.port_open


def test_abandoned_output_closes_its_port(transport: FakeMidiOut) -> None:
    out = Output("Test", transport=transport)
    out.open_port(0)
    del out
    assert not transport.port_open


def test_default_transport_is_rtmidi(monkeypatch) -> None:
    created = []

    def fake_midi_out(name=None):
        created.append(name)
        return FakeMidiOut()

    monkeypatch.setattr("midiout.output.rtmidi.MidiOut", fake_midi_out)
    Output("My App")
    Output()
    assert created == ["My App", None]


def test_repr_shows_state(output: Output) -> None:
    output.open_port(0)
    assert "Synth A" in repr(output)
    assert "'Test'" in repr(output)
