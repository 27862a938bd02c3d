"""Tests for the OSC listener and sender."""

import logging
import queue
import socket
from unittest.mock import MagicMock, patch

import pytest
from pythonosc.osc_bundle_builder import IMMEDIATELY, OscBundleBuilder
from pythonosc.osc_message_builder import OscMessageBuilder
from pythonosc.osc_packet import ParseError

from hogbridge.exceptions import ConsoleWriteError, ListenAddressError
from hogbridge.osc import OscListener, OscSender
from hogbridge.protocols import ConsoleEvent

CLIENT = ("127.0.0.1", 50000)


def message(address, *args):
    builder = OscMessageBuilder(address=address)
    for arg in args:
        builder.add_arg(arg)
    return builder.build()


def bundle(*contents):
    builder = OscBundleBuilder(IMMEDIATELY)
    for content in contents:
        builder.add_content(content)
    return builder.build()


@pytest.fixture
def received():
    return []


@pytest.fixture
def listener(received):
    """Listener that is never bound; packets go straight to its dispatcher."""
    osc_listener = OscListener("127.0.0.1", 0)
    osc_listener.on_message(received.append)
    return osc_listener


def dispatch(osc_listener, dgram):
    osc_listener.dispatcher.call_handlers_for_packet(dgram, CLIENT)


@pytest.mark.unit
class TestDispatch:
    """Test message delivery and bundle flattening."""

    def test_single_message(self, listener, received):
        dispatch(listener, message("/hog/status/led/maingo", 1.0).dgram)
        assert received == [ConsoleEvent("/hog/status/led/maingo", (1.0,))]

    def test_bundle_is_flattened(self, listener, received):
        packet = bundle(
            message("/hog/status/led/maingo", 1.0),
            message("/hog/status/led/mainhalt", 0.0),
        )
        dispatch(listener, packet.dgram)
        assert [event.address for event in received] == [
            "/hog/status/led/maingo",
            "/hog/status/led/mainhalt",
        ]

    def test_nested_bundles_are_flattened(self, listener, received):
        inner = bundle(message("/hog/status/led/choose/1", 1.0), message("/hog/status/led/choose/2", 0.0))
        outer = bundle(message("/hog/status/led/maingo", 1.0), inner)
        dispatch(listener, outer.dgram)
        assert {event.address for event in received} == {
            "/hog/status/led/maingo",
            "/hog/status/led/choose/1",
            "/hog/status/led/choose/2",
        }
        assert len(received) == 3

    def test_message_without_arguments(self, listener, received):
        dispatch(listener, message("/hog/status/led/maingo").dgram)
        assert received == [ConsoleEvent("/hog/status/led/maingo", ())]

    def test_decode_errors_propagate_to_server(self, listener, received):
        with pytest.raises(ParseError):
            dispatch(listener, b"#bundle\x00\x00")
        assert received == []

    def test_callback_errors_are_contained(self):
        osc_listener = OscListener("127.0.0.1", 0)
        osc_listener.on_message(MagicMock(side_effect=RuntimeError("boom")))
        dispatch(osc_listener, message("/hog/status/led/maingo", 1.0).dgram)


@pytest.mark.unit
class TestOscSender:
    """Test the UDP sender."""

    def test_send_before_start_raises(self):
        with pytest.raises(ConsoleWriteError):
            OscSender("127.0.0.1", 7001).send("/hog/hardware/maingo", 1.0)

    @patch("hogbridge.osc.sender.SimpleUDPClient")
    def test_sends_single_float(self, client_cls):
        with OscSender("10.0.0.5", 7001) as sender:
            sender.send("/hog/hardware/fader/1", 255)

        client_cls.assert_called_once_with("10.0.0.5", 7001)
        client = client_cls.return_value
        client.send_message.assert_called_once_with("/hog/hardware/fader/1", 255.0)
        assert isinstance(client.send_message.call_args.args[1], float)
        client.close.assert_called_once()

    @patch("hogbridge.osc.sender.SimpleUDPClient")
    def test_send_failure_raises(self, client_cls):
        client_cls.return_value.send_message.side_effect = OSError("network unreachable")
        sender = OscSender("127.0.0.1", 7001)
        sender.start()

        with pytest.raises(ConsoleWriteError) as exc_info:
            sender.send("/hog/hardware/maingo", 1.0)
        assert exc_info.value.port == 7001

    @patch("hogbridge.osc.sender.SimpleUDPClient", side_effect=socket.gaierror("unknown host"))
    def test_unresolvable_console(self, client_cls):
        with pytest.raises(ConsoleWriteError):
            OscSender("console.invalid", 7001).start()

    @patch("hogbridge.osc.sender.SimpleUDPClient")
    def test_send_after_stop_raises(self, client_cls):
        sender = OscSender("127.0.0.1", 7001)
        sender.start()
        sender.stop()
        with pytest.raises(ConsoleWriteError):
            sender.send("/hog/hardware/maingo", 1.0)


@pytest.mark.integration
class TestLoopback:
    """Test sender and listener over a real loopback socket."""

    def test_round_trip(self):
        events = queue.Queue()
        with OscListener("127.0.0.1", 0, poll_interval=0.05) as osc_listener:
            osc_listener.on_message(events.put)
            host, port = osc_listener.local_address

            with OscSender(host, port) as sender:
                sender.send("/hog/hardware/fader/1", 255.0)

            event = events.get(timeout=2.0)

        assert event == ConsoleEvent("/hog/hardware/fader/1", (255.0,))
        assert not osc_listener.is_running

    @pytest.mark.parametrize("bad_datagram", [
        b"/\xff\xfe\x00,\x00\x00\x00",
        b"\x00\x01not osc",
        b"#bundle\x00\x00",
    ])
    def test_keeps_listening_after_bad_datagram(self, bad_datagram, caplog):
        caplog.set_level(logging.WARNING, logger="hogbridge.osc.listener")
        events = queue.Queue()
        with OscListener("127.0.0.1", 0, poll_interval=0.05) as osc_listener:
            osc_listener.on_message(events.put)
            address = osc_listener.local_address

            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            try:
                sock.sendto(bad_datagram, address)
                sock.sendto(message("/hog/status/led/maingo", 1.0).dgram, address)
            finally:
                sock.close()

            event = events.get(timeout=2.0)
            assert osc_listener.is_running

        assert event == ConsoleEvent("/hog/status/led/maingo", (1.0,))
        assert events.empty()
        assert any("Could not decode" in r.getMessage() for r in caplog.records)

    def test_buffer_size_applies_to_server(self):
        with OscListener("127.0.0.1", 0, buffer_size=2048) as osc_listener:
            assert osc_listener._server.max_packet_size == 2048

    def test_bind_failure(self):
        blocker = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        blocker.bind(("127.0.0.1", 0))
        try:
            port = blocker.getsockname()[1]
            osc_listener = OscListener("127.0.0.1", port)
            with pytest.raises(ListenAddressError) as exc_info:
                osc_listener.start()
            assert exc_info.value.port == port
            assert not osc_listener.is_running
        finally:
            blocker.close()

    def test_invalid_host(self):
        with pytest.raises(ListenAddressError):
            OscListener("256.1.1.1", 7002).start()
