"""Tests for the MIDI surface connection."""

from unittest.mock import MagicMock, patch

import mido
import pytest

from hogbridge.exceptions import SurfaceNotFoundError, SurfaceWriteError
from hogbridge.midi import MidiInputManager, MidiManager, MidiOutputManager, parse_message
from hogbridge.protocols import SurfaceEvent, SurfaceEventKind


def make_port(name):
    port = MagicMock()
    port.name = name
    return port


@pytest.mark.unit
class TestParseMessage:
    """Test decoding of surface MIDI messages."""

    def test_note_on(self):
        event = parse_message(mido.Message('note_on', note=16, velocity=127))
        assert event == SurfaceEvent(SurfaceEventKind.NOTE_ON, 16, 127)

    def test_note_on_zero_velocity_is_release(self):
        event = parse_message(mido.Message('note_on', note=16, velocity=0))
        assert event == SurfaceEvent.note_off(16)

    def test_note_off(self):
        event = parse_message(mido.Message('note_off', note=16, velocity=64))
        assert event.kind is SurfaceEventKind.NOTE_OFF
        assert event.number == 16

    def test_control_change(self):
        event = parse_message(mido.Message('control_change', control=48, value=100))
        assert event == SurfaceEvent.control_change(48, 100)

    def test_other_channels_are_ignored(self):
        assert parse_message(mido.Message('note_on', channel=1, note=16, velocity=127)) is None
        assert parse_message(mido.Message('control_change', channel=15, control=48, value=1)) is None

    def test_non_channel_messages_are_ignored(self):
        assert parse_message(mido.Message('clock')) is None
        assert parse_message(mido.Message('sysex', data=[0x47, 0x7F])) is None

    def test_other_channel_messages_are_ignored(self):
        assert parse_message(mido.Message('pitchwheel', pitch=100)) is None
        assert parse_message(mido.Message('program_change', program=3)) is None


@pytest.mark.unit
class TestMidiInputManager:
    """Test opening the input port and dispatching events."""

    @patch('hogbridge.midi.input_manager.mido.open_input')
    @patch('hogbridge.midi.input_manager.mido.get_input_names')
    def test_opens_port_matching_prefix(self, mock_names, mock_open):
        mock_names.return_value = ["Keyboard", "APC MINI 0", "APC MINI 1"]
        mock_open.return_value = make_port("APC MINI 0")

        manager = MidiInputManager("APC MINI")
        manager.start()

        assert mock_open.call_args.args[0] == "APC MINI 0"
        assert manager.current_port == "APC MINI 0"

        manager.stop()
        mock_open.return_value.close.assert_called_once()
        assert manager.current_port is None

    @patch('hogbridge.midi.input_manager.mido.get_input_names')
    def test_prefix_must_match_start(self, mock_names):
        """Test that the prefix is not a substring search."""
        mock_names.return_value = ["My APC MINI"]

        manager = MidiInputManager("APC MINI")
        with pytest.raises(SurfaceNotFoundError) as exc_info:
            manager.start()

        assert exc_info.value.direction == "input"
        assert exc_info.value.available == ["My APC MINI"]

    @patch('hogbridge.midi.input_manager.mido.open_input')
    @patch('hogbridge.midi.input_manager.mido.get_input_names')
    def test_open_failure_is_not_found(self, mock_names, mock_open):
        mock_names.return_value = ["APC MINI"]
        mock_open.side_effect = OSError("busy")

        with pytest.raises(SurfaceNotFoundError):
            MidiInputManager("APC MINI").start()

    @patch('hogbridge.midi.input_manager.mido.open_input')
    @patch('hogbridge.midi.input_manager.mido.get_input_names')
    def test_port_selector(self, mock_names, mock_open):
        mock_names.return_value = ["APC MINI 0", "APC MINI 1"]
        mock_open.return_value = make_port("APC MINI 1")

        manager = MidiInputManager("APC MINI", port_selector=lambda ports: ports[-1])
        manager.start()

        assert mock_open.call_args.args[0] == "APC MINI 1"

    def test_callback_dispatches_events(self):
        manager = MidiInputManager("APC MINI")
        events = []
        raw = []
        manager.on_event(events.append)
        manager.on_message(raw.append)

        manager._midi_callback(mido.Message('note_on', note=3, velocity=127))
        manager._midi_callback(mido.Message('note_on', channel=2, note=3, velocity=127))

        assert events == [SurfaceEvent.note_on(3, 127)]
        assert len(raw) == 2

    def test_callback_errors_are_contained(self):
        """Test that a failing consumer does not raise into mido's thread."""
        manager = MidiInputManager("APC MINI")

        def failing(event):
            raise RuntimeError("queue gone")

        manager.on_event(failing)
        manager._midi_callback(mido.Message('note_on', note=3, velocity=127))


@pytest.mark.unit
class TestMidiOutputManager:
    """Test lamp output."""

    @patch('hogbridge.midi.output_manager.mido.open_output')
    @patch('hogbridge.midi.output_manager.mido.get_output_names')
    def test_set_lamp_sends_note_on_channel_zero(self, mock_names, mock_open):
        mock_names.return_value = ["APC MINI"]
        port = make_port("APC MINI")
        mock_open.return_value = port

        manager = MidiOutputManager("APC MINI")
        manager.start()
        manager.set_lamp(35, 5)

        sent = port.send.call_args.args[0]
        assert sent.type == "note_on"
        assert sent.channel == 0
        assert sent.note == 35
        assert sent.velocity == 5

    def test_send_without_port_raises(self):
        with pytest.raises(SurfaceWriteError):
            MidiOutputManager("APC MINI").set_lamp(0, 127)

    @patch('hogbridge.midi.output_manager.mido.open_output')
    @patch('hogbridge.midi.output_manager.mido.get_output_names')
    def test_send_failure_raises(self, mock_names, mock_open):
        mock_names.return_value = ["APC MINI"]
        port = make_port("APC MINI")
        port.send.side_effect = OSError("device unplugged")
        mock_open.return_value = port

        manager = MidiOutputManager("APC MINI")
        manager.start()

        with pytest.raises(SurfaceWriteError) as exc_info:
            manager.set_lamp(0, 127)
        assert "device unplugged" in exc_info.value.technical_message


@pytest.mark.unit
class TestMidiManager:
    """Test the combined surface connection."""

    @patch('hogbridge.midi.output_manager.mido.get_output_names')
    @patch('hogbridge.midi.input_manager.mido.open_input')
    @patch('hogbridge.midi.input_manager.mido.get_input_names')
    def test_missing_output_closes_input(self, mock_in_names, mock_open_input, mock_out_names):
        mock_in_names.return_value = ["APC MINI"]
        mock_open_input.return_value = make_port("APC MINI")
        mock_out_names.return_value = []

        manager = MidiManager("APC MINI")
        with pytest.raises(SurfaceNotFoundError) as exc_info:
            manager.start()

        assert exc_info.value.direction == "output"
        mock_open_input.return_value.close.assert_called_once()
        assert manager.current_input_port is None

    @patch('hogbridge.midi.output_manager.mido.open_output')
    @patch('hogbridge.midi.output_manager.mido.get_output_names')
    @patch('hogbridge.midi.input_manager.mido.open_input')
    @patch('hogbridge.midi.input_manager.mido.get_input_names')
    def test_context_manager(self, mock_in_names, mock_open_input, mock_out_names, mock_open_output):
        mock_in_names.return_value = ["APC MINI"]
        mock_out_names.return_value = ["APC MINI"]
        mock_open_input.return_value = make_port("APC MINI")
        mock_open_output.return_value = make_port("APC MINI")

        with MidiManager("APC MINI") as manager:
            assert manager.current_input_port == "APC MINI"
            assert manager.current_output_port == "APC MINI"

        assert manager.current_input_port is None
        assert manager.current_output_port is None

    @patch('hogbridge.midi.manager.mido.get_output_names')
    @patch('hogbridge.midi.manager.mido.get_input_names')
    def test_list_ports(self, mock_in_names, mock_out_names):
        mock_in_names.return_value = ["APC MINI"]
        mock_out_names.return_value = ["APC MINI", "Synth"]

        assert MidiManager.list_ports() == {"input": ["APC MINI"], "output": ["APC MINI", "Synth"]}
