"""MIDI connection to the control surface."""

from .base_manager import BaseMidiManager
from .input_manager import MidiInputManager, parse_message
from .manager import MidiManager
from .output_manager import MidiOutputManager

__all__ = ["BaseMidiManager", "MidiInputManager", "MidiOutputManager", "MidiManager", "parse_message"]
