"""MIDI manager combining the surface's input and output."""

import logging
from typing import Callable, Optional

import mido

from hogbridge.protocols import SurfaceEvent

from .input_manager import MidiInputManager
from .output_manager import MidiOutputManager

logger = logging.getLogger(__name__)


class MidiManager:
    """
    Both MIDI directions of one control surface.

    Input and output ports are matched by the same name prefix. Satisfies
    the SurfaceOutput protocol through set_lamp().
    """

    def __init__(
        self,
        device_prefix: str,
        port_selector: Optional[Callable[[list[str]], Optional[str]]] = None
    ):
        """
        Initialize MIDI manager.

        Args:
            device_prefix: Port names starting with this string belong to the device
            port_selector: Optional function to select best port from candidates
        """
        self._input_manager = MidiInputManager(device_prefix, port_selector)
        self._output_manager = MidiOutputManager(device_prefix, port_selector)

    def on_event(self, callback: Callable[[SurfaceEvent], None]) -> None:
        """
        Register callback for decoded surface events.

        Callback is executed in mido's internal I/O thread - keep it fast!
        """
        self._input_manager.on_event(callback)

    def set_lamp(self, note: int, velocity: int) -> None:
        self._output_manager.set_lamp(note, velocity)

    def start(self) -> None:
        """
        Open input and output ports.

        Raises:
            SurfaceNotFoundError: If either direction cannot be opened
        """
        self._input_manager.start()
        try:
            self._output_manager.start()
        except Exception:
            self._input_manager.stop()
            raise
        logger.debug("MidiManager started")

    def stop(self) -> None:
        """Close both ports."""
        self._input_manager.stop()
        self._output_manager.stop()
        logger.debug("MidiManager stopped")

    @property
    def current_input_port(self) -> Optional[str]:
        return self._input_manager.current_port

    @property
    def current_output_port(self) -> Optional[str]:
        return self._output_manager.current_port

    @staticmethod
    def list_ports() -> dict:
        """
        List all available MIDI ports.

        Returns:
            Dictionary with 'input' and 'output' lists of port names
        """
        return {
            'input': mido.get_input_names(),
            'output': mido.get_output_names()
        }

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.stop()
