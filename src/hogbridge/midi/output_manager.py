"""MIDI output manager: lamp and note messages to the surface."""

import logging

import mido

from hogbridge.exceptions import SurfaceWriteError

from .base_manager import BaseMidiManager

logger = logging.getLogger(__name__)


class MidiOutputManager(BaseMidiManager[mido.ports.BaseOutput]):
    """MIDI output of the surface."""

    def send(self, message: mido.Message) -> None:
        """
        Send MIDI message to device.

        Raises:
            SurfaceWriteError: If the port is not open or sending fails
        """
        with self._port_lock:
            if self._port is None:
                raise SurfaceWriteError(self._device_prefix, "port is not open")
            try:
                self._port.send(message)
            except Exception as e:
                logger.error(f"Error sending MIDI message {message}: {e}")
                raise SurfaceWriteError(self._port.name, str(e)) from e

    def set_lamp(self, note: int, velocity: int) -> None:
        """Set a pad's lamp; the surface reads note-on velocity as brightness."""
        self.send(mido.Message("note_on", channel=0, note=note, velocity=velocity))

    def _get_available_ports(self) -> list[str]:
        return mido.get_output_names()

    def _open_port(self, port_name: str) -> mido.ports.BaseOutput:
        return mido.open_output(port_name)

    def _get_port_type_name(self) -> str:
        return "output"
