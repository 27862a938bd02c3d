"""MIDI input manager: decodes surface messages into SurfaceEvents."""

import logging
from collections.abc import Callable

import mido

from hogbridge.protocols import SurfaceEvent

from .base_manager import BaseMidiManager

logger = logging.getLogger(__name__)

SURFACE_CHANNEL = 0


def parse_message(msg: mido.Message) -> SurfaceEvent | None:
    """
    Convert a MIDI message from the surface into a SurfaceEvent.

    Only channel 0 note and control change messages are kept. A note_on
    with velocity 0 is a release.

    Returns:
        SurfaceEvent, or None if the message is not surface input
    """
    if getattr(msg, "channel", None) != SURFACE_CHANNEL:
        return None

    if msg.type == "note_on":
        if msg.velocity > 0:
            return SurfaceEvent.note_on(msg.note, msg.velocity)
        return SurfaceEvent.note_off(msg.note)
    if msg.type == "note_off":
        return SurfaceEvent.note_off(msg.note)
    if msg.type == "control_change":
        return SurfaceEvent.control_change(msg.control, msg.value)
    return None


class MidiInputManager(BaseMidiManager[mido.ports.BaseInput]):
    """MIDI input of the surface, delivering messages through callbacks."""

    def __init__(
        self,
        device_prefix: str,
        port_selector: Callable[[list[str]], str | None] | None = None,
    ):
        super().__init__(device_prefix, port_selector)
        self._message_callback: Callable[[mido.Message], None] | None = None
        self._event_callback: Callable[[SurfaceEvent], None] | None = None

    def on_message(self, callback: Callable[[mido.Message], None]) -> None:
        """
        Register callback for every raw incoming MIDI message.

        Callback is executed in mido's internal I/O thread - keep it fast!
        """
        self._message_callback = callback

    def on_event(self, callback: Callable[[SurfaceEvent], None]) -> None:
        """
        Register callback for decoded surface events.

        Callback is executed in mido's internal I/O thread - keep it fast!
        """
        self._event_callback = callback

    def _get_available_ports(self) -> list[str]:
        return mido.get_input_names()

    def _open_port(self, port_name: str) -> mido.ports.BaseInput:
        return mido.open_input(port_name, callback=self._midi_callback)

    def _get_port_type_name(self) -> str:
        return "input"

    def _midi_callback(self, msg: mido.Message) -> None:
        """
        MIDI message callback - called from mido's internal I/O thread.

        Exceptions are logged here and never reach mido's thread.
        """
        try:
            if self._message_callback:
                self._message_callback(msg)

            if self._event_callback:
                event = parse_message(msg)
                if event is not None:
                    self._event_callback(event)
        except Exception as e:
            logger.error(f"Error in MIDI input callback: {e}")
