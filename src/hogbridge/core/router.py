"""Message router: translates surface input to OSC and console status to lamps.

Both inputs put events on one queue; the router is its only consumer, so
the registry and both output transports are only ever used from the
router's thread.
"""

import logging
import queue
from numbers import Real
from typing import Any, Optional

from hogbridge.models import Mapping
from hogbridge.protocols import (
    BridgeEvent,
    ConsoleEvent,
    ConsoleOutput,
    SurfaceEvent,
    SurfaceEventKind,
    SurfaceOutput,
)

logger = logging.getLogger(__name__)

HARDWARE_PREFIX = "/hog/hardware/"
LED_STATUS_PREFIX = "/hog/status/led/"
TIME_STATUS_PREFIX = "/hog/status/time"
FLASH_PREFIX = "flash"

# Marks the end of the event stream
_STOP = object()


def hardware_address(name: str) -> str:
    """OSC address the console expects for a hardware control."""
    return f"{HARDWARE_PREFIX}{name}"


def remap_controller_value(value: int) -> float:
    """Stretch a 0-127 fader value to the console's 0-255 range."""
    return float(value * 2 + value // 64)


def normalize_led_name(name: str) -> str:
    """
    Undo the console's naming inconsistencies in LED status names.

    The console reports "effects" keys that it accepts as "effect", and
    sometimes appends "/100" to the playback keys (maingo, mainhalt, ...).
    """
    name = name.replace("effects", "effect")
    if name.endswith("/100"):
        name = name[:-len("/100")]
    return name


class MessageRouter:
    """
    Single-consumer loop between the surface and the console.

    Producers call post() from any thread; run() processes one event at a
    time until stop() is called or an output transport fails. A
    TransportWriteError from either output propagates out of run().
    """

    def __init__(self, mapping: Mapping, surface: SurfaceOutput, console: ConsoleOutput):
        """
        Initialize the router.

        Args:
            mapping: Registry of surface controls
            surface: Lamp output of the control surface
            console: OSC output towards the console
        """
        self._mapping = mapping
        self._surface = surface
        self._console = console
        self._queue: queue.Queue = queue.Queue()

    def post(self, event: BridgeEvent) -> None:
        """Queue an event. Safe to call from any thread, never blocks."""
        self._queue.put(event)

    def stop(self) -> None:
        """Make run() return once the events queued so far are handled."""
        self._queue.put(_STOP)

    def pending(self) -> int:
        """Approximate number of queued events."""
        return self._queue.qsize()

    def reset_lamps(self) -> None:
        """Show every button's standby state."""
        count = 0
        for button in self._mapping.all_buttons():
            self._surface.set_lamp(button.note, button.vel_off)
            count += 1
        logger.info(f"Reset {count} lamps")

    def run(self) -> None:
        """Process queued events until stopped."""
        logger.debug("Router loop started")
        while True:
            event = self._queue.get()
            if event is _STOP:
                break
            self.process(event)
        logger.debug("Router loop stopped")

    def process(self, event: BridgeEvent) -> None:
        """Handle a single event."""
        if isinstance(event, SurfaceEvent):
            self.handle_surface_event(event)
        elif isinstance(event, ConsoleEvent):
            self.handle_console_event(event)
        else:
            raise TypeError(f"Unsupported event type: {type(event).__name__}")

    def handle_surface_event(self, event: SurfaceEvent) -> None:
        """Translate a pad or fader action into an OSC message."""
        if event.kind is SurfaceEventKind.CONTROL_CHANGE:
            controller = self._mapping.controller_by_id(event.number)
            if controller is None:
                logger.debug(f"Unmapped controller {event.number}")
                return
            self._console.send(hardware_address(controller.name), remap_controller_value(event.value))
            return

        button = self._mapping.button_by_note(event.number)
        if button is None:
            logger.debug(f"Unmapped note {event.number}")
            return
        value = 1.0 if event.kind is SurfaceEventKind.NOTE_ON else 0.0
        self._console.send(hardware_address(button.name), value)

    def handle_console_event(self, event: ConsoleEvent) -> None:
        """Translate an LED status message into a lamp update."""
        if not event.address.startswith(LED_STATUS_PREFIX):
            if not event.address.startswith(TIME_STATUS_PREFIX):
                logger.debug(f"Ignoring OSC message {event.address}")
            return

        name = normalize_led_name(event.address[len(LED_STATUS_PREFIX):])
        button = self._mapping.button_by_name(name)
        if button is None:
            if not name.startswith(FLASH_PREFIX):
                logger.warning(f"Unknown LED key {name}")
            return

        state = _led_state(event.args)
        if state is None:
            logger.warning(f"{name}: unexpected LED status arguments {event.args!r}")
            return

        velocity = button.vel_on if state else button.vel_off
        self._surface.set_lamp(button.note, velocity)


def _led_state(args: tuple[Any, ...]) -> Optional[bool]:
    """Return True/False for a status of exactly 1/0, None for anything else."""
    if not args:
        return None
    value = args[0]
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    if value == 0:
        return False
    if value == 1:
        return True
    return None
