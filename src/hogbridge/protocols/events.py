"""Events flowing from the two inputs into the router queue.

A BridgeEvent is either a SurfaceEvent (pad or fader on the controller)
or a ConsoleEvent (one OSC message from the console, bundles already
flattened). Nothing else is ever put on the queue.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class SurfaceEventKind(Enum):
    """Kinds of input the surface produces."""

    NOTE_ON = "note_on"                  # Pad pressed
    NOTE_OFF = "note_off"                # Pad released
    CONTROL_CHANGE = "control_change"    # Fader moved


@dataclass(frozen=True)
class SurfaceEvent:
    """Decoded channel-0 message from the control surface."""

    kind: SurfaceEventKind
    number: int  # note or controller number
    value: int   # velocity or controller value

    @classmethod
    def note_on(cls, note: int, velocity: int = 127) -> "SurfaceEvent":
        return cls(SurfaceEventKind.NOTE_ON, note, velocity)

    @classmethod
    def note_off(cls, note: int) -> "SurfaceEvent":
        return cls(SurfaceEventKind.NOTE_OFF, note, 0)

    @classmethod
    def control_change(cls, control: int, value: int) -> "SurfaceEvent":
        return cls(SurfaceEventKind.CONTROL_CHANGE, control, value)


@dataclass(frozen=True)
class ConsoleEvent:
    """A single OSC message received from the console."""

    address: str
    args: tuple[Any, ...] = ()


BridgeEvent = Union[SurfaceEvent, ConsoleEvent]
