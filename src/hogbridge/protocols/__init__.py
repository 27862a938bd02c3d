"""Event types and transport protocols shared by the bridge components."""

from .events import BridgeEvent, ConsoleEvent, SurfaceEvent, SurfaceEventKind
from .transports import ConsoleOutput, SurfaceOutput

__all__ = [
    "BridgeEvent",
    "ConsoleEvent",
    "ConsoleOutput",
    "SurfaceEvent",
    "SurfaceEventKind",
    "SurfaceOutput",
]
