"""OSC connection to the lighting console."""

from .listener import ConsoleDispatcher, OscListener, OscStatusServer
from .sender import OscSender

__all__ = ["ConsoleDispatcher", "OscListener", "OscStatusServer", "OscSender"]
