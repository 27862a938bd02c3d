"""Transport-related exceptions.

Raised by the MIDI surface connection and the OSC sockets:
- SurfaceNotFoundError: No MIDI port matches the configured device prefix
- ListenAddressError: The OSC listen socket could not be bound
- TransportWriteError: Sending to the surface or the console failed
"""

from typing import Optional

from .base import HogBridgeError


class TransportError(HogBridgeError):
    """Base class for surface and network transport errors."""
    pass


class SurfaceNotFoundError(TransportError):
    """No MIDI port name starts with the configured device prefix."""

    def __init__(self, device: str, direction: str, available: Optional[list[str]] = None):
        """
        Initialize surface not found error.

        Args:
            device: Device name prefix that was searched for
            direction: "input" or "output"
            available: Port names that were available at the time
        """
        available = available or []
        technical = f"No MIDI {direction} port starting with '{device}' in {available}"
        super().__init__(
            user_message=f"Could not find MIDI {direction} for device '{device}'",
            technical_message=technical,
            recovery_hint=(
                "Check that the controller is plugged in.\n"
                "Run 'hogbridge midi list' to see available MIDI ports, then "
                "'hogbridge config set --midi-device NAME' to change the prefix"
            ),
        )
        self.device = device
        self.direction = direction
        self.available = available


class ListenAddressError(TransportError):
    """The UDP listen socket could not be bound."""

    def __init__(self, host: str, port: int, original_error: str):
        super().__init__(
            user_message=f"Could not listen for OSC on {host}:{port}",
            technical_message=f"bind({host!r}, {port}) failed: {original_error}",
            recovery_hint=(
                "Another program may already use this port, or the address does not "
                "belong to this machine.\n"
                "Use 'hogbridge --listen HOST:PORT' or 'hogbridge config set --listen-port N'"
            ),
        )
        self.host = host
        self.port = port
        self.original_error = original_error


class TransportWriteError(TransportError):
    """An outgoing message could not be sent."""

    def __init__(self, target: str, original_error: str):
        super().__init__(
            user_message=f"Failed to send to {target}",
            technical_message=f"Write to {target} failed: {original_error}",
            recovery_hint="Check the connection and restart the bridge",
        )
        self.target = target
        self.original_error = original_error


class SurfaceWriteError(TransportWriteError):
    """Sending a note/lamp message to the MIDI surface failed."""

    def __init__(self, port_name: str, original_error: str):
        super().__init__(f"MIDI output '{port_name}'", original_error)
        self.port_name = port_name


class ConsoleWriteError(TransportWriteError):
    """Sending an OSC message to the console failed."""

    def __init__(self, host: str, port: int, original_error: str):
        super().__init__(f"console at {host}:{port}", original_error)
        self.host = host
        self.port = port
