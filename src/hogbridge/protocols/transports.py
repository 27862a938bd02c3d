"""Output transport protocols used by the router."""

from typing import Protocol


class SurfaceOutput(Protocol):
    """Lamp output of the control surface."""

    def set_lamp(self, note: int, velocity: int) -> None:
        """
        Set a pad's lamp by sending note-on on channel 0.

        Raises:
            SurfaceWriteError: If the message cannot be sent
        """
        ...


class ConsoleOutput(Protocol):
    """OSC output towards the console."""

    def send(self, address: str, value: float) -> None:
        """
        Send one message with a single float argument.

        Raises:
            ConsoleWriteError: If the datagram cannot be sent
        """
        ...
