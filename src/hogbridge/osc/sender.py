"""OSC sender: control events towards the console."""

import logging
from typing import Optional

from pythonosc.udp_client import SimpleUDPClient

from hogbridge.exceptions import ConsoleWriteError

logger = logging.getLogger(__name__)


class OscSender:
    """
    Sends single-float OSC messages to the console over UDP.

    Satisfies the ConsoleOutput protocol. Sending is fire-and-forget; a
    failing send raises ConsoleWriteError.
    """

    def __init__(self, host: str, port: int):
        self._host = host
        self._port = port
        self._client: Optional[SimpleUDPClient] = None

    def start(self) -> None:
        """
        Create the UDP client.

        Raises:
            ConsoleWriteError: If the console address cannot be resolved
        """
        if self._client is not None:
            return
        try:
            self._client = SimpleUDPClient(self._host, self._port)
        except OSError as e:
            raise ConsoleWriteError(self._host, self._port, str(e)) from e
        logger.info(f"Sending OSC messages to {self._host}:{self._port}")

    def stop(self) -> None:
        client, self._client = self._client, None
        if client:
            try:
                client.close()
            except OSError as e:
                logger.error(f"Error closing OSC client: {e}")

    def send(self, address: str, value: float) -> None:
        """
        Send one message with a single float32 argument.

        Raises:
            ConsoleWriteError: If the client is closed or the send fails
        """
        if self._client is None:
            raise ConsoleWriteError(self._host, self._port, "client is not open")

        try:
            self._client.send_message(address, float(value))
        except OSError as e:
            logger.error(f"Error sending OSC message {address}: {e}")
            raise ConsoleWriteError(self._host, self._port, str(e)) from e
        logger.debug(f"OSC -> {address} {value}")

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.stop()
