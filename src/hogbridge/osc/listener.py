"""OSC listener: receives console datagrams and flattens bundles into messages."""

import logging
import threading
from typing import Callable, Optional

from pythonosc.dispatcher import Dispatcher
from pythonosc.osc_packet import OscPacket
from pythonosc.osc_server import BlockingOSCUDPServer

from hogbridge.exceptions import ListenAddressError
from hogbridge.protocols import ConsoleEvent

logger = logging.getLogger(__name__)


class ConsoleDispatcher(Dispatcher):
    """
    Dispatcher that lets decode errors reach the server.

    The stock dispatcher drops packets it cannot parse without a trace;
    here every decode error propagates to OscStatusServer.handle_error.
    """

    def call_handlers_for_packet(self, data: bytes, client_address: tuple[str, int]) -> list:
        packet = OscPacket(data)
        for timed_message in packet.messages:
            for handler in self.handlers_for_address(timed_message.message.address):
                handler.invoke(client_address, timed_message.message)
        return []


class OscStatusServer(BlockingOSCUDPServer):
    """Blocking UDP server that logs rejected and undecodable datagrams."""

    def verify_request(self, request, client_address) -> bool:
        if super().verify_request(request, client_address):
            return True
        logger.warning(
            f"Could not decode OSC datagram from {client_address[0]} "
            f"({len(request[0])} bytes): not an OSC message or bundle"
        )
        return False

    def handle_error(self, request, client_address) -> None:
        logger.warning(
            f"Could not decode OSC datagram from {client_address[0]} ({len(request[0])} bytes)",
            exc_info=True,
        )


class OscListener:
    """
    Receives the console's OSC feed on a dedicated thread.

    A single blocking server handles datagrams one at a time, so messages
    reach the callback in arrival order. Bundles are flattened by the
    dispatcher. Undecodable datagrams are logged and skipped.
    """

    def __init__(
        self,
        host: str,
        port: int,
        buffer_size: int = 1536,
        poll_interval: float = 0.5
    ):
        """
        Initialize OSC listener.

        Args:
            host: Address to bind to
            port: UDP port to bind to
            buffer_size: Largest datagram read per receive (bytes)
            poll_interval: How often the serve loop checks for shutdown (seconds)
        """
        self._host = host
        self._port = port
        self._buffer_size = buffer_size
        self._poll_interval = poll_interval
        self._server: Optional[OscStatusServer] = None
        self._thread: Optional[threading.Thread] = None
        self._callback: Optional[Callable[[ConsoleEvent], None]] = None

        self.dispatcher = ConsoleDispatcher()
        self.dispatcher.set_default_handler(self._handle_message)

    def on_message(self, callback: Callable[[ConsoleEvent], None]) -> None:
        """
        Register callback for decoded messages.

        Callback is executed in the listener thread.
        """
        self._callback = callback

    def start(self) -> None:
        """
        Bind the socket and start the serve thread.

        Raises:
            ListenAddressError: If the socket cannot be bound
        """
        if self.is_running:
            logger.warning("OscListener is already running")
            return

        try:
            server = OscStatusServer((self._host, self._port), self.dispatcher)
        except OSError as e:
            raise ListenAddressError(self._host, self._port, str(e)) from e
        server.max_packet_size = self._buffer_size

        self._server = server
        self._thread = threading.Thread(
            target=server.serve_forever,
            kwargs={"poll_interval": self._poll_interval},
            name="osc-listener",
            daemon=True,
        )
        self._thread.start()
        logger.info(f"Listening for OSC messages on {self._host}:{self._port}")

    def stop(self) -> None:
        """Stop the serve thread and close the socket."""
        server, self._server = self._server, None
        thread, self._thread = self._thread, None

        if server is None:
            return

        if thread and thread.is_alive() and thread is not threading.current_thread():
            server.shutdown()
            thread.join()
        server.server_close()

        logger.debug("OscListener stopped")

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def local_address(self) -> Optional[tuple[str, int]]:
        """Bound (host, port), useful when binding to port 0."""
        return self._server.server_address if self._server else None

    def _handle_message(self, address: str, *args) -> None:
        event = ConsoleEvent(address, args)
        if self._callback:
            try:
                self._callback(event)
            except Exception as e:
                logger.error(f"Error in OSC message callback: {e}")

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.stop()
