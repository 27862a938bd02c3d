"""Bridge: acquires the surface and network resources and runs the router."""

import contextlib
import logging
from typing import Optional

from hogbridge.exceptions import ErrorContext
from hogbridge.midi import MidiManager
from hogbridge.models import BridgeConfig, Mapping
from hogbridge.osc import OscListener, OscSender

from .router import MessageRouter

logger = logging.getLogger(__name__)


class Bridge:
    """
    Owns the MIDI ports, the OSC sockets and the router.

    Use as a context manager: entering opens every resource (any failure
    releases what was already opened and propagates), leaving closes them
    all, also when run() ends with an exception.

    Example:
        ```python
        with Bridge(config) as bridge:
            bridge.run()
        ```
    """

    def __init__(
        self,
        config: BridgeConfig,
        mapping: Optional[Mapping] = None,
        midi: Optional[MidiManager] = None,
        listener: Optional[OscListener] = None,
        sender: Optional[OscSender] = None,
    ):
        """
        Initialize the bridge. Nothing is opened until start().

        Args:
            config: Device and network settings
            mapping: Surface layout (defaults to the APC Mini layout)
            midi: Surface connection (defaults to one built from config)
            listener: OSC input (defaults to one built from config)
            sender: OSC output (defaults to one built from config)
        """
        self.config = config
        self.mapping = mapping or Mapping.apc_mini()
        self.midi = midi or MidiManager(config.midi_device)
        self.listener = listener or OscListener(
            config.listen_host, config.listen_port, buffer_size=config.recv_buffer_size
        )
        self.sender = sender or OscSender(config.console_host, config.console_port)
        self.router = MessageRouter(self.mapping, surface=self.midi, console=self.sender)
        self._resources: Optional[contextlib.ExitStack] = None

    def start(self) -> None:
        """
        Open all resources and connect the inputs to the router queue.

        Raises:
            SurfaceNotFoundError: If the MIDI device is not present
            ListenAddressError: If the OSC listen socket cannot be bound
        """
        if self._resources is not None:
            logger.warning("Bridge is already started")
            return

        self.midi.on_event(self.router.post)
        self.listener.on_message(self.router.post)

        with contextlib.ExitStack() as stack:
            with ErrorContext("open OSC sender", logger_instance=logger):
                self.sender.start()
                stack.callback(self.sender.stop)
            with ErrorContext(f"connect to MIDI device '{self.config.midi_device}'", logger_instance=logger):
                self.midi.start()
                stack.callback(self.midi.stop)
            with ErrorContext("start OSC listener", logger_instance=logger):
                self.listener.start()
                stack.callback(self.listener.stop)
            self._resources = stack.pop_all()

        logger.info(
            f"Bridge started: surface in='{self.midi.current_input_port}' "
            f"out='{self.midi.current_output_port}', console {self.config.console_host}:{self.config.console_port}"
        )

    def run(self) -> None:
        """
        Reset the lamps and route events until stop() is called.

        Raises:
            TransportWriteError: If sending to the surface or the console fails
        """
        self.router.reset_lamps()
        self.router.run()

    def stop(self) -> None:
        """Ask the router loop to finish. Safe to call from any thread."""
        self.router.stop()

    def close(self) -> None:
        """Release all resources in reverse order of acquisition."""
        if self._resources is None:
            return
        resources, self._resources = self._resources, None
        resources.close()
        logger.info("Bridge stopped")

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
