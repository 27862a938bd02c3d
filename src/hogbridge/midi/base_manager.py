"""Base MIDI port manager: find a port by name prefix and own it."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Generic, Optional, TypeVar

import mido

from hogbridge.exceptions import SurfaceNotFoundError

logger = logging.getLogger(__name__)

# Type variable for port types (BaseInput or BaseOutput)
PortType = TypeVar('PortType', bound=mido.ports.BasePort)


class BaseMidiManager(ABC, Generic[PortType]):
    """
    Base MIDI manager.

    Opens the first port whose name starts with the configured device
    prefix when started and closes it when stopped. A missing device is
    reported as SurfaceNotFoundError; there is no hot-plug reconnection.

    Subclasses must implement abstract methods for port-specific operations.
    """

    def __init__(
        self,
        device_prefix: str,
        port_selector: Optional[Callable[[list[str]], Optional[str]]] = None
    ):
        """
        Initialize MIDI manager.

        Args:
            device_prefix: Port names starting with this string belong to the device
            port_selector: Optional function to select best port from candidates.
                          If None, selects first matching port.
        """
        self._device_prefix = device_prefix
        self._port_selector = port_selector
        self._port: Optional[PortType] = None
        self._port_lock = threading.Lock()

    @abstractmethod
    def _get_available_ports(self) -> list[str]:
        """
        Get list of available ports.

        Returns:
            List of available port names
        """
        pass

    @abstractmethod
    def _open_port(self, port_name: str) -> PortType:
        """
        Open a MIDI port.

        Args:
            port_name: Name of the port to open

        Returns:
            Opened port object
        """
        pass

    @abstractmethod
    def _get_port_type_name(self) -> str:
        """
        Get human-readable port type name for logging.

        Returns:
            "input" or "output"
        """
        pass

    def matches(self, port_name: str) -> bool:
        """Check if a port name belongs to the configured device."""
        return port_name.startswith(self._device_prefix)

    def _find_matching_port(self, available_ports: list[str]) -> Optional[str]:
        """Find the port to use among the available ones."""
        matching_ports = [p for p in available_ports if self.matches(p)]

        if not matching_ports:
            return None

        if self._port_selector:
            return self._port_selector(matching_ports)

        return matching_ports[0]

    def start(self) -> None:
        """
        Find and open the device port.

        Raises:
            SurfaceNotFoundError: If no port matches the device prefix or it cannot be opened
        """
        port_type = self._get_port_type_name()

        with self._port_lock:
            if self._port is not None:
                logger.warning(f"Midi{port_type.capitalize()}Manager is already running")
                return

            available_ports = self._get_available_ports()
            port_name = self._find_matching_port(available_ports)
            if port_name is None:
                raise SurfaceNotFoundError(self._device_prefix, port_type, available_ports)

            try:
                self._port = self._open_port(port_name)
            except Exception as e:
                logger.error(f"Failed to open MIDI {port_type} {port_name}: {e}")
                raise SurfaceNotFoundError(self._device_prefix, port_type, available_ports) from e

        logger.info(f"Connected to MIDI {port_type}: {port_name}")

    def stop(self) -> None:
        """Close the port."""
        with self._port_lock:
            if self._port:
                try:
                    self._port.close()
                except Exception as e:
                    logger.error(f"Error closing MIDI {self._get_port_type_name()} port: {e}")
                self._port = None

        logger.debug(f"Midi{self._get_port_type_name().capitalize()}Manager stopped")

    @property
    def current_port(self) -> Optional[str]:
        """Get the open port's name."""
        with self._port_lock:
            return self._port.name if self._port else None

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.stop()
