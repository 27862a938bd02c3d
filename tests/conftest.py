"""Pytest fixtures for tests."""

import pytest

from hogbridge.core import MessageRouter
from hogbridge.models import BridgeConfig, Mapping


class RecordingSurface:
    """SurfaceOutput that records lamp updates."""

    def __init__(self):
        self.lamps: list[tuple[int, int]] = []

    def set_lamp(self, note: int, velocity: int) -> None:
        self.lamps.append((note, velocity))


class RecordingConsole:
    """ConsoleOutput that records sent messages."""

    def __init__(self):
        self.sent: list[tuple[str, float]] = []

    def send(self, address: str, value: float) -> None:
        self.sent.append((address, value))


@pytest.fixture
def mapping():
    """The built-in APC Mini layout."""
    return Mapping.apc_mini()


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def console():
    return RecordingConsole()


@pytest.fixture
def router(mapping, surface, console):
    """Router wired to recording outputs."""
    return MessageRouter(mapping, surface=surface, console=console)


@pytest.fixture
def config():
    """Config pointing at loopback."""
    return BridgeConfig(listen_host="127.0.0.1", listen_port=9, console_host="127.0.0.1")
