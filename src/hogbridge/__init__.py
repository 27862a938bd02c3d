"""hogbridge: APC Mini control surface bridge for Hog 4 lighting consoles."""

__version__ = "0.1.0"

from .core import Bridge, MessageRouter
from .models import BridgeConfig, Mapping

__all__ = [
    "Bridge",
    "BridgeConfig",
    "Mapping",
    "MessageRouter",
]
