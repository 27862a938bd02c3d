"""Data models for the bridge."""

from .config import BridgeConfig
from .mapping import ButtonMapping, ControlMapping, Mapping

__all__ = [
    "BridgeConfig",
    "ButtonMapping",
    "ControlMapping",
    "Mapping",
]
