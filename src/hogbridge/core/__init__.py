"""Routing core."""

from .bridge import Bridge
from .router import (
    HARDWARE_PREFIX,
    LED_STATUS_PREFIX,
    TIME_STATUS_PREFIX,
    MessageRouter,
    hardware_address,
    normalize_led_name,
    remap_controller_value,
)

__all__ = [
    "Bridge",
    "MessageRouter",
    "HARDWARE_PREFIX",
    "LED_STATUS_PREFIX",
    "TIME_STATUS_PREFIX",
    "hardware_address",
    "normalize_led_name",
    "remap_controller_value",
]
