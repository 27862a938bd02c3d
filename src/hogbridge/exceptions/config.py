"""Errors raised while reading or changing the bridge configuration."""

from typing import Any, Optional

from .base import HogBridgeError

_FIELD_HINTS = {
    "midi_device": "Run 'hogbridge midi list' to see the connected MIDI ports",
    "listen_port": "UDP ports range from 1 to 65535",
    "console_port": "UDP ports range from 1 to 65535",
    "recv_buffer_size": "The receive buffer must hold at least 512 bytes",
}


class ConfigurationError(HogBridgeError):
    """The configuration file cannot be used."""


class ConfigFileInvalidError(ConfigurationError):
    """The configuration file is not a JSON object."""

    def __init__(self, file_path: str, parse_error: str):
        if "empty" in parse_error.lower():
            user_message = "Configuration file is empty"
        else:
            user_message = "Configuration file is not valid JSON"

        super().__init__(
            user_message=user_message,
            technical_message=f"Cannot parse {file_path}: {parse_error}",
            recovery_hint=(
                f"Fix or delete {file_path}, or run 'hogbridge config reset' "
                "to write the defaults"
            ),
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """A configuration value is out of range or has the wrong type."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        hint = _FIELD_HINTS.get(field, f"Check the '{field}' value")
        if file_path:
            hint += f"\nConfig file: {file_path}"

        super().__init__(
            user_message=f"Invalid configuration value for '{field}': {error_msg}",
            technical_message=f"{field}={value!r} rejected: {error_msg}",
            recovery_hint=hint,
        )
        self.field = field
        self.value = value
        self.file_path = file_path
