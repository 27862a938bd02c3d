"""Helpers shared by the bridge and the command line for reporting errors."""

import logging
from typing import Optional

from pydantic import ValidationError

from .base import HogBridgeError
from .config import ConfigFileInvalidError, ConfigValidationError

logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Logs the start, success or failure of one startup step.

    Exceptions always propagate; hogbridge errors are logged with their
    technical message, anything else with a traceback.

    Example:
        ```python
        with ErrorContext("start OSC listener", logger_instance=logger):
            listener.start()
        ```
    """

    def __init__(self, operation: str, logger_instance: Optional[logging.Logger] = None):
        self.operation = operation
        self.logger = logger_instance or logger

    def __enter__(self):
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
        elif isinstance(exc_val, HogBridgeError):
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)
        return False


def wrap_pydantic_error(error: ValidationError, file_path: str) -> HogBridgeError:
    """
    Turn a BridgeConfig validation failure into a configuration error.

    Malformed JSON becomes ConfigFileInvalidError; rejected values become
    ConfigValidationError naming the field (or all fields, when several fail).
    """
    errors = error.errors()

    if errors and errors[0]["type"] == "json_invalid":
        return ConfigFileInvalidError(file_path, errors[0]["msg"])

    if len(errors) == 1:
        first = errors[0]
        field = ".".join(str(loc) for loc in first["loc"]) or "config"
        return ConfigValidationError(field, first.get("input"), first["msg"], file_path=file_path)

    lines = [f"  - {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in errors]
    return ConfigValidationError(
        field="multiple fields",
        value=None,
        error_msg=f"{len(errors)} validation errors:\n" + "\n".join(lines),
        file_path=file_path,
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """(message, hint or None) for the command line error block."""
    if isinstance(error, HogBridgeError):
        return error.user_message, error.recovery_hint
    return f"{type(error).__name__}: {error}", None
