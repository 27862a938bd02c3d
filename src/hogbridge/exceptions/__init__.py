"""
Custom exception hierarchy for hogbridge.

## Exception Hierarchy

```
HogBridgeError (base)
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
└── TransportError
    ├── SurfaceNotFoundError
    ├── ListenAddressError
    └── TransportWriteError
        ├── SurfaceWriteError
        └── ConsoleWriteError
```

All custom exceptions inherit from `HogBridgeError`, which provides
`user_message`, `technical_message` and `recovery_hint`.

Startup failures (`SurfaceNotFoundError`, `ListenAddressError`, configuration
errors) abort before the router loop starts. A `TransportWriteError` raised
while the loop runs terminates the bridge; resources are released by the
`Bridge` context manager on the way out.
"""

from .base import HogBridgeError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import ErrorContext, format_error_for_display, wrap_pydantic_error
from .transport import (
    ConsoleWriteError,
    ListenAddressError,
    SurfaceNotFoundError,
    SurfaceWriteError,
    TransportError,
    TransportWriteError,
)

__all__ = [
    # Base
    "HogBridgeError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Transport
    "ConsoleWriteError",
    "ListenAddressError",
    "SurfaceNotFoundError",
    "SurfaceWriteError",
    "TransportError",
    "TransportWriteError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "wrap_pydantic_error",
]
