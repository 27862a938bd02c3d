"""Root of the hogbridge error hierarchy."""

from typing import Optional


class HogBridgeError(Exception):
    """
    Error that the command line can report without a traceback.

    `str(error)` is the one-line message shown after "ERROR:". The
    technical message goes to the log file, and the hint, when present,
    tells the operator what to change before starting the bridge again.
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """Message followed by the hint, for click.ClickException."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\n{self.recovery_hint}"
