"""Bridge configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field

from hogbridge.utils.persistence import PydanticPersistence

CONFIG_DIR = Path.home() / ".hogbridge"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.json"


class BridgeConfig(BaseModel):
    """Device and network settings for the bridge."""

    # MIDI settings
    midi_device: str = Field(
        default="APC MINI",
        min_length=1,
        description="Prefix of the MIDI port names of the control surface",
    )

    # OSC settings
    listen_host: str = Field(
        default="0.0.0.0", description="Address to receive console status messages on"
    )
    listen_port: int = Field(
        default=7002, ge=1, le=65535, description="UDP port to receive console status messages on"
    )
    console_host: str = Field(
        default="127.0.0.1", description="Address of the console's OSC input"
    )
    console_port: int = Field(
        default=7001, ge=1, le=65535, description="UDP port of the console's OSC input"
    )
    recv_buffer_size: int = Field(
        default=1536, ge=512, description="Largest datagram read from the listen socket (bytes)"
    )

    @property
    def listen_address(self) -> tuple[str, int]:
        return (self.listen_host, self.listen_port)

    @property
    def console_address(self) -> tuple[str, int]:
        return (self.console_host, self.console_port)

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "BridgeConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.hogbridge/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH
        return PydanticPersistence.load_json_or_default(path, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        if path is None:
            path = DEFAULT_CONFIG_PATH
        PydanticPersistence.save_json(self, path)
