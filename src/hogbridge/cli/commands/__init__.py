"""CLI commands for hogbridge."""

from .config import config
from .mapping import mapping_group
from .midi import midi_group
from .osc import osc_group

__all__ = ["config", "mapping_group", "midi_group", "osc_group"]
