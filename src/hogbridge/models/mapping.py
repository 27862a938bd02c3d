"""Control surface layout: which pad or fader carries which console control name."""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

logger = logging.getLogger(__name__)


GRID_SIZE = 8
VELOCITY_MAX = 127

# Standby glow levels for unlit grid pads
STANDBY_BRIGHT = 5
STANDBY_DIM = 3

# Top row first, as the pads appear on the device
BUTTON_MATRIX: tuple[tuple[str, ...], ...] = (
    ("nextpage", "", "", "", "ewheelbutton/1", "ewheelbutton/2", "ewheelbutton/3", "ewheelbutton/4"),
    ("grandmaster", "", "", "", "intensity", "position", "colour", "beam"),
    ("mainchoose", "live", "scene", "cue", "effect", "time", "group", "fixture"),
    ("assert", "macro", "list", "page", "backspace", "slash", "minus", "plus"),
    ("release", "delete", "move", "copy", "seven", "eight", "nine", "thru"),
    ("mainback", "update", "merge", "record", "four", "five", "six", "full"),
    ("mainhalt", "setup", "goto", "set", "one", "two", "three", "at"),
    ("maingo", "pig", "fan", "open", "zero", "dot", "enter", "enter"),
)

# Bottom to top
RIGHT_COLUMN: tuple[str, ...] = ("highlight", "blind", "clear", "back", "all", "next", "", "")
RIGHT_COLUMN_FIRST_NOTE = 82

FADER_COUNT = 9
CHOOSE_FIRST_NOTE = 64
CHOOSE_MASTER_NOTE = 98  # ninth choose button sits apart from the other eight
FADER_FIRST_CONTROL = 48


class ButtonMapping(BaseModel):
    """A pad or button: note number, console name and lamp velocities."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Console control name, e.g. 'choose/3'")
    note: int = Field(ge=0, le=127, description="MIDI note sent and lit by the pad")
    vel_on: int = Field(default=VELOCITY_MAX, ge=0, le=127, description="Lamp velocity when active")
    vel_off: int = Field(default=0, ge=0, le=127, description="Lamp velocity when inactive")


class ControlMapping(BaseModel):
    """A continuous controller (fader)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Console control name, e.g. 'fader/1'")
    id: int = Field(ge=0, le=127, description="MIDI control change number")


def standby_velocity(x: int, y: int) -> int:
    """
    Lamp velocity for an inactive grid pad.

    x and y count from the bottom left. The keypad and the console section
    blocks glow a little brighter than the pads around them.
    """
    if 1 <= x < 4 and (y < 2 or y >= 4):
        return STANDBY_BRIGHT
    if x >= 4 and (y < 5 or y == 7):
        return STANDBY_BRIGHT
    return STANDBY_DIM


def choose_note(index: int) -> int:
    """Note of the choose button above fader `index` (1-based)."""
    if index == FADER_COUNT:
        return CHOOSE_MASTER_NOTE
    return CHOOSE_FIRST_NOTE + index - 1


class Mapping(BaseModel):
    """
    Immutable registry of every button and controller on the surface.

    Lookups go through dictionaries built once after validation, so the
    registry can be shared between threads without locking.
    """

    model_config = ConfigDict(frozen=True)

    buttons: tuple[ButtonMapping, ...] = ()
    controllers: tuple[ControlMapping, ...] = ()

    _by_note: dict[int, ButtonMapping] = PrivateAttr(default_factory=dict)
    _by_name: dict[str, ButtonMapping] = PrivateAttr(default_factory=dict)
    _by_id: dict[int, ControlMapping] = PrivateAttr(default_factory=dict)

    @field_validator("buttons")
    @classmethod
    def validate_unique_notes(cls, v: tuple[ButtonMapping, ...]) -> tuple[ButtonMapping, ...]:
        """Ensure no two buttons share a note."""
        seen: set[int] = set()
        for button in v:
            if button.note in seen:
                raise ValueError(f"Duplicate button note {button.note} ('{button.name}')")
            seen.add(button.note)
        return v

    @field_validator("controllers")
    @classmethod
    def validate_unique_ids(cls, v: tuple[ControlMapping, ...]) -> tuple[ControlMapping, ...]:
        """Ensure no two controllers share a control number."""
        seen: set[int] = set()
        for controller in v:
            if controller.id in seen:
                raise ValueError(f"Duplicate controller id {controller.id} ('{controller.name}')")
            seen.add(controller.id)
        return v

    def model_post_init(self, __context: Any) -> None:
        for button in self.buttons:
            self._by_note[button.note] = button
            # First entry wins for a repeated name (the double-width enter key)
            self._by_name.setdefault(button.name, button)
        for controller in self.controllers:
            self._by_id[controller.id] = controller

    def button_by_name(self, name: str) -> ButtonMapping | None:
        return self._by_name.get(name)

    def button_by_note(self, note: int) -> ButtonMapping | None:
        return self._by_note.get(note)

    def controller_by_id(self, id: int) -> ControlMapping | None:
        return self._by_id.get(id)

    def all_buttons(self) -> tuple[ButtonMapping, ...]:
        """All buttons in registration order."""
        return self.buttons

    def all_controllers(self) -> tuple[ControlMapping, ...]:
        return self.controllers

    @classmethod
    def apc_mini(cls) -> "Mapping":
        """
        Build the layout for an Akai APC Mini driving a Hog 4 console.

        The 8x8 grid is defined top row first but the device numbers notes
        from the bottom left (note = 8 * y + x). Empty cells get no mapping.
        The right-hand column starts at note 82, the choose buttons above the
        faders at note 64 (the ninth at 98) and the faders at control 48.

        Returns:
            Mapping: Registry for the APC Mini layout
        """
        buttons: list[ButtonMapping] = []
        controllers: list[ControlMapping] = []

        for x in range(GRID_SIZE):
            for y in range(GRID_SIZE):
                name = BUTTON_MATRIX[GRID_SIZE - 1 - y][x]
                if not name:
                    continue
                buttons.append(ButtonMapping(
                    name=name,
                    note=GRID_SIZE * y + x,
                    vel_on=VELOCITY_MAX,
                    vel_off=standby_velocity(x, y),
                ))

        for y, name in enumerate(RIGHT_COLUMN):
            if not name:
                continue
            buttons.append(ButtonMapping(
                name=name,
                note=RIGHT_COLUMN_FIRST_NOTE + y,
                vel_on=VELOCITY_MAX,
                vel_off=0,
            ))

        for i in range(1, FADER_COUNT + 1):
            buttons.append(ButtonMapping(
                name=f"choose/{i}",
                note=choose_note(i),
                vel_on=VELOCITY_MAX,
                vel_off=0,
            ))
            controllers.append(ControlMapping(
                name=f"fader/{i}",
                id=FADER_FIRST_CONTROL + i - 1,
            ))

        logger.debug(f"Built APC Mini layout: {len(buttons)} buttons, {len(controllers)} controllers")
        return cls(buttons=tuple(buttons), controllers=tuple(controllers))
