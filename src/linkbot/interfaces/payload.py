"""Outbound message payload shape."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class Color(IntEnum):
    """Embed accent colours."""

    BLUE = 0x3498DB
    RED = 0xED4245
    GREEN = 0x57F287
    GREY = 0x95A5A6


class ControlStyle(Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    SUCCESS = "success"
    DANGER = "danger"


@dataclass(frozen=True)
class Field:
    """A titled block inside a payload."""

    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class Control:
    """An interactive button attached to a message."""

    id: str
    label: str
    style: ControlStyle = ControlStyle.SECONDARY
    disabled: bool = False
    emoji: str | None = None


@dataclass(frozen=True)
class Payload:
    """A message as handed to the gateway (new message or edit)."""

    color: Color = Color.BLUE
    title: str | None = None
    description: str | None = None
    fields: tuple[Field, ...] = field(default_factory=tuple)
    footer: str | None = None
    author: str | None = None
    content: str | None = None
    controls: tuple[Control, ...] = field(default_factory=tuple)

    def has_enabled_controls(self) -> bool:
        """Check if any control can still be pressed."""
        return any(not c.disabled for c in self.controls)

