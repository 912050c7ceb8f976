"""
A participant of the game: an opaque identifier plus a cosmetic color.

(placed in its own module as the board, the codec and the history all need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from string import hexdigits

from src.core.exceptions import DecodeError

# Splits "<id>:/:<#RRGGBB>". Neither a hex color nor a platform uuid ever contains it.
SEPARATOR = ":/:"

DEFAULT_PALETTE: tuple[str, ...] = (
    "#F5B25C",
    "#4A90E2",
    "#7ED321",
    "#D0021B",
    "#9013FE",
    "#50E3C2",
)


def is_valid_hex_color(color: str) -> bool:
    """Valid color looks like '#RRGGBB' (case-insensitive)"""
    return (
        len(color) == 7
        and color[0] == "#"
        and all(character in hexdigits for character in color[1:])
    )


def normalize_hex_color(color: str) -> str:
    """Accept 'rrggbb' or '#rrggbb' and always hand back '#RRGGBB'"""
    candidate = color if color.startswith("#") else f"#{color}"
    if not is_valid_hex_color(candidate):
        raise ValueError(f"Not a hex color: {color!r}")
    return candidate.upper()


def rgb_to_hex(red: float, green: float, blue: float) -> str:
    """Channels in 0..1, truncated (not rounded) to a byte each."""
    return "#{:02X}{:02X}{:02X}".format(int(red * 255), int(green * 255), int(blue * 255))


def hex_to_rgb(color: str) -> tuple[float, float, float]:
    value = int(normalize_hex_color(color)[1:], 16)
    return (
        ((value & 0xFF0000) >> 16) / 255.0,
        ((value & 0x00FF00) >> 8) / 255.0,
        (value & 0x0000FF) / 255.0,
    )


@dataclass(frozen=True)
class Participant:
    id: str
    # cosmetic only: two participants with the same id are the same player, whatever their color
    color: str = field(default=DEFAULT_PALETTE[0], compare=False)

    def __post_init__(self) -> None:
        if not self.id or SEPARATOR in self.id:
            raise ValueError(f"Invalid participant id: {self.id!r}")
        object.__setattr__(self, "color", normalize_hex_color(self.color))

    @classmethod
    def from_wire(cls, token: str) -> Participant:
        """'<id>:/:<#RRGGBB>' -> Participant"""
        participant_id, sep, color = token.rpartition(SEPARATOR)
        if not sep or not participant_id or SEPARATOR in participant_id:
            raise DecodeError(f"Cannot interpret {token!r} as a participant.")
        if not is_valid_hex_color(color):
            raise DecodeError(f"Invalid color {color!r} for participant {participant_id!r}.")
        return cls(participant_id, color)

    def to_wire(self) -> str:
        return f"{self.id}{SEPARATOR}{self.color}"
