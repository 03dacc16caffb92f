"""
The sixteen classic console colors.

ConsoleColor keeps the numeric values of the classic Windows/.NET console
palette, so a color stored as an integer (in a config file, say) means the same
thing everywhere. Each member also knows the Rich color name used to draw it on
an ANSI terminal: the "dark" half of the palette maps to the eight standard
ANSI colors, the other half to their bright variants.
"""

from __future__ import annotations

from enum import IntEnum

from .errors import InvalidColorValue


class ConsoleColor(IntEnum):
    BLACK = 0
    DARK_BLUE = 1
    DARK_GREEN = 2
    DARK_CYAN = 3
    DARK_RED = 4
    DARK_MAGENTA = 5
    DARK_YELLOW = 6
    GRAY = 7
    DARK_GRAY = 8
    BLUE = 9
    GREEN = 10
    CYAN = 11
    RED = 12
    MAGENTA = 13
    YELLOW = 14
    WHITE = 15

    @property
    def rich_name(self) -> str:
        """Name of the Rich/ANSI color this member is drawn with."""
        return _RICH_NAMES[self]


_RICH_NAMES = {
    ConsoleColor.BLACK: "black",
    ConsoleColor.DARK_BLUE: "blue",
    ConsoleColor.DARK_GREEN: "green",
    ConsoleColor.DARK_CYAN: "cyan",
    ConsoleColor.DARK_RED: "red",
    ConsoleColor.DARK_MAGENTA: "magenta",
    ConsoleColor.DARK_YELLOW: "yellow",
    ConsoleColor.GRAY: "white",
    ConsoleColor.DARK_GRAY: "bright_black",
    ConsoleColor.BLUE: "bright_blue",
    ConsoleColor.GREEN: "bright_green",
    ConsoleColor.CYAN: "bright_cyan",
    ConsoleColor.RED: "bright_red",
    ConsoleColor.MAGENTA: "bright_magenta",
    ConsoleColor.YELLOW: "bright_yellow",
    ConsoleColor.WHITE: "bright_white",
}

# "DarkBlue", "dark_blue", "dark-blue" and "dark blue" all look the same here
_BY_KEY = {member.name.replace("_", "").lower(): member for member in ConsoleColor}


def _key(name: str) -> str:
    return "".join(ch for ch in name if ch not in "_- ").lower()


def parse_color(value: object) -> ConsoleColor:
    """Turn a member, a member name or an integer value into a ConsoleColor.

    Raises InvalidColorValue for anything that isn't one of the sixteen
    colors. Booleans are rejected even though they are ints.
    """
    if isinstance(value, ConsoleColor):
        return value
    if isinstance(value, bool):
        raise InvalidColorValue(value)
    if isinstance(value, int):
        try:
            return ConsoleColor(value)
        except ValueError:
            raise InvalidColorValue(value) from None
    if isinstance(value, str):
        member = _BY_KEY.get(_key(value))
        if member is None:
            raise InvalidColorValue(value)
        return member
    raise InvalidColorValue(value)
