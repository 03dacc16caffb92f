"""
Terminal backends.

A backend owns the output stream and the current foreground/background color.
The writer and the AdvConsole facade only talk to the TerminalBackend protocol,
so tests (or an application with its own terminal layer) can hand in any object
with the right methods.

RichBackend is the real one. ANSI terminals can't be asked which color is
active, so RichBackend keeps the color register itself and styles every write
from it through a Rich Console.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rich.console import COLOR_SYSTEMS, Console
from rich.style import Style

from .colors import ConsoleColor, parse_color
from .errors import BackendIOError


@runtime_checkable
class TerminalBackend(Protocol):
    """The capabilities a scoped colored write needs from a terminal."""

    def get_foreground_color(self) -> ConsoleColor: ...

    def set_foreground_color(self, color: ConsoleColor) -> None: ...

    def write(self, text: str, newline: bool = False) -> None: ...


class RichBackend:
    """TerminalBackend writing through a Rich Console."""

    def __init__(
        self,
        console: Console | None = None,
        foreground: ConsoleColor = ConsoleColor.GRAY,
        background: ConsoleColor = ConsoleColor.BLACK,
        line_terminator: str = "\n",
    ):
        self.console = console if console is not None else Console(highlight=False)
        self.default_foreground = parse_color(foreground)
        self.default_background = parse_color(background)
        self.line_terminator = line_terminator
        self._foreground = self.default_foreground
        self._background = self.default_background
        # Until a color is set explicitly the terminal keeps its own colors
        self._foreground_set = False
        self._background_set = False

    def get_foreground_color(self) -> ConsoleColor:
        return self._foreground

    def set_foreground_color(self, color: ConsoleColor) -> None:
        self._foreground = parse_color(color)
        # The default color means "the terminal's own", so restoring it unstyles
        self._foreground_set = self._foreground != self.default_foreground

    def get_background_color(self) -> ConsoleColor:
        return self._background

    def set_background_color(self, color: ConsoleColor) -> None:
        self._background = parse_color(color)
        self._background_set = self._background != self.default_background

    def reset_color(self) -> None:
        """Back to the defaults and to the terminal's own colors."""
        self._foreground = self.default_foreground
        self._background = self.default_background
        self._foreground_set = False
        self._background_set = False

    @property
    def style(self) -> Style | None:
        if not (self._foreground_set or self._background_set):
            return None
        return Style(
            color=self._foreground.rich_name if self._foreground_set else None,
            bgcolor=self._background.rich_name if self._background_set else None,
        )

    def write(self, text: str, newline: bool = False) -> None:
        """Write `text` exactly as given, styled from the register.

        Only the SGR codes for the current colors are added; control
        characters such as tabs and carriage returns pass through untouched.
        The line terminator is written after the style is closed.
        """
        end = self.line_terminator if newline else ""
        if not text and not end:
            return
        style = self.style
        color_system = COLOR_SYSTEMS.get(self.console.color_system or "")
        if style is not None and text:
            text = style.render(text, color_system=color_system)
        try:
            self.console.file.write(text + end)
            self.console.file.flush()
        except (OSError, ValueError) as e:
            raise BackendIOError(f"Could not write to terminal: {e}") from e

    def read_line(self) -> str | None:
        """Read one line of input; None at end of input."""
        try:
            return self.console.input()
        except EOFError:
            return None

    def clear(self) -> None:
        self.console.clear()

    def beep(self) -> None:
        self.console.bell()

    def set_title(self, title: str) -> None:
        self.console.set_window_title(title)
