"""
AdvConsole: a console object with colored writes.

AdvConsole bundles a TerminalBackend with a ScopedColorWriter. Most members
forward to the backend and add nothing (colors, clear, beep, title, input).
The colored helpers go through the writer, so the color they use never
outlives the call.

    from advconsole import ConsoleColor, get_console

    con = get_console()
    con.write_line_colored(ConsoleColor.GREEN, "Build {0} passed in {1:.1f}s", 42, 3.25)
    con.write_line("back in the usual color")

get_console() returns one shared instance configured from the environment and
~/.advconsole/config.json (see config.py). Build an AdvConsole yourself to use
a different backend or a lock.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console

from .backend import RichBackend, TerminalBackend
from .colors import ConsoleColor, parse_color
from .config import (
    get_color_system,
    get_default_background,
    get_default_foreground,
    get_force_terminal,
    get_line_terminator,
    load_config,
)
from .formatting import as_request
from .writer import ColorScope, ScopedColorWriter


class AdvConsole:
    """A console with added functionality."""

    def __init__(self, backend: TerminalBackend | None = None, lock=None):
        self.backend = backend if backend is not None else create_backend()
        self.writer = ScopedColorWriter(self.backend, lock=lock)

    # Colors

    @property
    def foreground_color(self) -> ConsoleColor:
        return self.backend.get_foreground_color()

    @foreground_color.setter
    def foreground_color(self, color: ConsoleColor | str | int) -> None:
        self.backend.set_foreground_color(parse_color(color))

    @property
    def background_color(self) -> ConsoleColor:
        return self.backend.get_background_color()

    @background_color.setter
    def background_color(self, color: ConsoleColor | str | int) -> None:
        self.backend.set_background_color(parse_color(color))

    def reset_color(self) -> None:
        self.backend.reset_color()

    def reset_foreground_color(self) -> None:
        """Set the foreground color to its default (Gray unless configured)."""
        self.foreground_color = get_default_foreground()

    def reset_background_color(self) -> None:
        """Set the background color to its default (Black unless configured)."""
        self.background_color = get_default_background()

    # Output in the current color

    def write(self, value: Any = None, *args: Any) -> None:
        self._write(as_request(value, *args).render())

    def write_line(self, value: Any = None, *args: Any) -> None:
        self._write(as_request(value, *args).render(), newline=True)

    def _write(self, text: str, newline: bool = False) -> None:
        # Share the writer's lock so a plain write never lands inside a colored scope
        lock = self.writer.lock
        if lock is None:
            self.backend.write(text, newline)
            return
        with lock:
            self.backend.write(text, newline)

    # Output in a given color

    def colored(self, color: ConsoleColor | str | int) -> ColorScope:
        return self.writer.colored(color)

    def write_colored(self, color: ConsoleColor | str | int, value: Any = None, *args: Any) -> None:
        self.writer.write(color, value, *args)

    def write_line_colored(
        self, color: ConsoleColor | str | int, value: Any = None, *args: Any
    ) -> None:
        self.writer.write_line(color, value, *args)

    # Pass-through

    def read_line(self) -> str | None:
        return self.backend.read_line()

    def clear(self) -> None:
        self.backend.clear()

    def beep(self) -> None:
        self.backend.beep()

    def set_title(self, title: str) -> None:
        self.backend.set_title(title)


def create_backend(console: Console | None = None) -> RichBackend:
    """RichBackend configured from settings; the config file is read once."""
    config = load_config()
    if console is None:
        console = Console(
            color_system=get_color_system(config),
            force_terminal=True if get_force_terminal(config) else None,
            highlight=False,
        )
    return RichBackend(
        console,
        foreground=get_default_foreground(config),
        background=get_default_background(config),
        line_terminator=get_line_terminator(config),
    )


_default_console: AdvConsole | None = None


def get_console() -> AdvConsole:
    """The shared AdvConsole, created on first use."""
    global _default_console
    if _default_console is None:
        _default_console = AdvConsole()
    return _default_console
