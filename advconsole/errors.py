"""
Exception types raised by advconsole.

Every failure surfaces as a ConsoleError subclass. Errors that happen inside a
scoped colored write record which step failed in `phase`:

  - "read":    reading the current foreground color
  - "set":     applying the requested color
  - "write":   emitting the text
  - "restore": putting the saved color back

When a write fails and the restore that follows also fails, the write error is
the one raised; the restore error hangs off it as `restore_error`.
"""

from __future__ import annotations


class ConsoleError(Exception):
    """Base class for all advconsole errors."""

    def __init__(self, message: str, phase: str | None = None):
        super().__init__(message)
        self.phase = phase
        self.restore_error: ConsoleError | None = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.phase:
            return f"{message} (during {self.phase})"
        return message


class InvalidColorValue(ConsoleError, ValueError):
    """The value is not a member of ConsoleColor."""

    def __init__(self, value: object, phase: str | None = None):
        super().__init__(f"Invalid console color: {value!r}", phase)
        self.value = value


class BackendIOError(ConsoleError):
    """The terminal backend failed (closed stream, no console, I/O error)."""


class FormatError(ConsoleError, ValueError):
    """A composite template or character range could not be rendered."""
