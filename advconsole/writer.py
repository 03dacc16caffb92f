"""
Scoped colored output.

ScopedColorWriter writes one request in a chosen foreground color and then
puts the terminal's previous color back:

    1. render the request to text (bad templates fail here, nothing changed)
    2. read the current foreground color and remember it
    3. set the requested color
    4. write the text
    5. restore the remembered color, whatever happened in step 4

Steps 2, 3 and 5 are the ColorScope context manager, so the restore runs on
every exit path out of the write, exceptions included. A failed read or set
raises straight away: the color was never changed, so there is nothing to
restore. If the write fails and the restore fails too, the write error is
raised with the restore error attached as `restore_error`.

The writer does no locking of its own. Two threads writing through the same
backend at once can interleave their save/set/restore steps and leave each
other's text (or the terminal) in the wrong color. Pass a shared lock to
serialize them; use an RLock if a `with writer.colored(...)` block writes
through the same writer.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .backend import TerminalBackend
from .colors import ConsoleColor, parse_color
from .errors import BackendIOError, ConsoleError
from .formatting import CharRange, WriteRequest, as_request


def _call(phase: str, fn: Callable[..., Any], *args: Any) -> Any:
    """Call into the backend, tagging any failure with the step it happened in."""
    try:
        return fn(*args)
    except ConsoleError as e:
        if e.phase is None:
            e.phase = phase
        raise
    except Exception as e:
        raise BackendIOError(f"Terminal backend failed: {e}", phase) from e


class ColorScope:
    """Holds the backend's foreground color for the duration of a with block."""

    def __init__(self, backend: TerminalBackend, color: ConsoleColor, lock=None):
        self.backend = backend
        self.color = color
        self.saved: ConsoleColor | None = None
        self._lock = lock

    def __enter__(self) -> ColorScope:
        if self._lock is not None:
            self._lock.acquire()
        try:
            self.saved = _call("read", self.backend.get_foreground_color)
            _call("set", self.backend.set_foreground_color, self.color)
        except BaseException:
            if self._lock is not None:
                self._lock.release()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            self._restore(exc)
        finally:
            if self._lock is not None:
                self._lock.release()
        return False

    def _restore(self, exc: BaseException | None) -> None:
        try:
            _call("restore", self.backend.set_foreground_color, self.saved)
        except ConsoleError as restore_error:
            if exc is None:
                raise
            # The exception already in flight stays the one the caller sees
            if isinstance(exc, ConsoleError):
                exc.restore_error = restore_error
            exc.add_note(f"Restoring the foreground color also failed: {restore_error}")


class ScopedColorWriter:
    """Writes requests in a given color without changing the terminal's color."""

    def __init__(self, backend: TerminalBackend, lock=None):
        self.backend = backend
        self.lock = lock

    def colored(self, color: ConsoleColor | str | int) -> ColorScope:
        """Context manager holding `color` until the block exits."""
        return ColorScope(self.backend, parse_color(color), self.lock)

    def write_colored(
        self,
        color: ConsoleColor | str | int,
        request: WriteRequest | Any,
        newline: bool = False,
    ) -> None:
        """Write `request` in `color`, followed by a line terminator if `newline`.

        Raises FormatError or InvalidColorValue before touching the backend,
        and BackendIOError (with `phase` set) for anything the backend raises.
        """
        text = as_request(request).render()
        color = parse_color(color)
        with self.colored(color):
            _call("write", self.backend.write, text, newline)

    def write(self, color: ConsoleColor | str | int, value: Any = None, *args: Any) -> None:
        self.write_colored(color, as_request(value, *args))

    def write_line(self, color: ConsoleColor | str | int, value: Any = None, *args: Any) -> None:
        self.write_colored(color, as_request(value, *args), newline=True)

    def write_range(
        self,
        color: ConsoleColor | str | int,
        buffer: Sequence[str],
        index: int,
        count: int,
        newline: bool = False,
    ) -> None:
        self.write_colored(color, CharRange(buffer, index, count), newline)
