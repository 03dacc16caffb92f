"""
Write requests and their conversion to text.

A write request is whatever a caller wants to put on the terminal in one call:

  - Text:      a single printable value (str, int, float, Decimal, bool,
               None, a character sequence, or any object with a __str__)
  - CharRange: `count` characters of a buffer starting at `index`
  - Composite: a template with positional placeholders plus its arguments

Every request renders to a plain string before anything touches the terminal.
Malformed templates and out-of-range buffers fail here, with FormatError, so a
bad request never leaves the terminal half-colored.

Composite templates use the classic console placeholder syntax:

    {index[,alignment][:format]}

`index` selects the argument, `alignment` pads the result to a width
(positive right-aligns, negative left-aligns) and `format` is handed to
Python's format() for that argument. `{{` and `}}` produce literal braces.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Union

from .errors import FormatError

_PLACEHOLDER = re.compile(r"\s*(\d+)\s*(?:,\s*(-?\d+)\s*)?(?::(.*))?", re.DOTALL)


def to_text(value: Any) -> str:
    """Canonical, locale-independent text for a single value."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # bool before int: True is an int too
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _float_text(value)
    if isinstance(value, Decimal):
        return format(value, "f") if value.is_finite() else str(value)
    if isinstance(value, (list, tuple)) and all(
        isinstance(ch, str) and len(ch) == 1 for ch in value
    ):
        return "".join(value)
    return str(value)


def _float_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text.replace("e", "E")


def format_composite(template: str | None, args: Sequence[Any]) -> str:
    """Substitute `args` into `template`.

    Raises FormatError when the template is None, has an unbalanced brace, a
    non-numeric index, or refers to an argument that wasn't supplied.
    """
    if template is None:
        raise FormatError("Format template is None")

    out: list[str] = []
    i = 0
    n = len(template)
    while i < n:
        ch = template[i]
        if ch == "{":
            if template.startswith("{{", i):
                out.append("{")
                i += 2
                continue
            end = template.find("}", i + 1)
            if end == -1:
                raise FormatError(f"Unterminated placeholder at position {i} in {template!r}")
            out.append(_render_placeholder(template[i + 1 : end], args, i, template))
            i = end + 1
        elif ch == "}":
            if template.startswith("}}", i):
                out.append("}")
                i += 2
                continue
            raise FormatError(f"Unmatched '}}' at position {i} in {template!r}")
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _render_placeholder(body: str, args: Sequence[Any], pos: int, template: str) -> str:
    match = _PLACEHOLDER.fullmatch(body)
    if match is None or "{" in body:
        raise FormatError(f"Invalid placeholder {{{body}}} at position {pos} in {template!r}")

    index = int(match.group(1))
    if index >= len(args):
        raise FormatError(
            f"Placeholder {{{index}}} needs at least {index + 1} argument(s), got {len(args)}"
        )

    value = args[index]
    spec = match.group(3)
    if spec and value is not None:
        try:
            text = format(value, spec)
        except (TypeError, ValueError) as e:
            raise FormatError(f"Cannot format {value!r} with {spec!r}: {e}") from e
    else:
        text = to_text(value)

    if match.group(2) is not None:
        width = int(match.group(2))
        text = text.ljust(-width) if width < 0 else text.rjust(width)
    return text


@dataclass(frozen=True)
class Text:
    """A single printable value."""

    value: Any = None

    def render(self) -> str:
        return to_text(self.value)


@dataclass(frozen=True)
class CharRange:
    """`count` characters of `buffer`, starting at `index`."""

    buffer: Sequence[str] | None
    index: int
    count: int

    def render(self) -> str:
        if self.buffer is None:
            raise FormatError("Character buffer is None")
        if self.index < 0 or self.count < 0:
            raise FormatError(
                f"Index and count must be non-negative (index={self.index}, count={self.count})"
            )
        if self.index + self.count > len(self.buffer):
            raise FormatError(
                f"Range {self.index}..{self.index + self.count} is outside a buffer "
                f"of length {len(self.buffer)}"
            )
        return "".join(self.buffer[self.index : self.index + self.count])


@dataclass(frozen=True)
class Composite:
    """A composite format template and the arguments it refers to."""

    template: str | None
    args: tuple[Any, ...] = field(default_factory=tuple)

    def render(self) -> str:
        return format_composite(self.template, self.args)


WriteRequest = Union[Text, CharRange, Composite]


def as_request(value: Any = None, *args: Any) -> WriteRequest:
    """Coerce a value (and optional template arguments) into a WriteRequest.

    Requests pass through untouched. A string followed by arguments is a
    composite template; anything else becomes Text.
    """
    if isinstance(value, (Text, CharRange, Composite)):
        if args:
            raise TypeError(f"{type(value).__name__} request takes no extra arguments")
        return value
    if args:
        if value is not None and not isinstance(value, str):
            raise TypeError(f"Composite template must be a string, not {type(value).__name__}")
        return Composite(value, args)
    return Text(value)


def render(request: WriteRequest) -> str:
    """Render a request to the exact text it emits (without line terminator)."""
    return request.render()
