# pyright: reportAny=false, reportExplicitAny=false
"""TOML document parsing, flattening and value rendering.

A configuration document is flattened into dotted leaf keys. Tables are
walked recursively in insertion order; every other value, arrays included,
is a leaf. Leaf values are rendered back as TOML inline literals so that a
``key = literal`` line per entry re-parses to the same leaves.
"""

import math
import re
import tomllib
from collections.abc import Iterable, Iterator, Mapping
from datetime import date, datetime, time
from typing import Any, Final

from gitconf.entries._models import ConfigEntry, FileEntry, KeyValueEntry
from gitconf.exceptions import ParseError
from gitconf.utils import toml_error_position

_BARE_KEY_RE: Final = re.compile(r"[A-Za-z0-9_-]+")

_ESCAPES: Final = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def parse_document(text: str, *, origin: str = "<string>") -> dict[str, Any]:
    """Parse a TOML configuration document.

    Args:
        text: The document source.
        origin: Where the document came from, reported in errors.

    Returns:
        The parsed document.

    Raises:
        ParseError: If the document is not valid TOML.
    """
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse {origin}: {e}"
        line, column = toml_error_position(e)
        raise ParseError(
            msg, location=origin, line=line, column=column, cause=e
        ) from e


def quote_string(value: str) -> str:
    """Quote a string as a TOML basic string."""
    chars: list[str] = []
    for char in value:
        if char in _ESCAPES:
            chars.append(_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:  # noqa: PLR2004
            chars.append(f"\\u{ord(char):04X}")
        else:
            chars.append(char)
    return '"' + "".join(chars) + '"'


def format_key(part: str) -> str:
    """Format one key segment, quoting it unless it is a bare TOML key."""
    if _BARE_KEY_RE.fullmatch(part):
        return part
    return quote_string(part)


def join_key(parts: Iterable[str]) -> str:
    """Join key segments into a dotted TOML key."""
    return ".".join(format_key(part) for part in parts)


def render_value(value: Any) -> str:
    """Render a parsed TOML value as an inline TOML literal.

    Example:
        >>> render_value(5), render_value("world"), render_value(True)
        ('5', '"world"', 'true')
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "nan"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        return repr(value)
    if isinstance(value, str):
        return quote_string(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Mapping):
        items = ", ".join(
            f"{format_key(k)} = {render_value(v)}" for k, v in value.items()
        )
        return "{" + items + "}" if items else "{}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(render_value(item) for item in value) + "]"
    msg = f"Cannot render {type(value).__name__} as a TOML value"
    raise TypeError(msg)


def flatten_document(
    document: Mapping[str, Any],
    prefix: tuple[str, ...] = (),
) -> Iterator[tuple[str, Any]]:
    """Yield ``(dotted_key, value)`` for every leaf in document order.

    Empty tables have no leaves and yield nothing.

    Example:
        >>> list(flatten_document({"application": {"five": 5, "tags": ["a"]}}))
        [('application.five', 5), ('application.tags', ['a'])]
    """
    for key, value in document.items():
        path = (*prefix, key)
        if isinstance(value, Mapping):
            yield from flatten_document(value, path)
        else:
            yield join_key(path), value


def entries_to_document(entries: Iterable[ConfigEntry]) -> str:
    """Serialize entries back to a TOML document.

    Each entry becomes a ``key = literal`` line; file entries are written as
    strings. Parsing the result and flattening it yields the same leaves.
    """
    lines: list[str] = []
    for entry in entries:
        match entry:
            case KeyValueEntry():
                lines.append(entry.render())
            case FileEntry(key=key, value=value):
                lines.append(f"{key} = {quote_string(value)}")
    return "\n".join(lines) + "\n" if lines else ""
