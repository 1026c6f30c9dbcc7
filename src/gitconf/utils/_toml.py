"""TOML helpers shared by the settings and entries packages."""

import re
import tomllib
from typing import Final

# Interpreters before 3.14 only report the position in the message.
_POSITION_RE: Final = re.compile(r"\(at line (\d+), column (\d+)\)")


def toml_error_position(
    error: tomllib.TOMLDecodeError,
) -> tuple[int | None, int | None]:
    """Return the 1-based ``(line, column)`` of a TOML syntax error.

    Example:
        >>> try:
        ...     tomllib.loads("a = \\nb = 1")
        ... except tomllib.TOMLDecodeError as e:
        ...     toml_error_position(e)
        (1, 5)
    """
    line: int | None = getattr(error, "lineno", None)
    column: int | None = getattr(error, "colno", None)
    if line is not None:
        return line, column

    match = _POSITION_RE.search(str(error))
    if match is None:
        return None, None
    return int(match.group(1)), int(match.group(2))
