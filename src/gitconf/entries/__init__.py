"""Configuration entries.

This package parses a TOML configuration document, flattens it into dotted
leaf keys and classifies each leaf as a key/value or a file entry.

Example:
    >>> from gitconf.entries import classify
    >>> list(classify('application.hello = "world"'))
    [KeyValueEntry(key='application.hello', value='"world"')]
"""

from gitconf.exceptions import ParseError

from ._classifier import (
    PATH_PREFIXES,
    classify,
    classify_document,
    classify_value,
    is_file_reference,
)
from ._document import (
    entries_to_document,
    flatten_document,
    format_key,
    join_key,
    parse_document,
    quote_string,
    render_value,
)
from ._models import ConfigEntry, FileEntry, KeyValueEntry

__all__ = [
    "PATH_PREFIXES",
    "ConfigEntry",
    "FileEntry",
    "KeyValueEntry",
    "ParseError",
    "classify",
    "classify_document",
    "classify_value",
    "entries_to_document",
    "flatten_document",
    "format_key",
    "is_file_reference",
    "join_key",
    "parse_document",
    "quote_string",
    "render_value",
]
