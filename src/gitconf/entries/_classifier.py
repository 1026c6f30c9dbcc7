# pyright: reportAny=false, reportExplicitAny=false
"""Classification of configuration leaves into key/value and file entries.

A leaf is a file reference when its value is a string shaped like a POSIX
path. The rule is deliberately syntactic and deterministic:

1. Only strings qualify; numbers, booleans, dates and arrays never do.
2. The string is non-empty and contains no whitespace and no ``:``. This
   rules out prose, URLs, ``scp``-style remotes and Windows drive paths.
3. It either starts with ``/``, ``./``, ``../`` or ``~/`` followed by at
   least one character, or it contains a ``/`` and its last segment has a
   non-empty stem and an extension of 1 to 10 ASCII letters or digits.

So ``conf/app.conf``, ``/etc/ssl/cert.pem`` and ``./data`` are files, while
``world``, ``application.conf``, ``image/png`` and ``https://x/y.json``
are plain values.
"""

import re
from collections.abc import Iterator, Mapping
from typing import Any, Final

from gitconf.entries._document import flatten_document, parse_document, render_value
from gitconf.entries._models import ConfigEntry, FileEntry, KeyValueEntry
from gitconf.git import RawFileContent

PATH_PREFIXES: Final = ("/", "./", "../", "~/")

_FORBIDDEN_RE: Final = re.compile(r"[\s:]")
_LAST_SEGMENT_RE: Final = re.compile(r".+\.[A-Za-z0-9]{1,10}")


def is_file_reference(value: Any) -> bool:
    """Return True if a leaf value names a file.

    Example:
        >>> is_file_reference("conf/app.conf"), is_file_reference("world")
        (True, False)
    """
    if not isinstance(value, str) or not value:
        return False
    if _FORBIDDEN_RE.search(value):
        return False

    for prefix in PATH_PREFIXES:
        if value.startswith(prefix) and len(value) > len(prefix):
            return True

    if "/" not in value:
        return False
    last_segment = value.rsplit("/", 1)[1]
    return _LAST_SEGMENT_RE.fullmatch(last_segment) is not None


def classify_value(key: str, value: Any) -> ConfigEntry:
    """Build the entry for one leaf."""
    if is_file_reference(value):
        return FileEntry(key=key, value=value)
    return KeyValueEntry(key=key, value=render_value(value))


def classify_document(document: Mapping[str, Any]) -> Iterator[ConfigEntry]:
    """Lazily yield the entries of a parsed document in document order."""
    for key, value in flatten_document(document):
        yield classify_value(key, value)


def classify(
    content: RawFileContent | str,
    *,
    origin: str | None = None,
) -> Iterator[ConfigEntry]:
    """Parse a configuration document and classify its leaves.

    The document is parsed before this function returns, so syntax errors
    are raised here rather than while iterating.

    Args:
        content: The raw file content, or the document text.
        origin: Where the document came from, reported in errors. Defaults
            to the file path for raw content.

    Returns:
        A lazy iterator of entries in document order.

    Raises:
        ParseError: If the content is not valid UTF-8 or not valid TOML.
    """
    if isinstance(content, RawFileContent):
        text = content.text
        origin = origin or content.path
    else:
        text = content
    document = parse_document(text, origin=origin or "<string>")
    return classify_document(document)
