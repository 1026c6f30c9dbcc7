"""Helpers for dulwich's bytes-based values."""

from typing import Final

_HEADS_PREFIX: Final = "refs/heads/"


def decode_bytes(value: bytes | str) -> str:
    """Return ``value`` as text; dulwich hands out SHAs and refs as bytes."""
    return value.decode() if isinstance(value, bytes) else value


def strip_refs_heads(ref: bytes | str | None) -> str | None:
    """Turn a full branch ref into its short name.

    Example:
        >>> strip_refs_heads(b"refs/heads/main")
        'main'
    """
    if ref is None:
        return None
    return decode_bytes(ref).removeprefix(_HEADS_PREFIX)
