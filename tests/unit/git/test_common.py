"""Unit tests for common git helpers."""

import pytest

from gitconf.git import decode_bytes, strip_refs_heads


class TestDecodeBytes:
    @pytest.mark.parametrize(("value", "expected"), [(b"main", "main"), ("main", "main")])
    def test_decodes(self, value: bytes | str, expected: str) -> None:
        assert decode_bytes(value) == expected


class TestStripRefsHeads:
    @pytest.mark.parametrize(
        ("ref", "expected"),
        [
            (b"refs/heads/main", "main"),
            ("refs/heads/feature/x", "feature/x"),
            ("main", "main"),
            ("refs/tags/v1", "refs/tags/v1"),
            (None, None),
        ],
    )
    def test_strips_prefix(self, ref: bytes | str | None, expected: str | None) -> None:
        assert strip_refs_heads(ref) == expected
