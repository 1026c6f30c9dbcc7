# pyright: reportAny=false
"""Unit tests for TOML document handling."""

from datetime import date, datetime, time, timezone

import pytest

from gitconf.entries import (
    FileEntry,
    KeyValueEntry,
    ParseError,
    entries_to_document,
    flatten_document,
    format_key,
    join_key,
    parse_document,
    quote_string,
    render_value,
)


class TestParseDocument:
    def test_dotted_keys(self) -> None:
        document = parse_document("application.five = 5\n")

        assert document == {"application": {"five": 5}}

    def test_syntax_error_has_location(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _ = parse_document("a = 1\nb = = 2\n", origin="conf/app.toml")

        error = exc_info.value
        assert error.location == "conf/app.toml"
        assert error.line == 2
        assert str(error).startswith("Failed to parse conf/app.toml")

    def test_duplicate_key_rejected(self) -> None:
        with pytest.raises(ParseError):
            _ = parse_document("a = 1\na = 2\n")


class TestQuoteString:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("world", '"world"'),
            ("", '""'),
            ('say "hi"', '"say \\"hi\\""'),
            ("C:\\temp", '"C:\\\\temp"'),
            ("a\nb\tc", '"a\\nb\\tc"'),
            ("\x00\x7f", '"\\u0000\\u007F"'),
            ("héllo ✓", '"héllo ✓"'),
        ],
    )
    def test_quotes(self, value: str, expected: str) -> None:
        assert quote_string(value) == expected


class TestKeys:
    @pytest.mark.parametrize(
        ("part", "expected"),
        [
            ("is-enabled", "is-enabled"),
            ("snake_case", "snake_case"),
            ("42", "42"),
            ("with.dot", '"with.dot"'),
            ("with space", '"with space"'),
            ("", '""'),
        ],
    )
    def test_format_key(self, part: str, expected: str) -> None:
        assert format_key(part) == expected

    def test_join_key(self) -> None:
        assert join_key(["server", "host.name", "port"]) == 'server."host.name".port'


class TestRenderValue:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (True, "true"),
            (False, "false"),
            (5, "5"),
            (-12, "-12"),
            (1.5, "1.5"),
            (1e100, "1e+100"),
            (float("inf"), "inf"),
            (float("-inf"), "-inf"),
            (float("nan"), "nan"),
            ("world", '"world"'),
            (date(2024, 1, 31), "2024-01-31"),
            (time(7, 30), "07:30:00"),
            (datetime(2024, 1, 31, 7, 30), "2024-01-31T07:30:00"),
            (
                datetime(2024, 1, 31, 7, 30, tzinfo=timezone.utc),
                "2024-01-31T07:30:00+00:00",
            ),
            ([1, "a", True], '[1, "a", true]'),
            ([], "[]"),
            ({"x": 1, "y z": "w"}, '{x = 1, "y z" = "w"}'),
            ({}, "{}"),
            ([{"a": [1]}], "[{a = [1]}]"),
        ],
    )
    def test_renders_literal(self, value: object, expected: str) -> None:
        assert render_value(value) == expected

    def test_rejects_unknown_types(self) -> None:
        with pytest.raises(TypeError):
            _ = render_value(object())


class TestFlattenDocument:
    def test_document_order(self) -> None:
        document = parse_document(
            """
            application.five = 5
            application.hello = "world"

            [server]
            port = 8080
            tags = ["a", "b"]

            [server.tls]
            cert = "/etc/ssl/cert.pem"
            """
        )

        assert list(flatten_document(document)) == [
            ("application.five", 5),
            ("application.hello", "world"),
            ("server.port", 8080),
            ("server.tags", ["a", "b"]),
            ("server.tls.cert", "/etc/ssl/cert.pem"),
        ]

    def test_arrays_of_tables_are_leaves(self) -> None:
        document = parse_document("[[hosts]]\nname = 'a'\n[[hosts]]\nname = 'b'\n")

        assert list(flatten_document(document)) == [
            ("hosts", [{"name": "a"}, {"name": "b"}])
        ]

    def test_empty_tables_skipped(self) -> None:
        assert list(flatten_document({"empty": {}, "a": {"b": {}}})) == []

    def test_quoted_key_segments(self) -> None:
        document = {"a": {"b.c": 1}}

        assert list(flatten_document(document)) == [('a."b.c"', 1)]


class TestEntriesToDocument:
    def test_renders_lines(self) -> None:
        entries = [
            KeyValueEntry(key="application.five", value="5"),
            FileEntry(key="application.cert", value="certs/ca.pem"),
        ]

        assert entries_to_document(entries) == (
            'application.five = 5\napplication.cert = "certs/ca.pem"\n'
        )

    def test_empty(self) -> None:
        assert entries_to_document([]) == ""
