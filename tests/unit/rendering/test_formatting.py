"""Tests for shared value formatting."""

from datetime import UTC, datetime

import pytest

from sitecheck.report_engine.rendering.formatting import (
    EMPTY_VALUE,
    escape_markdown,
    format_bytes,
    format_datetime,
    format_duration,
    format_page_label,
    format_scalar,
    humanise_key,
    slugify,
)


def test_slugify() -> None:
    """slugify produces lower-case dash-separated ids."""
    assert slugify("Mobile Safari / iPhone 13") == "mobile-safari-iphone-13"
    assert slugify("!!!") == "item"
    assert slugify(None, default="topic") == "topic"


@pytest.mark.parametrize(
    ("key", "expected"),
    [("totalLinks", "Total Links"), ("pages_with_errors", "Pages With Errors"), ("wcag", "Wcag")],
)
def test_humanise_key(key: str, expected: str) -> None:
    """humanise_key splits camelCase and snake_case keys."""
    assert humanise_key(key) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, EMPTY_VALUE),
        (True, "Yes"),
        (12, "12"),
        (1234567, "1,234,567"),
        (2.5, "2.5"),
        (3.0, "3"),
        ([], EMPTY_VALUE),
        (["a", 1], "a, 1"),
        ({"brokenCount": 0}, "Broken Count: 0"),
    ],
)
def test_format_scalar(value: object, expected: str) -> None:
    """format_scalar prints metric values as plain text."""
    assert format_scalar(value) == expected


def test_format_bytes() -> None:
    """format_bytes uses binary units."""
    assert format_bytes(0) == "0 B"
    assert format_bytes(512) == "512 B"
    assert format_bytes(1536) == "1.50 KB"
    assert format_bytes(8 * 1024 * 1024) == "8.00 MB"


def test_format_duration() -> None:
    """format_duration prints compact durations."""
    assert format_duration(850) == "850ms"
    assert format_duration(95_000) == "1m 35s"
    assert format_duration(3_725_000) == "1h 2m 5s"
    assert format_duration(None) is None


def test_format_datetime() -> None:
    """format_datetime includes the time zone."""
    assert format_datetime(datetime(2024, 1, 31, 9, 45, 12, tzinfo=UTC)) == "2024-01-31 09:45:12 UTC"
    assert format_datetime(None) == EMPTY_VALUE


def test_format_page_label() -> None:
    """The root path is labelled Homepage."""
    assert format_page_label("/") == "Homepage"
    assert format_page_label("/about") == "/about"


def test_escape_markdown() -> None:
    """Markdown control characters and HTML are escaped."""
    assert escape_markdown("a|b") == "a\\|b"
    assert escape_markdown("<script>") == "&lt;script&gt;"
    assert escape_markdown("*bold*_x_") == "\\*bold\\*\\_x\\_"
    assert escape_markdown("line1\nline2") == "line1<br />line2"
    assert escape_markdown(None) == ""
