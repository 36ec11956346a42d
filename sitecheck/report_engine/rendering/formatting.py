"""Value formatting shared by the HTML and Markdown renderers."""

import math
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

EMPTY_VALUE = "—"

_SLUG_RE = re.compile(r"[^a-z0-9]+")
_CAMEL_RE = re.compile(r"([a-z0-9])([A-Z])")


def slugify(value: object, default: str = "item") -> str:
    """Lower-case, dash-separated identifier safe for anchors and file names."""
    slug = _SLUG_RE.sub("-", str(value or "").lower()).strip("-")
    return slug or default


def humanise_key(key: str) -> str:
    """Turn ``totalLinks`` or ``total_links`` into ``Total Links``."""
    spaced = _CAMEL_RE.sub(r"\1 \2", re.sub(r"[_-]+", " ", str(key)))
    return " ".join(word[:1].upper() + word[1:] for word in spaced.split())


def format_page_label(page: str | None) -> str:
    """Display label for a page path."""
    if not page or page == "/":
        return "Homepage"
    return str(page)


def format_number(value: int | float) -> str:
    """Format a number with thousands separators."""
    if isinstance(value, float):
        if not math.isfinite(value):
            return str(value)
        if value.is_integer():
            return f"{int(value):,}"
        return f"{value:,.2f}".rstrip("0").rstrip(".")
    return f"{value:,}"


def format_scalar(value: Any) -> str:
    """Plain-text rendering of a metric value.

    Both renderers print metric values through this function so the two
    documents always agree on the text of every number.
    """
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, int | float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, list | tuple):
        if not value:
            return EMPTY_VALUE
        return ", ".join(format_scalar(item) for item in value)
    if isinstance(value, Mapping):
        if not value:
            return EMPTY_VALUE
        return "; ".join(
            f"{humanise_key(key)}: {format_scalar(item)}" for key, item in value.items()
        )
    return str(value)


def format_bytes(size: int | float) -> str:
    """Human-readable byte size (``1.50 MB``)."""
    if not isinstance(size, int | float) or not math.isfinite(size) or size <= 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB"]
    index = 0
    value = float(size)
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    if index == 0:
        return f"{value:.0f} {units[index]}"
    return f"{value:.2f} {units[index]}"


def format_duration(ms: float | None) -> str | None:
    """Compact duration such as ``850ms`` or ``1h 2m 5s``."""
    if ms is None or not math.isfinite(ms):
        return None
    if ms < 1000:
        return f"{round(ms)}ms"
    total_seconds = round(ms / 1000)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{seconds}s")
    return " ".join(parts)


def format_datetime(value: datetime | None) -> str:
    """Readable timestamp, or the empty marker."""
    if value is None:
        return EMPTY_VALUE
    return value.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def escape_markdown(value: object) -> str:
    """Escape text for use inside Markdown paragraphs and table cells."""
    text = str(value if value is not None else "")
    text = text.replace("\\", "\\\\")
    for char in ("|", "`", "*", "_", "[", "]"):
        text = text.replace(char, f"\\{char}")
    text = text.replace("<", "&lt;").replace(">", "&gt;")
    return text.replace("\r\n", "\n").replace("\n", "<br />")
