"""HTML fragments rendered from topic view models."""

from typing import TYPE_CHECKING

from jinja2 import DictLoader, Environment
from markupsafe import Markup

from sitecheck.report_engine.rendering.formatting import (
    format_bytes,
    format_datetime,
    format_duration,
)
from sitecheck.report_engine.rendering.templates import TEMPLATES

if TYPE_CHECKING:
    from sitecheck.report_engine.topics.base import Metric, PageCard, Table

environment = Environment(
    loader=DictLoader(TEMPLATES),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)
environment.globals.update(
    format_bytes=format_bytes,
    format_datetime=format_datetime,
    format_duration=format_duration,
)


def _macros():
    return environment.get_template("fragments.html.j2").module


def overview(metrics: list["Metric"], notes: list[str]) -> Markup:
    """Overview metrics table followed by plain-text notes."""
    return Markup(_macros().overview(metrics, notes))


def table(data: "Table") -> Markup:
    """Heading and table, or the table's empty text when it has no rows."""
    return Markup(_macros().table(data))


def page_card(card: "PageCard") -> Markup:
    """Per-page card with status tag and collapsible sections."""
    return Markup(_macros().page_card(card))
