"""Shared interface and view models for topic renderers."""

from collections.abc import Mapping
from typing import Any, ClassVar, Literal

from markupsafe import Markup
from pydantic import BaseModel, ConfigDict, Field

from sitecheck.report_engine.models.aggregate import (
    ProjectBucket,
    TopicDomain,
    TopicGroup,
    TopicStatus,
)
from sitecheck.report_engine.models.summary import (
    PageSummaryPayload,
    RuleSnapshot,
    RunSummaryPayload,
)
from sitecheck.report_engine.rendering import fragments
from sitecheck.report_engine.rendering.formatting import (
    EMPTY_VALUE,
    format_page_label,
    format_scalar,
    humanise_key,
)

Tone = Literal["error", "warning", "ok", "neutral"]
Cell = str | list[str]

IMPACT_ORDER = ("critical", "serious", "moderate", "minor", "info")
IMPACT_TONES: dict[str, Tone] = {
    "critical": "error",
    "serious": "warning",
    "gating": "error",
    "advisory": "warning",
}
STATUS_TONES: dict[TopicStatus, Tone] = {"fail": "error", "warn": "warning", "pass": "ok"}


class _ViewModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Metric(_ViewModel):
    """Labelled overview value."""

    label: str
    value: Any = None

    @property
    def display(self) -> str:
        """Text both renderers print for this value."""
        return format_scalar(self.value)


class TableRow(_ViewModel):
    """Table row; list cells render as bullet lists."""

    cells: list[Cell]
    tone: Tone | None = None


class Table(_ViewModel):
    """Heading, columns, and rows shared by the HTML and Markdown output."""

    heading: str | None = None
    columns: list[str]
    rows: list[TableRow] = Field(default_factory=list)
    empty_text: str = "No entries recorded."


class CardSection(_ViewModel):
    """Collapsible list inside a page card."""

    label: str
    items: list[str]
    tone: Tone | None = None


class PageCard(_ViewModel):
    """Topic-specific view of one page summary."""

    title: str
    status: TopicStatus
    status_label: str
    details: list[str] = Field(default_factory=list)
    sections: list[CardSection] = Field(default_factory=list)
    tables: list[Table] = Field(default_factory=list)


class PageGroup(_ViewModel):
    """All page summaries sharing a page key, in attempt order."""

    page: str
    label: str
    status: TopicStatus
    cards: list[PageCard]


def as_list(value: Any) -> list[Any]:
    """Coerce an optional list value."""
    if isinstance(value, list):
        return value
    return []


def text_items(value: Any) -> list[str]:
    """String items of a list value."""
    return [str(item) for item in as_list(value) if item is not None]


def first_present(mapping: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key that is present and not None."""
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return value
    return None


def rounded(value: Any) -> str:
    """Rounded number or the empty marker."""
    if isinstance(value, int | float) and not isinstance(value, bool):
        return format_scalar(round(value))
    return EMPTY_VALUE


def final_page_entries(bucket: ProjectBucket) -> list[PageSummaryPayload]:
    """Page payloads with one entry per page and viewport, last occurrence wins."""
    latest: dict[tuple[str, str], PageSummaryPayload] = {}
    for payload in bucket.page_payloads:
        key = (payload.page, payload.viewport)
        latest.pop(key, None)
        latest[key] = payload
    return sorted(latest.values(), key=lambda item: (item.page, item.viewport))


class TopicRenderer:
    """Renders one topic.

    Subclasses describe the topic through view models; the HTML and Markdown
    renderers print the same view models so the two documents never differ
    in the facts they report.
    """

    topic: ClassVar[str] = "generic"
    domain: ClassVar[TopicDomain] = "functional"
    default_title: ClassVar[str] = "Summary"
    section_title: ClassVar[str] = "Summary"
    overview_labels: ClassVar[dict[str, str]] = {}
    accordion_heading: ClassVar[str] = "Per-page breakdown"

    def title(self, group: TopicGroup) -> str:
        """Display title of the topic panel."""
        if group.title and group.title != group.base_name:
            return group.title
        return self.default_title

    def section_heading(self, bucket: ProjectBucket) -> str:
        """Heading of a bucket section."""
        return f"{bucket.label} – {self.section_title}"

    # Overview

    def overview_metrics(self, bucket: ProjectBucket) -> list[Metric]:
        """Labelled overview values for a bucket."""
        payload = bucket.run_payload
        if payload is None:
            return []
        return [
            Metric(label=self.overview_labels.get(key, humanise_key(key)), value=value)
            for key, value in payload.overview.items()
        ]

    def notes(self, bucket: ProjectBucket) -> list[str]:
        """Short plain-text remarks printed under the overview."""
        payload = bucket.run_payload
        if payload is None:
            return []
        threshold = payload.metadata.fail_on
        return [f"Gating threshold: {threshold}"] if threshold else []

    # Rule details

    def rule_sections(self, bucket: ProjectBucket) -> list[Table]:
        """Rule-level findings grouped by impact or category."""
        payload = bucket.run_payload
        if payload is None or not payload.rule_snapshots:
            return []
        grouped: dict[str, list[RuleSnapshot]] = {}
        for snapshot in payload.rule_snapshots:
            grouped.setdefault(snapshot.severity_label.lower(), []).append(snapshot)

        def order(label: str) -> int:
            return IMPACT_ORDER.index(label) if label in IMPACT_ORDER else 0

        return [
            self.rule_table(self.rule_heading(label), snapshots)
            for label, snapshots in sorted(grouped.items(), key=lambda item: order(item[0]))
        ]

    def rule_heading(self, label: str) -> str:
        """Heading for a group of rule snapshots."""
        return f"{humanise_key(label)} findings"

    def rule_table(self, heading: str, snapshots: list[RuleSnapshot]) -> Table:
        """Rule snapshots as a table."""
        rows = [
            TableRow(
                cells=[
                    snapshot.severity_label,
                    snapshot.rule,
                    format_scalar(snapshot.pages),
                    format_scalar(snapshot.nodes),
                    format_scalar(snapshot.viewports),
                    format_scalar(snapshot.wcag_tags),
                    snapshot.help_url or EMPTY_VALUE,
                ],
                tone=IMPACT_TONES.get(snapshot.severity_label.lower()),
            )
            for snapshot in snapshots
        ]
        return Table(
            heading=heading,
            columns=["Impact", "Rule", "Pages", "Nodes", "Viewports", "WCAG", "Help"],
            rows=rows,
        )

    # Pages

    page_heading: ClassVar[str] = "Pages"
    page_empty_text: ClassVar[str] = "No page summaries recorded."

    def page_columns(self) -> list[str]:
        """Column headings of the page table."""
        return ["Page", "Viewport", "Summary"]

    def page_row(self, payload: PageSummaryPayload) -> list[Cell]:
        """Cells of one page table row, matching ``page_columns``."""
        return [payload.page, payload.viewport, format_scalar(payload.summary)]

    def page_table(self, bucket: ProjectBucket) -> Table | None:
        """Table with one row per page and viewport, last occurrence wins."""
        return Table(
            heading=self.page_heading,
            columns=self.page_columns(),
            rows=[
                TableRow(
                    cells=self.page_row(payload),
                    tone=STATUS_TONES[self.page_status(payload)],
                )
                for payload in final_page_entries(bucket)
            ],
            empty_text=self.page_empty_text,
        )

    def extra_tables(self, bucket: ProjectBucket) -> list[Table]:
        """Additional topic-specific tables shown after the page table."""
        return []

    def page_status(self, payload: PageSummaryPayload) -> TopicStatus:
        """Status of a single page summary."""
        summary = payload.summary
        if as_list(first_present(summary, "gating", "gatingIssues")):
            return "fail"
        if as_list(summary.get("warnings")) or as_list(summary.get("advisories")):
            return "warn"
        return "pass"

    def page_label(self, payload: PageSummaryPayload) -> str:
        """Label of a page group in the per-page section."""
        return format_page_label(payload.page)

    def page_card(self, payload: PageSummaryPayload) -> PageCard:
        """Card view of a page summary."""
        summary = payload.summary
        status = self.page_status(payload)
        gating = text_items(first_present(summary, "gating", "gatingIssues"))
        sections = [
            CardSection(label="Gating issues", items=gating, tone="error"),
            CardSection(label="Warnings", items=text_items(summary.get("warnings"))),
            CardSection(label="Advisories", items=text_items(summary.get("advisories"))),
            CardSection(label="Notes", items=text_items(summary.get("notes"))),
        ]
        return PageCard(
            title=f"{format_page_label(payload.page)} ({payload.viewport})",
            status=status,
            status_label=f"{len(gating)} gating issue(s)" if gating else "Pass",
            details=[f"Viewport: {payload.viewport}"],
            sections=[section for section in sections if section.items],
        )

    def page_groups(self, bucket: ProjectBucket, group: TopicGroup) -> list[PageGroup]:
        """Page summaries grouped by page key for the collapsible section."""
        if group.suppress_page_entries:
            return []
        grouped: dict[str, list[PageSummaryPayload]] = {}
        for payload in bucket.page_payloads:
            grouped.setdefault(payload.page, []).append(payload)

        groups = []
        for page in sorted(grouped):
            payloads = grouped[page]
            groups.append(
                PageGroup(
                    page=page,
                    label=self.page_label(payloads[-1]),
                    status=self.page_status(payloads[-1]),
                    cards=[self.page_card(payload) for payload in payloads],
                )
            )
        return groups

    # HTML fragments

    def render_overview(self, bucket: ProjectBucket) -> Markup:
        """Overview metrics table and notes."""
        return fragments.overview(self.overview_metrics(bucket), self.notes(bucket))

    def render_rule_table(self, table: Table) -> Markup:
        """One rule-detail table."""
        return fragments.table(table)

    def render_page_card(self, card: PageCard) -> Markup:
        """One page card."""
        return fragments.page_card(card)

    def trusted_fragment(self, payload: RunSummaryPayload) -> Markup | None:
        """Pre-rendered HTML supplied by the check logic, if the topic embeds it."""
        return None

    def trusted_markdown(self, payload: RunSummaryPayload) -> str | None:
        """Pre-rendered Markdown supplied by the check logic, if the topic embeds it."""
        return None
