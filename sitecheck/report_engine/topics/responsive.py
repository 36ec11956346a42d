"""Responsive layout topic: horizontal overflow at narrow viewports."""

from collections.abc import Mapping
from typing import Any, ClassVar

from sitecheck.report_engine.models.aggregate import ProjectBucket, TopicStatus
from sitecheck.report_engine.models.summary import PageSummaryPayload
from sitecheck.report_engine.topics.base import (
    CardSection,
    Cell,
    Metric,
    PageCard,
    TopicRenderer,
    as_list,
    first_present,
    text_items,
)


def _px(value: Any) -> str:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return f"{value}px"
    return "n/a"


def _overflow(page: Mapping[str, Any]) -> int | float:
    value = page.get("horizontalOverflowPx")
    if isinstance(value, int | float) and not isinstance(value, bool):
        return value
    return 0


def _gating(summary: Mapping[str, Any]) -> list[str]:
    return text_items(first_present(summary, "gatingIssues", "gating"))


def describe_overflow_source(source: Any) -> str:
    """Element that extends past the viewport, with its bounding box."""
    if not isinstance(source, Mapping):
        return str(source)
    label = str(source.get("tag") or "element")
    if source.get("id"):
        label += f"#{source['id']}"
    if source.get("className"):
        label += f".{source['className']}"
    text = f" – {source['text']}" if source.get("text") else ""
    return (
        f"{label} extends viewport "
        f"(L {source.get('rectLeft')}px / R {source.get('rectRight')}px){text}"
    )


class ReflowRenderer(TopicRenderer):
    """320px reflow audit."""

    topic = "reflow"
    domain = "responsive"
    default_title = "320px reflow summary"
    section_title = "320px reflow"
    accordion_heading = "Per-page reflow findings"
    overview_labels: ClassVar[dict[str, str]] = {
        "totalPagesAudited": "Pages audited",
        "pagesWithOverflow": "Pages with overflow",
        "pagesWithAdvisories": "Pages with advisories",
        "maxOverflowPx": "Maximum overflow (px)",
    }

    def overview_metrics(self, bucket: ProjectBucket) -> list[Metric]:
        """Counters from the overview, computed from ``details.pages`` when missing."""
        payload = bucket.run_payload
        if payload is None or payload.detail_pages is None:
            return super().overview_metrics(bucket)
        overview = payload.overview
        pages = payload.detail_pages
        computed = {
            "totalPagesAudited": len(pages),
            "pagesWithOverflow": sum(1 for page in pages if as_list(page.get("gating"))),
            "pagesWithAdvisories": sum(1 for page in pages if as_list(page.get("advisories"))),
            "maxOverflowPx": max((_overflow(page) for page in pages), default=0),
        }
        return [
            Metric(
                label=label,
                value=overview[key] if overview.get(key) is not None else computed[key],
            )
            for key, label in self.overview_labels.items()
        ]

    def notes(self, bucket: ProjectBucket) -> list[str]:
        payload = bucket.run_payload
        if payload is None:
            return []
        references = [
            f"{ref.get('id', '')} {ref.get('name', '')}".strip()
            for ref in as_list((payload.details or {}).get("wcagReferences"))
            if isinstance(ref, Mapping)
        ]
        notes = super().notes(bucket)
        if references:
            notes.insert(0, f"WCAG coverage: {', '.join(references)}")
        return notes

    def page_columns(self) -> list[str]:
        return [
            "Page",
            "Viewport",
            "Viewport width",
            "Document width",
            "Horizontal overflow",
            "Gating issues",
            "Advisories",
        ]

    def page_row(self, payload: PageSummaryPayload) -> list[Cell]:
        summary = payload.summary
        return [
            payload.page,
            payload.viewport,
            _px(summary.get("viewportWidth")),
            _px(summary.get("documentWidth")),
            _px(_overflow(summary)),
            str(len(_gating(summary))),
            str(len(as_list(summary.get("advisories")))),
        ]

    def page_status(self, payload: PageSummaryPayload) -> TopicStatus:
        summary = payload.summary
        if _gating(summary):
            return "fail"
        if as_list(summary.get("advisories")):
            return "warn"
        return "pass"

    def page_card(self, payload: PageSummaryPayload) -> PageCard:
        summary = payload.summary
        gating = _gating(summary)
        sources = [describe_overflow_source(item) for item in as_list(summary.get("overflowSources"))]
        sections = [
            CardSection(label="Gating issues", items=gating, tone="error"),
            CardSection(label="Advisories", items=text_items(summary.get("advisories"))),
            CardSection(label="Potential overflow sources", items=sources),
        ]
        return PageCard(
            title=f"{payload.page} ({payload.viewport})",
            status=self.page_status(payload),
            status_label=f"{len(gating)} gating issue(s)" if gating else "Pass",
            details=[
                f"Viewport width: {_px(summary.get('viewportWidth'))}; "
                f"document width: {_px(summary.get('documentWidth'))}",
                f"Horizontal overflow: {_px(_overflow(summary))}",
            ],
            sections=[section for section in sections if section.items],
        )
