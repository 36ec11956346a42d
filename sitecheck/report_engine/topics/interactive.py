"""Console and resource error monitoring topic."""

from typing import Any

from sitecheck.report_engine.models.aggregate import ProjectBucket, TopicStatus
from sitecheck.report_engine.models.summary import PageSummaryPayload
from sitecheck.report_engine.rendering.formatting import format_scalar
from sitecheck.report_engine.topics.base import (
    CardSection,
    Cell,
    PageCard,
    TopicRenderer,
    as_list,
    text_items,
)

SAMPLE_LIMIT = 5


def _count(summary: dict[str, Any], key: str) -> int:
    value = summary.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


def console_messages(summary: dict[str, Any]) -> list[str]:
    """Up to five console error messages."""
    messages = []
    for item in as_list(summary.get("consoleSample"))[:SAMPLE_LIMIT]:
        if isinstance(item, dict):
            messages.append(str(item.get("message") or item))
        else:
            messages.append(str(item))
    return messages


def resource_failures(summary: dict[str, Any]) -> list[str]:
    """Up to five failed resource requests."""
    failures = []
    for item in as_list(summary.get("resourceSample"))[:SAMPLE_LIMIT]:
        if not isinstance(item, dict):
            failures.append(str(item))
            continue
        if item.get("type") == "requestfailed":
            label = f"requestfailed – {item.get('failure') or 'unknown'}"
        else:
            parts = [item.get("type") or "resource", item.get("status"), item.get("method")]
            label = " ".join(str(part) for part in parts if part)
        failures.append(f"{label} – {item.get('url') or ''}")
    return failures


class InteractiveRenderer(TopicRenderer):
    """JavaScript console and failed-request monitoring."""

    topic = "interactive"
    domain = "functional"
    default_title = "Interactive smoke summary"
    section_title = "JavaScript & resource monitoring"
    page_empty_text = "No interactive pages were scanned."

    def notes(self, bucket: ProjectBucket) -> list[str]:
        """Resource error budget, then the gating threshold."""
        payload = bucket.run_payload
        if payload is None:
            return []
        notes = []
        budget = payload.overview.get("resourceErrorBudget")
        if budget is not None:
            notes.append(f"Resource error budget: {format_scalar(budget)}")
        return notes + super().notes(bucket)

    def page_columns(self) -> list[str]:
        return ["Page", "Status", "Console", "Resources", "Notes"]

    def page_row(self, payload: PageSummaryPayload) -> list[Cell]:
        summary = payload.summary
        status = summary.get("status")
        notes = text_items(summary.get("warnings")) + text_items(summary.get("info"))
        return [
            payload.page,
            "n/a" if status is None else str(status),
            console_messages(summary) or ["No console errors"],
            resource_failures(summary) or ["No failed requests"],
            notes or "No additional notes",
        ]

    def page_status(self, payload: PageSummaryPayload) -> TopicStatus:
        summary = payload.summary
        if _count(summary, "consoleErrors") > 0 or _count(summary, "resourceErrors") > 0:
            return "fail"
        if as_list(summary.get("warnings")):
            return "warn"
        return "pass"

    def page_card(self, payload: PageSummaryPayload) -> PageCard:
        summary = payload.summary
        console_errors = _count(summary, "consoleErrors")
        resource_errors = _count(summary, "resourceErrors")
        sections = [
            CardSection(label="Console errors", items=console_messages(summary), tone="error"),
            CardSection(label="Failed requests", items=resource_failures(summary), tone="error"),
            CardSection(label="Warnings", items=text_items(summary.get("warnings"))),
            CardSection(label="Info", items=text_items(summary.get("info"))),
        ]
        return PageCard(
            title=f"{payload.page} ({payload.viewport})",
            status=self.page_status(payload),
            status_label=f"{console_errors} console / {resource_errors} resource error(s)",
            details=[f"HTTP status: {format_scalar(summary.get('status'))}"],
            sections=[section for section in sections if section.items],
        )
