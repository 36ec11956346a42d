"""Infrastructure topics: availability, HTTP response validation and performance."""

from typing import Any

from sitecheck.report_engine.models.aggregate import TopicStatus
from sitecheck.report_engine.models.summary import PageSummaryPayload
from sitecheck.report_engine.rendering.formatting import EMPTY_VALUE, format_scalar
from sitecheck.report_engine.topics.base import (
    CardSection,
    Cell,
    PageCard,
    TopicRenderer,
    as_list,
    rounded,
    text_items,
)


def http_status_tone(status: Any) -> TopicStatus:
    """Status of a page from its HTTP response code."""
    if isinstance(status, int) and not isinstance(status, bool):
        if status >= 400:
            return "fail"
        if status >= 300:
            return "warn"
    return "pass"


def element_checks(summary: dict[str, Any]) -> list[str]:
    """``present``/``missing`` lines for structural element checks."""
    elements = summary.get("elements")
    if not isinstance(elements, dict):
        return []
    return [f"{key}: {'present' if value else 'missing'}" for key, value in elements.items()]


def failed_checks(summary: dict[str, Any]) -> list[str]:
    """Labels of failed HTTP checks with their details."""
    lines = []
    for check in as_list(summary.get("failedChecks")):
        if not isinstance(check, dict):
            lines.append(str(check))
            continue
        label = check.get("label") or "Check failed"
        lines.append(f"{label} – {check['details']}" if check.get("details") else str(label))
    return lines


def budget_breaches(summary: dict[str, Any]) -> list[str]:
    """Performance budget breaches as ``metric: value (budget)`` lines."""
    lines = []
    for breach in as_list(summary.get("budgetBreaches")):
        if not isinstance(breach, dict):
            lines.append(str(breach))
            continue
        lines.append(
            f"{breach.get('metric')}: {rounded(breach.get('value'))}ms "
            f"(budget {rounded(breach.get('budget'))}ms)"
        )
    return lines


class AvailabilityRenderer(TopicRenderer):
    """Uptime and basic page structure checks."""

    topic = "availability"
    domain = "functional"
    default_title = "Availability & uptime summary"
    section_title = "Availability & uptime"
    page_empty_text = "No availability checks captured."

    def page_columns(self) -> list[str]:
        return ["Page", "Status", "Structure", "Warnings", "Info"]

    def page_row(self, payload: PageSummaryPayload) -> list[Cell]:
        summary = payload.summary
        status = summary.get("status")
        return [
            payload.page,
            "n/a" if status is None else str(status),
            element_checks(summary) or "No element checks recorded",
            text_items(summary.get("warnings")) or "None",
            text_items(summary.get("info")) or "None",
        ]

    def page_status(self, payload: PageSummaryPayload) -> TopicStatus:
        summary = payload.summary
        status = http_status_tone(summary.get("status"))
        if status == "pass" and (
            as_list(summary.get("warnings")) or any(line.endswith("missing") for line in element_checks(summary))
        ):
            return "warn"
        return status

    def page_card(self, payload: PageSummaryPayload) -> PageCard:
        summary = payload.summary
        sections = [
            CardSection(label="Structure", items=element_checks(summary)),
            CardSection(label="Warnings", items=text_items(summary.get("warnings")), tone="warning"),
            CardSection(label="Info", items=text_items(summary.get("info"))),
        ]
        return PageCard(
            title=f"{payload.page} ({payload.viewport})",
            status=self.page_status(payload),
            status_label=f"HTTP {format_scalar(summary.get('status'))}",
            sections=[section for section in sections if section.items],
        )


class HttpRenderer(TopicRenderer):
    """HTTP status, redirects and response checks."""

    topic = "http"
    domain = "functional"
    default_title = "HTTP response validation summary"
    section_title = "HTTP response validation"
    page_empty_text = "No HTTP validation results available."

    def page_columns(self) -> list[str]:
        return ["Page", "Status", "Status text", "Redirect", "Failed checks"]

    def page_row(self, payload: PageSummaryPayload) -> list[Cell]:
        summary = payload.summary
        status = summary.get("status")
        return [
            payload.page,
            "n/a" if status is None else str(status),
            str(summary.get("statusText") or ""),
            str(summary.get("redirectLocation") or EMPTY_VALUE),
            failed_checks(summary) or "All checks passed",
        ]

    def page_status(self, payload: PageSummaryPayload) -> TopicStatus:
        summary = payload.summary
        if failed_checks(summary):
            return "fail"
        return http_status_tone(summary.get("status"))

    def page_card(self, payload: PageSummaryPayload) -> PageCard:
        summary = payload.summary
        failures = failed_checks(summary)
        details = [f"Status text: {summary.get('statusText') or EMPTY_VALUE}"]
        if summary.get("redirectLocation"):
            details.append(f"Redirects to {summary['redirectLocation']}")
        return PageCard(
            title=f"{payload.page} ({payload.viewport})",
            status=self.page_status(payload),
            status_label=f"HTTP {format_scalar(summary.get('status'))}",
            details=details,
            sections=[CardSection(label="Failed checks", items=failures, tone="error")] if failures else [],
        )


class PerformanceRenderer(TopicRenderer):
    """Navigation timing and performance budgets."""

    topic = "performance"
    domain = "functional"
    default_title = "Performance monitoring summary"
    section_title = "Performance monitoring"
    page_empty_text = "No performance metrics captured."

    def page_columns(self) -> list[str]:
        return ["Page", "Load (ms)", "DOM Loaded", "Load complete", "FCP", "Budget breaches"]

    def page_row(self, payload: PageSummaryPayload) -> list[Cell]:
        summary = payload.summary
        return [
            payload.page,
            rounded(summary.get("loadTimeMs")),
            rounded(summary.get("domContentLoadedMs")),
            rounded(summary.get("loadCompleteMs")),
            rounded(summary.get("firstContentfulPaintMs")),
            budget_breaches(summary) or "None",
        ]

    def page_status(self, payload: PageSummaryPayload) -> TopicStatus:
        return "fail" if budget_breaches(payload.summary) else "pass"

    def page_card(self, payload: PageSummaryPayload) -> PageCard:
        summary = payload.summary
        breaches = budget_breaches(summary)
        return PageCard(
            title=f"{payload.page} ({payload.viewport})",
            status=self.page_status(payload),
            status_label=f"{len(breaches)} budget breach(es)" if breaches else "Within budget",
            details=[
                f"Load: {rounded(summary.get('loadTimeMs'))} ms",
                f"First contentful paint: {rounded(summary.get('firstContentfulPaintMs'))} ms",
            ],
            sections=[CardSection(label="Budget breaches", items=breaches, tone="error")] if breaches else [],
        )
