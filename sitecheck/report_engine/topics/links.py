"""Internal link integrity topic."""

from typing import Any, ClassVar

from sitecheck.report_engine.models.aggregate import ProjectBucket, TopicStatus
from sitecheck.report_engine.models.summary import PageSummaryPayload
from sitecheck.report_engine.rendering.formatting import format_scalar
from sitecheck.report_engine.topics.base import (
    CardSection,
    Cell,
    PageCard,
    Table,
    TableRow,
    TopicRenderer,
    as_list,
    final_page_entries,
)


def _broken_count(summary: dict[str, Any]) -> int:
    value = summary.get("brokenCount")
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return len(as_list(summary.get("brokenSample")))


def _describe_issue(issue: Any) -> str:
    if not isinstance(issue, dict):
        return str(issue)
    outcome = issue.get("status") if issue.get("status") is not None else issue.get("error") or "error"
    return f"{issue.get('url') or ''} ({outcome}, {issue.get('methodTried') or 'HEAD'})"


class InternalLinksRenderer(TopicRenderer):
    """Crawled internal links and their HTTP outcome."""

    topic = "internal-links"
    domain = "functional"
    default_title = "Internal link audit summary"
    section_title = "Internal link coverage"
    overview_labels: ClassVar[dict[str, str]] = {
        "brokenCount": "Broken",
        "uniqueChecked": "Checked",
    }
    page_heading = "Link coverage"
    page_empty_text = "No pages were evaluated for internal links."

    def page_columns(self) -> list[str]:
        return ["Page", "Links found", "Checked", "Broken"]

    def page_row(self, payload: PageSummaryPayload) -> list[Cell]:
        summary = payload.summary
        return [
            payload.page,
            format_scalar(summary.get("totalLinks")),
            format_scalar(summary.get("uniqueChecked")),
            format_scalar(_broken_count(summary)),
        ]

    def page_status(self, payload: PageSummaryPayload) -> TopicStatus:
        return "fail" if _broken_count(payload.summary) > 0 else "pass"

    def extra_tables(self, bucket: ProjectBucket) -> list[Table]:
        """Broken links across the bucket's final page entries."""
        rows = []
        for payload in final_page_entries(bucket):
            for issue in as_list(payload.summary.get("brokenSample")):
                if not isinstance(issue, dict):
                    continue
                outcome = issue.get("status")
                rows.append(
                    TableRow(
                        cells=[
                            payload.page,
                            str(issue.get("url") or ""),
                            str(outcome) if outcome is not None else str(issue.get("error") or "error"),
                            str(issue.get("methodTried") or "HEAD"),
                        ],
                        tone="error",
                    )
                )
        return [
            Table(
                heading=f"Broken links – {bucket.label}",
                columns=["Source page", "URL", "Status / Error", "Method"],
                rows=rows,
                empty_text="None detected.",
            )
        ]

    def page_card(self, payload: PageSummaryPayload) -> PageCard:
        summary = payload.summary
        broken = _broken_count(summary)
        issues = [_describe_issue(issue) for issue in as_list(summary.get("brokenSample"))]
        return PageCard(
            title=f"{payload.page} ({payload.viewport})",
            status=self.page_status(payload),
            status_label=f"{broken} broken" if broken else "Pass",
            details=[
                f"Links found: {format_scalar(summary.get('totalLinks'))}",
                f"Checked: {format_scalar(summary.get('uniqueChecked'))}",
            ],
            sections=[CardSection(label="Broken links", items=issues, tone="error")] if issues else [],
        )
