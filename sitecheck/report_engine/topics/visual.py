"""Visual regression topic."""

from typing import Any

from sitecheck.report_engine.models.aggregate import TopicStatus
from sitecheck.report_engine.models.summary import PageSummaryPayload
from sitecheck.report_engine.rendering.formatting import EMPTY_VALUE, format_number
from sitecheck.report_engine.topics.base import (
    CardSection,
    Cell,
    PageCard,
    TopicRenderer,
    as_list,
    text_items,
)

ARTIFACT_KINDS = ("baseline", "actual", "diff")


def is_diff(summary: dict[str, Any]) -> bool:
    """Whether the comparison reported a difference."""
    return str(summary.get("result") or "").lower() == "diff"


def diff_details(summary: dict[str, Any]) -> list[str]:
    """Pixel and size details of a comparison."""
    lines = []
    pixel_diff = summary.get("pixelDiff")
    if isinstance(pixel_diff, int | float):
        lines.append(f"Pixel diff: {format_number(pixel_diff)}")
    ratio = summary.get("pixelRatio")
    if isinstance(ratio, int | float):
        lines.append(f"Diff ratio: {ratio * 100:.2f}%")
    expected = summary.get("expectedSize")
    actual = summary.get("actualSize")
    if isinstance(expected, dict) and isinstance(actual, dict):
        lines.append(
            f"Expected {expected.get('width')}×{expected.get('height')}px, "
            f"got {actual.get('width')}×{actual.get('height')}px"
        )
    if summary.get("error"):
        lines.append(str(summary["error"]))
    return lines


def artifact_names(summary: dict[str, Any]) -> list[str]:
    """Attachment names of the baseline, actual and diff images."""
    artifacts = summary.get("artifacts")
    if not isinstance(artifacts, dict):
        return []
    return [f"{kind.capitalize()}: {artifacts[kind]}" for kind in ARTIFACT_KINDS if artifacts.get(kind)]


class VisualRenderer(TopicRenderer):
    """Screenshot comparisons against stored baselines."""

    topic = "visual"
    domain = "visual"
    default_title = "Visual regression summary"
    section_title = "Visual regression"
    page_empty_text = "No visual comparisons were recorded."

    def page_columns(self) -> list[str]:
        return ["Page", "Viewport", "Screenshot", "Threshold", "Result", "Artifacts", "Details"]

    def page_row(self, payload: PageSummaryPayload) -> list[Cell]:
        summary = payload.summary
        threshold = summary.get("threshold")
        return [
            payload.page,
            payload.viewport,
            str(summary.get("screenshot") or EMPTY_VALUE),
            EMPTY_VALUE if threshold is None else str(threshold),
            "Diff detected" if is_diff(summary) else "Matched",
            artifact_names(summary) or EMPTY_VALUE,
            diff_details(summary) or "Matched baseline",
        ]

    def page_status(self, payload: PageSummaryPayload) -> TopicStatus:
        summary = payload.summary
        if is_diff(summary) or as_list(summary.get("gating")):
            return "fail"
        if as_list(summary.get("warnings")) or as_list(summary.get("advisories")):
            return "warn"
        return "pass"

    def page_card(self, payload: PageSummaryPayload) -> PageCard:
        summary = payload.summary
        sections = [
            CardSection(label="Gating issues", items=text_items(summary.get("gating")), tone="error"),
            CardSection(label="Warnings", items=text_items(summary.get("warnings"))),
            CardSection(label="Advisories", items=text_items(summary.get("advisories"))),
            CardSection(label="Notes", items=text_items(summary.get("notes"))),
            CardSection(label="Comparison", items=diff_details(summary)),
            CardSection(label="Artifacts", items=artifact_names(summary)),
        ]
        return PageCard(
            title=f"{payload.page} ({payload.viewport})",
            status=self.page_status(payload),
            status_label="Diff detected" if is_diff(summary) else "Matched",
            details=[f"Screenshot: {summary.get('screenshot') or EMPTY_VALUE}"],
            sections=[section for section in sections if section.items],
        )
