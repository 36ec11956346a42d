"""Markdown rendition of the report for CI logs and plain-text viewers."""

import logging

from sitecheck.report_engine.models.aggregate import ClassifiedTopic, ReportModel
from sitecheck.report_engine.rendering.formatting import (
    EMPTY_VALUE,
    escape_markdown,
    format_datetime,
    format_duration,
)
from sitecheck.report_engine.rendering.html import environment_table, summary_metrics, topic_table
from sitecheck.report_engine.topics.base import Cell, Metric, PageGroup, Table
from sitecheck.report_engine.topics.registry import get_renderer

logger = logging.getLogger(__name__)


def _cell(value: Cell) -> str:
    if isinstance(value, list):
        return "<br />".join(escape_markdown(item) for item in value) or EMPTY_VALUE
    return escape_markdown(value) or EMPTY_VALUE


def markdown_table(columns: list[str], rows: list[list[Cell]]) -> list[str]:
    """Pipe table lines."""
    lines = [
        "| " + " | ".join(escape_markdown(column) for column in columns) + " |",
        "| " + " | ".join("---" for _ in columns) + " |",
    ]
    lines.extend("| " + " | ".join(_cell(cell) for cell in row) + " |" for row in rows)
    return lines


def metrics_block(metrics: list[Metric]) -> list[str]:
    """``| Metric | Value |`` table."""
    if not metrics:
        return []
    return markdown_table(["Metric", "Value"], [[metric.label, metric.display] for metric in metrics])


def table_block(table: Table, level: int = 4) -> list[str]:
    """Heading and table, or the table's empty text."""
    lines = []
    if table.heading:
        lines += [f"{'#' * level} {escape_markdown(table.heading)}", ""]
    if table.rows:
        lines += markdown_table(table.columns, [row.cells for row in table.rows])
    else:
        lines.append(f"_{escape_markdown(table.empty_text)}_")
    lines.append("")
    return lines


def page_group_block(group: PageGroup) -> list[str]:
    """Bulleted cards of one page, in attempt order."""
    lines = [f"##### {escape_markdown(group.label)} ({group.status})", ""]
    for card in group.cards:
        lines.append(f"- **{escape_markdown(card.title)}**: {escape_markdown(card.status_label)}")
        lines.extend(f"  - {escape_markdown(detail)}" for detail in card.details)
        for section in card.sections:
            lines.append(f"  - {escape_markdown(section.label)} ({len(section.items)})")
            lines.extend(f"    - {escape_markdown(item)}" for item in section.items)
        for table in card.tables:
            lines.append("")
            lines.extend(table_block(table, level=6))
    lines.append("")
    return lines


def topic_block(topic: ClassifiedTopic) -> list[str]:
    """One topic section with a subsection per project bucket."""
    renderer = get_renderer(topic.topic)
    lines = [
        f"## {escape_markdown(renderer.title(topic.group))}",
        "",
        f"Status: **{topic.status.upper()}**: {escape_markdown(topic.reason)}",
        "",
    ]
    for result in topic.buckets:
        bucket = result.bucket
        payload = bucket.run_payload
        lines += [f"### {escape_markdown(renderer.section_heading(bucket))}", ""]

        metrics = metrics_block(renderer.overview_metrics(bucket))
        if metrics:
            lines += metrics + [""]
        for note in renderer.notes(bucket):
            lines += [escape_markdown(note), ""]

        trusted = renderer.trusted_markdown(payload) if payload else None
        if trusted:
            lines += [trusted.strip(), ""]

        for table in renderer.rule_sections(bucket):
            lines += table_block(table)
        page_table = renderer.page_table(bucket)
        if page_table is not None:
            lines += table_block(page_table)
        for table in renderer.extra_tables(bucket):
            lines += table_block(table)

        groups = renderer.page_groups(bucket, topic.group)
        if groups:
            lines += [f"#### {escape_markdown(renderer.accordion_heading)}", ""]
            for group in groups:
                lines += page_group_block(group)
    return lines


def failing_tests_block(report: ReportModel) -> list[str]:
    """Tests whose final attempt did not pass or skip."""
    rows: list[list[Cell]] = [
        [
            test.display_title,
            test.project_name,
            test.status,
            format_duration(test.duration_ms) or EMPTY_VALUE,
        ]
        for test in report.run.tests
        if test.status not in ("passed", "skipped")
    ]
    lines = ["## Failing tests", ""]
    if rows:
        lines += markdown_table(["Test", "Project", "Status", "Duration"], rows)
    else:
        lines.append("_No failing tests._")
    return lines + [""]


def render_report_markdown(report: ReportModel) -> str:
    """Render the Markdown report.

    Uses the same view models as the HTML document, so every overview value
    appears with identical text in both.

    Args:
        report: Classified report model

    Returns:
        Markdown document

    """
    run = report.run
    lines = [
        f"# {escape_markdown(run.title)}",
        "",
        f"Run `{run.run_id}` started {format_datetime(run.started_at)}, "
        f"duration {format_duration(run.duration_ms) or EMPTY_VALUE}.",
        "",
        "## Summary",
        "",
    ]
    lines += metrics_block(summary_metrics(report)) + [""]
    lines += table_block(topic_table(report), level=3)
    lines += table_block(environment_table(run), level=3)
    for topic in report.topics:
        lines += topic_block(topic)
    lines += failing_tests_block(report)

    logger.info(f"Rendered Markdown report for {run.run_id}")
    return "\n".join(lines).rstrip() + "\n"
