"""Interactive single-document HTML report."""

import logging
from typing import Any

from markupsafe import Markup

from sitecheck.report_engine.models.aggregate import ClassifiedTopic, ReportModel, TopicDomain
from sitecheck.report_engine.models.run_record import RunRecord
from sitecheck.report_engine.rendering import fragments
from sitecheck.report_engine.rendering.formatting import (
    EMPTY_VALUE,
    format_datetime,
    format_duration,
)
from sitecheck.report_engine.rendering.templates import BASE_STYLES, BEHAVIOUR_SCRIPT
from sitecheck.report_engine.topics.base import STATUS_TONES, Metric, Table, TableRow
from sitecheck.report_engine.topics.registry import get_renderer

logger = logging.getLogger(__name__)

DOMAIN_LABELS: dict[TopicDomain, str] = {
    "accessibility": "Accessibility",
    "functional": "Functional",
    "responsive": "Responsive",
    "visual": "Visual",
}

STATUS_FILTERS = (
    ("failed", "Failed", "failed"),
    ("timedOut", "Timed out", "timed_out"),
    ("interrupted", "Interrupted", "interrupted"),
    ("passed", "Passed", "passed"),
    ("skipped", "Skipped", "skipped"),
    ("unknown", "Unknown", "unknown"),
)


def summary_metrics(report: ReportModel) -> list[Metric]:
    """Cross-topic counters shown on the summary panel."""
    run = report.run
    counts = run.status_counts
    totals = report.status_totals()
    return [
        Metric(label="Pages scanned", value=len(report.pages_scanned)),
        Metric(label="Browsers covered", value=len(run.projects)),
        Metric(label="Total checks", value=run.total_tests),
        Metric(label="Passed", value=counts.passed),
        Metric(label="Failed", value=counts.failed + counts.timed_out + counts.interrupted),
        Metric(label="Flaky", value=counts.flaky),
        Metric(label="Skipped", value=counts.skipped),
        Metric(label="Topics failing", value=totals["fail"]),
        Metric(label="Topics with warnings", value=totals["warn"]),
        Metric(label="Topics passing", value=totals["pass"]),
    ]


def topic_table(report: ReportModel) -> Table:
    """One row per classified topic with its counters."""
    rows = []
    for topic in report.topics:
        renderer = get_renderer(topic.topic)
        metrics = topic.metrics
        rows.append(
            TableRow(
                cells=[
                    renderer.title(topic.group),
                    DOMAIN_LABELS[topic.domain],
                    topic.status,
                    str(metrics.blocking),
                    str(metrics.warnings),
                    str(metrics.advisories),
                    str(metrics.affected_pages),
                ],
                tone=STATUS_TONES[topic.status],
            )
        )
    return Table(
        heading="Topics",
        columns=[
            "Topic",
            "Domain",
            "Status",
            "Blocking",
            "Warnings",
            "Advisories",
            "Affected pages",
        ],
        rows=rows,
        empty_text="No topic summaries were attached to this run.",
    )


def environment_table(run: RunRecord) -> Table:
    """Run metadata and host environment."""
    environment = run.environment
    fields = [
        ("Run id", run.run_id),
        ("Started", format_datetime(run.started_at)),
        ("Completed", format_datetime(run.completed_at)),
        ("Duration", format_duration(run.duration_ms) or EMPTY_VALUE),
        ("Site", run.site.name if run.site else EMPTY_VALUE),
        ("Base URL", (run.site.base_url if run.site else None) or EMPTY_VALUE),
        ("Profile", run.profile or EMPTY_VALUE),
        ("Planned tests", str(run.total_tests_planned) if run.total_tests_planned is not None else EMPTY_VALUE),
        ("Projects", ", ".join(run.projects) or EMPTY_VALUE),
        ("Platform", f"{environment.platform} {environment.release} ({environment.arch})"),
        ("Python", environment.python),
    ]
    return Table(
        heading="Run details",
        columns=["Field", "Value"],
        rows=[TableRow(cells=[label, value]) for label, value in fields],
    )


def topic_context(topic: ClassifiedTopic) -> dict[str, Any]:
    """Template context of one topic panel."""
    renderer = get_renderer(topic.topic)
    sections = []
    for result in topic.buckets:
        bucket = result.bucket
        payload = bucket.run_payload
        page_groups = [
            {
                "label": group.label,
                "status": group.status,
                "cards": [renderer.render_page_card(card) for card in group.cards],
            }
            for group in renderer.page_groups(bucket, topic.group)
        ]
        sections.append(
            {
                "project": bucket.project_name,
                "heading": renderer.section_heading(bucket),
                "overview": renderer.render_overview(bucket),
                "fragment": renderer.trusted_fragment(payload) if payload else None,
                "rule_tables": [renderer.render_rule_table(table) for table in renderer.rule_sections(bucket)],
                "page_table": renderer.page_table(bucket),
                "extra_tables": renderer.extra_tables(bucket),
                "accordion_heading": renderer.accordion_heading,
                "page_groups": page_groups,
            }
        )
    return {
        "panel_id": topic.panel_id,
        "title": renderer.title(topic.group),
        "status": topic.status,
        "reason": topic.reason,
        "domain": topic.domain,
        "sections": sections,
    }


def render_report_html(report: ReportModel) -> str:
    """Render the interactive report document.

    Panel switching works through radio inputs and ``:checked`` selectors;
    the script only reveals the expand/collapse and attempt filter controls.

    Args:
        report: Classified report model

    Returns:
        Complete HTML document

    """
    run = report.run
    topics = [topic_context(topic) for topic in report.topics]

    domains = []
    for domain, label in DOMAIN_LABELS.items():
        members = [topic for topic in topics if topic["domain"] == domain]
        if members:
            domains.append({"label": label, "topics": members})

    counts = run.status_counts.model_dump()
    status_filters = [
        {"value": value, "label": label, "count": counts[field]}
        for value, label, field in STATUS_FILTERS
        if counts[field]
    ]

    template = fragments.environment.get_template("report.html.j2")
    html = template.render(
        run=run,
        duration=format_duration(run.duration_ms) or EMPTY_VALUE,
        styles=Markup(BASE_STYLES),
        script=Markup(BEHAVIOUR_SCRIPT),
        panel_ids=["summary", *(topic["panel_id"] for topic in topics), "tests"],
        domains=domains,
        topics=topics,
        summary_cards=summary_metrics(report),
        topic_table=topic_table(report),
        environment_table=environment_table(run),
        status_filters=status_filters,
    )
    logger.info(f"Rendered HTML report for {run.run_id} with {len(topics)} topic panels")
    return html
