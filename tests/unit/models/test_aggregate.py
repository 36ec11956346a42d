"""Tests for aggregation models."""

from sitecheck.report_engine.grouping import build_topic_groups
from sitecheck.report_engine.models.aggregate import (
    ClassifiedTopic,
    ProjectBucket,
    ReportModel,
    TopicMetrics,
)


def test_topic_metrics_add() -> None:
    """TopicMetrics sum field by field."""
    total = TopicMetrics(blocking=1, warnings=2) + TopicMetrics(blocking=3, affected_pages=4)

    assert total == TopicMetrics(blocking=4, warnings=2, advisories=0, affected_pages=4)


def test_bucket_label_prefers_run_payload_project(run_payload, summary_record) -> None:
    """The bucket label comes from the authoritative run payload."""
    record = summary_record(run_payload("wcag", project_name="Desktop Chrome"))
    bucket = ProjectBucket(project_name="chromium", run_entries=[record], authoritative=record)

    assert bucket.label == "Desktop Chrome"
    assert ProjectBucket(project_name="chromium").label == "chromium"


def test_report_model_pages_and_totals(run_payload, page_payload, summary_record, make_run) -> None:
    """pages_scanned merges page entries and details.pages; totals count statuses."""
    records = [
        summary_record(page_payload("internal-links", "/about")),
        summary_record(
            run_payload("wcag", details={"pages": [{"page": "/"}, {"page": "/about"}, {"url": 3}]})
        ),
        summary_record(run_payload("internal-links")),
    ]
    links, wcag = build_topic_groups(records)
    topics = [
        ClassifiedTopic(
            group=group,
            topic=group.base_name,
            domain="functional",
            panel_id=f"topic-{group.base_name}",
            metrics=TopicMetrics(),
            status=status,
            reason="",
        )
        for group, status in ((links, "pass"), (wcag, "fail"))
    ]

    report = ReportModel(run=make_run(summaries=records), topics=topics)

    assert report.pages_scanned == ["/", "/about"]
    assert report.status_totals() == {"fail": 1, "warn": 0, "pass": 1}
