"""Tests for topic grouping and project bucketing."""

from collections.abc import Callable
from typing import Any

from sitecheck.report_engine.grouping import (
    build_topic_groups,
    resolve_page_project,
    resolve_run_project,
    select_authoritative,
)
from sitecheck.report_engine.models.run_record import SummaryRecord
from sitecheck.report_engine.severity import classify_buckets

PayloadFactory = Callable[..., dict[str, Any]]
RecordFactory = Callable[..., SummaryRecord]


def test_groups_by_base_name_in_first_seen_order(
    run_payload: PayloadFactory, page_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """One group per baseName, ordered by first appearance."""
    records = [
        summary_record(page_payload("internal-links", "/")),
        summary_record(run_payload("wcag", title="Accessibility")),
        summary_record(run_payload("internal-links")),
        summary_record(page_payload("wcag", "/about")),
    ]

    groups = build_topic_groups(records)

    assert [group.base_name for group in groups] == ["internal-links", "wcag"]
    links, wcag = groups
    assert links.title == "internal-links"
    assert wcag.title == "Accessibility"
    assert len(links.run_entries) == 1
    assert len(links.page_entries) == 1
    assert links.has_run_entry


def test_group_summary_type_and_page_suppression(
    run_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """The first summaryType wins and any suppressPageEntries flag sticks."""
    first = run_payload("a11y-scan")
    second = run_payload("a11y-scan", summary_type="wcag")
    second["metadata"]["suppressPageEntries"] = True

    (group,) = build_topic_groups([summary_record(first), summary_record(second)])

    assert group.summary_type == "wcag"
    assert group.suppress_page_entries


def test_run_project_resolution(run_payload: PayloadFactory, summary_record: RecordFactory) -> None:
    """Run entries prefer metadata projectName, then run scope, then the test project."""
    assert resolve_run_project(summary_record(run_payload("t", project_name="webkit"))) == "webkit"
    assert resolve_run_project(summary_record(run_payload("t", scope="run"))) == "run"
    assert resolve_run_project(summary_record(run_payload("t"), project_name="firefox")) == "firefox"
    assert resolve_run_project(summary_record(run_payload("t"), project_name=None)) == "default"


def test_page_project_never_uses_run_scope(
    page_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Page entries fall back to the test project, not ``run``."""
    record = summary_record(page_payload("t", "/"), project_name="firefox")

    assert resolve_page_project(record) == "firefox"


def test_buckets_partition_by_project(
    run_payload: PayloadFactory, page_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Entries of each project land in their own bucket."""
    records = [
        summary_record(run_payload("wcag", project_name="chromium")),
        summary_record(run_payload("wcag", project_name="firefox")),
        summary_record(page_payload("wcag", "/", project_name="firefox")),
        summary_record(page_payload("wcag", "/", project_name="chromium")),
        summary_record(page_payload("wcag", "/about", project_name="chromium")),
    ]

    (group,) = build_topic_groups(records)

    assert [bucket.project_name for bucket in group.buckets] == ["chromium", "firefox"]
    chromium, firefox = group.buckets
    assert [payload.page for payload in chromium.page_payloads] == ["/", "/about"]
    assert len(firefox.page_payloads) == 1
    assert chromium.authoritative == records[0]


def test_details_pages_entry_is_authoritative(
    run_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """A run entry with details.pages wins regardless of input order."""
    legacy = summary_record(run_payload("wcag", {"totalGatingFindings": 9}))
    detailed = summary_record(
        run_payload("wcag", {"totalGatingFindings": 1}, details={"pages": [{"page": "/"}]})
    )

    assert select_authoritative([legacy, detailed]) is detailed
    assert select_authoritative([detailed, legacy]) is detailed
    assert select_authoritative([legacy]) is legacy
    assert select_authoritative([]) is None


def test_page_entries_kept_alongside_details_pages(
    run_payload: PayloadFactory, page_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Page attachments for a page listed in details.pages are not deduplicated away."""
    records = [
        summary_record(
            run_payload("structure", details={"pages": [{"page": "/", "h1Count": 1}]})
        ),
        summary_record(page_payload("structure", "/", {"h1Count": 2})),
        summary_record(page_payload("structure", "/", {"h1Count": 1})),
    ]

    (group,) = build_topic_groups(records)
    bucket = group.buckets[0]

    assert bucket.run_payload.detail_pages == [{"page": "/", "h1Count": 1}]
    assert [payload.summary["h1Count"] for payload in bucket.page_payloads] == [2, 1]


def test_classification_independent_of_input_order(
    run_payload: PayloadFactory, page_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Reordering the records does not change the classified metrics."""
    records = [
        summary_record(run_payload("wcag", {"totalGatingFindings": 9}, summary_type="wcag")),
        summary_record(page_payload("wcag", "/")),
        summary_record(
            run_payload(
                "wcag",
                {"totalGatingFindings": 0, "advisoryPages": 2},
                summary_type="wcag",
                details={"pages": []},
            )
        ),
    ]

    def classify(ordered: list[SummaryRecord]) -> tuple[Any, ...]:
        (group,) = build_topic_groups(ordered)
        _, metrics, status, reason = classify_buckets(group.buckets, "wcag")
        return metrics, status, reason

    forward = classify(records)

    assert forward == classify(list(reversed(records)))
    assert forward[1] == "warn"
    assert forward[0].warnings == 2
