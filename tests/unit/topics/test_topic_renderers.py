"""Tests for topic renderer view models and fragments."""

from collections.abc import Callable
from typing import Any

from sitecheck.report_engine.grouping import build_topic_groups
from sitecheck.report_engine.models.aggregate import TopicGroup
from sitecheck.report_engine.models.run_record import SummaryRecord
from sitecheck.report_engine.topics.accessibility import (
    FormsRenderer,
    IframeMetadataRenderer,
    ReducedMotionRenderer,
    StructureRenderer,
    WcagRenderer,
)
from sitecheck.report_engine.topics.base import TopicRenderer
from sitecheck.report_engine.topics.generic import GenericRenderer
from sitecheck.report_engine.topics.interactive import InteractiveRenderer
from sitecheck.report_engine.topics.links import InternalLinksRenderer

PayloadFactory = Callable[..., dict[str, Any]]
RecordFactory = Callable[..., SummaryRecord]


def _group(records: list[SummaryRecord]) -> TopicGroup:
    (group,) = build_topic_groups(records)
    return group


def _metrics(renderer: TopicRenderer, group: TopicGroup) -> dict[str, str]:
    return {metric.label: metric.display for metric in renderer.overview_metrics(group.buckets[0])}


def test_internal_links_overview_labels(
    run_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Overview keys are humanised, with topic-specific labels."""
    group = _group(
        [summary_record(run_payload("internal-links", {"totalLinks": 12, "brokenCount": 0}))]
    )

    assert _metrics(InternalLinksRenderer(), group) == {"Total Links": "12", "Broken": "0"}


def test_internal_links_page_table_last_occurrence_wins(
    run_payload: PayloadFactory, page_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """A retried page appears once in the table with its final values."""
    group = _group(
        [
            summary_record(run_payload("internal-links")),
            summary_record(page_payload("internal-links", "/", {"totalLinks": 3, "brokenCount": 2})),
            summary_record(page_payload("internal-links", "/about", {"totalLinks": 1})),
            summary_record(page_payload("internal-links", "/", {"totalLinks": 3, "brokenCount": 0})),
        ]
    )
    renderer = InternalLinksRenderer()
    bucket = group.buckets[0]

    table = renderer.page_table(bucket)

    assert table.columns == ["Page", "Links found", "Checked", "Broken"]
    assert [row.cells for row in table.rows] == [["/", "3", "—", "0"], ["/about", "1", "—", "0"]]
    assert [row.tone for row in table.rows] == ["ok", "ok"]

    (pages_group, about_group) = renderer.page_groups(bucket, group)
    assert [card.status for card in pages_group.cards] == ["fail", "pass"]
    assert pages_group.status == "pass"
    assert about_group.label == "/about"


def test_internal_links_broken_link_table(
    page_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Broken link samples are listed per source page."""
    sample = [{"url": "https://example.com/gone", "status": 404, "methodTried": "GET"}]
    group = _group(
        [
            summary_record(
                page_payload("internal-links", "/", {"brokenCount": 1, "brokenSample": sample})
            )
        ]
    )

    (table,) = InternalLinksRenderer().extra_tables(group.buckets[0])

    assert table.heading == "Broken links – chromium"
    assert table.rows[0].cells == ["/", "https://example.com/gone", "404", "GET"]


def test_internal_links_broken_link_table_empty(
    run_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Without broken links the table shows its empty text."""
    group = _group([summary_record(run_payload("internal-links"))])

    (table,) = InternalLinksRenderer().extra_tables(group.buckets[0])

    assert table.rows == []
    assert table.empty_text == "None detected."


def test_suppressed_page_entries_have_no_groups(
    run_payload: PayloadFactory, page_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """suppressPageEntries hides the per-page cards."""
    payload = run_payload("internal-links")
    payload["metadata"]["suppressPageEntries"] = True
    group = _group(
        [summary_record(payload), summary_record(page_payload("internal-links", "/"))]
    )

    assert InternalLinksRenderer().page_groups(group.buckets[0], group) == []


def test_wcag_curated_metrics_from_details(
    run_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """With details.pages the WCAG overview is computed from the pages."""
    pages = [
        {"page": "/", "gatingViolations": 2, "advisoryFindings": 1},
        {"page": "/about", "gatingViolations": 0, "bestPracticeFindings": 3},
    ]
    group = _group(
        [
            summary_record(
                run_payload(
                    "wcag",
                    {"totalGatingFindings": 2},
                    summary_type="wcag",
                    details={"pages": pages, "viewports": ["desktop", "mobile"]},
                )
            )
        ]
    )

    metrics = _metrics(WcagRenderer(), group)

    assert metrics == {
        "Total pages": "2",
        "Pages with gating findings": "1",
        "Pages with advisory findings": "1",
        "Pages with best-practice advisories": "1",
        "Total gating findings": "2",
        "Total advisory findings": "1",
        "Total best-practice findings": "3",
        "Viewports tested": "2",
    }


def test_wcag_raw_overview_without_details(
    run_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Without details.pages the raw overview is shown."""
    group = _group([summary_record(run_payload("wcag", {"totalViolations": 4}, summary_type="wcag"))])

    assert _metrics(WcagRenderer(), group) == {"Total Violations": "4"}


def test_wcag_rule_sections_split_by_category(
    run_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Rule snapshots are split into gating, advisory and best-practice tables."""
    snapshots = [
        {"rule": "region", "category": "best-practice"},
        {"rule": "color-contrast", "impact": "serious", "category": "gating", "pages": ["/"]},
        {"rule": "image-alt", "impact": "critical", "category": "gating"},
    ]
    group = _group([summary_record(run_payload("wcag", summary_type="wcag", ruleSnapshots=snapshots))])

    tables = WcagRenderer().rule_sections(group.buckets[0])

    assert [table.heading for table in tables] == [
        "Blocking WCAG violations",
        "Best-practice advisories (no WCAG tag)",
    ]
    assert [row.cells[1] for row in tables[0].rows] == ["color-contrast", "image-alt"]
    assert tables[0].rows[1].tone == "error"


def test_wcag_page_status(page_payload: PayloadFactory, summary_record: RecordFactory) -> None:
    """Gating violations fail a page; advisories warn."""
    renderer = WcagRenderer()
    failing = summary_record(page_payload("wcag", "/", {"gatingViolations": 1})).page_payload
    warning = summary_record(page_payload("wcag", "/", {"advisoryFindings": 2})).page_payload
    clean = summary_record(page_payload("wcag", "/", {})).page_payload

    assert renderer.page_status(failing) == "fail"
    assert renderer.page_status(warning) == "warn"
    assert renderer.page_status(clean) == "pass"


def test_forms_metrics_and_table(run_payload: PayloadFactory, summary_record: RecordFactory) -> None:
    """Forms topics report per-form counters and no page table."""
    forms = [
        {"formName": "Contact", "page": "/contact", "gating": ["missing label"], "fields": 3},
        {"formName": "Search", "page": "/", "advisories": ["placeholder only"], "fields": 1},
    ]
    group = _group([summary_record(run_payload("forms", details={"forms": forms}))])
    renderer = FormsRenderer()
    bucket = group.buckets[0]

    metrics = _metrics(renderer, group)

    assert metrics["Forms audited"] == "2"
    assert metrics["Forms with gating issues"] == "1"
    assert metrics["Fields reviewed"] == "4"
    assert renderer.page_table(bucket) is None
    (table,) = renderer.extra_tables(bucket)
    assert table.rows[0].cells == ["Contact", "/contact", "1", "0"]
    assert table.rows[0].tone == "error"


def test_interactive_notes_and_row(
    run_payload: PayloadFactory, page_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Interactive topics list console and resource samples."""
    group = _group(
        [
            summary_record(run_payload("interactive", {"consoleErrors": 1, "resourceErrorBudget": 0})),
            summary_record(
                page_payload(
                    "interactive",
                    "/",
                    {
                        "status": 200,
                        "consoleErrors": 1,
                        "consoleSample": [{"message": "TypeError: x is undefined"}],
                        "resourceSample": [
                            {"type": "requestfailed", "failure": "net::ERR_FAILED", "url": "/a.js"}
                        ],
                    },
                )
            ),
        ]
    )
    renderer = InteractiveRenderer()
    bucket = group.buckets[0]

    assert renderer.notes(bucket) == ["Resource error budget: 0"]
    (row,) = renderer.page_table(bucket).rows
    assert row.cells == [
        "/",
        "200",
        ["TypeError: x is undefined"],
        ["requestfailed – net::ERR_FAILED – /a.js"],
        "No additional notes",
    ]
    assert row.tone == "error"


def test_generic_renderer_embeds_trusted_bodies(
    run_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Only the generic renderer embeds htmlBody and markdownBody."""
    record = summary_record(
        run_payload("seo-meta", htmlBody="<p class='custom'>ok</p>", markdownBody="**ok**")
    )
    payload = record.run_payload

    assert str(GenericRenderer().trusted_fragment(payload)) == "<p class='custom'>ok</p>"
    assert GenericRenderer().trusted_markdown(payload) == "**ok**"
    assert InternalLinksRenderer().trusted_fragment(payload) is None
    assert InternalLinksRenderer().trusted_markdown(payload) is None


def test_generic_renderer_title_and_chips(
    run_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Generic titles humanise the baseName; notes show metadata chips."""
    payload = run_payload("seo-meta", scope="project", project_name="webkit")
    payload["metadata"]["viewports"] = ["desktop", "mobile"]
    payload["metadata"]["failOn"] = "serious"
    group = _group([summary_record(payload)])
    renderer = GenericRenderer()

    assert renderer.title(group) == "Seo Meta"
    assert renderer.notes(group.buckets[0]) == [
        "Scope: project",
        "Project: webkit",
        "Viewports: desktop, mobile",
        "Threshold: serious",
    ]


def test_overview_fragment_escapes_values(
    run_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Overview values from payloads are HTML-escaped."""
    group = _group([summary_record(run_payload("seo-meta", {"title": "<script>alert(1)</script>"}))])

    html = str(GenericRenderer().render_overview(group.buckets[0]))

    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "<script>" not in html
    assert 'data-metric="Title"' in html


def test_page_card_fragment(page_payload: PayloadFactory, summary_record: RecordFactory) -> None:
    """Page cards render their sections and status label."""
    payload = summary_record(
        page_payload("seo-meta", "/", {"gating": ["Missing <title>"], "notes": ["checked"]})
    ).page_payload
    renderer = GenericRenderer()
    card = renderer.page_card(payload)

    html = str(renderer.render_page_card(card))

    assert card.title == "Homepage (desktop)"
    assert card.status == "fail"
    assert "1 gating issue(s)" in html
    assert "Gating issues (1)" in html
    assert "Missing &lt;title&gt;" in html


def test_reduced_motion_metrics_from_details(
    run_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Missing reduced-motion counters are computed from details.pages."""
    pages = [
        {"page": "/", "matchesPreference": True, "significantAnimations": [{"name": "fade"}]},
        {"page": "/about", "matchesPreference": False, "gating": ["spins forever"]},
    ]
    group = _group(
        [
            summary_record(
                run_payload(
                    "a11y-reduced-motion-summary",
                    {"totalPagesAudited": 2},
                    summary_type="reduced-motion",
                    details={"pages": pages, "wcagReferences": [{"id": "2.3.3", "name": "Animation"}]},
                )
            )
        ]
    )
    renderer = ReducedMotionRenderer()

    assert _metrics(renderer, group) == {
        "Pages audited": "2",
        "Pages respecting preference": "1",
        "Pages with gating issues": "1",
        "Pages with advisories": "0",
        "Significant animations": "1",
    }
    assert renderer.notes(group.buckets[0]) == ["WCAG coverage: 2.3.3 Animation"]


def test_reduced_motion_page_card(page_payload: PayloadFactory, summary_record: RecordFactory) -> None:
    """Reduced-motion cards describe the preference and significant animations."""
    payload = summary_record(
        page_payload(
            "a11y-reduced-motion",
            "/",
            {
                "matchesPreference": False,
                "animations": [{}, {}],
                "significantAnimations": [
                    {"name": "spin", "selector": ".hero", "duration": 1200, "iterations": "infinite"}
                ],
                "gatingIssues": ["Animation ignores prefers-reduced-motion"],
            },
            summary_type="reduced-motion",
        )
    ).page_payload
    renderer = ReducedMotionRenderer()

    card = renderer.page_card(payload)

    assert card.status == "fail"
    assert card.status_label == "1 gating issue(s)"
    assert card.details == [
        "Prefers-reduced-motion: Violated",
        "Animations observed: 2; significant animations: 1",
    ]
    assert [section.label for section in card.sections] == ["Gating issues", "Significant animations"]
    assert card.sections[1].items == ["spin on .hero (1200ms, infinite)"]
    assert renderer.page_row(payload) == ["/", "2", "1", "No", "1", "0"]


def test_iframe_metadata_metrics_and_card(
    run_payload: PayloadFactory, page_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Iframe audits count frames and describe each one."""
    frames = [
        {"src": "https://maps.example/embed", "crossOrigin": True, "title": "Office map"},
        {"index": 1},
    ]
    run = run_payload(
        "a11y-iframe",
        summary_type="iframe-metadata",
        details={"pages": [{"page": "/contact", "frames": frames, "gating": ["Iframe #1 has no label"]}]},
    )
    page = page_payload(
        "a11y-iframe",
        "/contact",
        {"iframeCount": 2, "frames": frames, "gatingIssues": ["Iframe #1 has no label"]},
        viewport="iframe-audit",
        summary_type="iframe-metadata",
    )
    group = _group([summary_record(run), summary_record(page)])
    renderer = IframeMetadataRenderer()
    bucket = group.buckets[0]

    assert _metrics(renderer, group) == {
        "Pages audited": "1",
        "Total iframes detected": "2",
        "Pages with gating issues": "1",
        "Pages with advisories": "0",
    }
    assert [row.cells for row in renderer.page_table(bucket).rows] == [["/contact", "2", "1", "0"]]
    (page_group,) = renderer.page_groups(bucket, group)
    card = page_group.cards[0]
    assert card.details == ["Iframe count: 2"]
    assert card.sections[-1].items == [
        "cross-origin iframe → https://maps.example/embed (Accessible label: Office map)",
        "same-origin iframe → #1 (Accessible label: no accessible label)",
    ]


def test_structure_metrics_and_card(
    run_payload: PayloadFactory, page_payload: PayloadFactory, summary_record: RecordFactory
) -> None:
    """Structure audits report landmarks, heading skips and the heading outline."""
    pages = [
        {"page": "/", "hasMainLandmark": True, "h1Count": 1},
        {"page": "/blog", "hasMainLandmark": False, "headingSkips": ["H2 → H4"], "gating": ["Missing <main>"]},
    ]
    summary = {
        "h1Count": 2,
        "hasMainLandmark": False,
        "navigationLandmarks": 1,
        "headingSkips": ["H2 → H4"],
        "headingOutline": [{"text": "Blog", "level": 1}, {"level": 4}],
        "gatingIssues": ["Missing <main>"],
        "advisories": ["Footer landmark missing"],
    }
    group = _group(
        [
            summary_record(run_payload("a11y-structure", summary_type="structure", details={"pages": pages})),
            summary_record(page_payload("a11y-structure", "/blog", summary, summary_type="structure")),
        ]
    )
    renderer = StructureRenderer()
    bucket = group.buckets[0]

    assert _metrics(renderer, group) == {
        "Pages audited": "2",
        "Pages missing main landmark": "1",
        "Pages with heading skips": "1",
        "Pages with gating issues": "1",
        "Pages with advisories": "0",
    }
    assert [row.cells for row in renderer.page_table(bucket).rows] == [
        ["/blog", "2", "No", "1", "1", "1"]
    ]
    card = renderer.page_card(bucket.page_payloads[0])
    assert card.status == "fail"
    assert card.details[:2] == ["H1 count: 2", "Main landmark: missing"]
    assert [section.label for section in card.sections] == [
        "Gating issues",
        "Advisories",
        "Heading level skips",
        "Heading outline (2 headings)",
    ]
    assert card.sections[-1].items == ["Blog (H1)", "Untitled heading (H4)"]
