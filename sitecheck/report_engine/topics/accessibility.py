"""Accessibility topics: WCAG scans, forms, keyboard, motion, iframes and structure."""

from collections.abc import Mapping
from typing import Any, ClassVar

from sitecheck.report_engine.models.aggregate import ProjectBucket, TopicStatus
from sitecheck.report_engine.models.summary import PageSummaryPayload
from sitecheck.report_engine.rendering.formatting import EMPTY_VALUE, format_page_label
from sitecheck.report_engine.topics.base import (
    CardSection,
    Cell,
    Metric,
    PageCard,
    Table,
    TableRow,
    TopicRenderer,
    as_list,
    first_present,
    text_items,
)

RULE_CATEGORY_HEADINGS = {
    "gating": "Blocking WCAG violations",
    "advisory": "WCAG advisory findings",
    "best-practice": "Best-practice advisories (no WCAG tag)",
}


def _count(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int | float):
        return int(value)
    return len(as_list(value))


def _pages_with(pages: list[dict[str, Any]], key: str) -> int:
    return sum(1 for page in pages if _count(page.get(key)) > 0)


def _total(pages: list[dict[str, Any]], key: str) -> int:
    return sum(_count(page.get(key)) for page in pages)


def _gating_issues(summary: Mapping[str, Any]) -> list[str]:
    return text_items(first_present(summary, "gatingIssues", "gating"))


class WcagRenderer(TopicRenderer):
    """axe-core WCAG scan results."""

    topic = "wcag"
    domain = "accessibility"
    default_title = "WCAG findings summary"
    section_title = "WCAG findings"

    def overview_metrics(self, bucket: ProjectBucket) -> list[Metric]:
        """Curated counters when ``details.pages`` is present, raw overview otherwise."""
        payload = bucket.run_payload
        if payload is None or payload.detail_pages is None:
            return super().overview_metrics(bucket)

        overview = payload.overview
        pages = payload.detail_pages
        details = payload.details or {}
        viewports = details.get("viewports")
        viewport_count = (
            len(viewports) if isinstance(viewports, list) else len(payload.metadata.viewports)
        )

        def pick(key: str, default: int) -> Any:
            value = overview.get(key)
            return default if value is None else value

        return [
            Metric(label="Total pages", value=pick("totalPages", len(pages))),
            Metric(
                label="Pages with gating findings",
                value=pick("gatingPages", _pages_with(pages, "gatingViolations")),
            ),
            Metric(
                label="Pages with advisory findings",
                value=pick("advisoryPages", _pages_with(pages, "advisoryFindings")),
            ),
            Metric(
                label="Pages with best-practice advisories",
                value=pick("bestPracticePages", _pages_with(pages, "bestPracticeFindings")),
            ),
            Metric(
                label="Total gating findings",
                value=pick("totalGatingFindings", _total(pages, "gatingViolations")),
            ),
            Metric(
                label="Total advisory findings",
                value=pick("totalAdvisoryFindings", _total(pages, "advisoryFindings")),
            ),
            Metric(
                label="Total best-practice findings",
                value=pick("totalBestPracticeFindings", _total(pages, "bestPracticeFindings")),
            ),
            Metric(label="Viewports tested", value=pick("viewportsTested", viewport_count)),
        ]

    def notes(self, bucket: ProjectBucket) -> list[str]:
        """Gating threshold from details, overview or metadata."""
        payload = bucket.run_payload
        if payload is None:
            return []
        threshold = first_present(payload.details or {}, "failThreshold") or first_present(
            payload.overview, "failThreshold"
        )
        threshold = threshold or payload.metadata.fail_on
        return [f"Gating threshold: {threshold}"] if threshold else []

    def rule_sections(self, bucket: ProjectBucket) -> list[Table]:
        """Rule snapshots split into gating, advisory and best-practice tables."""
        payload = bucket.run_payload
        if payload is None or not payload.rule_snapshots:
            return []
        if not any(snapshot.category in RULE_CATEGORY_HEADINGS for snapshot in payload.rule_snapshots):
            return super().rule_sections(bucket)

        tables = []
        for category, heading in RULE_CATEGORY_HEADINGS.items():
            snapshots = [s for s in payload.rule_snapshots if s.category == category]
            if snapshots:
                tables.append(self.rule_table(heading, snapshots))
        return tables

    def page_columns(self) -> list[str]:
        return ["Page", "Viewport", "Status", "Gating", "Advisory", "Best practice", "HTTP"]

    def page_row(self, payload: PageSummaryPayload) -> list[Cell]:
        summary = payload.summary
        return [
            payload.page,
            payload.viewport,
            str(summary.get("status") or "passed").replace("-", " "),
            str(_count(summary.get("gatingViolations"))),
            str(_count(summary.get("advisoryFindings"))),
            str(_count(summary.get("bestPracticeFindings"))),
            str(summary.get("httpStatus") or EMPTY_VALUE),
        ]

    def page_status(self, payload: PageSummaryPayload) -> TopicStatus:
        summary = payload.summary
        if _count(summary.get("gatingViolations")) > 0 or summary.get("status") in (
            "violations",
            "http-error",
        ):
            return "fail"
        if (
            _count(summary.get("advisoryFindings")) > 0
            or _count(summary.get("bestPracticeFindings")) > 0
            or summary.get("status") in ("scan-error", "stability-timeout")
        ):
            return "warn"
        return "pass"

    def page_card(self, payload: PageSummaryPayload) -> PageCard:
        summary = payload.summary
        gating_label = summary.get("gatingLabel") or "WCAG A/AA/AAA"
        gating = _count(summary.get("gatingViolations"))
        label = format_page_label(payload.page)

        notes = text_items(summary.get("notes"))
        stability = summary.get("stability")
        if isinstance(stability, Mapping):
            state = "Stable" if stability.get("ok") else "Stability issue"
            strategy = stability.get("strategy")
            notes.append(f"{state} (strategy: {strategy})" if strategy else state)
        http_status = summary.get("httpStatus")
        if http_status and http_status != 200:
            notes.append(f"HTTP {http_status}")

        tables = [
            self._issue_table(f"{label} – {gating_label}", summary.get("violations")),
            self._issue_table(f"{label} – Non-gating WCAG findings", summary.get("advisoriesList")),
            self._issue_table(
                f"{label} – Best-practice advisories (no WCAG tag)",
                summary.get("bestPracticesList"),
            ),
        ]
        return PageCard(
            title=f"{label} ({payload.viewport})",
            status=self.page_status(payload),
            status_label=f"{gating} gating issue(s)",
            details=[
                f"Gating threshold: {gating_label}",
                f"Advisory findings: {_count(summary.get('advisoryFindings'))} • "
                f"Best-practice advisories: {_count(summary.get('bestPracticeFindings'))}",
            ],
            sections=[CardSection(label="Notes", items=notes)] if notes else [],
            tables=[table for table in tables if table is not None],
        )

    def _issue_table(self, heading: str, entries: Any) -> Table | None:
        rows = []
        for entry in as_list(entries):
            if not isinstance(entry, Mapping):
                continue
            impact = str(entry.get("impact") or entry.get("category") or "info")
            tags = [str(tag) for tag in as_list(entry.get("tags")) if str(tag).lower().startswith("wcag")]
            tags = tags or text_items(entry.get("wcagTags"))
            targets = []
            for node in as_list(entry.get("nodes"))[:5]:
                if not isinstance(node, Mapping):
                    continue
                target = as_list(node.get("target"))
                if target:
                    targets.append(str(target[0]))
                elif node.get("html"):
                    targets.append(str(node["html"]))
            rows.append(
                TableRow(
                    cells=[
                        impact,
                        str(entry.get("id") or entry.get("rule") or "rule"),
                        ", ".join(tags) or EMPTY_VALUE,
                        targets or EMPTY_VALUE,
                        str(entry.get("helpUrl") or entry.get("help") or EMPTY_VALUE),
                    ],
                    tone="error" if impact.lower() in ("critical", "serious") else None,
                )
            )
        if not rows:
            return None
        return Table(
            heading=heading,
            columns=["Impact", "Rule", "WCAG tags", "Sample targets", "Help"],
            rows=rows,
        )


class FormsRenderer(TopicRenderer):
    """Form labelling and field accessibility audit."""

    topic = "forms"
    domain = "accessibility"
    default_title = "Forms accessibility summary"
    section_title = "Forms accessibility"
    accordion_heading = "Per-form breakdown"

    def _forms(self, bucket: ProjectBucket) -> list[dict[str, Any]] | None:
        payload = bucket.run_payload
        if payload is None or not payload.details:
            return None
        forms = payload.details.get("forms")
        if not isinstance(forms, list):
            return None
        return [form for form in forms if isinstance(form, dict)]

    def overview_metrics(self, bucket: ProjectBucket) -> list[Metric]:
        """Counters computed from ``details.forms``, raw overview otherwise."""
        forms = self._forms(bucket)
        if forms is None:
            return super().overview_metrics(bucket)
        return [
            Metric(label="Forms audited", value=len(forms)),
            Metric(label="Forms with gating issues", value=_pages_with(forms, "gating")),
            Metric(label="Forms with advisories", value=_pages_with(forms, "advisories")),
            Metric(label="Fields reviewed", value=_total(forms, "fields")),
            Metric(label="Total gating findings", value=_total(forms, "gating")),
            Metric(label="Total advisory findings", value=_total(forms, "advisories")),
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
        return [f"WCAG coverage: {', '.join(references) or EMPTY_VALUE}"] + super().notes(bucket)

    def extra_tables(self, bucket: ProjectBucket) -> list[Table]:
        forms = self._forms(bucket)
        if forms is None:
            return []
        return [
            Table(
                heading="Forms",
                columns=["Form", "Page", "Gating issues", "Advisories"],
                rows=[
                    TableRow(
                        cells=[
                            str(form.get("formName") or "Form"),
                            str(form.get("page") or "Unknown"),
                            str(_count(form.get("gating"))),
                            str(_count(form.get("advisories"))),
                        ],
                        tone="error" if _count(form.get("gating")) else None,
                    )
                    for form in forms
                ],
                empty_text="No forms were audited.",
            )
        ]

    def page_table(self, bucket: ProjectBucket) -> Table | None:
        return None

    def page_status(self, payload: PageSummaryPayload) -> TopicStatus:
        summary = payload.summary
        if _gating_issues(summary):
            return "fail"
        if as_list(summary.get("advisories")):
            return "warn"
        return "pass"

    def page_label(self, payload: PageSummaryPayload) -> str:
        form_name = payload.summary.get("formName") or "Form"
        return f"{form_name} – {format_page_label(payload.page)}"

    def page_card(self, payload: PageSummaryPayload) -> PageCard:
        summary = payload.summary
        gating = _gating_issues(summary)
        sections = [
            CardSection(label="Gating issues", items=gating, tone="error"),
            CardSection(label="Advisories", items=text_items(summary.get("advisories"))),
        ]
        for field in as_list(summary.get("fields")):
            if not isinstance(field, Mapping):
                continue
            name = field.get("name") or "Field"
            accessible = field.get("accessibleName") or "no accessible name"
            required = "Yes" if field.get("required") else "No"
            issues = text_items(field.get("issues")) or ["No issues detected."]
            sections.append(
                CardSection(
                    label=f"{name} – {accessible} (required: {required})",
                    items=issues,
                )
            )
        selector = summary.get("selectorUsed") or summary.get("selector") or "n/a"
        return PageCard(
            title=self.page_label(payload),
            status=self.page_status(payload),
            status_label=f"{len(gating)} gating issue(s)" if gating else "Pass",
            details=[f"Form selector: {selector}", f"Viewport: {payload.viewport}"],
            sections=[section for section in sections if section.items],
        )


class KeyboardRenderer(TopicRenderer):
    """Keyboard focus order, focus indicators and skip links."""

    topic = "keyboard"
    domain = "accessibility"
    default_title = "Keyboard navigation summary"
    section_title = "Keyboard navigation"
    overview_labels: ClassVar[dict[str, str]] = {
        "totalPagesAudited": "Pages audited",
        "pagesWithGatingIssues": "Pages with gating issues",
        "pagesWithAdvisories": "Pages with advisories",
        "skipLinksDetected": "Skip links detected",
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
            "pagesWithGatingIssues": _pages_with(pages, "gating"),
            "pagesWithAdvisories": _pages_with(pages, "advisories"),
            "skipLinksDetected": sum(1 for page in pages if page.get("skipLink")),
        }
        return [
            Metric(
                label=label,
                value=overview[key] if overview.get(key) is not None else computed[key],
            )
            for key, label in self.overview_labels.items()
        ]

    def page_columns(self) -> list[str]:
        return ["Page", "Viewport", "Focusable", "Visited", "Skip link", "Gating issues"]

    def page_row(self, payload: PageSummaryPayload) -> list[Cell]:
        summary = payload.summary
        return [
            payload.page,
            payload.viewport,
            str(summary.get("focusableCount", EMPTY_VALUE)),
            str(summary.get("visitedCount", EMPTY_VALUE)),
            "Yes" if summary.get("skipLink") else "No",
            _gating_issues(summary) or EMPTY_VALUE,
        ]

    def page_card(self, payload: PageSummaryPayload) -> PageCard:
        summary = payload.summary
        gating = _gating_issues(summary)
        skip_link = summary.get("skipLink")
        if isinstance(skip_link, Mapping):
            skip_status = f"present ({skip_link.get('text') or skip_link.get('href') or 'skip link'})"
        elif skip_link:
            skip_status = "present"
        else:
            skip_status = "not detected"

        sequence = []
        for index, stop in enumerate(as_list(summary.get("focusSequence")), start=1):
            stop = stop if isinstance(stop, Mapping) else {}
            indicator = (
                "Focus indicator detected" if stop.get("hasIndicator") else "No focus indicator found"
            )
            sequence.append(f"Step {index}: {stop.get('summary') or f'Stop {index}'} – {indicator}")

        sections = [
            CardSection(label="Gating issues", items=gating, tone="error"),
            CardSection(label="Advisories", items=text_items(summary.get("advisories"))),
            CardSection(label="Focus sequence", items=sequence),
        ]
        return PageCard(
            title=f"{format_page_label(payload.page)} ({payload.viewport})",
            status=self.page_status(payload),
            status_label=f"{len(gating)} gating issue(s)" if gating else "Pass",
            details=[
                f"Focusable elements detected: {summary.get('focusableCount', 'n/a')}",
                f"Visited via keyboard: {summary.get('visitedCount', 'n/a')}",
                f"Skip link {skip_status}.",
            ],
            sections=[section for section in sections if section.items],
        )



def _wcag_coverage(details: Mapping[str, Any] | None) -> list[str]:
    return [
        f"{ref.get('id', '')} {ref.get('name', '')}".strip()
        for ref in as_list((details or {}).get("wcagReferences"))
        if isinstance(ref, Mapping)
    ]


class _PageAuditRenderer(TopicRenderer):
    """Per-page audits whose run entry lists pages under ``details.pages``.

    Overview values come from the run overview; counters it omits are
    computed from the page list.
    """

    domain = "accessibility"

    def computed_overview(self, pages: list[dict[str, Any]]) -> dict[str, Any]:
        """Fallback values for ``overview_labels`` keys."""
        return {
            "totalPagesAudited": len(pages),
            "pagesWithGatingIssues": _pages_with(pages, "gating"),
            "pagesWithAdvisories": _pages_with(pages, "advisories"),
        }

    def overview_metrics(self, bucket: ProjectBucket) -> list[Metric]:
        payload = bucket.run_payload
        if payload is None or payload.detail_pages is None:
            return super().overview_metrics(bucket)
        overview = payload.overview
        computed = self.computed_overview(payload.detail_pages)
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
        references = _wcag_coverage(payload.details)
        notes = super().notes(bucket)
        if references:
            notes.insert(0, f"WCAG coverage: {', '.join(references)}")
        return notes

    def page_status(self, payload: PageSummaryPayload) -> TopicStatus:
        summary = payload.summary
        if _gating_issues(summary):
            return "fail"
        if as_list(summary.get("advisories")):
            return "warn"
        return "pass"

    def base_sections(self, summary: Mapping[str, Any]) -> list[CardSection]:
        """Gating issues and advisories of a page summary."""
        return [
            CardSection(label="Gating issues", items=_gating_issues(summary), tone="error"),
            CardSection(label="Advisories", items=text_items(summary.get("advisories"))),
        ]

    def build_card(
        self,
        payload: PageSummaryPayload,
        details: list[str],
        sections: list[CardSection],
    ) -> PageCard:
        """Page card with the shared status pill."""
        gating = _gating_issues(payload.summary)
        return PageCard(
            title=format_page_label(payload.page),
            status=self.page_status(payload),
            status_label=f"{len(gating)} gating issue(s)" if gating else "Pass",
            details=details,
            sections=[section for section in sections if section.items],
        )


def describe_animation(animation: Any) -> str:
    """Animation name, target, duration and iteration count."""
    if not isinstance(animation, Mapping):
        return str(animation)
    name = animation.get("name") or animation.get("type") or "animation"
    selector = animation.get("selector") or "element"
    duration = animation.get("duration")
    iterations = animation.get("iterations")
    duration_text = f"{duration}ms" if duration is not None else "unknown duration"
    iterations_text = iterations if iterations is not None else "unknown iterations"
    return f"{name} on {selector} ({duration_text}, {iterations_text})"


class ReducedMotionRenderer(_PageAuditRenderer):
    """prefers-reduced-motion support."""

    topic = "reduced-motion"
    default_title = "Reduced motion preference summary"
    section_title = "Reduced motion"
    accordion_heading = "Per-page reduced-motion findings"
    overview_labels: ClassVar[dict[str, str]] = {
        "totalPagesAudited": "Pages audited",
        "pagesRespectingPreference": "Pages respecting preference",
        "pagesWithGatingIssues": "Pages with gating issues",
        "pagesWithAdvisories": "Pages with advisories",
        "totalSignificantAnimations": "Significant animations",
    }

    def computed_overview(self, pages: list[dict[str, Any]]) -> dict[str, Any]:
        computed = super().computed_overview(pages)
        computed["pagesRespectingPreference"] = sum(
            1 for page in pages if page.get("matchesPreference")
        )
        computed["totalSignificantAnimations"] = _total(pages, "significantAnimations")
        return computed

    def page_columns(self) -> list[str]:
        return [
            "Page",
            "Running animations",
            "Significant animations",
            "Prefers-reduced respected",
            "Gating issues",
            "Advisories",
        ]

    def page_row(self, payload: PageSummaryPayload) -> list[Cell]:
        summary = payload.summary
        return [
            payload.page,
            str(_count(summary.get("animations"))),
            str(_count(summary.get("significantAnimations"))),
            "Yes" if summary.get("matchesPreference") else "No",
            str(len(_gating_issues(summary))),
            str(_count(summary.get("advisories"))),
        ]

    def page_card(self, payload: PageSummaryPayload) -> PageCard:
        summary = payload.summary
        significant = as_list(summary.get("significantAnimations"))
        preference = "Respected" if summary.get("matchesPreference") else "Violated"
        sections = self.base_sections(summary)
        sections.append(
            CardSection(
                label="Significant animations",
                items=[describe_animation(animation) for animation in significant],
            )
        )
        return self.build_card(
            payload,
            details=[
                f"Prefers-reduced-motion: {preference}",
                f"Animations observed: {_count(summary.get('animations'))}; "
                f"significant animations: {len(significant)}",
            ],
            sections=sections,
        )


def describe_frame(frame: Any) -> str:
    """Origin, location and accessible label of an iframe."""
    if not isinstance(frame, Mapping):
        return str(frame)
    label = frame.get("title") or frame.get("ariaLabel") or frame.get("name") or "no accessible label"
    origin = "cross-origin" if frame.get("crossOrigin") else "same-origin"
    location = frame.get("resolvedUrl") or frame.get("src") or f"#{frame.get('index')}"
    return f"{origin} iframe → {location} (Accessible label: {label})"


class IframeMetadataRenderer(_PageAuditRenderer):
    """Accessible labelling of embedded frames."""

    topic = "iframe-metadata"
    default_title = "Iframe accessibility summary"
    section_title = "Iframe accessibility"
    accordion_heading = "Per-page iframe findings"
    overview_labels: ClassVar[dict[str, str]] = {
        "totalPagesAudited": "Pages audited",
        "totalIframesDetected": "Total iframes detected",
        "pagesWithMissingLabels": "Pages with gating issues",
        "pagesWithAdvisories": "Pages with advisories",
    }

    def computed_overview(self, pages: list[dict[str, Any]]) -> dict[str, Any]:
        computed = super().computed_overview(pages)
        computed["totalIframesDetected"] = _total(pages, "frames")
        computed["pagesWithMissingLabels"] = computed["pagesWithGatingIssues"]
        return computed

    def page_columns(self) -> list[str]:
        return ["Page", "Iframe count", "Gating issues", "Advisories"]

    def _iframe_count(self, summary: Mapping[str, Any]) -> int:
        count = summary.get("iframeCount")
        return count if isinstance(count, int) else _count(summary.get("frames"))

    def page_row(self, payload: PageSummaryPayload) -> list[Cell]:
        summary = payload.summary
        return [
            payload.page,
            str(self._iframe_count(summary)),
            str(len(_gating_issues(summary))),
            str(_count(summary.get("advisories"))),
        ]

    def page_card(self, payload: PageSummaryPayload) -> PageCard:
        summary = payload.summary
        sections = self.base_sections(summary)
        sections.append(
            CardSection(
                label="Iframe inventory",
                items=[describe_frame(frame) for frame in as_list(summary.get("frames"))],
            )
        )
        return self.build_card(
            payload,
            details=[f"Iframe count: {self._iframe_count(summary)}"],
            sections=sections,
        )


class StructureRenderer(_PageAuditRenderer):
    """Landmark regions and heading hierarchy."""

    topic = "structure"
    default_title = "Landmark & heading structure summary"
    section_title = "Landmarks & headings"
    accordion_heading = "Per-page structure findings"
    overview_labels: ClassVar[dict[str, str]] = {
        "totalPagesAudited": "Pages audited",
        "pagesMissingMain": "Pages missing main landmark",
        "pagesWithHeadingSkips": "Pages with heading skips",
        "pagesWithGatingIssues": "Pages with gating issues",
        "pagesWithAdvisories": "Pages with advisories",
    }

    def computed_overview(self, pages: list[dict[str, Any]]) -> dict[str, Any]:
        computed = super().computed_overview(pages)
        computed["pagesMissingMain"] = sum(1 for page in pages if not page.get("hasMainLandmark"))
        computed["pagesWithHeadingSkips"] = _pages_with(pages, "headingSkips")
        return computed

    def page_columns(self) -> list[str]:
        return ["Page", "H1 count", "Main landmark", "Heading skips", "Gating issues", "Advisories"]

    def page_row(self, payload: PageSummaryPayload) -> list[Cell]:
        summary = payload.summary
        return [
            payload.page,
            str(summary.get("h1Count") or 0),
            "Yes" if summary.get("hasMainLandmark") else "No",
            str(_count(summary.get("headingSkips"))),
            str(len(_gating_issues(summary))),
            str(_count(summary.get("advisories"))),
        ]

    def page_card(self, payload: PageSummaryPayload) -> PageCard:
        summary = payload.summary
        outline = [
            f"{entry.get('text') or 'Untitled heading'} (H{entry.get('level', '?')})"
            for entry in as_list(summary.get("headingOutline"))
            if isinstance(entry, Mapping)
        ]
        sections = self.base_sections(summary)
        sections.append(
            CardSection(label="Heading level skips", items=text_items(summary.get("headingSkips")))
        )
        sections.append(
            CardSection(label=f"Heading outline ({len(outline)} headings)", items=outline)
        )
        h1_count = summary.get("h1Count")
        return self.build_card(
            payload,
            details=[
                f"H1 count: {h1_count if h1_count is not None else 'n/a'}",
                f"Main landmark: {'present' if summary.get('hasMainLandmark') else 'missing'}",
                f"Navigation landmarks: {summary.get('navigationLandmarks') or 0}",
                f"Header landmarks: {summary.get('headerLandmarks') or 0}",
                f"Footer landmarks: {summary.get('footerLandmarks') or 0}",
            ],
            sections=sections,
        )
