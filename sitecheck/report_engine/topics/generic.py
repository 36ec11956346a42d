"""Fallback renderer for topics without a dedicated renderer."""

from markupsafe import Markup

from sitecheck.report_engine.models.aggregate import ProjectBucket, TopicGroup
from sitecheck.report_engine.models.summary import RunSummaryPayload
from sitecheck.report_engine.rendering.formatting import humanise_key
from sitecheck.report_engine.topics.base import TopicRenderer


class GenericRenderer(TopicRenderer):
    """Prints the raw overview, rule snapshots and page summaries.

    This is the only renderer that embeds the ``htmlBody`` and
    ``markdownBody`` fragments produced by check logic.
    """

    topic = "generic"
    domain = "functional"
    default_title = "Summary"
    section_title = "Summary"

    def title(self, group: TopicGroup) -> str:
        return group.title if group.title != group.base_name else humanise_key(group.base_name)

    def notes(self, bucket: ProjectBucket) -> list[str]:
        """Scope, project, viewport and threshold chips from the run metadata."""
        payload = bucket.run_payload
        if payload is None:
            return []
        metadata = payload.metadata
        chips = []
        if metadata.scope:
            chips.append(f"Scope: {metadata.scope}")
        if metadata.project_name and metadata.scope != "run":
            chips.append(f"Project: {metadata.project_name}")
        if metadata.viewports:
            chips.append(f"Viewports: {', '.join(metadata.viewports)}")
        if metadata.fail_on:
            chips.append(f"Threshold: {metadata.fail_on}")
        return chips

    def trusted_fragment(self, payload: RunSummaryPayload) -> Markup | None:
        if not payload.html_body:
            return None
        return Markup(payload.html_body)

    def trusted_markdown(self, payload: RunSummaryPayload) -> str | None:
        return payload.markdown_body or None
