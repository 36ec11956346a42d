"""Report pipeline: aggregate, classify, render and persist a finished run."""

import logging

from sitecheck.report_engine.grouping import build_topic_groups
from sitecheck.report_engine.models.aggregate import ClassifiedTopic, ReportModel
from sitecheck.report_engine.models.report_config import ReportConfig
from sitecheck.report_engine.models.run_index import WrittenRun
from sitecheck.report_engine.models.run_record import RunRecord
from sitecheck.report_engine.rendering.formatting import slugify
from sitecheck.report_engine.rendering.html import render_report_html
from sitecheck.report_engine.rendering.markdown import render_report_markdown
from sitecheck.report_engine.severity import classify_buckets
from sitecheck.report_engine.topics.registry import resolve_renderer
from sitecheck.report_engine.writer import RunWriter

logger = logging.getLogger(__name__)


def build_report_model(run: RunRecord) -> ReportModel:
    """Group, merge and classify the summaries of a run.

    Groups without any run entry are left out; they have no overview to
    classify.

    Args:
        run: Finished run record

    Returns:
        Report model with classified topics in first-seen order

    """
    topics: list[ClassifiedTopic] = []
    panel_ids: set[str] = set()
    for group in build_topic_groups(run.summaries):
        if not group.has_run_entry:
            logger.info(f"Skipping topic {group.base_name}: no run summary recorded")
            continue

        renderer = resolve_renderer(group)
        results, metrics, status, reason = classify_buckets(group.buckets, renderer.topic)

        panel_id = f"topic-{slugify(group.base_name, default='topic')}"
        suffix = 2
        while panel_id in panel_ids:
            panel_id = f"topic-{slugify(group.base_name, default='topic')}-{suffix}"
            suffix += 1
        panel_ids.add(panel_id)

        topics.append(
            ClassifiedTopic(
                group=group,
                topic=renderer.topic,
                domain=renderer.domain,
                panel_id=panel_id,
                buckets=results,
                metrics=metrics,
                status=status,
                reason=reason,
            )
        )
        logger.info(f"Topic {group.base_name} classified as {status}: {reason}")

    return ReportModel(run=run, topics=topics)


def render_documents(report: ReportModel) -> tuple[str, str]:
    """Render the HTML and Markdown documents of a report."""
    return render_report_html(report), render_report_markdown(report)


class ReportPipeline:
    """Turns a finished run record into written report files."""

    def __init__(self, config: ReportConfig | None = None, writer: RunWriter | None = None) -> None:
        """Initialize pipeline with configuration and an optional writer."""
        self.config = config or ReportConfig()
        self.writer = writer or RunWriter(self.config)

    async def run(self, record: RunRecord) -> WrittenRun:
        """Aggregate, render and write a run.

        Args:
            record: Run record returned by ``ReportSession.on_run_end``

        Returns:
            Location of the written run

        Raises:
            ReportWriteError: If the run could not be persisted

        """
        logger.info(f"Building report for {record.run_id}...")
        report = build_report_model(record)
        logger.info(f"Classified {len(report.topics)} topics")

        written = await self.writer.write(report, render_documents)
        logger.info(f"Report written to {written.report_path}")
        return written
