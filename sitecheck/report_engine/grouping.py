"""Group summary payloads by topic and partition them by project."""

import logging
from collections.abc import Iterable

from sitecheck.report_engine.models.aggregate import ProjectBucket, TopicGroup
from sitecheck.report_engine.models.run_record import SummaryRecord

logger = logging.getLogger(__name__)

DEFAULT_PROJECT = "default"
RUN_SCOPE_PROJECT = "run"


def resolve_run_project(record: SummaryRecord) -> str:
    """Project label for a run entry."""
    metadata = record.payload.metadata
    if metadata.project_name:
        return metadata.project_name
    if metadata.scope == "run":
        return RUN_SCOPE_PROJECT
    return record.project_name or DEFAULT_PROJECT


def resolve_page_project(record: SummaryRecord) -> str:
    """Project label for a page entry; page entries never fall back to ``run``."""
    metadata = record.payload.metadata
    return metadata.project_name or record.project_name or DEFAULT_PROJECT


def select_authoritative(run_entries: list[SummaryRecord]) -> SummaryRecord | None:
    """Pick the run entry the bucket's metrics are read from.

    A payload carrying ``details.pages`` wins over the older overview-only
    shape regardless of input order; otherwise the first entry wins.
    """
    for entry in run_entries:
        payload = entry.run_payload
        if payload is not None and payload.detail_pages is not None:
            return entry
    for entry in run_entries:
        if entry.run_payload is not None:
            return entry
    return None


def build_project_buckets(
    run_entries: list[SummaryRecord], page_entries: list[SummaryRecord]
) -> list[ProjectBucket]:
    """Partition a topic's entries by resolved project label."""
    runs: dict[str, list[SummaryRecord]] = {}
    pages: dict[str, list[SummaryRecord]] = {}
    order: dict[str, None] = {}

    for entry in run_entries:
        project = resolve_run_project(entry)
        order.setdefault(project, None)
        runs.setdefault(project, []).append(entry)

    for entry in page_entries:
        project = resolve_page_project(entry)
        order.setdefault(project, None)
        pages.setdefault(project, []).append(entry)

    buckets = []
    for project in order:
        bucket_runs = runs.get(project, [])
        buckets.append(
            ProjectBucket(
                project_name=project,
                run_entries=bucket_runs,
                page_entries=pages.get(project, []),
                authoritative=select_authoritative(bucket_runs),
            )
        )
    return buckets


def build_topic_groups(records: Iterable[SummaryRecord]) -> list[TopicGroup]:
    """Group summary records by ``baseName``.

    Args:
        records: Validated summary records in input order

    Returns:
        One group per ``baseName`` in first-seen order, each with its buckets

    """
    collected: dict[str, dict] = {}
    for record in records:
        payload = record.payload
        group = collected.setdefault(
            payload.base_name,
            {
                "title": None,
                "summary_type": None,
                "run_entries": [],
                "page_entries": [],
                "suppress": False,
            },
        )
        if not group["title"] and payload.title:
            group["title"] = payload.title
        if payload.metadata.suppress_page_entries:
            group["suppress"] = True

        if record.run_payload is not None:
            group["run_entries"].append(record)
        else:
            group["page_entries"].append(record)

    groups = []
    for base_name, group in collected.items():
        run_entries: list[SummaryRecord] = group["run_entries"]
        page_entries: list[SummaryRecord] = group["page_entries"]
        groups.append(
            TopicGroup(
                base_name=base_name,
                title=group["title"] or base_name,
                summary_type=_summary_type(run_entries + page_entries),
                run_entries=run_entries,
                page_entries=page_entries,
                buckets=build_project_buckets(run_entries, page_entries),
                suppress_page_entries=group["suppress"],
            )
        )

    logger.info(f"Built {len(groups)} topic groups")
    return groups


def _summary_type(entries: list[SummaryRecord]) -> str | None:
    for entry in entries:
        summary_type = entry.payload.metadata.summary_type
        if summary_type:
            return summary_type
    return None
