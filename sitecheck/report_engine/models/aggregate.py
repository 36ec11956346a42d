"""Models produced by grouping, merging, and classifying summary payloads."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from sitecheck.report_engine.models.run_record import RunRecord, SummaryRecord
from sitecheck.report_engine.models.summary import (
    PageSummaryPayload,
    RunSummaryPayload,
)

TopicStatus = Literal["fail", "warn", "pass"]
TopicDomain = Literal["accessibility", "functional", "responsive", "visual"]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ProjectBucket(_FrozenModel):
    """Entries of one topic for a single project/browser/viewport label."""

    project_name: str
    run_entries: list[SummaryRecord] = Field(default_factory=list)
    page_entries: list[SummaryRecord] = Field(default_factory=list)
    authoritative: SummaryRecord | None = None

    @property
    def run_payload(self) -> RunSummaryPayload | None:
        """Payload of the authoritative run entry."""
        if self.authoritative is None:
            return None
        return self.authoritative.run_payload

    @property
    def page_payloads(self) -> list[PageSummaryPayload]:
        """Page payloads in input order."""
        return [
            entry.page_payload
            for entry in self.page_entries
            if entry.page_payload is not None
        ]

    @property
    def label(self) -> str:
        """Display label, preferring the run payload's project name."""
        payload = self.run_payload
        if payload is not None and payload.metadata.project_name:
            return payload.metadata.project_name
        return self.project_name


class TopicGroup(_FrozenModel):
    """All summary payloads sharing a ``baseName``."""

    base_name: str
    title: str
    summary_type: str | None = None
    run_entries: list[SummaryRecord] = Field(default_factory=list)
    page_entries: list[SummaryRecord] = Field(default_factory=list)
    buckets: list[ProjectBucket] = Field(default_factory=list)
    suppress_page_entries: bool = False

    @property
    def has_run_entry(self) -> bool:
        """Whether any bucket resolved an authoritative run entry."""
        return any(bucket.authoritative is not None for bucket in self.buckets)


class TopicMetrics(_FrozenModel):
    """Severity counters derived from a run entry's overview."""

    blocking: int = 0
    warnings: int = 0
    advisories: int = 0
    affected_pages: int = 0

    def __add__(self, other: "TopicMetrics") -> "TopicMetrics":
        """Sum two sets of counters."""
        return TopicMetrics(
            blocking=self.blocking + other.blocking,
            warnings=self.warnings + other.warnings,
            advisories=self.advisories + other.advisories,
            affected_pages=self.affected_pages + other.affected_pages,
        )


class BucketResult(_FrozenModel):
    """Metrics for one project bucket."""

    bucket: ProjectBucket
    metrics: TopicMetrics


class ClassifiedTopic(_FrozenModel):
    """Topic group annotated with metrics and severity."""

    group: TopicGroup
    topic: str
    domain: TopicDomain
    panel_id: str
    buckets: list[BucketResult] = Field(default_factory=list)
    metrics: TopicMetrics
    status: TopicStatus
    reason: str


class ReportModel(_FrozenModel):
    """Everything the renderers need for one run."""

    run: RunRecord
    topics: list[ClassifiedTopic] = Field(default_factory=list)

    @property
    def pages_scanned(self) -> list[str]:
        """Distinct page identifiers seen across all topics."""
        pages: dict[str, None] = {}
        for topic in self.topics:
            for bucket in topic.group.buckets:
                for payload in bucket.page_payloads:
                    pages.setdefault(payload.page, None)
                run_payload = bucket.run_payload
                for page in (run_payload.detail_pages or []) if run_payload else []:
                    if isinstance(page.get("page"), str):
                        pages.setdefault(page["page"], None)
        return sorted(pages)

    def status_totals(self) -> dict[TopicStatus, int]:
        """Number of topics per classified status."""
        totals: dict[TopicStatus, int] = {"fail": 0, "warn": 0, "pass": 0}
        for topic in self.topics:
            totals[topic.status] += 1
        return totals
