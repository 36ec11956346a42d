"""Data models for summary payloads, run records, aggregation, and configuration."""

from sitecheck.report_engine.models.aggregate import (
    BucketResult,
    ClassifiedTopic,
    ProjectBucket,
    ReportModel,
    TopicGroup,
    TopicMetrics,
)
from sitecheck.report_engine.models.lifecycle import (
    AttemptResult,
    ErrorInfo,
    RawAttachment,
    TestIdentity,
    TestLocation,
)
from sitecheck.report_engine.models.report_config import ReportConfig
from sitecheck.report_engine.models.run_index import (
    RunIndexEntry,
    RunManifest,
    WrittenRun,
)
from sitecheck.report_engine.models.run_record import (
    Attachment,
    Attempt,
    RunRecord,
    StatusCounts,
    SummaryRecord,
    TestRecord,
)
from sitecheck.report_engine.models.summary import (
    PageSummaryPayload,
    RunSummaryPayload,
    SummaryMetadata,
)

__all__ = [
    "Attachment",
    "Attempt",
    "AttemptResult",
    "BucketResult",
    "ClassifiedTopic",
    "ErrorInfo",
    "PageSummaryPayload",
    "ProjectBucket",
    "RawAttachment",
    "ReportConfig",
    "ReportModel",
    "RunIndexEntry",
    "RunManifest",
    "RunRecord",
    "RunSummaryPayload",
    "StatusCounts",
    "SummaryMetadata",
    "SummaryRecord",
    "TestIdentity",
    "TestLocation",
    "TestRecord",
    "TopicGroup",
    "TopicMetrics",
    "WrittenRun",
]
