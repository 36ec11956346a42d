"""Accumulate test lifecycle events into a run record."""

import hashlib
import logging
import platform
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from sitecheck.report_engine.attachments import (
    JSON_CONTENT_TYPE,
    decode_json_body,
    load_attachment,
    process_attachment,
)
from sitecheck.report_engine.models.lifecycle import (
    AttemptResult,
    RawAttachment,
    TestIdentity,
)
from sitecheck.report_engine.models.report_config import ReportConfig
from sitecheck.report_engine.models.run_record import (
    Attachment,
    Attempt,
    EnvironmentInfo,
    RunRecord,
    SiteInfo,
    StatusCounts,
    SummaryRecord,
    TestRecord,
)
from sitecheck.report_engine.rendering.formatting import slugify
from sitecheck.report_engine.schema_validator import (
    SummaryValidationError,
    looks_like_summary_payload,
    validate_summary_payload,
)

logger = logging.getLogger(__name__)

DEFAULT_PROJECT = "default"

# Title paths start with root suite, project, and file before the describe blocks.
_TITLE_PATH_PREFIX = 3


def generate_run_id(moment: datetime) -> str:
    """Build a run id such as ``run-20240131-094512``."""
    return moment.strftime("run-%Y%m%d-%H%M%S")


def make_anchor_id(test_id: str, project_name: str, title: str) -> str:
    """Stable anchor id used for HTML anchors and per-test file names."""
    digest = hashlib.md5(test_id.encode("utf-8"), usedforsecurity=False)
    return f"{slugify(project_name)}-{slugify(title)}-{digest.hexdigest()[:6]}"


def _display_title(identity: TestIdentity) -> str:
    trimmed = [part for part in identity.title_path[_TITLE_PATH_PREFIX:] if part]
    return " › ".join(trimmed) or identity.title


def collect_environment() -> EnvironmentInfo:
    """Describe the host running the report engine."""
    return EnvironmentInfo(
        platform=sys.platform,
        release=platform.release(),
        arch=platform.machine(),
        python=platform.python_version(),
    )


@dataclass
class _TestEntry:
    identity: TestIdentity
    project_name: str
    anchor_id: str
    attempts: list[Attempt] = field(default_factory=list)

    def freeze(self) -> TestRecord:
        return TestRecord(
            test_id=self.identity.id,
            anchor_id=self.anchor_id,
            title=self.identity.title,
            display_title=_display_title(self.identity),
            title_path=list(self.identity.title_path),
            location=self.identity.location,
            project_name=self.project_name,
            attempts=list(self.attempts),
        )


class ReportSession:
    """Collector for one test run.

    The hosting framework serialises reporter callbacks, so the session keeps
    plain in-memory state keyed by test identity and needs no locking.
    """

    def __init__(
        self,
        config: ReportConfig | None = None,
        run_id: str | None = None,
        clock: Callable[[], datetime] | None = None,
        environment: EnvironmentInfo | None = None,
    ) -> None:
        """Initialize an empty session."""
        self.config = config or ReportConfig()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._run_id = run_id
        self._environment = environment
        self._tests: dict[str, _TestEntry] = {}
        self._summaries: list[SummaryRecord] = []
        self._projects: set[str] = set()
        self._started_at: datetime | None = None
        self._planned: int | None = None
        self._record: RunRecord | None = None

    @property
    def finished(self) -> bool:
        """Whether ``on_run_end`` has been called."""
        return self._record is not None

    def on_run_begin(self, planned_test_count: int | None = None) -> None:
        """Record the run start time and the planned number of tests."""
        self._ensure_open()
        self._started_at = self._clock()
        self._planned = planned_test_count
        logger.info(f"Report session started, {planned_test_count} tests planned")

    def on_test_attempt_complete(
        self, test: TestIdentity, result: AttemptResult
    ) -> TestRecord:
        """Record one completed attempt of a test.

        Returns:
            Snapshot of the test record including the new attempt

        """
        self._ensure_open()
        entry = self._tests.get(test.id)
        if entry is None:
            project_name = test.project_name or result.project_name or DEFAULT_PROJECT
            entry = _TestEntry(
                identity=test,
                project_name=project_name,
                anchor_id=make_anchor_id(test.id, project_name, test.title),
            )
            self._tests[test.id] = entry
            self._projects.add(project_name)

        attachments = self._process_attachments(entry, result.attachments)
        entry.attempts.append(
            Attempt(
                status=result.status,
                start_time=result.start_time,
                duration_ms=result.duration_ms,
                retry=result.retry,
                worker_index=result.worker_index,
                attachments=attachments,
                errors=list(result.errors),
                stdout=list(result.stdout),
                stderr=list(result.stderr),
            )
        )
        return entry.freeze()

    def on_run_end(self) -> RunRecord:
        """Freeze the session and return the run record."""
        if self._record is not None:
            return self._record

        completed_at = self._clock()
        started_at = self._started_at or self._earliest_attempt() or completed_at
        tests = [entry.freeze() for entry in self._tests.values()]
        duration_ms = max((completed_at - started_at).total_seconds() * 1000, 0.0)

        config = self.config
        site = (
            SiteInfo(name=config.site_name, base_url=config.site_base_url)
            if config.site_name
            else None
        )
        title = f"{config.site_name} – Test Run" if config.site_name else "Test Run"

        self._record = RunRecord(
            run_id=self._run_id or generate_run_id(started_at),
            title=title,
            started_at=started_at,
            completed_at=completed_at,
            duration_ms=duration_ms,
            status_counts=count_statuses(tests),
            total_tests=len(tests),
            total_tests_planned=self._planned,
            projects=sorted(self._projects),
            site=site,
            profile=config.profile,
            environment=self._environment or collect_environment(),
            tests=tests,
            summaries=list(self._summaries),
        )
        logger.info(
            f"Report session finished: {len(tests)} tests, "
            f"{len(self._summaries)} summary payloads"
        )
        return self._record

    def _ensure_open(self) -> None:
        if self._record is not None:
            raise RuntimeError("Report session already finished")

    def _earliest_attempt(self) -> datetime | None:
        starts = [
            attempt.start_time
            for entry in self._tests.values()
            for attempt in entry.attempts
            if attempt.start_time is not None
        ]
        return min(starts) if starts else None

    def _process_attachments(
        self, entry: _TestEntry, attachments: list[RawAttachment]
    ) -> list[Attachment]:
        if not self.config.include_attachments:
            return []

        processed: list[Attachment] = []
        for attachment in attachments:
            body, read_error = load_attachment(attachment)

            if body is not None and attachment.content_type == JSON_CONTENT_TYPE:
                if self._capture_summary(entry, attachment, body):
                    continue

            processed.append(
                process_attachment(
                    attachment,
                    body,
                    inline_limit_bytes=self.config.inline_limit_bytes,
                    max_text_length=self.config.max_text_length,
                    read_error=read_error,
                )
            )
        return processed

    def _capture_summary(
        self, entry: _TestEntry, attachment: RawAttachment, body: bytes
    ) -> bool:
        """Route a summary payload to the aggregation list.

        Returns:
            True when the attachment was consumed as a summary payload

        """
        decoded = decode_json_body(body)
        if not looks_like_summary_payload(decoded):
            return False

        try:
            payload = validate_summary_payload(decoded)
        except SummaryValidationError as e:
            logger.warning(
                f"Dropping summary payload {attachment.name} from "
                f"{entry.identity.id}: {e}"
            )
            return False

        self._summaries.append(
            SummaryRecord(
                payload=payload,
                test_id=entry.identity.id,
                test_anchor_id=entry.anchor_id,
                project_name=entry.project_name,
            )
        )
        return True


def count_statuses(tests: list[TestRecord]) -> StatusCounts:
    """Fold final test statuses into status counters."""
    counts = {
        "passed": 0,
        "failed": 0,
        "skipped": 0,
        "timed_out": 0,
        "interrupted": 0,
        "unknown": 0,
        "flaky": 0,
    }
    for test in tests:
        key = "timed_out" if test.status == "timedOut" else test.status
        counts[key] += 1
        if test.flaky:
            counts["flaky"] += 1
    return StatusCounts(**counts)
