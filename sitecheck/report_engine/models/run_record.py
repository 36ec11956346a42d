"""Models for the aggregated run record."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from sitecheck.report_engine.models.lifecycle import ErrorInfo, TestLocation
from sitecheck.report_engine.models.summary import (
    PageSummaryPayload,
    RunSummaryPayload,
    SummaryPayload,
)

TestStatus = Literal["passed", "failed", "skipped", "timedOut", "interrupted", "unknown"]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Attachment(_FrozenModel):
    """Processed attachment, embedded or replaced by an omission marker."""

    name: str
    content_type: str
    size: int = 0
    data_uri: str | None = None
    text: str | None = None
    truncated: bool = False
    omitted: bool = False
    reason: str | None = None
    error: str | None = None


class Attempt(_FrozenModel):
    """Single attempt of a test case."""

    status: TestStatus
    start_time: datetime | None = None
    duration_ms: float = 0.0
    retry: int = 0
    worker_index: int | None = None
    attachments: list[Attachment] = Field(default_factory=list)
    errors: list[ErrorInfo] = Field(default_factory=list)
    stdout: list[str] = Field(default_factory=list)
    stderr: list[str] = Field(default_factory=list)


class TestRecord(_FrozenModel):
    """One logical test case and all of its attempts."""

    __test__ = False

    test_id: str
    anchor_id: str
    title: str
    display_title: str
    title_path: list[str] = Field(default_factory=list)
    location: TestLocation | None = None
    project_name: str
    attempts: list[Attempt] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> TestStatus:
        """Status of the final attempt."""
        if not self.attempts:
            return "unknown"
        return self.attempts[-1].status

    @computed_field  # type: ignore[prop-decorator]
    @property
    def flaky(self) -> bool:
        """Passed in the end after at least one non-passing attempt."""
        if self.status != "passed":
            return False
        return any(attempt.status != "passed" for attempt in self.attempts[:-1])

    @computed_field  # type: ignore[prop-decorator]
    @property
    def duration_ms(self) -> float:
        """Total duration across attempts."""
        return sum(attempt.duration_ms for attempt in self.attempts)


class SummaryRecord(_FrozenModel):
    """Validated summary payload tagged with its origin."""

    payload: SummaryPayload
    test_id: str
    test_anchor_id: str
    project_name: str | None = None

    @property
    def run_payload(self) -> RunSummaryPayload | None:
        """Payload as a run summary, or None for page summaries."""
        if isinstance(self.payload, RunSummaryPayload):
            return self.payload
        return None

    @property
    def page_payload(self) -> PageSummaryPayload | None:
        """Payload as a page summary, or None for run summaries."""
        if isinstance(self.payload, PageSummaryPayload):
            return self.payload
        return None


class StatusCounts(_FrozenModel):
    """Final-status counters folded over all tests."""

    passed: int = 0
    failed: int = 0
    skipped: int = 0
    timed_out: int = 0
    interrupted: int = 0
    unknown: int = 0
    flaky: int = 0


class SiteInfo(_FrozenModel):
    """Site under test."""

    name: str
    base_url: str | None = None


class EnvironmentInfo(_FrozenModel):
    """Host environment the run executed on."""

    platform: str
    release: str
    arch: str
    python: str


class RunRecord(_FrozenModel):
    """Final aggregate for one test run."""

    run_id: str
    title: str
    started_at: datetime
    completed_at: datetime
    duration_ms: float
    status_counts: StatusCounts
    total_tests: int
    total_tests_planned: int | None = None
    projects: list[str] = Field(default_factory=list)
    site: SiteInfo | None = None
    profile: str | None = None
    environment: EnvironmentInfo
    tests: list[TestRecord] = Field(default_factory=list)
    summaries: list[SummaryRecord] = Field(default_factory=list)

    def test_by_id(self, test_id: str) -> TestRecord | None:
        """Look up a test record by its framework id."""
        for test in self.tests:
            if test.test_id == test_id:
                return test
        return None
