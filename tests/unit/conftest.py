"""Builders for summary payloads and run records shared across unit tests."""

from collections.abc import Callable, Iterable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from sitecheck.report_engine.models.run_record import (
    EnvironmentInfo,
    RunRecord,
    StatusCounts,
    SummaryRecord,
    TestRecord,
)
from sitecheck.report_engine.schema_validator import validate_summary_payload

STARTED_AT = datetime(2024, 1, 31, 9, 45, 12, tzinfo=UTC)

TEST_ENVIRONMENT = EnvironmentInfo(
    platform="linux", release="6.1.0", arch="x86_64", python="3.12.1"
)


def _metadata(
    summary_type: str | None, project_name: str | None, scope: str | None
) -> dict[str, Any]:
    metadata: dict[str, Any] = {}
    if summary_type:
        metadata["summaryType"] = summary_type
    if project_name:
        metadata["projectName"] = project_name
    if scope:
        metadata["scope"] = scope
    return metadata


@pytest.fixture
def run_payload() -> Callable[..., dict[str, Any]]:
    """Factory for raw run-summary payload dicts."""

    def build(
        base_name: str,
        overview: dict[str, Any] | None = None,
        summary_type: str | None = None,
        project_name: str | None = None,
        scope: str | None = None,
        **fields: Any,
    ) -> dict[str, Any]:
        payload = {
            "schema": "codex.report.summary",
            "version": 1,
            "kind": "run-summary",
            "baseName": base_name,
            "metadata": _metadata(summary_type, project_name, scope),
            "overview": overview or {},
        }
        payload.update(fields)
        return payload

    return build


@pytest.fixture
def page_payload() -> Callable[..., dict[str, Any]]:
    """Factory for raw page-summary payload dicts."""

    def build(
        base_name: str,
        page: str,
        summary: dict[str, Any] | None = None,
        viewport: str = "desktop",
        summary_type: str | None = None,
        project_name: str | None = None,
    ) -> dict[str, Any]:
        return {
            "schema": "codex.report.summary",
            "version": 1,
            "kind": "page-summary",
            "baseName": base_name,
            "metadata": _metadata(summary_type, project_name, None),
            "page": page,
            "viewport": viewport,
            "summary": summary or {},
        }

    return build


@pytest.fixture
def summary_record() -> Callable[..., SummaryRecord]:
    """Factory validating a raw payload into a summary record."""

    def build(
        payload: dict[str, Any],
        project_name: str | None = "chromium",
        test_id: str = "test-1",
    ) -> SummaryRecord:
        return SummaryRecord(
            payload=validate_summary_payload(payload),
            test_id=test_id,
            test_anchor_id=f"{project_name or 'default'}-{test_id}",
            project_name=project_name,
        )

    return build


@pytest.fixture
def make_run() -> Callable[..., RunRecord]:
    """Factory for finished run records."""

    def build(
        summaries: Iterable[SummaryRecord] = (),
        tests: Iterable[TestRecord] = (),
        run_id: str = "run-20240131-094512",
        started_at: datetime = STARTED_AT,
        title: str = "Example – Test Run",
    ) -> RunRecord:
        test_list = list(tests)
        passed = sum(1 for test in test_list if test.status == "passed")
        failed = sum(1 for test in test_list if test.status == "failed")
        return RunRecord(
            run_id=run_id,
            title=title,
            started_at=started_at,
            completed_at=started_at + timedelta(seconds=95),
            duration_ms=95_000,
            status_counts=StatusCounts(passed=passed, failed=failed),
            total_tests=len(test_list),
            projects=sorted({test.project_name for test in test_list}),
            environment=TEST_ENVIRONMENT,
            tests=test_list,
            summaries=list(summaries),
        )

    return build
