"""Tests for run record models."""

import pytest
from pydantic import ValidationError

from sitecheck.report_engine.models.run_record import Attempt, StatusCounts, TestRecord


def _test_record(*statuses: str) -> TestRecord:
    return TestRecord(
        test_id="t-1",
        anchor_id="chromium-home-abc123",
        title="home",
        display_title="Home › loads",
        project_name="chromium",
        attempts=[Attempt(status=status, duration_ms=10) for status in statuses],  # type: ignore[arg-type]
    )


def test_test_record_status_is_final_attempt() -> None:
    """TestRecord status follows the last attempt."""
    assert _test_record("failed", "timedOut").status == "timedOut"
    assert _test_record().status == "unknown"


def test_test_record_flaky() -> None:
    """A pass after a non-passing attempt is flaky."""
    assert _test_record("failed", "passed").flaky
    assert not _test_record("passed").flaky
    assert not _test_record("passed", "failed").flaky


def test_test_record_duration_sums_attempts() -> None:
    """TestRecord duration is the sum of its attempts."""
    assert _test_record("failed", "failed", "passed").duration_ms == 30


def test_test_record_dump_includes_computed_fields() -> None:
    """Derived status fields are part of the serialised record."""
    data = _test_record("failed", "passed").model_dump(mode="json")

    assert data["status"] == "passed"
    assert data["flaky"] is True
    assert data["duration_ms"] == 20


def test_test_record_round_trips_from_dump() -> None:
    """A dumped record validates back, ignoring the computed fields."""
    record = _test_record("passed")

    assert TestRecord.model_validate(record.model_dump(mode="json")) == record


def test_attempt_rejects_unknown_status() -> None:
    """Attempt only accepts known statuses."""
    with pytest.raises(ValidationError):
        Attempt(status="exploded")  # type: ignore[arg-type]


def test_status_counts_are_frozen() -> None:
    """StatusCounts cannot be mutated."""
    counts = StatusCounts(passed=1)
    with pytest.raises(ValidationError):
        counts.passed = 2  # type: ignore[misc]


def test_run_record_test_by_id(make_run) -> None:
    """test_by_id finds tests by framework id."""
    record = _test_record("passed")
    run = make_run(tests=[record])

    assert run.test_by_id("t-1") == record
    assert run.test_by_id("missing") is None
