"""Tests for summary payload validation."""

from collections.abc import Callable
from typing import Any

import pytest

from sitecheck.report_engine.models.summary import PageSummaryPayload, RunSummaryPayload
from sitecheck.report_engine.schema_validator import (
    SummaryValidationError,
    looks_like_summary_payload,
    validate_summary_payload,
)

PayloadFactory = Callable[..., dict[str, Any]]


def test_validate_run_summary(run_payload: PayloadFactory) -> None:
    """validate_summary_payload returns a typed run summary."""
    payload = run_payload(
        "wcag",
        {"totalGatingFindings": 2},
        summary_type="wcag",
        project_name="chromium",
        ruleSnapshots=[{"rule": "color-contrast", "impact": "serious", "pages": ["/"]}],
    )

    result = validate_summary_payload(payload)

    assert isinstance(result, RunSummaryPayload)
    assert result.base_name == "wcag"
    assert result.metadata.summary_type == "wcag"
    assert result.metadata.project_name == "chromium"
    assert result.overview == {"totalGatingFindings": 2}
    assert result.rule_snapshots[0].rule == "color-contrast"


def test_validate_page_summary(page_payload: PayloadFactory) -> None:
    """validate_summary_payload returns a typed page summary."""
    result = validate_summary_payload(
        page_payload("internal-links", "/about", {"totalLinks": 4}, viewport="mobile")
    )

    assert isinstance(result, PageSummaryPayload)
    assert result.page == "/about"
    assert result.viewport == "mobile"
    assert result.summary == {"totalLinks": 4}


def test_validate_keeps_unknown_fields(run_payload: PayloadFactory) -> None:
    """Unknown top-level fields survive validation."""
    result = validate_summary_payload(run_payload("custom", producer="nightly-job"))

    assert result.model_extra == {"producer": "nightly-job"}


def test_validate_rejects_non_object() -> None:
    """validate_summary_payload rejects values that are not objects."""
    with pytest.raises(SummaryValidationError, match="Payload must be an object"):
        validate_summary_payload(["not", "a", "payload"])


def test_validate_rejects_unknown_schema(run_payload: PayloadFactory) -> None:
    """An unexpected schema id is rejected."""
    payload = run_payload("wcag")
    payload["schema"] = "other.report"

    with pytest.raises(SummaryValidationError, match='Expected schema "codex.report.summary"'):
        validate_summary_payload(payload)


@pytest.mark.parametrize("version", [2, "1", True, None])
def test_validate_rejects_wrong_version(run_payload: PayloadFactory, version: Any) -> None:
    """Only the integer version 1 is accepted."""
    payload = run_payload("wcag")
    payload["version"] = version

    with pytest.raises(SummaryValidationError, match="Expected version 1"):
        validate_summary_payload(payload)


def test_validate_requires_kind(run_payload: PayloadFactory) -> None:
    """A payload without kind is rejected."""
    payload = run_payload("wcag")
    del payload["kind"]

    with pytest.raises(SummaryValidationError, match="`kind` is required"):
        validate_summary_payload(payload)


def test_validate_rejects_unsupported_kind(run_payload: PayloadFactory) -> None:
    """A payload with an unknown kind is rejected."""
    payload = run_payload("wcag")
    payload["kind"] = "suite-summary"

    with pytest.raises(SummaryValidationError, match="Unsupported payload kind: suite-summary"):
        validate_summary_payload(payload)


@pytest.mark.parametrize("base_name", ["", "   ", 42])
def test_validate_requires_base_name(run_payload: PayloadFactory, base_name: Any) -> None:
    """baseName must be a non-empty string."""
    payload = run_payload("wcag")
    payload["baseName"] = base_name

    with pytest.raises(SummaryValidationError, match="`baseName` must be a non-empty string"):
        validate_summary_payload(payload)


def test_validate_page_summary_requires_viewport(page_payload: PayloadFactory) -> None:
    """Page summaries need a viewport."""
    payload = page_payload("wcag", "/")
    payload["viewport"] = ""

    with pytest.raises(SummaryValidationError, match="`viewport` is required"):
        validate_summary_payload(payload)


def test_validate_collects_all_envelope_errors(run_payload: PayloadFactory) -> None:
    """Every envelope problem is reported at once."""
    payload = run_payload("")
    payload["schema"] = "nope"
    payload["version"] = 3

    with pytest.raises(SummaryValidationError) as exc_info:
        validate_summary_payload(payload)

    assert len(exc_info.value.errors) == 3


def test_validate_reports_field_errors(run_payload: PayloadFactory) -> None:
    """Model validation failures name the offending field."""
    payload = run_payload("wcag", ruleSnapshots=[{"impact": "serious"}])

    with pytest.raises(SummaryValidationError, match="ruleSnapshots.0.rule"):
        validate_summary_payload(payload)


def test_validate_visual_page_summary_needs_finding_lists(page_payload: PayloadFactory) -> None:
    """Visual page summaries must carry array findings."""
    payload = page_payload(
        "visual",
        "/",
        {"gating": "diff", "warnings": [], "advisories": [], "notes": []},
        summary_type="visual",
    )

    with pytest.raises(SummaryValidationError, match="summary.gating must be an array"):
        validate_summary_payload(payload)


def test_looks_like_summary_payload() -> None:
    """Objects with a schema key or a summary kind look like payloads."""
    assert looks_like_summary_payload({"schema": "anything"})
    assert looks_like_summary_payload({"kind": "page-summary"})
    assert not looks_like_summary_payload({"kind": "trace"})
    assert not looks_like_summary_payload(["schema"])
    assert not looks_like_summary_payload(None)
