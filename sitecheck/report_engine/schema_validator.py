"""Validate schema-tagged summary payloads before aggregation."""

from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from sitecheck.report_engine.models.summary import (
    KIND_PAGE_SUMMARY,
    KIND_RUN_SUMMARY,
    SCHEMA_ID,
    SCHEMA_VERSION,
    PageSummaryPayload,
    RunSummaryPayload,
    SummaryPayload,
)

# Page summaries of these topics share the gating/warnings/advisories/notes shape.
NORMALISED_SUMMARY_TYPES = frozenset({"visual"})
NORMALISED_FINDING_KEYS = ("gating", "warnings", "advisories", "notes")

_payload_adapter: TypeAdapter[RunSummaryPayload | PageSummaryPayload] = TypeAdapter(
    SummaryPayload
)


class SummaryValidationError(ValueError):
    """Raised when a payload does not satisfy the summary schema."""

    def __init__(self, errors: list[str]) -> None:
        """Initialize with the list of problems found."""
        self.errors = errors
        super().__init__(f"Invalid report summary payload: {' '.join(errors)}")


def looks_like_summary_payload(payload: object) -> bool:
    """Return True when a decoded JSON value was meant to be a summary payload."""
    if not isinstance(payload, Mapping):
        return False
    if "schema" in payload:
        return True
    return payload.get("kind") in {KIND_RUN_SUMMARY, KIND_PAGE_SUMMARY}


def _check_envelope(payload: Mapping[str, Any]) -> list[str]:
    errors: list[str] = []
    schema = payload.get("schema")
    if schema != SCHEMA_ID:
        errors.append(f'Expected schema "{SCHEMA_ID}" (received {schema or ""}).')

    version = payload.get("version")
    if type(version) is not int or version != SCHEMA_VERSION:
        errors.append(f"Expected version {SCHEMA_VERSION} (received {version}).")

    kind = payload.get("kind")
    if not kind:
        errors.append("`kind` is required.")
    elif kind not in {KIND_RUN_SUMMARY, KIND_PAGE_SUMMARY}:
        errors.append(f"Unsupported payload kind: {kind}.")

    base_name = payload.get("baseName")
    if not isinstance(base_name, str) or not base_name.strip():
        errors.append("`baseName` must be a non-empty string.")

    if kind == KIND_PAGE_SUMMARY:
        if not payload.get("page"):
            errors.append("`page` is required for page summary payloads.")
        if not payload.get("viewport"):
            errors.append("`viewport` is required for page summary payloads.")
    return errors


def _check_normalised_findings(payload: PageSummaryPayload) -> list[str]:
    if payload.metadata.summary_type not in NORMALISED_SUMMARY_TYPES:
        return []
    return [
        f"summary.{key} must be an array."
        for key in NORMALISED_FINDING_KEYS
        if not isinstance(payload.summary.get(key), list)
    ]


def _format_validation_error(error: ValidationError) -> list[str]:
    messages = []
    for item in error.errors():
        # Drop the discriminator tag pydantic prepends to union locations.
        location = [str(part) for part in item["loc"]]
        if location and location[0] in {KIND_RUN_SUMMARY, KIND_PAGE_SUMMARY}:
            location = location[1:]
        path = ".".join(location) or "payload"
        messages.append(f"`{path}`: {item['msg']}.")
    return messages


def validate_summary_payload(
    payload: object,
) -> RunSummaryPayload | PageSummaryPayload:
    """Validate a decoded payload and return the typed model.

    Args:
        payload: Decoded JSON value from a structured-data attachment

    Returns:
        The parsed run or page summary

    Raises:
        SummaryValidationError: If the payload does not match the schema

    """
    if not isinstance(payload, Mapping):
        raise SummaryValidationError(["Payload must be an object."])

    errors = _check_envelope(payload)
    if errors:
        raise SummaryValidationError(errors)

    try:
        parsed = _payload_adapter.validate_python(dict(payload))
    except ValidationError as e:
        raise SummaryValidationError(_format_validation_error(e)) from e

    if isinstance(parsed, PageSummaryPayload):
        errors = _check_normalised_findings(parsed)
        if errors:
            raise SummaryValidationError(errors)

    return parsed
