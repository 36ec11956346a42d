"""Models for lifecycle events delivered by the test-execution framework."""

from datetime import UTC, datetime
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

AttemptStatus = Literal["passed", "failed", "skipped", "timedOut", "interrupted"]


class TestLocation(BaseModel):
    """Source location of a test case."""

    __test__ = False

    file: str = Field(..., description="Test file path")
    line: int | None = Field(default=None, description="Line number")
    column: int | None = Field(default=None, description="Column number")


class TestIdentity(BaseModel):
    """Stable identity of a test case across retries."""

    __test__ = False

    id: str = Field(..., description="Framework-assigned stable test id")
    title: str = Field(..., description="Test title")
    title_path: list[str] = Field(
        default_factory=list, description="Hierarchical title path"
    )
    location: TestLocation | None = Field(default=None, description="Source location")
    project_name: str | None = Field(
        default=None, description="Execution context (browser/project)"
    )


class RawAttachment(BaseModel):
    """Artifact as produced by the framework, before processing."""

    name: str = Field(default="attachment", description="Attachment name")
    content_type: str = Field(
        default="application/octet-stream", description="Declared media type"
    )
    body: bytes | str | None = Field(default=None, description="Inline payload")
    path: Path | None = Field(default=None, description="Payload file on disk")


class ErrorInfo(BaseModel):
    """Structured error captured during an attempt."""

    message: str = Field(default="Error", description="Error message")
    stack: str = Field(default="", description="Stack trace")


class AttemptResult(BaseModel):
    """Outcome of a single attempt of a test."""

    status: AttemptStatus = Field(..., description="Attempt outcome")
    duration_ms: float = Field(default=0.0, description="Attempt duration (ms)")
    start_time: datetime | None = Field(default=None, description="Attempt start")
    retry: int = Field(default=0, description="Retry index, 0 for first attempt")
    worker_index: int | None = Field(default=None, description="Worker index")
    project_name: str | None = Field(
        default=None, description="Worker/context label reported with the result"
    )
    attachments: list[RawAttachment] = Field(default_factory=list)
    errors: list[ErrorInfo] = Field(default_factory=list)
    stdout: list[str] = Field(default_factory=list)
    stderr: list[str] = Field(default_factory=list)

    @field_validator("start_time")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        """Naive start times are taken to be UTC."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
