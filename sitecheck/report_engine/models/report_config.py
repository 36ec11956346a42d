"""Configuration model for report generation."""

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_INLINE_LIMIT = 8 * 1024 * 1024
DEFAULT_MAX_TEXT_LENGTH = 200_000


class ReportConfig(BaseModel):
    """Settings controlling collection, rendering, and persistence."""

    output_folder: Path = Field(
        default=Path("reports"), description="Root folder for run directories"
    )
    report_file_name: str = Field(
        default="report.html", description="Interactive document file name"
    )
    markdown_file_name: str = Field(
        default="report.md", description="Markdown document file name"
    )
    inline_limit_bytes: int = Field(
        default=DEFAULT_INLINE_LIMIT,
        ge=0,
        description="Attachments above this size are omitted",
    )
    max_text_length: int = Field(
        default=DEFAULT_MAX_TEXT_LENGTH,
        ge=0,
        description="Text attachments are truncated beyond this many characters",
    )
    include_attachments: bool = Field(
        default=True, description="Process attachments at all"
    )
    site_name: str | None = Field(default=None, description="Site under test")
    site_base_url: str | None = Field(default=None, description="Site base URL")
    profile: str | None = Field(default=None, description="Run profile label")
