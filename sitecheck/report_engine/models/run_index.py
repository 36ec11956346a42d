"""Models for the persisted run index (manifest and latest-run pointer)."""

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from sitecheck.report_engine.models.run_record import SiteInfo, StatusCounts


class RunIndexEntry(BaseModel):
    """Pointer to one written run, as stored in ``latest-run.json`` and the manifest."""

    run_id: str = Field(..., description="Run id, equal to the run folder name")
    run_folder: str = Field(..., description="Run folder relative to the output folder")
    report_relative_path: str = Field(
        ..., description="HTML report path relative to the output folder"
    )
    markdown_relative_path: str | None = Field(
        default=None, description="Markdown report path relative to the output folder"
    )
    started_at: datetime
    completed_at: datetime
    duration_ms: float
    status_counts: StatusCounts
    total_tests: int
    site: SiteInfo | None = None
    profile: str | None = None
    created_at: datetime | None = Field(
        default=None, description="When the entry was added to the manifest"
    )


class RunManifest(BaseModel):
    """All written runs, newest first."""

    runs: list[RunIndexEntry] = Field(default_factory=list)


class WrittenRun(BaseModel):
    """Files produced by one writer call."""

    run_id: str
    run_dir: Path
    report_path: Path
    markdown_path: Path
    data_path: Path
    entry: RunIndexEntry
