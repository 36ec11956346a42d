"""Persist rendered reports, run data and the run index."""

import asyncio
import json
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from sitecheck.report_engine.models.aggregate import ReportModel
from sitecheck.report_engine.models.report_config import ReportConfig
from sitecheck.report_engine.models.run_index import RunIndexEntry, RunManifest, WrittenRun
from sitecheck.report_engine.models.run_record import RunRecord
from sitecheck.report_engine.run_index import (
    LATEST_RUN_FILE_NAME,
    MANIFEST_FILE_NAME,
    RUN_DATA_PATH,
    load_manifest,
)

logger = logging.getLogger(__name__)

RenderDocuments = Callable[[ReportModel], tuple[str, str]]


class ReportWriteError(RuntimeError):
    """Raised when a report or the run index cannot be written."""


def allocate_run_dir(output_dir: Path, run_id: str) -> Path:
    """Create a fresh run folder, suffixing ``-2``, ``-3``... on collision.

    Args:
        output_dir: Report output folder, created if missing
        run_id: Preferred folder name

    Returns:
        Newly created run folder

    """
    output_dir.mkdir(parents=True, exist_ok=True)
    candidate = run_id
    counter = 1
    while True:
        run_dir = output_dir / candidate
        try:
            run_dir.mkdir()
        except FileExistsError:
            counter += 1
            candidate = f"{run_id}-{counter}"
            continue
        return run_dir


def run_data(report: ReportModel) -> dict[str, Any]:
    """``data/run.json`` content: the run record plus classified topic summaries."""
    data = report.run.model_dump(mode="json", by_alias=True)
    data["topics"] = [
        {
            "base_name": topic.group.base_name,
            "title": topic.group.title,
            "topic": topic.topic,
            "domain": topic.domain,
            "panel_id": topic.panel_id,
            "status": topic.status,
            "reason": topic.reason,
            "metrics": topic.metrics.model_dump(),
            "projects": [result.bucket.label for result in topic.buckets],
        }
        for topic in report.topics
    ]
    return data


def _write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


class RunWriter:
    """Writes one run folder per call and keeps the run index current."""

    def __init__(
        self,
        config: ReportConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize writer with output configuration."""
        self.config = config or ReportConfig()
        self.clock = clock or (lambda: datetime.now(UTC))

    @property
    def output_dir(self) -> Path:
        """Root folder holding run folders, the manifest and the latest pointer."""
        return Path(self.config.output_folder)

    async def write(self, report: ReportModel, render: RenderDocuments) -> WrittenRun:
        """Write the report files and update the run index.

        The documents are rendered once the run folder is allocated, so they
        carry the run id that was actually written.

        Args:
            report: Classified report model
            render: Returns the HTML and Markdown documents for a report model

        Returns:
            Paths of the written run

        Raises:
            ReportWriteError: If any file cannot be written

        """
        try:
            return await asyncio.to_thread(self._write, report, render)
        except OSError as e:
            raise ReportWriteError(
                f"Failed to write report for {report.run.run_id}: {e}"
            ) from e

    def _write(self, report: ReportModel, render: RenderDocuments) -> WrittenRun:
        output_dir = self.output_dir
        run_dir = allocate_run_dir(output_dir, report.run.run_id)
        run_id = run_dir.name
        if run_id != report.run.run_id:
            logger.info(f"Run folder {report.run.run_id} exists, writing to {run_id}")
            report = report.model_copy(
                update={"run": report.run.model_copy(update={"run_id": run_id})}
            )

        html, markdown = render(report)
        report_path = run_dir / self.config.report_file_name
        markdown_path = run_dir / self.config.markdown_file_name
        report_path.write_text(html, encoding="utf-8")
        markdown_path.write_text(markdown, encoding="utf-8")

        data_path = run_dir / RUN_DATA_PATH
        tests_dir = data_path.parent / "tests"
        tests_dir.mkdir(parents=True, exist_ok=True)
        _write_json(data_path, run_data(report))
        for test in report.run.tests:
            _write_json(tests_dir / f"{test.anchor_id}.json", test.model_dump(mode="json"))

        entry = self._index_entry(report.run, run_dir, report_path, markdown_path)
        _write_json(
            output_dir / LATEST_RUN_FILE_NAME,
            entry.model_dump(mode="json", exclude={"created_at"}),
        )
        self._update_manifest(output_dir, entry)

        logger.info(f"Wrote run {run_id} with {len(report.run.tests)} tests to {run_dir}")
        return WrittenRun(
            run_id=run_id,
            run_dir=run_dir,
            report_path=report_path,
            markdown_path=markdown_path,
            data_path=data_path,
            entry=entry,
        )

    def _index_entry(
        self, run: RunRecord, run_dir: Path, report_path: Path, markdown_path: Path
    ) -> RunIndexEntry:
        output_dir = self.output_dir
        return RunIndexEntry(
            run_id=run.run_id,
            run_folder=run_dir.relative_to(output_dir).as_posix(),
            report_relative_path=report_path.relative_to(output_dir).as_posix(),
            markdown_relative_path=markdown_path.relative_to(output_dir).as_posix(),
            started_at=run.started_at,
            completed_at=run.completed_at,
            duration_ms=run.duration_ms,
            status_counts=run.status_counts,
            total_tests=run.total_tests,
            site=run.site,
            profile=run.profile,
            created_at=self.clock(),
        )

    def _update_manifest(self, output_dir: Path, entry: RunIndexEntry) -> None:
        manifest = load_manifest(output_dir)
        runs = [run for run in manifest.runs if run.run_id != entry.run_id]
        runs.append(entry)
        runs.sort(key=lambda run: run.started_at, reverse=True)
        _write_json(
            output_dir / MANIFEST_FILE_NAME,
            RunManifest(runs=runs).model_dump(mode="json"),
        )
        logger.info(f"Manifest now lists {len(runs)} runs")
