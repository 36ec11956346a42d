"""Read the run index to locate written reports."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from sitecheck.report_engine.models.run_index import RunIndexEntry, RunManifest

logger = logging.getLogger(__name__)

MANIFEST_FILE_NAME = "manifest.json"
LATEST_RUN_FILE_NAME = "latest-run.json"
RUN_DATA_PATH = Path("data") / "run.json"


def load_manifest(output_dir: Path) -> RunManifest:
    """Load ``manifest.json`` from the output folder.

    A missing manifest yields an empty one; a corrupt manifest is logged and
    treated as empty so the next write replaces it.

    Args:
        output_dir: Report output folder

    Returns:
        Manifest with runs in stored order

    Raises:
        OSError: If an existing manifest cannot be read

    """
    manifest_path = output_dir / MANIFEST_FILE_NAME
    if not manifest_path.exists():
        return RunManifest()

    raw = manifest_path.read_text(encoding="utf-8")
    try:
        return RunManifest.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Ignoring unreadable manifest {manifest_path}: {e}")
        return RunManifest()


def load_latest_run(output_dir: Path) -> RunIndexEntry | None:
    """Load the ``latest-run.json`` pointer, or None when absent or unreadable."""
    latest_path = output_dir / LATEST_RUN_FILE_NAME
    if not latest_path.exists():
        return None
    try:
        return RunIndexEntry.model_validate_json(latest_path.read_text(encoding="utf-8"))
    except ValidationError as e:
        logger.warning(f"Ignoring unreadable latest-run pointer {latest_path}: {e}")
        return None


def scan_run_folders(output_dir: Path, report_file_name: str = "report.html") -> list[Path]:
    """Run folders holding a report, most recently modified first."""
    if not output_dir.is_dir():
        return []
    folders = [
        path
        for path in output_dir.iterdir()
        if path.is_dir() and (path / report_file_name).exists()
    ]
    return sorted(folders, key=lambda path: path.stat().st_mtime, reverse=True)


def list_runs(output_dir: Path) -> list[RunIndexEntry]:
    """Runs recorded in the manifest, newest first."""
    manifest = load_manifest(output_dir)
    return sorted(manifest.runs, key=lambda entry: entry.started_at, reverse=True)


def resolve_report_path(
    output_dir: Path, target: str | None = None, report_file_name: str = "report.html"
) -> Path:
    """Locate the report to open.

    Without a target the latest run wins: the ``latest-run.json`` pointer,
    then the newest manifest entry, then the most recently modified run
    folder. A target may name a run id, a run folder or a file inside the
    output folder.

    Args:
        output_dir: Report output folder
        target: Optional run id, folder name or relative file path
        report_file_name: File name of the HTML report inside a run folder

    Returns:
        Path to an existing report file

    Raises:
        FileNotFoundError: If no matching report exists

    """
    if target is None:
        candidates: list[Path] = []
        latest = load_latest_run(output_dir)
        if latest is not None:
            candidates.append(output_dir / latest.report_relative_path)
        candidates.extend(output_dir / entry.report_relative_path for entry in list_runs(output_dir))
        candidates.extend(folder / report_file_name for folder in scan_run_folders(output_dir, report_file_name))
        for candidate in candidates:
            if candidate.is_file():
                return candidate
        raise FileNotFoundError(f"No reports found in {output_dir}")

    for entry in list_runs(output_dir):
        if target in (entry.run_id, entry.run_folder):
            candidate = output_dir / entry.report_relative_path
            if candidate.is_file():
                return candidate

    run_report = output_dir / target / report_file_name
    if run_report.is_file():
        return run_report

    candidate_file = output_dir / target
    if candidate_file.is_file():
        return candidate_file

    raise FileNotFoundError(f"Report not found for target: {target}")
