"""CLI entry point for browsing and re-rendering site test reports."""

import json
import logging
import sys
from enum import Enum
from pathlib import Path

import typer
from pydantic import ValidationError

from sitecheck.report_engine.config import ConfigError, load_report_config
from sitecheck.report_engine.models.report_config import ReportConfig
from sitecheck.report_engine.models.run_record import RunRecord
from sitecheck.report_engine.pipeline import build_report_model
from sitecheck.report_engine.rendering.html import render_report_html
from sitecheck.report_engine.rendering.markdown import render_report_markdown
from sitecheck.report_engine.run_index import list_runs, resolve_report_path, scan_run_folders

# Configure logging - force reconfiguration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
    force=True,
)
logger = logging.getLogger(__name__)

app = typer.Typer(help="Browse and re-render site test reports.")


class OutputFormat(str, Enum):
    """Document formats the render command can produce."""

    html = "html"
    markdown = "markdown"


def _load_config(config_path: Path | None, output_folder: Path | None) -> ReportConfig:
    """Load configuration, exiting with code 1 when it is invalid."""
    try:
        config = load_report_config(config_path)
    except ConfigError as e:
        logger.error(f"Failed to load config: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    if output_folder is not None:
        config = config.model_copy(update={"output_folder": output_folder})
    return config


@app.command("list")
def list_reports(
    output_folder: Path | None = typer.Option(None, help="Report output folder"),  # noqa: B008
    config: Path | None = typer.Option(None, help="Path to YAML report config"),  # noqa: B008
) -> None:
    """List written runs, newest first."""
    settings = _load_config(config, output_folder)
    output_dir = Path(settings.output_folder)

    try:
        runs = list_runs(output_dir)
    except OSError as e:
        typer.echo(f"Error reading manifest: {e}", err=True)
        raise typer.Exit(code=1)

    if not runs:
        folders = scan_run_folders(output_dir, settings.report_file_name)
        if not folders:
            typer.echo("No reports found. Run the test suite to generate one.")
            return
        typer.echo("Available reports (newest first):")
        for folder in folders:
            typer.echo(f"- {folder.name} :: metadata unavailable")
        return

    typer.echo("Available reports (newest first):")
    for run in runs:
        counts = run.status_counts
        summary = (
            f"total {run.total_tests} | pass {counts.passed:>3} | "
            f"fail {counts.failed:>3} | skip {counts.skipped:>3}"
        )
        started = run.started_at.isoformat(timespec="seconds")
        duration = f"{round(run.duration_ms / 1000)}s"
        typer.echo(f"- {run.run_id} :: {started} ({duration}) :: {summary}")


@app.command("open")
def open_report(
    target: str | None = typer.Argument(None, help="Run id, run folder or report file"),
    print_path: bool = typer.Option(False, "--print-path", help="Print the path instead of opening it"),
    output_folder: Path | None = typer.Option(None, help="Report output folder"),  # noqa: B008
    config: Path | None = typer.Option(None, help="Path to YAML report config"),  # noqa: B008
) -> None:
    """Open the latest report, or the one named by TARGET."""
    settings = _load_config(config, output_folder)

    try:
        report_path = resolve_report_path(
            Path(settings.output_folder), target, settings.report_file_name
        )
    except FileNotFoundError as e:
        logger.error(str(e))
        typer.echo(f"Error: {e}", err=True)
        typer.echo("Use `sitecheck-report list` to see available runs.", err=True)
        raise typer.Exit(code=1)

    if print_path:
        typer.echo(str(report_path))
        return

    logger.info(f"Opening report: {report_path}")
    typer.launch(str(report_path))


@app.command("render")
def render(
    run_json: Path = typer.Argument(..., help="Path to a saved data/run.json"),  # noqa: B008
    output_format: OutputFormat = typer.Option(  # noqa: B008
        OutputFormat.html, "--format", help="Document format to produce"
    ),
    output: Path | None = typer.Option(  # noqa: B008
        None, "--output", "-o", help="Write the document here instead of stdout"
    ),
) -> None:
    """Re-render a report document from a saved run record."""
    try:
        data = json.loads(run_json.read_text(encoding="utf-8"))
        record = RunRecord.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Failed to load run record from {run_json}: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        report = build_report_model(record)
        if output_format is OutputFormat.html:
            document = render_report_html(report)
        else:
            document = render_report_markdown(report)
    except Exception as e:
        logger.exception("Report rendering failed")
        typer.echo(f"Error rendering report: {e}", err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(document, nl=False)
        return

    try:
        output.write_text(document, encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error writing {output}: {e}", err=True)
        raise typer.Exit(code=1)
    logger.info(f"Wrote {output_format.value} report to {output}")


if __name__ == "__main__":  # pragma: no cover
    app()
