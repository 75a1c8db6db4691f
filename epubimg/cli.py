"""Command-line interface for epubimg.

Responsibilities:
- Expose user-facing commands for single, batch, and dry-run conversions.
- Convert CLI arguments and environment defaults into config objects.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from . import __version__
from .cli_rendering import (
    echo_batch_summary,
    echo_extraction_summary,
    echo_image_list,
    echo_warnings,
    exit_with_command_error,
)
from .config import BatchConfig, ConfigLoader, ExtractionConfig, RuntimeDefaults
from .errors import StructuralError
from .parsing import normalize_mode
from .pipeline import BatchRunner, ImageExtractionPipeline
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="epubimg",
    no_args_is_help=True,
    help="Extract EPUB images into a numbered zip archive.",
)

_MODE_HELP = (
    "Ordering mode: `page` (reading order, default) or `manifest` "
    "(manifest declaration order)."
)


class ExtractProgressIndicator:
    """Render progress lines for a conversion, throttled to 10% steps."""

    _STEP_PERCENT = 10

    def __init__(self, command_name: str) -> None:
        """Initialize progress indicator metadata for a command invocation."""

        self._command_name = command_name
        self._last_percent: int | None = None

    def on_progress(self, percent: int, status: str) -> None:
        """Print one progress line when progress advanced enough to be visible."""

        if (
            self._last_percent is not None
            and percent < 100
            and percent - self._last_percent < self._STEP_PERCENT
        ):
            return
        self._last_percent = percent
        typer.echo(f"[progress] command={self._command_name} {percent:3d}% {status}")


def _version_callback(value: bool) -> None:
    """Print the package version and exit."""

    if value:
        typer.echo(f"epubimg {__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Extract EPUB images into a numbered zip archive."""


def _load_runtime_defaults() -> RuntimeDefaults:
    """Load environment defaults and map failures to structural errors."""

    try:
        return ConfigLoader.from_env()
    except ValueError as exc:
        raise StructuralError(
            stage="config",
            detail=f"Invalid environment configuration: {exc}",
            hint="Fix or unset `EPUBIMG_MODE` / `EPUBIMG_WORKERS` and rerun.",
        ) from exc


def _resolve_mode(mode: str | None, defaults: RuntimeDefaults) -> str:
    """Return the CLI mode when given, otherwise the environment default."""

    return normalize_mode(mode) or defaults.mode


@app.command("extract")
def extract_command(
    input_epub: Annotated[Path, typer.Argument(help="Path to source EPUB.")],
    output_zip: Annotated[Path, typer.Argument(help="Path of the zip archive to create.")],
    mode: Annotated[str | None, typer.Option("--mode", help=_MODE_HELP)] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", help="Suppress progress lines and phase logs."),
    ] = False,
) -> None:
    """Extract images from one EPUB into a new zip archive."""

    try:
        defaults = _load_runtime_defaults()
        config = ExtractionConfig(
            input_epub=input_epub,
            output_zip=output_zip,
            mode=_resolve_mode(mode, defaults),
        )
        progress = ExtractProgressIndicator(command_name="extract")
        pipeline = ImageExtractionPipeline(
            run_logger=RunLogger(
                level="ERROR" if quiet else "INFO",
                log_item_warnings=False,
            ),
            progress_callback=None if quiet else progress.on_progress,
        )
        result = pipeline.run(config)
    except Exception as exc:
        exit_with_command_error("extract", exc)

    echo_warnings(result.warnings)
    echo_extraction_summary(result)


@app.command("batch")
def batch_command(
    inputs: Annotated[list[Path], typer.Argument(help="Source EPUB paths.")],
    out_dir: Annotated[
        Path | None,
        typer.Option(
            "--out-dir",
            help="Directory for `<name>.zip` outputs (default: next to each input).",
        ),
    ] = None,
    mode: Annotated[str | None, typer.Option("--mode", help=_MODE_HELP)] = None,
    workers: Annotated[
        int | None,
        typer.Option("--workers", help="Maximum number of concurrent conversions."),
    ] = None,
) -> None:
    """Convert several EPUB files concurrently, one output archive per input."""

    try:
        defaults = _load_runtime_defaults()
        config = BatchConfig(
            inputs=tuple(inputs),
            output_dir=out_dir,
            mode=_resolve_mode(mode, defaults),
            max_workers=workers if workers is not None else defaults.max_workers,
        )
        runner = BatchRunner(run_logger=RunLogger(level="WARNING", log_item_warnings=False))
        report = runner.run(config)
    except Exception as exc:
        exit_with_command_error("batch", exc)

    for outcome in report.succeeded:
        if outcome.result is not None:
            echo_warnings(outcome.result.warnings)
    echo_batch_summary(report)
    if not report.ok:
        raise typer.Exit(code=1)


@app.command("list-images")
def list_images_command(
    input_epub: Annotated[Path, typer.Argument(help="Path to source EPUB.")],
    mode: Annotated[str | None, typer.Option("--mode", help=_MODE_HELP)] = None,
) -> None:
    """Print the resolved image order without writing an archive.

    Rows are numbered by the output entry each image will be written as; images
    missing from the archive are marked `-` and skipped.
    """

    try:
        defaults = _load_runtime_defaults()
        resolved_mode = _resolve_mode(mode, defaults)
        pipeline = ImageExtractionPipeline(
            run_logger=RunLogger(level="WARNING", log_item_warnings=False)
        )
        listing = pipeline.list_images(input_epub, resolved_mode)
    except Exception as exc:
        exit_with_command_error("list-images", exc)

    typer.echo(f"Package document: {listing.package_path}")
    typer.echo(f"Mode: {listing.mode}")
    echo_image_list(listing.order, listing.missing)
    echo_warnings(listing.warnings)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
