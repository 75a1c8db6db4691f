"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
conversion summaries, skipped-item warnings, and image listings.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from typing import NoReturn

import typer

from .errors import StructuralError
from .models.datatypes import BatchReport, ExtractionResult, ItemWarning


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, StructuralError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_warnings(warnings: Iterable[ItemWarning]) -> None:
    """Print each skipped-item warning on stderr."""

    for warning in warnings:
        typer.secho(
            f"[Warn] {warning.kind}: {warning.detail}",
            fg=typer.colors.YELLOW,
            err=True,
        )


def echo_extraction_summary(result: ExtractionResult) -> None:
    """Print requested vs written counts, output path, and mode."""

    typer.echo(
        f"Done. Extracted {result.written_count}/{result.requested} images "
        f"into {result.output_zip} with mode [{result.mode}]"
    )
    if result.warnings:
        typer.echo(f"Warnings: {len(result.warnings)}")


def echo_batch_summary(report: BatchReport) -> None:
    """Print one line per batch unit followed by overall totals."""

    for outcome in report.outcomes:
        if outcome.result is not None:
            result = outcome.result
            typer.echo(
                f"ok {outcome.input_epub} -> {outcome.output_zip}: "
                f"{result.written_count}/{result.requested} images, "
                f"{len(result.warnings)} warning(s)"
            )
            continue
        error = outcome.error
        if isinstance(error, StructuralError):
            reason = f"stage `{error.stage}`: {error.detail}"
        else:
            reason = str(error)
        typer.secho(
            f"failed {outcome.input_epub}: {reason}",
            fg=typer.colors.RED,
            err=True,
        )
    typer.echo(
        f"Batch complete: {len(report.succeeded)} succeeded, {len(report.failed)} failed."
    )


def echo_image_list(order: Iterable[str], missing: Collection[str] = ()) -> None:
    """Print resolved image paths numbered by the output entry they will become.

    Paths absent from the archive are marked with `-` and do not consume a number,
    matching how the writer renumbers only written entries.
    """

    written = 0
    for path in order:
        if path in missing:
            typer.echo(f"-. {path} (missing from archive, skipped)")
            continue
        typer.echo(f"{written}. {path}")
        written += 1
