"""Batch conversion of several EPUB files.

Each input is converted by its own `ImageExtractionPipeline` on a worker
thread. Units share no mutable state; the runner waits for all of them and
reports outcomes in input order. A failing unit never stops its siblings.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ..config import BatchConfig, ExtractionConfig
from ..errors import StructuralError
from ..models.datatypes import BatchOutcome, BatchReport
from ..telemetry.logger import RunLogger
from .orchestrator import ImageExtractionPipeline

UnitProgressCallback = Callable[[Path, int, str], None]


class BatchRunner:
    """Run independent conversion units concurrently."""

    def __init__(
        self,
        run_logger: RunLogger | None = None,
        progress_callback: UnitProgressCallback | None = None,
    ) -> None:
        """Initialize shared logging and per-unit progress reporting hooks."""

        self._run_logger = run_logger
        self._progress_callback = progress_callback

    def run(self, config: BatchConfig) -> BatchReport:
        """Convert every input in `config` and return outcomes in input order."""

        try:
            config.validate()
        except ValueError as exc:
            raise StructuralError(
                stage="config",
                detail=str(exc),
                hint=(
                    "Pass distinct EPUB names (or run them separately) and a positive "
                    "`--workers` value."
                ),
            ) from exc

        units = config.unit_configs()
        workers = min(config.max_workers, len(units))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            outcomes = list(executor.map(self._run_unit, units))
        return BatchReport(outcomes=tuple(outcomes))

    def _run_unit(self, config: ExtractionConfig) -> BatchOutcome:
        """Run one unit, capturing its failure in the outcome."""

        pipeline = ImageExtractionPipeline(
            run_logger=self._run_logger,
            progress_callback=self._unit_progress(config.input_epub),
        )
        try:
            result = pipeline.run(config)
        except Exception as exc:
            return BatchOutcome(
                input_epub=config.input_epub,
                output_zip=config.output_zip,
                error=exc,
            )
        return BatchOutcome(
            input_epub=config.input_epub,
            output_zip=config.output_zip,
            result=result,
        )

    def _unit_progress(self, input_epub: Path) -> Callable[[int, str], None] | None:
        """Bind the batch progress callback to one input path."""

        callback = self._progress_callback
        if callback is None:
            return None

        def _report(percent: int, status: str) -> None:
            callback(input_epub, percent, status)

        return _report
