"""Stage telemetry helper methods for the conversion pipeline.

Responsibilities:
- Map stage names to progress percentages for the progress callback.
- Emit stage start/complete/failure and skipped-item events.
- Wrap stage actions with consistent telemetry hooks.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from ..models.datatypes import ItemWarning

_StageResult = TypeVar("_StageResult")

ProgressCallback = Callable[[int, str], None]


class PipelineTelemetryMixin:
    """Provide stage-telemetry helper methods."""

    # Percent reported when each stage starts; `extract` advances to 100 per image.
    _STAGE_PERCENT = {
        "open": 0,
        "locate": 10,
        "parse": 20,
        "resolve": 30,
        "extract": 40,
    }

    _run_logger = None
    _progress_callback: ProgressCallback | None = None

    def _report_progress(self, percent: int, status: str) -> None:
        """Forward one progress update to the caller, clamped to 0-100."""

        if self._progress_callback is not None:
            self._progress_callback(max(0, min(100, int(percent))), status)

    def _report_extract_progress(self, processed: int, total: int) -> None:
        """Report per-image progress across the extract stage's percent range."""

        start = self._STAGE_PERCENT["extract"]
        percent = start + ((100 - start) * processed) // total if total else 100
        self._report_progress(percent, f"extract {processed}/{total}")

    def _on_stage_start(self, stage_name: str) -> None:
        """Emit start events to the progress callback and structured logger."""

        if stage_name in self._STAGE_PERCENT:
            self._report_progress(self._STAGE_PERCENT[stage_name], stage_name)
        if self._run_logger is not None:
            self._run_logger.log_stage_start(stage_name)

    def _on_stage_complete(self, stage_name: str) -> None:
        """Emit stage-complete event to the structured logger."""

        if self._run_logger is not None:
            self._run_logger.log_stage_complete(stage_name)

    def _on_stage_failure(self, stage_name: str, exc: Exception) -> None:
        """Emit stage-failure event with sanitized exception metadata."""

        if self._run_logger is not None:
            self._run_logger.log_stage_failure(stage_name, type(exc).__name__)

    def _on_item_warnings(self, stage_name: str, warnings: Iterable[ItemWarning]) -> None:
        """Emit one skipped-item event per warning."""

        if self._run_logger is None:
            return
        for warning in warnings:
            self._run_logger.log_item_warning(stage_name, warning.kind, warning.path)

    def _run_stage(
        self,
        stage_name: str,
        action: Callable[[], _StageResult],
    ) -> _StageResult:
        """Run one named stage and emit start/complete/failure telemetry events."""

        self._on_stage_start(stage_name)
        try:
            result = action()
        except Exception as exc:
            self._on_stage_failure(stage_name, exc)
            raise
        self._on_stage_complete(stage_name)
        return result
