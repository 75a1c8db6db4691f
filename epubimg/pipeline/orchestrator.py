"""Pipeline orchestration for one EPUB-to-images conversion.

Responsibilities:
- Define the stage order: open, locate, parse, resolve, extract.
- Keep structural failures fatal and item failures as warnings.
- Create the output archive only after the structural stages succeed.

Key types:
- `ImageExtractionPipeline`: orchestration facade.
"""

from __future__ import annotations

from pathlib import Path

from ..config import ExtractionConfig, validate_mode
from ..errors import StructuralError
from ..io.archive import ArchiveIndex, open_epub
from ..io.container import locate_package_document
from ..io.package import load_package_document
from ..io.writer import ImageArchiveWriter
from ..models.datatypes import ExtractionResult, ImageListing, PackageDocument
from ..ordering.resolver import DEFAULT_ORDER_MODE, OrderResolution, resolve_image_order
from ..telemetry.logger import RunLogger
from .telemetry import PipelineTelemetryMixin, ProgressCallback


class ImageExtractionPipeline(PipelineTelemetryMixin):
    """Coordinate all stages for a single conversion run."""

    def __init__(
        self,
        run_logger: RunLogger | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Initialize optional runtime logging and progress reporting hooks."""

        self._run_logger = run_logger
        self._progress_callback = progress_callback

    def run(self, config: ExtractionConfig) -> ExtractionResult:
        """Convert one EPUB into a numbered image archive and return a summary."""

        self._validate_config(config)

        with self._run_stage("open", lambda: open_epub(config.input_epub)) as archive:
            index = ArchiveIndex(archive)
            package, resolution = self._resolve(index, config.mode)

            writer = ImageArchiveWriter(config.output_zip)
            written, write_warnings = self._run_stage(
                "extract",
                lambda: writer.write(
                    resolution.order,
                    index,
                    on_image=self._report_extract_progress,
                ),
            )
        self._on_item_warnings("extract", write_warnings)

        result = ExtractionResult(
            input_epub=config.input_epub,
            output_zip=config.output_zip,
            mode=config.mode,
            package_path=package.path,
            requested=len(resolution.order),
            written=written,
            warnings=resolution.warnings + write_warnings,
        )
        self._report_progress(
            100,
            f"done {result.written_count}/{result.requested} images",
        )
        return result

    def list_images(
        self, input_epub: Path, mode: str = DEFAULT_ORDER_MODE
    ) -> ImageListing:
        """Resolve the image order of an EPUB without writing any output."""

        try:
            validate_mode(mode)
        except ValueError as exc:
            raise StructuralError(
                stage="config",
                detail=str(exc),
                hint="Use `--mode page` or `--mode manifest`.",
            ) from exc
        with self._run_stage("open", lambda: open_epub(input_epub)) as archive:
            index = ArchiveIndex(archive)
            package, resolution = self._resolve(index, mode)

        return ImageListing(
            package_path=package.path,
            mode=mode,
            order=resolution.order,
            missing=frozenset(path for path in resolution.order if path not in index),
            warnings=resolution.warnings,
        )

    def _resolve(
        self, index: ArchiveIndex, mode: str
    ) -> tuple[PackageDocument, OrderResolution]:
        """Run locate, parse, and resolve stages against an opened archive."""

        package_path = self._run_stage("locate", lambda: locate_package_document(index))
        package = self._run_stage("parse", lambda: load_package_document(index, package_path))
        resolution = self._run_stage(
            "resolve",
            lambda: resolve_image_order(mode, package, index),
        )
        self._on_item_warnings("resolve", resolution.warnings)
        return package, resolution

    def _validate_config(self, config: ExtractionConfig) -> None:
        """Validate top-level configuration and map failures to a structural error."""

        try:
            config.validate()
        except ValueError as exc:
            raise StructuralError(
                stage="config",
                detail=str(exc),
                hint="Use `--mode page` or `--mode manifest` and distinct input/output paths.",
            ) from exc
