"""Configuration model and loaders for epubimg.

Responsibilities:
- Define per-run and per-batch configuration as typed dataclasses.
- Apply the batch output naming convention.
- Provide an environment loader for runtime defaults.

Key types:
- `ExtractionConfig`: settings for one conversion run.
- `BatchConfig`: settings for a multi-input session.
- `RuntimeDefaults`: mode/worker defaults resolved from the environment.
- `ConfigLoader`: static construction helpers.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping

from .ordering.resolver import DEFAULT_ORDER_MODE, ORDER_MODES
from .parsing import normalize_mode, normalize_optional_string, parse_positive_int

_DEFAULT_MAX_WORKERS = 4
_OUTPUT_SUFFIX = ".zip"


def validate_mode(mode: str) -> None:
    """Raise `ValueError` for unsupported ordering modes."""

    if mode not in ORDER_MODES:
        supported = ", ".join(ORDER_MODES)
        raise ValueError(f"Unsupported mode `{mode}`. Supported values: {supported}.")


@dataclass(frozen=True, slots=True)
class ExtractionConfig:
    """Runtime configuration for one conversion run.

    Attributes:
        input_epub: Path to the source EPUB.
        output_zip: Path of the archive to create.
        mode: Ordering mode, `page` (default) or `manifest`.
    """

    input_epub: Path
    output_zip: Path
    mode: str = DEFAULT_ORDER_MODE

    def validate(self) -> None:
        """Validate configuration values before a run starts."""

        validate_mode(self.mode)
        if self.input_epub.resolve() == self.output_zip.resolve():
            raise ValueError("Output archive path must differ from the input EPUB path.")


@dataclass(frozen=True, slots=True)
class BatchConfig:
    """Configuration for converting several EPUB files in one session.

    Attributes:
        inputs: Source EPUB paths, in reporting order.
        output_dir: Directory for outputs; `None` writes next to each input.
        mode: Ordering mode applied to every unit.
        max_workers: Upper bound on concurrently running units.
    """

    inputs: tuple[Path, ...]
    output_dir: Path | None = None
    mode: str = DEFAULT_ORDER_MODE
    max_workers: int = _DEFAULT_MAX_WORKERS

    def validate(self) -> None:
        """Validate batch-level values."""

        if not self.inputs:
            raise ValueError("At least one input EPUB is required.")
        validate_mode(self.mode)
        if self.max_workers <= 0:
            raise ValueError("`max_workers` must be a positive integer.")

        claimed: dict[Path, Path] = {}
        for input_epub in self.inputs:
            output_zip = self.output_for(input_epub).resolve()
            if output_zip in claimed:
                raise ValueError(
                    f"Inputs `{claimed[output_zip]}` and `{input_epub}` both map to "
                    f"output `{output_zip}`."
                )
            claimed[output_zip] = input_epub

    def output_for(self, input_epub: Path) -> Path:
        """Return the output archive path for one input (`<dir>/<stem>.zip`)."""

        directory = self.output_dir if self.output_dir is not None else input_epub.parent
        return directory / f"{input_epub.stem}{_OUTPUT_SUFFIX}"

    def unit_configs(self) -> list[ExtractionConfig]:
        """Expand the batch into one `ExtractionConfig` per input."""

        return [
            ExtractionConfig(
                input_epub=input_epub,
                output_zip=self.output_for(input_epub),
                mode=self.mode,
            )
            for input_epub in self.inputs
        ]


@dataclass(frozen=True, slots=True)
class RuntimeDefaults:
    """Caller-owned defaults that CLI flags may override."""

    mode: str = DEFAULT_ORDER_MODE
    max_workers: int = _DEFAULT_MAX_WORKERS


class ConfigLoader:
    """Factory methods for runtime defaults from external sources."""

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> RuntimeDefaults:
        """Create validated defaults from `EPUBIMG_MODE` and `EPUBIMG_WORKERS`."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        mode = normalize_mode(env_map.get("EPUBIMG_MODE")) or DEFAULT_ORDER_MODE
        validate_mode(mode)

        max_workers = _DEFAULT_MAX_WORKERS
        raw_workers = normalize_optional_string(env_map.get("EPUBIMG_WORKERS"))
        if raw_workers is not None:
            max_workers = parse_positive_int(raw_workers, "EPUBIMG_WORKERS")

        return RuntimeDefaults(mode=mode, max_workers=max_workers)
