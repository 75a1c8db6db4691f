"""Core datatypes shared across epubimg modules.

Responsibilities:
- Represent immutable records exchanged between conversion stages.
- Provide explicit typing for the resolved image order and run summaries.

Key types:
- `ManifestEntry`, `SpineRef`, `PackageDocument`, `ItemWarning`,
  `WrittenImage`, `ExtractionResult`, `ImageListing`, `BatchOutcome`, and
  `BatchReport`.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from pathlib import Path

ResolvedImageOrder = tuple[str, ...]

IMAGE_MEDIA_TYPE_PREFIX = "image/"
XHTML_MEDIA_TYPE = "application/xhtml+xml"


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    """One resource declared in the package manifest.

    Attributes:
        id: Manifest item identifier, unique within one package document.
        href: Location relative to the package document.
        media_type: Declared MIME type of the resource.
    """

    id: str
    href: str
    media_type: str

    @property
    def is_image(self) -> bool:
        """Return whether the declared media type is an image type."""

        return self.media_type.startswith(IMAGE_MEDIA_TYPE_PREFIX)

    @property
    def is_xhtml(self) -> bool:
        """Return whether the entry is an XHTML content document."""

        return self.media_type == XHTML_MEDIA_TYPE


@dataclass(frozen=True, slots=True)
class SpineRef:
    """Reading-order reference to a manifest entry."""

    idref: str


@dataclass(frozen=True, slots=True)
class PackageDocument:
    """Decoded manifest and spine of one package document.

    Attributes:
        path: Archive path of the package document itself.
        manifest: Manifest entries in declaration order.
        spine: Spine references in reading order.
    """

    path: str
    manifest: tuple[ManifestEntry, ...] = field(default_factory=tuple)
    spine: tuple[SpineRef, ...] = field(default_factory=tuple)

    @property
    def directory(self) -> str:
        """Archive directory containing the package document (`""` at the root)."""

        return posixpath.dirname(self.path)

    def entry_by_id(self, item_id: str) -> ManifestEntry | None:
        """Return the first manifest entry declared with `item_id`, if any."""

        for entry in self.manifest:
            if entry.id == item_id:
                return entry
        return None

    def image_entries(self) -> tuple[ManifestEntry, ...]:
        """Return image entries in manifest declaration order."""

        return tuple(entry for entry in self.manifest if entry.is_image)


@dataclass(frozen=True, slots=True)
class ItemWarning:
    """Non-fatal diagnostic for an item skipped during a run.

    Attributes:
        kind: Warning category (`page_missing`, `page_unreadable`, `image_missing`,
            `image_unreadable`, or `entry_collision`).
        path: Archive path (or output entry name) the warning refers to.
        detail: Human-readable description.
    """

    kind: str
    path: str
    detail: str


@dataclass(frozen=True, slots=True)
class WrittenImage:
    """One image entry copied into the output archive."""

    index: int
    source_path: str
    entry_name: str
    size: int


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Summary of one completed conversion run.

    Attributes:
        input_epub: Source EPUB path.
        output_zip: Written output archive path.
        mode: Ordering mode used (`page` or `manifest`).
        package_path: Archive path of the package document.
        requested: Number of image paths in the resolved order.
        written: Images actually copied, in output order.
        warnings: Item warnings accumulated across resolve and extract stages.
    """

    input_epub: Path
    output_zip: Path
    mode: str
    package_path: str
    requested: int
    written: tuple[WrittenImage, ...] = field(default_factory=tuple)
    warnings: tuple[ItemWarning, ...] = field(default_factory=tuple)

    @property
    def written_count(self) -> int:
        """Return how many images were written to the output archive."""

        return len(self.written)


@dataclass(frozen=True, slots=True)
class ImageListing:
    """Resolved image order of one EPUB, computed without writing output.

    Attributes:
        package_path: Archive path of the package document.
        mode: Ordering mode used.
        order: Resolved archive paths, in output order.
        missing: Paths of `order` that are absent from the archive.
        warnings: Item warnings raised while resolving.
    """

    package_path: str
    mode: str
    order: ResolvedImageOrder
    missing: frozenset[str] = field(default_factory=frozenset)
    warnings: tuple[ItemWarning, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class BatchOutcome:
    """Result of one unit in a batch session; exactly one of `result`/`error` is set."""

    input_epub: Path
    output_zip: Path
    result: ExtractionResult | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """Return whether the unit completed without a structural failure."""

        return self.error is None


@dataclass(frozen=True, slots=True)
class BatchReport:
    """Outcomes of a batch session in input order."""

    outcomes: tuple[BatchOutcome, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> tuple[BatchOutcome, ...]:
        """Return outcomes that produced an output archive."""

        return tuple(outcome for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> tuple[BatchOutcome, ...]:
        """Return outcomes that failed with a structural error."""

        return tuple(outcome for outcome in self.outcomes if not outcome.ok)

    @property
    def ok(self) -> bool:
        """Return whether every unit in the batch succeeded."""

        return not self.failed
