"""Output archive writer.

Responsibilities:
- Copy resolved image entries byte-for-byte into a new zip archive.
- Name output entries `<n><ext>` where `n` counts written entries from 0.
- Skip missing, unreadable, or colliding entries with item warnings.
"""

from __future__ import annotations

import zipfile
from collections.abc import Callable, Sequence
from pathlib import Path

from ..errors import StructuralError
from ..models.datatypes import ItemWarning, WrittenImage
from ..ordering.paths import lowercase_extension
from .archive import ArchiveIndex, EntryReadError


class ImageArchiveWriter:
    """Write an ordered selection of archive entries into a new zip file."""

    def __init__(self, output_zip: Path, compression: int = zipfile.ZIP_DEFLATED) -> None:
        """Initialize the writer for one output path."""

        self.output_zip = output_zip
        self.compression = compression

    @staticmethod
    def entry_name(index: int, source_path: str) -> str:
        """Return the output entry name for the `index`-th written image."""

        return f"{index}{lowercase_extension(source_path)}"

    def write(
        self,
        order: Sequence[str],
        index: ArchiveIndex,
        on_image: Callable[[int, int], None] | None = None,
    ) -> tuple[tuple[WrittenImage, ...], tuple[ItemWarning, ...]]:
        """Copy every available entry of `order` into the output archive.

        Args:
            order: Resolved archive paths, in output order.
            index: Index of the source archive.
            on_image: Optional callback receiving `(processed, total)` after each path.

        Returns:
            Written images and item warnings for skipped paths.

        Raises:
            StructuralError: If the output archive cannot be created or written.
        """

        try:
            self.output_zip.parent.mkdir(parents=True, exist_ok=True)
            archive = zipfile.ZipFile(self.output_zip, "w", compression=self.compression)
        except OSError as exc:
            raise StructuralError(
                stage="extract",
                detail=f"Cannot create output archive `{self.output_zip}`: {exc}",
                hint="Check that the output location is writable.",
            ) from exc

        written: list[WrittenImage] = []
        warnings: list[ItemWarning] = []
        used_names: set[str] = set()
        total = len(order)
        try:
            with archive:
                for position, source_path in enumerate(order, start=1):
                    self._copy_entry(archive, index, source_path, written, warnings, used_names)
                    if on_image is not None:
                        on_image(position, total)
        except OSError as exc:
            self.output_zip.unlink(missing_ok=True)
            raise StructuralError(
                stage="extract",
                detail=f"Failed writing output archive `{self.output_zip}`: {exc}",
                hint="Check free disk space and permissions, then rerun.",
            ) from exc

        return tuple(written), tuple(warnings)

    def _copy_entry(
        self,
        archive: zipfile.ZipFile,
        index: ArchiveIndex,
        source_path: str,
        written: list[WrittenImage],
        warnings: list[ItemWarning],
        used_names: set[str],
    ) -> None:
        """Copy one source entry, appending to `written` or `warnings`."""

        if source_path not in index:
            warnings.append(
                ItemWarning(
                    kind="image_missing",
                    path=source_path,
                    detail=f"image not found: {source_path}, skip",
                )
            )
            return
        try:
            data = index.read(source_path)
        except EntryReadError as exc:
            warnings.append(
                ItemWarning(
                    kind="image_unreadable",
                    path=source_path,
                    detail=f"cannot read image {source_path}: {exc}, skip",
                )
            )
            return

        name = self.entry_name(len(written), source_path)
        # Only reachable if `entry_name` stops being unique per written count.
        if name in used_names:
            warnings.append(
                ItemWarning(
                    kind="entry_collision",
                    path=name,
                    detail=f"output entry {name} already written, skip {source_path}",
                )
            )
            return

        archive.writestr(name, data)
        used_names.add(name)
        written.append(
            WrittenImage(
                index=len(written),
                source_path=source_path,
                entry_name=name,
                size=len(data),
            )
        )
