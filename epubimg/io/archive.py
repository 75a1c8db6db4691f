"""Read-only index over the entries of an opened EPUB archive.

Responsibilities:
- Open EPUB files as zip archives and map failures to structural errors.
- Map normalized entry paths to zip members for lookup and byte reads.
"""

from __future__ import annotations

import zipfile
import zlib
from collections.abc import Iterator
from pathlib import Path

from ..errors import NotFoundError, ParseError
from ..ordering.paths import normalize_archive_path

_ENTRY_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    OSError,
    RuntimeError,
    NotImplementedError,
)


class EntryReadError(OSError):
    """Raised when an existing archive entry cannot be decompressed or read."""


def open_epub(path: Path) -> zipfile.ZipFile:
    """Open an EPUB file as a zip archive."""

    if not path.exists():
        raise NotFoundError(
            stage="open",
            detail=f"Input EPUB not found: `{path}`.",
            hint="Verify the input path and rerun the command.",
        )
    try:
        return zipfile.ZipFile(path, "r")
    except zipfile.BadZipFile as exc:
        raise ParseError(
            stage="open",
            detail=f"Input `{path}` is not a readable zip archive: {exc}",
            hint="EPUB files must be OCF zip containers.",
        ) from exc
    except OSError as exc:
        raise NotFoundError(
            stage="open",
            detail=f"Cannot open input EPUB `{path}`: {exc}",
        ) from exc


class ArchiveIndex:
    """Mapping from normalized archive path to the zip member holding its bytes."""

    def __init__(self, archive: zipfile.ZipFile) -> None:
        """Index every non-directory member of `archive`; first member wins on duplicates."""

        self._archive = archive
        self._members: dict[str, zipfile.ZipInfo] = {}
        for info in archive.infolist():
            if info.is_dir():
                continue
            key = normalize_archive_path(info.filename)
            if key and key not in self._members:
                self._members[key] = info

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and path in self._members

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def read(self, path: str) -> bytes:
        """Read the raw bytes of an indexed entry.

        Raises:
            KeyError: If `path` is not in the index.
            EntryReadError: If the entry exists but cannot be read.
        """

        info = self._members[path]
        try:
            return self._archive.read(info)
        except _ENTRY_READ_ERRORS as exc:
            raise EntryReadError(f"cannot read `{path}`: {exc}") from exc
