"""Package document parser.

Responsibilities:
- Read the package document (`.opf`) named by the container locator.
- Decode manifest items and spine references in declaration order.

Referential integrity (dangling idrefs, odd media types) is not validated here;
the order resolver tolerates it.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from ..errors import NotFoundError, ParseError
from ..models.datatypes import ManifestEntry, PackageDocument, SpineRef
from ..ordering.paths import normalize_archive_path
from .archive import ArchiveIndex, EntryReadError
from .xml_utils import children_named, first_child_named


def load_package_document(index: ArchiveIndex, package_path: str) -> PackageDocument:
    """Read and decode the package document stored at `package_path`."""

    normalized_path = normalize_archive_path(package_path)
    if normalized_path not in index:
        raise NotFoundError(
            stage="parse",
            detail=f"Package document `{package_path}` not found in archive.",
            hint="Check the `full-path` declared in `META-INF/container.xml`.",
        )
    try:
        data = index.read(normalized_path)
    except EntryReadError as exc:
        raise ParseError(
            stage="parse",
            detail=f"Cannot read package document `{normalized_path}`: {exc}",
        ) from exc
    return parse_package_document(data, normalized_path)


def parse_package_document(data: bytes, path: str = "") -> PackageDocument:
    """Decode manifest and spine sequences from raw package document bytes.

    Args:
        data: Raw XML bytes of the package document.
        path: Archive path of the document, kept for relative href resolution.

    Raises:
        ParseError: If the XML is malformed.
    """

    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise ParseError(
            stage="parse",
            detail=f"Malformed XML in package document `{path or '<memory>'}`: {exc}",
        ) from exc

    manifest: list[ManifestEntry] = []
    manifest_element = first_child_named(root, "manifest")
    if manifest_element is not None:
        for item in children_named(manifest_element, "item"):
            manifest.append(
                ManifestEntry(
                    id=item.get("id", ""),
                    href=item.get("href", ""),
                    media_type=item.get("media-type", ""),
                )
            )

    spine: list[SpineRef] = []
    spine_element = first_child_named(root, "spine")
    if spine_element is not None:
        for itemref in children_named(spine_element, "itemref"):
            spine.append(SpineRef(idref=itemref.get("idref", "")))

    return PackageDocument(path=path, manifest=tuple(manifest), spine=tuple(spine))
