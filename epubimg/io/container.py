"""Container locator: find the package document path via `META-INF/container.xml`."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from ..errors import NotFoundError, ParseError
from .archive import ArchiveIndex, EntryReadError
from .xml_utils import local_name

CONTAINER_PATH = "META-INF/container.xml"


def locate_package_document(index: ArchiveIndex) -> str:
    """Return the `full-path` of the first `rootfile` declared in container.xml.

    Raises:
        NotFoundError: If container.xml is not present in the archive.
        ParseError: If container.xml is unreadable, malformed, or has no usable
            `full-path` attribute.
    """

    if CONTAINER_PATH not in index:
        raise NotFoundError(
            stage="locate",
            detail=f"`{CONTAINER_PATH}` not found in archive.",
            hint="The input does not look like an EPUB (OCF) container.",
        )
    try:
        root = ET.fromstring(index.read(CONTAINER_PATH))
    except EntryReadError as exc:
        raise ParseError(stage="locate", detail=f"Cannot read `{CONTAINER_PATH}`: {exc}") from exc
    except ET.ParseError as exc:
        raise ParseError(
            stage="locate",
            detail=f"Malformed XML in `{CONTAINER_PATH}`: {exc}",
        ) from exc

    for element in root.iter():
        if local_name(element.tag) != "rootfile":
            continue
        full_path = (element.get("full-path") or "").strip()
        if not full_path:
            break
        return full_path

    raise ParseError(
        stage="locate",
        detail=f"`{CONTAINER_PATH}` declares no `rootfile` with a `full-path` attribute.",
    )
