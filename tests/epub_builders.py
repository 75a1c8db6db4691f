"""Helpers for writing small synthetic EPUB archives in tests."""

from __future__ import annotations

import zipfile
from collections.abc import Iterable, Mapping
from pathlib import Path

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"png-payload"
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"jpeg-payload"
GIF_BYTES = b"GIF89a" + b"gif-payload"

_OPF_NAMESPACE = "http://www.idpf.org/2007/opf"


def container_xml(full_path: str = "OEBPS/content.opf") -> str:
    """Return a minimal OCF container document pointing at `full_path`."""

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">\n'
        "  <rootfiles>\n"
        f'    <rootfile full-path="{full_path}" media-type="application/oebps-package+xml"/>\n'
        "  </rootfiles>\n"
        "</container>\n"
    )


def package_opf(
    manifest: Iterable[tuple[str, str, str]],
    spine: Iterable[str] = (),
    *,
    namespaced: bool = True,
) -> str:
    """Return a package document with `(id, href, media_type)` items and spine idrefs."""

    items = "\n".join(
        f'    <item id="{item_id}" href="{href}" media-type="{media_type}"/>'
        for item_id, href, media_type in manifest
    )
    itemrefs = "\n".join(f'    <itemref idref="{idref}"/>' for idref in spine)
    xmlns = f' xmlns="{_OPF_NAMESPACE}"' if namespaced else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<package version="3.0"{xmlns} unique-identifier="uid">\n'
        "  <metadata/>\n"
        "  <manifest>\n"
        f"{items}\n"
        "  </manifest>\n"
        "  <spine>\n"
        f"{itemrefs}\n"
        "  </spine>\n"
        "</package>\n"
    )


def xhtml_page(body: str) -> str:
    """Wrap `body` markup in a minimal XHTML document."""

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<html xmlns="http://www.w3.org/1999/xhtml"><head><title>p</title></head>\n'
        f"<body>{body}</body></html>\n"
    )


def write_epub(path: Path, entries: Mapping[str, str | bytes]) -> Path:
    """Write `entries` (archive name to text or bytes) into a zip at `path`."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("mimetype", "application/epub+zip")
        for name, payload in entries.items():
            archive.writestr(name, payload)
    return path


def read_zip_entries(path: Path) -> dict[str, bytes]:
    """Return every entry of a zip archive keyed by name, in archive order."""

    with zipfile.ZipFile(path) as archive:
        return {info.filename: archive.read(info) for info in archive.infolist()}


def corrupt_stored_payload(path: Path, payload: bytes) -> Path:
    """Overwrite a stored entry's bytes in place so reading it fails its CRC check.

    `payload` must occur exactly once in the archive file.
    """

    raw = path.read_bytes()
    assert raw.count(payload) == 1
    path.write_bytes(raw.replace(payload, bytes(byte ^ 0xFF for byte in payload)))
    return path
