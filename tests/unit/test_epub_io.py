"""Unit tests for archive indexing, container location, and package parsing."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from epubimg.errors import NotFoundError, ParseError, StructuralError
from epubimg.io.archive import ArchiveIndex, open_epub
from epubimg.io.container import locate_package_document
from epubimg.io.package import load_package_document, parse_package_document
from epubimg.models.datatypes import ManifestEntry, SpineRef
from tests.epub_builders import container_xml, package_opf, write_epub


def test_archive_index_skips_directories_and_normalizes_names(tmp_path: Path) -> None:
    """Index keys should be normalized file paths only."""

    epub_path = tmp_path / "book.epub"
    with zipfile.ZipFile(epub_path, "w") as archive:
        archive.writestr("OEBPS/", b"")
        archive.writestr("./OEBPS/a.png", b"A")

    with zipfile.ZipFile(epub_path) as archive:
        index = ArchiveIndex(archive)
        assert "OEBPS/a.png" in index
        assert "OEBPS" not in index
        assert "OEBPS/" not in index
        assert len(index) == 1
        assert index.read("OEBPS/a.png") == b"A"
        with pytest.raises(KeyError):
            index.read("missing.png")


def test_open_epub_maps_missing_and_non_zip_inputs(tmp_path: Path) -> None:
    """Missing files and non-zip files should raise structural errors at `open`."""

    with pytest.raises(NotFoundError) as missing:
        open_epub(tmp_path / "missing.epub")
    assert missing.value.stage == "open"

    not_zip = tmp_path / "plain.epub"
    not_zip.write_text("not a zip", encoding="utf-8")
    with pytest.raises(ParseError) as bad:
        open_epub(not_zip)
    assert bad.value.stage == "open"


def test_locate_package_document_reads_first_rootfile(tmp_path: Path) -> None:
    """Locator should return `full-path` of the first declared rootfile."""

    container = container_xml("OPS/package.opf").replace(
        "</rootfiles>",
        '<rootfile full-path="OPS/second.opf" media-type="application/oebps-package+xml"/></rootfiles>',
    )
    epub_path = write_epub(tmp_path / "book.epub", {"META-INF/container.xml": container})

    with zipfile.ZipFile(epub_path) as archive:
        assert locate_package_document(ArchiveIndex(archive)) == "OPS/package.opf"


def test_locate_package_document_errors(tmp_path: Path) -> None:
    """Missing, malformed, and attribute-less containers should fail structurally."""

    missing = write_epub(tmp_path / "missing.epub", {"OEBPS/content.opf": "<package/>"})
    malformed = write_epub(
        tmp_path / "malformed.epub", {"META-INF/container.xml": "<container><rootfiles>"}
    )
    no_path = write_epub(
        tmp_path / "no_path.epub",
        {"META-INF/container.xml": "<container><rootfiles><rootfile/></rootfiles></container>"},
    )

    with zipfile.ZipFile(missing) as archive:
        with pytest.raises(NotFoundError, match="container.xml"):
            locate_package_document(ArchiveIndex(archive))
    for path in (malformed, no_path):
        with zipfile.ZipFile(path) as archive:
            with pytest.raises(ParseError) as exc_info:
                locate_package_document(ArchiveIndex(archive))
            assert isinstance(exc_info.value, StructuralError)
            assert exc_info.value.stage == "locate"


def test_parse_package_document_preserves_declaration_order() -> None:
    """Manifest and spine sequences should keep document order, dangling refs included."""

    opf = package_opf(
        manifest=[
            ("b", "b.png", "image/png"),
            ("a", "a.jpg", "image/jpeg"),
            ("p1", "p1.xhtml", "application/xhtml+xml"),
        ],
        spine=["p1", "ghost"],
    )

    package = parse_package_document(opf.encode("utf-8"), "OEBPS/content.opf")

    assert package.manifest == (
        ManifestEntry(id="b", href="b.png", media_type="image/png"),
        ManifestEntry(id="a", href="a.jpg", media_type="image/jpeg"),
        ManifestEntry(id="p1", href="p1.xhtml", media_type="application/xhtml+xml"),
    )
    assert package.spine == (SpineRef(idref="p1"), SpineRef(idref="ghost"))
    assert package.directory == "OEBPS"
    assert [entry.id for entry in package.image_entries()] == ["b", "a"]
    assert package.entry_by_id("ghost") is None


def test_parse_package_document_accepts_unnamespaced_and_missing_attributes() -> None:
    """Un-namespaced documents and missing attributes should be tolerated."""

    opf = b"""<package><manifest><item id="x" href="x.png"/></manifest></package>"""

    package = parse_package_document(opf, "content.opf")

    assert package.manifest == (ManifestEntry(id="x", href="x.png", media_type=""),)
    assert package.spine == ()
    assert package.directory == ""


def test_parse_package_document_rejects_malformed_xml() -> None:
    """Malformed package XML should raise a parse-stage structural error."""

    with pytest.raises(ParseError) as exc_info:
        parse_package_document(b"<package><manifest>", "content.opf")

    assert exc_info.value.stage == "parse"


def test_load_package_document_requires_entry(tmp_path: Path) -> None:
    """A container pointing at a missing package document should fail at `parse`."""

    epub_path = write_epub(tmp_path / "book.epub", {"META-INF/container.xml": container_xml()})

    with zipfile.ZipFile(epub_path) as archive:
        with pytest.raises(NotFoundError) as exc_info:
            load_package_document(ArchiveIndex(archive), "OEBPS/content.opf")

    assert exc_info.value.stage == "parse"
