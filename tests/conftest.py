"""Shared pytest fixtures for the full epubimg test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.epub_builders import (
    GIF_BYTES,
    JPEG_BYTES,
    PNG_BYTES,
    container_xml,
    package_opf,
    write_epub,
    xhtml_page,
)


@pytest.fixture
def picture_book_epub(tmp_path: Path) -> Path:
    """EPUB whose manifest order differs from reading order and reuses one image.

    Reading order: cover.png, pic2.jpg (page 1), then cover.png again and
    inner/deep.gif (page 2). Manifest order: pic2.jpg, cover.png, deep.gif.
    """

    opf = package_opf(
        manifest=[
            ("img-pic2", "text/pic2.jpg", "image/jpeg"),
            ("img-cover", "images/cover.png", "image/png"),
            ("img-deep", "images/inner/deep.gif", "image/gif"),
            ("page1", "text/page1.xhtml", "application/xhtml+xml"),
            ("page2", "text/page2.xhtml", "application/xhtml+xml"),
            ("css", "style.css", "text/css"),
        ],
        spine=["page1", "page2"],
    )
    return write_epub(
        tmp_path / "picture_book.epub",
        {
            "META-INF/container.xml": container_xml("OEBPS/content.opf"),
            "OEBPS/content.opf": opf,
            "OEBPS/text/page1.xhtml": xhtml_page(
                '<img src="../images/cover.png"/><p>one</p><img alt="x" src=\'pic2.jpg\'>'
            ),
            "OEBPS/text/page2.xhtml": xhtml_page(
                '<img src="../images/cover.png" /><img src="../images/inner/deep.gif"></img>'
            ),
            "OEBPS/images/cover.png": PNG_BYTES,
            "OEBPS/text/pic2.jpg": JPEG_BYTES,
            "OEBPS/images/inner/deep.gif": GIF_BYTES,
            "OEBPS/style.css": "body {}",
        },
    )
