"""Integration-test fixtures for small end-to-end EPUB inputs."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.epub_builders import (
    JPEG_BYTES,
    PNG_BYTES,
    container_xml,
    package_opf,
    write_epub,
)


@pytest.fixture(autouse=True)
def _clear_epubimg_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CLI runs independent of the developer's environment defaults."""

    monkeypatch.delenv("EPUBIMG_MODE", raising=False)
    monkeypatch.delenv("EPUBIMG_WORKERS", raising=False)


@pytest.fixture
def manifest_only_epub(tmp_path: Path) -> Path:
    """EPUB with a root-level package declaring `a.jpg` then `b.png` and no spine."""

    return write_epub(
        tmp_path / "manifest_only.epub",
        {
            "META-INF/container.xml": container_xml("content.opf"),
            "content.opf": package_opf(
                manifest=[("a", "a.jpg", "image/jpeg"), ("b", "b.png", "image/png")],
            ),
            "a.jpg": JPEG_BYTES,
            "b.png": PNG_BYTES,
        },
    )


@pytest.fixture
def missing_image_epub(tmp_path: Path) -> Path:
    """EPUB whose manifest declares an image that is absent from the archive."""

    return write_epub(
        tmp_path / "missing_image.epub",
        {
            "META-INF/container.xml": container_xml("OEBPS/content.opf"),
            "OEBPS/content.opf": package_opf(
                manifest=[
                    ("a", "a.jpg", "image/jpeg"),
                    ("gone", "gone.png", "image/png"),
                    ("b", "b.PNG", "image/png"),
                ],
            ),
            "OEBPS/a.jpg": JPEG_BYTES,
            "OEBPS/b.PNG": PNG_BYTES,
        },
    )


@pytest.fixture
def no_container_epub(tmp_path: Path) -> Path:
    """Zip archive without `META-INF/container.xml`."""

    return write_epub(
        tmp_path / "no_container.epub",
        {
            "OEBPS/content.opf": package_opf(manifest=[("a", "a.jpg", "image/jpeg")]),
            "OEBPS/a.jpg": JPEG_BYTES,
        },
    )
