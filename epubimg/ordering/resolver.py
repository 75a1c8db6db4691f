"""Image order resolution.

Responsibilities:
- Compute the ordered list of image entry paths for one package document.
- Support `manifest` order (authoring order) and `page` order (reading order).

Key functions:
- `resolve_manifest_order`: image hrefs in manifest declaration order.
- `resolve_page_order`: first-occurrence image references across spine pages.
- `resolve_image_order`: mode dispatch used by the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import StructuralError
from ..io.archive import ArchiveIndex, EntryReadError
from ..models.datatypes import (
    ItemWarning,
    ManifestEntry,
    PackageDocument,
    ResolvedImageOrder,
)
from .html_images import extract_img_sources
from .paths import archive_dirname, resolve_archive_path

MODE_PAGE = "page"
MODE_MANIFEST = "manifest"
ORDER_MODES = (MODE_PAGE, MODE_MANIFEST)
DEFAULT_ORDER_MODE = MODE_PAGE


@dataclass(frozen=True, slots=True)
class OrderResolution:
    """Resolved image order plus warnings for items skipped while resolving."""

    order: ResolvedImageOrder
    warnings: tuple[ItemWarning, ...] = field(default_factory=tuple)


def resolve_manifest_order(package: PackageDocument) -> OrderResolution:
    """Return every manifest image, in declaration order, as archive paths.

    Missing entries are not filtered here; the writer skips them.
    """

    order = tuple(
        resolve_archive_path(package.directory, entry.href)
        for entry in package.image_entries()
    )
    return OrderResolution(order=order)


def spine_pages(package: PackageDocument) -> list[ManifestEntry]:
    """Return XHTML content documents referenced by the spine, in spine order.

    Spine references to unknown ids or non-XHTML entries are dropped silently.
    """

    pages: list[ManifestEntry] = []
    for ref in package.spine:
        entry = package.entry_by_id(ref.idref)
        if entry is not None and entry.is_xhtml:
            pages.append(entry)
    return pages


def resolve_page_order(package: PackageDocument, index: ArchiveIndex) -> OrderResolution:
    """Return images in reading order, deduplicated by first occurrence.

    Each spine page is scanned for `img` tags; `src` values are resolved against
    the page's own directory. Missing pages and images are reported as warnings.
    """

    order: list[str] = []
    seen: set[str] = set()
    warnings: list[ItemWarning] = []

    for page in spine_pages(package):
        page_path = resolve_archive_path(package.directory, page.href)
        if page_path not in index:
            warnings.append(
                ItemWarning(
                    kind="page_missing",
                    path=page_path,
                    detail=f"page file not found: {page_path}",
                )
            )
            continue
        try:
            document = index.read(page_path)
        except EntryReadError as exc:
            warnings.append(
                ItemWarning(
                    kind="page_unreadable",
                    path=page_path,
                    detail=f"cannot read page file {page_path}: {exc}",
                )
            )
            continue

        page_dir = archive_dirname(page_path)
        for src in extract_img_sources(document):
            image_path = resolve_archive_path(page_dir, src)
            if image_path not in index:
                warnings.append(
                    ItemWarning(
                        kind="image_missing",
                        path=image_path,
                        detail=f"img {image_path} referenced by {page_path} not found in archive",
                    )
                )
                continue
            if image_path in seen:
                continue
            seen.add(image_path)
            order.append(image_path)

    return OrderResolution(order=tuple(order), warnings=tuple(warnings))


def resolve_image_order(
    mode: str,
    package: PackageDocument,
    index: ArchiveIndex,
) -> OrderResolution:
    """Resolve image order for `mode`; unknown modes are structural errors."""

    if mode == MODE_MANIFEST:
        return resolve_manifest_order(package)
    if mode == MODE_PAGE:
        return resolve_page_order(package, index)
    raise StructuralError(
        stage="config",
        detail=f"Unknown mode `{mode}`.",
        hint=f"Use one of: {', '.join(ORDER_MODES)}.",
    )
