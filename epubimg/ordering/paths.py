"""Archive path helpers.

Zip entry names always use forward slashes, so these helpers use `posixpath`
regardless of the host platform.
"""

from __future__ import annotations

import posixpath


def normalize_archive_path(path: str) -> str:
    """Normalize an archive path, resolving `.`/`..` segments.

    Leading slashes are dropped so the result is always archive-relative.
    """

    normalized = posixpath.normpath(path.replace("\\", "/"))
    normalized = normalized.lstrip("/")
    if normalized in {"", "."}:
        return ""
    return normalized


def resolve_archive_path(base_dir: str, href: str) -> str:
    """Join `href` onto an archive directory and normalize the result.

    Args:
        base_dir: Directory inside the archive (`""` for the archive root).
        href: Relative reference, as written in a package or content document.

    Returns:
        Normalized archive-relative path.
    """

    joined = f"{base_dir}/{href}" if base_dir else href
    return normalize_archive_path(joined)


def archive_dirname(path: str) -> str:
    """Return the containing archive directory of `path` (`""` at the root)."""

    return posixpath.dirname(path)


def lowercase_extension(path: str) -> str:
    """Return the lowercased extension of `path` including the dot, or `""`."""

    return posixpath.splitext(posixpath.basename(path))[1].lower()
