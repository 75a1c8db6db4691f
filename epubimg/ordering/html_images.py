"""`img` source extraction from XHTML content documents."""

from __future__ import annotations

import re

# Matches self-closing and open `img` tags with single- or double-quoted `src`.
# Entity-escaped values are returned as written.
IMG_SRC_PATTERN = re.compile(rb"""<img\s+[^>]*src\s*=\s*['"]([^'"]+)['"][^>]*/?>""")


def extract_img_sources(document: bytes) -> list[str]:
    """Return `src` values of all `img` tags in textual order of appearance."""

    return [
        match.group(1).decode("utf-8", errors="replace")
        for match in IMG_SRC_PATTERN.finditer(document)
    ]
