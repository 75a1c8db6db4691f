"""Namespace-agnostic ElementTree helpers."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterator


def local_name(tag: object) -> str:
    """Return an element tag without its `{namespace}` prefix."""

    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def children_named(element: ET.Element, name: str) -> Iterator[ET.Element]:
    """Yield direct children of `element` whose local name is `name`."""

    for child in element:
        if local_name(child.tag) == name:
            yield child


def first_child_named(element: ET.Element, name: str) -> ET.Element | None:
    """Return the first direct child whose local name is `name`, if any."""

    return next(children_named(element, name), None)
