"""Input/output stage components for epubimg.

This package contains the archive index, container locator, package parser,
and output archive writer used by the conversion pipeline.
"""

from .archive import ArchiveIndex, EntryReadError, open_epub
from .container import CONTAINER_PATH, locate_package_document
from .package import load_package_document, parse_package_document
from .writer import ImageArchiveWriter

__all__ = [
    "ArchiveIndex",
    "CONTAINER_PATH",
    "EntryReadError",
    "ImageArchiveWriter",
    "load_package_document",
    "locate_package_document",
    "open_epub",
    "parse_package_document",
]
