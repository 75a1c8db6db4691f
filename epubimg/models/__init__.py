"""Shared typed data models for epubimg.

This package contains dataclasses used across conversion modules to avoid
cross-module coupling and circular imports.
"""

from .datatypes import (
    BatchOutcome,
    BatchReport,
    ExtractionResult,
    ImageListing,
    ItemWarning,
    ManifestEntry,
    PackageDocument,
    ResolvedImageOrder,
    SpineRef,
    WrittenImage,
)

__all__ = [
    "BatchOutcome",
    "BatchReport",
    "ExtractionResult",
    "ImageListing",
    "ItemWarning",
    "ManifestEntry",
    "PackageDocument",
    "ResolvedImageOrder",
    "SpineRef",
    "WrittenImage",
]
