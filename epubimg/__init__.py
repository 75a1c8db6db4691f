"""Top-level package for epubimg.

This package extracts the images of an EPUB archive into a new zip archive,
numbered in manifest order or reading (page) order. The main orchestration
entry point is `ImageExtractionPipeline`.
"""

from .pipeline import BatchRunner, ImageExtractionPipeline

__all__ = ["BatchRunner", "ImageExtractionPipeline", "__version__"]

__version__ = "0.1.0"
