"""epubimg pipeline package.

This package contains orchestration for single conversions, batch sessions,
and stage telemetry helpers.
"""

from .batch import BatchRunner
from .orchestrator import ImageExtractionPipeline

__all__ = ["BatchRunner", "ImageExtractionPipeline"]
