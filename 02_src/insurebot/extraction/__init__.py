"""Document extraction module."""

from .extractor import (
    IExtractionProvider,
    StaticExtractionProvider,
    VisionExtractionProvider,
    create_extraction_provider,
)

__all__ = [
    "IExtractionProvider",
    "StaticExtractionProvider",
    "VisionExtractionProvider",
    "create_extraction_provider",
]
