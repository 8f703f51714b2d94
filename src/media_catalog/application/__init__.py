"""
Application layer for Media Catalog.

Orchestrates the codecs and the persistence port for bulk import and export.
"""

from .pipeline import ImportExportPipeline

__all__ = [
    "ImportExportPipeline",
]
