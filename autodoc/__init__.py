"""Render doc-comment markers in source files into indexed markdown."""

from .document import Document, extract_document
from .errors import AutodocError, ConfigError, DocumentReadError, DocumentWriteError
from .models import IndexEntry, IndexedSection, RenderResult, Section

__all__ = [
    "AutodocError",
    "ConfigError",
    "Document",
    "DocumentReadError",
    "DocumentWriteError",
    "IndexEntry",
    "IndexedSection",
    "RenderResult",
    "Section",
    "extract_document",
]
