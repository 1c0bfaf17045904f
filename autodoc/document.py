"""Per-file documentation extraction."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import BinaryIO, Iterable, List, Optional, Union

from .extraction.builder import LineSource, build_sections
from .extraction.constants import DEFAULT_FENCE_LANGUAGE
from .extraction.indexer import HierarchyIndexer
from .extraction.renderer import MarkdownRenderer
from .models import IndexedSection, IndexEntry, RenderResult


@dataclass
class Document:
    """Renderable markdown for one source file."""

    title: str
    entries: List[IndexEntry] = field(default_factory=list)
    sections: List[IndexedSection] = field(default_factory=list)

    def write_to(self, sink: BinaryIO) -> RenderResult:
        """Render the whole document into ``sink``.

        Stops at the first write error; the result carries the byte count
        written before it and the error itself.
        """
        return MarkdownRenderer().render(sink, self.title, self.entries, self.sections)

    def render(self) -> str:
        buffer = io.BytesIO()
        self.write_to(buffer).raise_for_error()
        return buffer.getvalue().decode("utf-8", "surrogateescape")


def extract_document(
    title: str,
    stream: Iterable[Union[str, bytes]],
    *,
    fence_language: str = DEFAULT_FENCE_LANGUAGE,
) -> Optional[Document]:
    """Extract the documented symbols of ``stream``.

    Returns None when the stream holds no signature lines. Read faults raise
    :class:`~autodoc.errors.DocumentReadError` and no partial document is
    returned.
    """
    lines = LineSource(stream, title)
    sections = build_sections(lines, fence_language=fence_language)
    if not sections:
        return None
    entries, indexed = HierarchyIndexer().index(sections)
    return Document(title=title, entries=entries, sections=indexed)


__all__ = ["Document", "extract_document"]
