"""Markdown serialization for extracted documents."""

from __future__ import annotations

from typing import BinaryIO, Sequence

from ..models import DirectoryIndex, IndexedSection, IndexEntry, RenderResult
from .constants import BACK_LINK, HOME_LINK, INDEX_PAGE, TOP_ANCHOR


class _SinkWriter:
    """Writes UTF-8 chunks, remembering the first failure and skipping the rest.

    Undecodable source bytes carried as surrogates are written back unchanged.
    A sink that accepts fewer bytes than it was given counts as a failure.
    """

    def __init__(self, sink: BinaryIO) -> None:
        self._sink = sink
        self.result = RenderResult()

    def write(self, text: str) -> None:
        if self.result.error is not None:
            return
        data = text.encode("utf-8", "surrogateescape")
        try:
            written = self._sink.write(data)
        except (OSError, ValueError) as exc:
            self.result.error = exc
            return
        if written is None:
            written = len(data)
        self.result.bytes_written += written
        if written < len(data):
            self.result.error = OSError(f"short write: {written} of {len(data)} bytes")


class MarkdownRenderer:
    """Serializes a document title, index and sections into markdown."""

    def render(
        self,
        sink: BinaryIO,
        title: str,
        entries: Sequence[IndexEntry],
        sections: Sequence[IndexedSection],
    ) -> RenderResult:
        writer = _SinkWriter(sink)
        writer.write("## ")
        writer.write(title)
        writer.write(TOP_ANCHOR)
        writer.write(HOME_LINK)

        for entry in entries:
            writer.write(entry.render())

        for section in sections:
            writer.write("\n")
            writer.write("\n".join(section.rendered_fragments))
        return writer.result

    def render_index(self, sink: BinaryIO, index: DirectoryIndex) -> RenderResult:
        """Write the index page listing child directories, then child files."""
        writer = _SinkWriter(sink)
        writer.write("## Index of ")
        writer.write(index.title)
        writer.write("\n")
        if not index.is_root:
            writer.write(BACK_LINK)
        for name in sorted(index.dirs):
            writer.write(f"\n* [{name}]({name}/{INDEX_PAGE})")
        for name in sorted(index.files):
            writer.write(f"\n* [{name}]({name}.md)")
        return writer.result


__all__ = ["MarkdownRenderer"]
