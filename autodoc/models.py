"""Core data models shared across autodoc components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .errors import DocumentWriteError


@dataclass(frozen=True)
class Section:
    """One documented symbol as collected by the section builder."""

    header: str
    fragments: Tuple[str, ...]


@dataclass(frozen=True)
class IndexEntry:
    """A bullet in the document index."""

    depth: int
    header: str
    anchor: str

    def render(self) -> str:
        indent = "  " * (self.depth - 1)
        return f"{indent}* [{self.header}](#{self.anchor})\n"


@dataclass(frozen=True)
class IndexedSection:
    """A section placed in the hierarchy, ready for rendering."""

    section: Section
    depth: int
    anchor: str
    title: str
    footer: str

    @property
    def header(self) -> str:
        return self.section.header

    @property
    def rendered_fragments(self) -> List[str]:
        return [self.title, *self.section.fragments, self.footer]


@dataclass
class RenderResult:
    """Outcome of rendering a document into a byte sink."""

    bytes_written: int = 0
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self, target: str = "<sink>") -> None:
        """Raise DocumentWriteError when the render stopped on a write fault."""
        if self.error is not None:
            raise DocumentWriteError(target, self.bytes_written, self.error) from self.error


@dataclass
class DirectoryIndex:
    """Children of one documentation directory that produced output."""

    title: str
    files: List[str] = field(default_factory=list)
    dirs: List[str] = field(default_factory=list)
    is_root: bool = False

    @property
    def empty(self) -> bool:
        return not self.files and not self.dirs
