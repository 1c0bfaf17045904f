"""Hierarchical index and heading-level computation."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ..models import IndexedSection, IndexEntry, Section
from .constants import TOP_LINK


def anchor_for(header: str) -> str:
    """Return the markdown anchor for ``header`` (anchors cannot hold ``:``)."""
    return header.replace(":", "_")


def is_ancestor(parent: str, header: str) -> bool:
    """Return True when ``header`` nests under ``parent``.

    ``foo.bar.baz`` nests under ``foo.bar``, but ``foo.barge`` does not: the
    character following the shared prefix must not continue a word.
    """
    if len(header) <= len(parent) or not header.startswith(parent):
        return False
    boundary = header[len(parent)]
    return not boundary.isalpha() and not boundary.isdigit()


def push_header(header: str, stack: List[str]) -> List[str]:
    """Pop non-ancestors off ``stack`` and push ``header``; returns the stack."""
    while stack and not is_ancestor(stack[-1], header):
        stack.pop()
    stack.append(header)
    return stack


class HierarchyIndexer:
    """Sorts sections and assigns their nesting depth."""

    def index(self, sections: Sequence[Section]) -> Tuple[List[IndexEntry], List[IndexedSection]]:
        ordered = sorted(sections, key=lambda section: section.header)
        entries: List[IndexEntry] = []
        indexed: List[IndexedSection] = []
        stack: List[str] = []
        for section in ordered:
            depth = len(push_header(section.header, stack))
            anchor = anchor_for(section.header)
            entries.append(IndexEntry(depth=depth, header=section.header, anchor=anchor))
            indexed.append(
                IndexedSection(
                    section=section,
                    depth=depth,
                    anchor=anchor,
                    title=self._title_line(depth, anchor, section.header),
                    footer=TOP_LINK,
                )
            )
        return entries, indexed

    @staticmethod
    def _title_line(depth: int, anchor: str, header: str) -> str:
        return f"{'#' * (depth + 2)} <a name='{anchor}'></a>{header}"


__all__ = ["HierarchyIndexer", "anchor_for", "is_ancestor", "push_header"]
