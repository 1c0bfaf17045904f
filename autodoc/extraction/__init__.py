"""Doc-comment extraction pipeline: classify, build, index, render."""

from __future__ import annotations

from .builder import BuilderState, LineSource, SectionBuilder, build_sections
from .classifier import ClassifiedLine, LineKind, classify, extract_header
from .indexer import HierarchyIndexer, anchor_for, is_ancestor
from .renderer import MarkdownRenderer

__all__ = [
    "BuilderState",
    "ClassifiedLine",
    "HierarchyIndexer",
    "LineKind",
    "LineSource",
    "MarkdownRenderer",
    "SectionBuilder",
    "anchor_for",
    "build_sections",
    "classify",
    "extract_header",
    "is_ancestor",
]
