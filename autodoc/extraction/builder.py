"""Section building from a stream of classified source lines."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, List, Union

from ..errors import DocumentReadError
from ..models import Section
from .classifier import (
    ClassifiedLine,
    LineKind,
    classify,
    extract_header,
    is_example_end,
    leading_whitespace,
)
from .constants import DEFAULT_FENCE_LANGUAGE, FENCE


class BuilderState(Enum):
    """Where the builder sits relative to the current section."""

    OUTSIDE = "outside"
    SIGNATURE_BLOCK = "signature_block"
    PROSE = "prose"


class LineSource:
    """Iterator over newline-stripped lines that reports read faults.

    Any error raised while pulling a line (I/O errors, a closed stream) is
    re-raised as :class:`DocumentReadError`. Exhaustion is ordinary end of
    input. Bytes that are not valid UTF-8 are kept as surrogates so they
    reach the rendered output unchanged.
    """

    def __init__(self, stream: Iterable[Union[str, bytes]], title: str = "<stream>") -> None:
        self.title = title
        self.line_number = 0
        try:
            self._lines: Iterator[Union[str, bytes]] = iter(stream)
        except (OSError, ValueError) as exc:
            raise DocumentReadError(title, exc) from exc

    def __iter__(self) -> "LineSource":
        return self

    def __next__(self) -> str:
        try:
            raw = next(self._lines)
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8", "surrogateescape")
        except StopIteration:
            raise
        except (OSError, ValueError) as exc:
            raise DocumentReadError(self.title, exc) from exc
        self.line_number += 1
        if raw.endswith("\n"):
            raw = raw[:-1]
        if raw.endswith("\r"):
            raw = raw[:-1]
        return raw


class _SectionDraft:
    """Mutable fragment list for the section currently being read."""

    def __init__(self, signature: str, open_fence: str) -> None:
        self.header = extract_header(signature)
        self.fragments: List[str] = [open_fence, signature]
        self.state = BuilderState.SIGNATURE_BLOCK

    def append(self, fragment: str) -> None:
        self.fragments.append(fragment)

    def freeze(self) -> Section:
        return Section(header=self.header, fragments=tuple(self.fragments))


class SectionBuilder:
    """Groups signature, prose and example lines into sections.

    One builder serves one parse pass: it owns the line cursor and keeps no
    state once :meth:`build` returns.
    """

    def __init__(self, lines: LineSource, *, fence_language: str = DEFAULT_FENCE_LANGUAGE) -> None:
        self._lines = lines
        self._open_fence = f"{FENCE}{fence_language}"
        self._close_fence = FENCE
        self.state = BuilderState.OUTSIDE

    def build(self) -> List[Section]:
        """Consume the line source and return sections in source order."""
        sections: List[Section] = []
        for line in self._lines:
            classified = classify(line)
            if classified.kind is LineKind.SIGNATURE:
                sections.append(self._read_section(classified.text))
        return sections

    def _read_section(self, signature: str) -> Section:
        draft = _SectionDraft(signature, self._open_fence)
        self.state = draft.state
        for line in self._lines:
            if not self._advance(draft, classify(line)):
                break
        self._close(draft)
        return draft.freeze()

    def _advance(self, draft: _SectionDraft, line: ClassifiedLine) -> bool:
        """Apply one line to ``draft``; return False when the line ends it."""
        if line.kind is LineKind.SIGNATURE:
            if draft.state is BuilderState.PROSE:
                draft.append(self._open_fence)
            draft.append(line.text)
            self._transition(draft, BuilderState.SIGNATURE_BLOCK)
            return True

        if draft.state is BuilderState.SIGNATURE_BLOCK:
            draft.append(self._close_fence)
            self._transition(draft, BuilderState.PROSE)

        if line.kind is LineKind.COMMENT:
            draft.append(line.text)
            return True
        if line.kind is LineKind.EXAMPLE_START:
            self._read_example(draft)
            return True
        return False

    def _read_example(self, draft: _SectionDraft) -> None:
        draft.append(self._open_fence)
        prefix: str | None = None
        for line in self._lines:
            if prefix is None:
                prefix = leading_whitespace(line)
            if is_example_end(line):
                break
            if line.startswith(prefix):
                line = line[len(prefix):]
            draft.append(line)
        draft.append(self._close_fence)

    def _close(self, draft: _SectionDraft) -> None:
        if draft.state is BuilderState.SIGNATURE_BLOCK:
            draft.append(self._close_fence)
        self._transition(draft, BuilderState.OUTSIDE)

    def _transition(self, draft: _SectionDraft, state: BuilderState) -> None:
        draft.state = state
        self.state = state


def build_sections(
    lines: LineSource, *, fence_language: str = DEFAULT_FENCE_LANGUAGE
) -> List[Section]:
    """Return every section found in ``lines``."""
    return SectionBuilder(lines, fence_language=fence_language).build()


__all__ = ["BuilderState", "LineSource", "SectionBuilder", "build_sections"]
