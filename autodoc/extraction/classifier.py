"""Line classification for doc-comment markers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_SIGNATURE_PATTERN = re.compile(r"^\s*//\s*>\s*(.*)")
_COMMENT_PATTERN = re.compile(r"^\s*//\s*(.*)")
_EXAMPLE_START_PATTERN = re.compile(r"^\s*/\*\s*>")
_EXAMPLE_END_PATTERN = re.compile(r"^\s*\*/")
_LEADING_WHITESPACE_PATTERN = re.compile(r"^[\t ]*")
_HEADER_PATTERN = re.compile(r"^[a-zA-Z0-9$._:-]*")


class LineKind(Enum):
    """Classes a source line can fall into."""

    SIGNATURE = "signature"
    COMMENT = "comment"
    EXAMPLE_START = "example_start"
    EXAMPLE_END = "example_end"
    OTHER = "other"


@dataclass(frozen=True)
class ClassifiedLine:
    """A line together with its class and captured text."""

    kind: LineKind
    raw: str
    text: str = ""


def classify(line: str) -> ClassifiedLine:
    """Return the class of ``line``.

    Signatures win over plain comments since every signature is also a
    ``//`` comment. Example-end lines are only meaningful inside an open
    example block; callers outside one treat them as ``OTHER``.
    """
    match = _SIGNATURE_PATTERN.match(line)
    if match:
        return ClassifiedLine(LineKind.SIGNATURE, line, match.group(1))
    match = _COMMENT_PATTERN.match(line)
    if match:
        return ClassifiedLine(LineKind.COMMENT, line, match.group(1))
    if _EXAMPLE_START_PATTERN.match(line):
        return ClassifiedLine(LineKind.EXAMPLE_START, line)
    if _EXAMPLE_END_PATTERN.match(line):
        return ClassifiedLine(LineKind.EXAMPLE_END, line)
    return ClassifiedLine(LineKind.OTHER, line)


def is_signature(line: str) -> bool:
    return _SIGNATURE_PATTERN.match(line) is not None


def is_comment(line: str) -> bool:
    return _COMMENT_PATTERN.match(line) is not None


def is_example_start(line: str) -> bool:
    return _EXAMPLE_START_PATTERN.match(line) is not None


def is_example_end(line: str) -> bool:
    return _EXAMPLE_END_PATTERN.match(line) is not None


def extract_header(signature: str) -> str:
    """Return the symbol name leading ``signature``; may be empty."""
    match = _HEADER_PATTERN.match(signature)
    return match.group(0) if match else ""


def leading_whitespace(line: str) -> str:
    match = _LEADING_WHITESPACE_PATTERN.match(line)
    return match.group(0) if match else ""


__all__ = [
    "ClassifiedLine",
    "LineKind",
    "classify",
    "extract_header",
    "is_comment",
    "is_example_end",
    "is_example_start",
    "is_signature",
    "leading_whitespace",
]
