"""Exception types raised by autodoc."""

from __future__ import annotations


class AutodocError(RuntimeError):
    """Base class for autodoc failures."""


class ConfigError(AutodocError):
    """Raised when the configuration file cannot be parsed."""


class DocumentReadError(AutodocError):
    """Raised when pulling lines from a source stream fails."""

    def __init__(self, title: str, cause: BaseException) -> None:
        super().__init__(f"Failed to read {title}: {cause}")
        self.title = title
        self.cause = cause


class DocumentWriteError(AutodocError):
    """Raised when rendered markdown cannot be written in full."""

    def __init__(self, target: str, bytes_written: int, cause: BaseException) -> None:
        super().__init__(f"Failed to write {target} after {bytes_written} bytes: {cause}")
        self.target = target
        self.bytes_written = bytes_written
        self.cause = cause


__all__ = ["AutodocError", "ConfigError", "DocumentReadError", "DocumentWriteError"]
