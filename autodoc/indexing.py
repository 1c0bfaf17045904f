"""Directory walking and index page generation."""

from __future__ import annotations

import os
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .config import AutodocConfig
from .document import extract_document
from .errors import AutodocError
from .extraction.constants import INDEX_PAGE
from .extraction.renderer import MarkdownRenderer
from .ignore import IgnoreRule, build_rules, should_ignore
from .logging import get_logger
from .models import DirectoryIndex

_ALWAYS_SKIPPED_DIRS = {".git", ".hg", ".svn", "__pycache__"}

_DOCUMENTED = "documented"
_SKIPPED = "skipped"
_FAILED = "failed"


@dataclass
class IndexStats:
    """Files seen during one indexing run."""

    documented: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)


class DirectoryIndexer:
    """Documents source trees and writes an index page per directory."""

    def __init__(
        self,
        config: AutodocConfig,
        *,
        renderer: MarkdownRenderer | None = None,
        keep_going: bool = False,
    ) -> None:
        self.config = config
        self.renderer = renderer or MarkdownRenderer()
        self.keep_going = keep_going
        self.stats = IndexStats()
        self.logger = get_logger("indexing")
        self._rules: List[IgnoreRule] = build_rules(config.exclude_paths)
        self._extensions = tuple(config.extensions)
        self._skip_dirs = set(config.skip_dirs) | _ALWAYS_SKIPPED_DIRS
        self._executor: Optional[Executor] = None
        self._base: Optional[Path] = None
        self._doc_root: Optional[Path] = None

    def document_directories(self, title: str, doc_path: Path, base_dirs: Sequence[Path]) -> Path:
        """Index every base directory under ``doc_path`` and write the root index."""
        doc_path = Path(doc_path)
        self._doc_root = doc_path.resolve()
        root = DirectoryIndex(title=title, is_root=True)

        workers = max(1, self.config.workers)
        executor = ThreadPoolExecutor(max_workers=workers) if workers > 1 else None
        self._executor = executor
        try:
            for directory in base_dirs:
                directory = Path(directory)
                base = directory.resolve().name
                self._base = directory
                if self.index_dir(f"{title}/{base}", doc_path / base, directory):
                    root.dirs.append(base)
        finally:
            self._executor = None
            self._base = None
            if executor is not None:
                executor.shutdown(wait=True)

        index_path = self._write_index(doc_path, root)
        self.logger.info(
            "Documented %d files across %d source directories",
            len(self.stats.documented),
            len(root.dirs),
        )
        return index_path

    def index_dir(self, title: str, doc_dir: Path, code_dir: Path) -> bool:
        """Document ``code_dir`` recursively; return True when anything was written."""
        index = DirectoryIndex(title=title)
        file_names: List[str] = []
        dir_names: List[str] = []
        with os.scandir(code_dir) as entries:
            for entry in sorted(entries, key=lambda item: item.name):
                name = entry.name
                # Directory symlinks are not followed; they may loop back up the tree.
                if entry.is_dir(follow_symlinks=False):
                    if name in self._skip_dirs or self._excluded(code_dir / name, True):
                        continue
                    if self._is_output_dir(Path(entry.path)):
                        continue
                    dir_names.append(name)
                elif name.endswith(self._extensions):
                    if self._excluded(code_dir / name, False):
                        self.logger.debug("Excluded %s", code_dir / name)
                        continue
                    file_names.append(name)

        if self._executor is not None:
            futures = [
                self._executor.submit(self._document_file_guarded, title, name, doc_dir, code_dir)
                for name in file_names
            ]
            outcomes = [future.result() for future in futures]
        else:
            outcomes = [
                self._document_file_guarded(title, name, doc_dir, code_dir) for name in file_names
            ]
        for name, outcome in zip(file_names, outcomes):
            self._record(outcome, code_dir / name)
            if outcome == _DOCUMENTED:
                index.files.append(name)

        for name in dir_names:
            if self.index_dir(f"{title}/{name}", doc_dir / name, code_dir / name):
                index.dirs.append(name)

        if index.empty:
            return False

        self._write_index(doc_dir, index)
        return True

    def document_file(self, title: str, name: str, doc_dir: Path, code_dir: Path) -> bool:
        """Write ``doc_dir/<name>.md``; return False when the file has no docs."""
        source = code_dir / name
        with source.open("r", encoding="utf-8", errors="surrogateescape") as handle:
            document = extract_document(
                f"{title}/{name}", handle, fence_language=self.config.fence_language
            )
        if document is None:
            self.logger.debug("No documentation found in %s", source)
            return False

        doc_dir.mkdir(parents=True, exist_ok=True)
        target = doc_dir / f"{name}.md"
        with target.open("wb") as out:
            result = document.write_to(out)
        result.raise_for_error(str(target))
        self.logger.debug("Wrote %s (%d bytes)", target, result.bytes_written)
        return True

    def _document_file_guarded(self, title: str, name: str, doc_dir: Path, code_dir: Path) -> str:
        try:
            documented = self.document_file(title, name, doc_dir, code_dir)
        except (AutodocError, OSError) as exc:
            if not self.keep_going:
                raise
            self.logger.warning("Skipping %s: %s", code_dir / name, exc)
            return _FAILED
        return _DOCUMENTED if documented else _SKIPPED

    def _record(self, outcome: str, path: Path) -> None:
        if outcome == _DOCUMENTED:
            self.stats.documented.append(path)
        elif outcome == _SKIPPED:
            self.stats.skipped.append(path)
        else:
            self.stats.failed.append(path)

    def _write_index(self, doc_dir: Path, index: DirectoryIndex) -> Path:
        doc_dir.mkdir(parents=True, exist_ok=True)
        target = doc_dir / INDEX_PAGE
        with target.open("wb") as out:
            result = self.renderer.render_index(out, index)
        result.raise_for_error(str(target))
        self.logger.debug("Wrote index %s", target)
        return target

    def _excluded(self, path: Path, is_dir: bool) -> bool:
        if not self._rules or self._base is None:
            return False
        try:
            rel_path = path.relative_to(self._base).as_posix()
        except ValueError:
            return False
        return should_ignore(rel_path, is_dir, self._rules)

    def _is_output_dir(self, path: Path) -> bool:
        return self._doc_root is not None and path.resolve() == self._doc_root


def document_directories(
    title: str,
    doc_path: Path,
    base_dirs: Sequence[Path],
    *,
    config: AutodocConfig,
    keep_going: bool = False,
) -> Path:
    """Convenience wrapper around :class:`DirectoryIndexer`."""
    indexer = DirectoryIndexer(config, keep_going=keep_going)
    return indexer.document_directories(title, doc_path, base_dirs)


__all__ = ["DirectoryIndexer", "IndexStats", "document_directories"]
