"""Pipeline orchestration for build/render flows."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, List, Mapping, Optional

from .config import AutodocConfig, load_config
from .document import extract_document
from .indexing import DirectoryIndexer
from .logging import get_logger


@dataclass
class BuildOutcome:
    """Result of a documentation build."""

    index_path: Path
    documented: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)


class Orchestrator:
    """Coordinates configuration, source walking and rendering."""

    def __init__(self, *, keep_going: bool = False) -> None:
        self.keep_going = keep_going
        self.logger = get_logger("orchestrator")

    def run_build(
        self,
        path: str,
        *,
        config_path: Optional[Path] = None,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> BuildOutcome:
        """Document every configured source directory of the project at ``path``."""
        project_root = Path(path).expanduser().resolve()
        if not project_root.exists():
            raise FileNotFoundError(f"Project path not found: {path}")
        if not project_root.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {path}")

        config = load_config(config_path or project_root)
        if config_path is not None:
            config = replace(config, root=project_root)
        config = self._apply_overrides(config, overrides or {})

        sources = config.source_paths()
        for source in sources:
            if not source.is_dir():
                raise NotADirectoryError(f"Source directory not found: {source}")

        self.logger.info("Building docs for %s into %s", project_root, config.output_path)
        self.logger.debug(
            "Sources: %s; extensions: %s; workers: %d",
            ", ".join(str(source) for source in sources),
            ", ".join(config.extensions),
            config.workers,
        )

        indexer = DirectoryIndexer(config, keep_going=self.keep_going)
        index_path = indexer.document_directories(
            config.project_title, config.output_path, sources
        )
        return BuildOutcome(
            index_path=index_path,
            documented=list(indexer.stats.documented),
            skipped=list(indexer.stats.skipped),
            failed=list(indexer.stats.failed),
        )

    def render_file(
        self, path: str, *, title: Optional[str] = None, fence_language: Optional[str] = None
    ) -> Optional[str]:
        """Return the markdown for one source file, or None when it has no docs."""
        source = Path(path).expanduser()
        config = load_config(source.resolve().parent)
        with source.open("r", encoding="utf-8", errors="surrogateescape") as handle:
            document = extract_document(
                title or source.name,
                handle,
                fence_language=fence_language or config.fence_language,
            )
        if document is None:
            self.logger.debug("No documentation found in %s", source)
            return None
        return document.render()

    @staticmethod
    def _apply_overrides(config: AutodocConfig, overrides: Mapping[str, Any]) -> AutodocConfig:
        values = {key: value for key, value in overrides.items() if value not in (None, [], ())}
        if "extensions" in values:
            values["extensions"] = [
                ext if ext.startswith(".") else f".{ext}" for ext in values["extensions"]
            ]
        return replace(config, **values)


__all__ = ["BuildOutcome", "Orchestrator"]
