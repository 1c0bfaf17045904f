"""Configuration loading for autodoc (.autodoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError
from .extraction.constants import DEFAULT_FENCE_LANGUAGE

CONFIG_FILENAME = ".autodoc.yml"

DEFAULT_EXTENSIONS = [".js"]
DEFAULT_SKIP_DIRS = ["tests"]
DEFAULT_OUTPUT = "docs"


@dataclass
class AutodocConfig:
    """Represents the settings defined in .autodoc.yml."""

    root: Path
    title: Optional[str] = None
    output: str = DEFAULT_OUTPUT
    sources: List[str] = field(default_factory=list)
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    skip_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_SKIP_DIRS))
    exclude_paths: List[str] = field(default_factory=list)
    fence_language: str = DEFAULT_FENCE_LANGUAGE
    workers: int = 1

    @property
    def project_title(self) -> str:
        return self.title or self.root.name or "docs"

    @property
    def output_path(self) -> Path:
        return self.root / self.output

    def source_paths(self) -> List[Path]:
        if not self.sources:
            return [self.root]
        return [self.root / source for source in self.sources]


def load_config(config_path: Path) -> AutodocConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AutodocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    config = AutodocConfig(root=root)
    config.title = _as_str(data.get("title"))
    config.output = _as_str(data.get("output")) or DEFAULT_OUTPUT
    config.sources = _as_str_list(data.get("sources"))

    extensions = _as_str_list(data.get("extensions"))
    if extensions:
        config.extensions = [_normalise_extension(ext) for ext in extensions]
    if "skip_dirs" in data:
        config.skip_dirs = _as_str_list(data.get("skip_dirs"))
    config.exclude_paths = _as_str_list(data.get("exclude_paths"))
    config.fence_language = _as_str(data.get("fence_language")) or DEFAULT_FENCE_LANGUAGE

    workers = _as_int(data.get("workers"))
    if workers is not None:
        if workers < 1:
            raise ConfigError("workers must be a positive integer")
        config.workers = workers

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _normalise_extension(extension: str) -> str:
    return extension if extension.startswith(".") else f".{extension}"


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    return []


__all__ = ["AutodocConfig", "CONFIG_FILENAME", "ConfigError", "load_config"]
