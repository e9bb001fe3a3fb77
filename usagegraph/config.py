"""Configuration loading for usagegraph (.usagegraph.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .analyzers.orphaned import DEFAULT_FACTORY_PREFIXES, DEFAULT_INFRASTRUCTURE_SUFFIXES
from .analyzers.unused_exports import DEFAULT_ENTRY_POINT_NAMES
from .resolver import DEFAULT_EXTENSIONS

CONFIG_FILENAME = ".usagegraph.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ResolverConfig:
    """Extension probing order for relative imports."""

    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))


@dataclass
class InfrastructureConfig:
    """Naming conventions that mark infrastructure classes and factories."""

    suffixes: List[str] = field(default_factory=lambda: list(DEFAULT_INFRASTRUCTURE_SUFFIXES))
    factory_prefixes: List[str] = field(default_factory=lambda: list(DEFAULT_FACTORY_PREFIXES))


@dataclass
class AnalyzerConfig:
    """Analyzer enablement and exclusions."""

    enabled: Optional[List[str]] = None
    exclude_paths: List[str] = field(default_factory=list)


@dataclass
class UsageGraphConfig:
    """Represents the settings defined in .usagegraph.yml."""

    root: Path
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    entry_points: List[str] = field(default_factory=lambda: list(DEFAULT_ENTRY_POINT_NAMES))
    infrastructure: InfrastructureConfig = field(default_factory=InfrastructureConfig)
    analyzers: AnalyzerConfig = field(default_factory=AnalyzerConfig)


def load_config(config_path: Path) -> UsageGraphConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return UsageGraphConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = UsageGraphConfig(root=root)

    resolver_data = _as_dict(data.get("resolver"))
    extensions = _as_str_list(resolver_data.get("extensions"))
    if extensions:
        config.resolver.extensions = [_as_extension(ext) for ext in extensions]

    entry_points = _as_str_list(data.get("entry_points"))
    if entry_points:
        config.entry_points = entry_points

    infra_data = _as_dict(data.get("infrastructure"))
    suffixes = _as_str_list(infra_data.get("suffixes"))
    if suffixes:
        config.infrastructure.suffixes = suffixes
    prefixes = _as_str_list(infra_data.get("factory_prefixes"))
    if prefixes:
        config.infrastructure.factory_prefixes = prefixes

    analyzer_data = _as_dict(data.get("analyzers"))
    if "enabled" in analyzer_data and analyzer_data.get("enabled") is not None:
        config.analyzers.enabled = _as_str_list(analyzer_data.get("enabled"))
    config.analyzers.exclude_paths = _as_str_list(analyzer_data.get("exclude_paths"))

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_extension(value: str) -> str:
    return value if value.startswith(".") else f".{value}"


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float)) and not isinstance(item, bool)]
    return []


__all__ = [
    "AnalyzerConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "InfrastructureConfig",
    "ResolverConfig",
    "UsageGraphConfig",
    "load_config",
]
