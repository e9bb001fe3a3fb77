"""Tests for usagegraph.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from usagegraph.analyzers.orphaned import DEFAULT_FACTORY_PREFIXES, DEFAULT_INFRASTRUCTURE_SUFFIXES
from usagegraph.analyzers.unused_exports import DEFAULT_ENTRY_POINT_NAMES
from usagegraph.config import ConfigError, UsageGraphConfig, load_config
from usagegraph.resolver import DEFAULT_EXTENSIONS


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, UsageGraphConfig)
    assert config.root == tmp_path.resolve()
    assert config.resolver.extensions == list(DEFAULT_EXTENSIONS)
    assert config.entry_points == list(DEFAULT_ENTRY_POINT_NAMES)
    assert config.infrastructure.suffixes == list(DEFAULT_INFRASTRUCTURE_SUFFIXES)
    assert config.infrastructure.factory_prefixes == list(DEFAULT_FACTORY_PREFIXES)
    assert config.analyzers.enabled is None
    assert config.analyzers.exclude_paths == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".usagegraph.yml"
    config_file.write_text(
        """
resolver:
  extensions: [".ts", "tsx", ".js"]
entry_points:
  - index
  - worker
infrastructure:
  suffixes: [Client, Worker]
  factory_prefixes:
    - create
    - spawn
analyzers:
  enabled: [unused-exports]
  exclude_paths:
    - "vendor/*"
    - "**/*.d.ts"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.resolver.extensions == [".ts", ".tsx", ".js"]
    assert config.entry_points == ["index", "worker"]
    assert config.infrastructure.suffixes == ["Client", "Worker"]
    assert config.infrastructure.factory_prefixes == ["create", "spawn"]
    assert config.analyzers.enabled == ["unused-exports"]
    assert config.analyzers.exclude_paths == ["vendor/*", "**/*.d.ts"]


def test_load_config_from_directory(tmp_path: Path) -> None:
    (tmp_path / ".usagegraph.yml").write_text("entry_points: [main]\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.entry_points == ["main"]
    assert config.resolver.extensions == list(DEFAULT_EXTENSIONS)


def test_wrong_types_fall_back_to_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / ".usagegraph.yml"
    config_file.write_text(
        "resolver: nope\ninfrastructure:\n  suffixes: 42\nentry_points: []\n",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.resolver.extensions == list(DEFAULT_EXTENSIONS)
    assert config.infrastructure.suffixes == list(DEFAULT_INFRASTRUCTURE_SUFFIXES)
    assert config.entry_points == list(DEFAULT_ENTRY_POINT_NAMES)


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / ".usagegraph.yml"
    config_file.write_text("\n", encoding="utf-8")

    assert load_config(config_file).entry_points == list(DEFAULT_ENTRY_POINT_NAMES)


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    config_file = tmp_path / ".usagegraph.yml"
    config_file.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(config_file)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    config_file = tmp_path / ".usagegraph.yml"
    config_file.write_text("resolver: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(config_file)
