"""Load repo maps written by the upstream scanner."""

from __future__ import annotations

import json
from pathlib import Path

from .logging import get_logger
from .models import RepoMap, RepoMapError

REPO_MAP_FILENAME = "repo-map.json"

logger = get_logger("loader")


def resolve_repo_map_path(path: Path) -> Path:
    path = path.expanduser()
    if path.is_dir():
        return (path / REPO_MAP_FILENAME).resolve()
    return path.resolve()


def load_repo_map(path: Path) -> RepoMap:
    """Read and coerce a repo map JSON file (or ``repo-map.json`` inside a directory)."""
    map_file = resolve_repo_map_path(Path(path))
    if not map_file.exists():
        raise FileNotFoundError(f"Repo map not found at {map_file}")

    try:
        payload = json.loads(map_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RepoMapError(f"Failed to parse {map_file.name}: {exc}") from exc

    repo_map = RepoMap.from_dict(payload)
    logger.debug("Loaded repo map with %d files from %s", len(repo_map), map_file)
    return repo_map


__all__ = ["REPO_MAP_FILENAME", "load_repo_map", "resolve_repo_map_path"]
