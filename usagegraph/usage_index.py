"""Reverse indexes of symbol and file usage built from a repo map."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .logging import get_logger
from .models import (
    DEFAULT,
    NAMED_IMPORT_KINDS,
    ImportEntry,
    RepoMap,
    UsageIndex,
    coerce_repo_map,
)
from .resolver import DEFAULT_EXTENSIONS, module_stem, resolve_import_source

logger = get_logger("usage_index")


def build_usage_index(
    repo_map: RepoMap | Dict[str, Any] | None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> UsageIndex:
    """Build ``by_symbol``, ``by_file`` and ``exports_by_file`` lookups.

    Export names are registered for every file before any import is
    resolved. Each resolved import adds the importer to ``by_file`` of its
    target; named imports additionally record one ``by_symbol`` entry per
    bound name. Default imports are tracked under the target's base name,
    which is only an approximation of the real binding. Namespace imports
    stay file-level.
    """
    repo = coerce_repo_map(repo_map)
    index = UsageIndex()
    if not repo.files:
        return index

    for file_path, record in repo.files.items():
        index.exports_by_file[file_path] = record.export_names()

    unresolved = 0
    for importer_path, record in repo.files.items():
        for entry in record.imports:
            target = resolve_import_source(importer_path, entry.source, repo, extensions)
            if target is None:
                unresolved += 1
                continue

            index.by_file.setdefault(target, set()).add(importer_path)

            for name in _imported_names(entry, target):
                key = UsageIndex.symbol_key(target, name)
                index.by_symbol.setdefault(key, set()).add(importer_path)

    logger.debug(
        "Indexed %d files: %d symbol keys, %d imported files, %d unresolved imports",
        len(repo.files),
        len(index.by_symbol),
        len(index.by_file),
        unresolved,
    )
    return index


def _imported_names(entry: ImportEntry, target: str) -> List[str]:
    if entry.kind in NAMED_IMPORT_KINDS:
        return list(entry.names or [])
    if entry.kind == DEFAULT:
        return [module_stem(target)]
    return []


def find_usages(index: UsageIndex, file_path: str, symbol_name: str) -> List[str]:
    """Return the files importing ``symbol_name`` from ``file_path``."""
    return sorted(index.symbol_importers(file_path, symbol_name))


def find_dependents(index: UsageIndex, file_path: str) -> List[str]:
    """Return the files importing anything from ``file_path``."""
    return sorted(index.file_dependents(file_path))


def is_file_imported(index: UsageIndex, file_path: str) -> bool:
    return bool(index.file_dependents(file_path))


def is_symbol_used(index: UsageIndex, file_path: str, symbol_name: str) -> bool:
    return bool(index.symbol_importers(file_path, symbol_name))


__all__ = [
    "build_usage_index",
    "find_dependents",
    "find_usages",
    "is_file_imported",
    "is_symbol_used",
]
