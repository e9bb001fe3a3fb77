"""Analyzer flagging exports that no other file imports."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from .base import Analyzer
from ..logging import get_logger
from ..models import LOW, MEDIUM, Finding, RepoMap, UsageIndex, coerce_repo_map
from ..resolver import DEFAULT_EXTENSIONS, module_stem
from ..usage_index import build_usage_index, is_file_imported, is_symbol_used

DEFAULT_ENTRY_POINT_NAMES: tuple[str, ...] = ("index", "main", "app", "server", "cli", "bin")

logger = get_logger("analyzers.unused_exports")


def is_entry_point(
    file_path: str, entry_point_names: Sequence[str] = DEFAULT_ENTRY_POINT_NAMES
) -> bool:
    """Return True when the file's base name marks it as externally invoked."""
    names = {name.lower() for name in entry_point_names}
    return module_stem(file_path).lower() in names


def find_unused_exports(
    repo_map: RepoMap | Dict[str, Any] | None,
    usage_index: Optional[UsageIndex] = None,
    *,
    entry_point_names: Sequence[str] = DEFAULT_ENTRY_POINT_NAMES,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> List[Finding]:
    """Return exports with no symbol-level importer.

    Exports of a file nothing imports are graded MEDIUM. Exports of a file
    that is imported for other symbols (or through a namespace import) are
    graded LOW. Entry-point files are skipped entirely.
    """
    repo = coerce_repo_map(repo_map)
    if not repo.files:
        return []
    index = usage_index if usage_index is not None else build_usage_index(repo, extensions)

    findings: List[Finding] = []
    for file_path, record in repo.files.items():
        if not record.exports or is_entry_point(file_path, entry_point_names):
            continue
        certainty = LOW if is_file_imported(index, file_path) else MEDIUM
        for export in record.exports:
            if is_symbol_used(index, file_path, export.name):
                continue
            findings.append(
                Finding(
                    file=file_path,
                    name=export.name,
                    line=export.line,
                    kind=export.kind or "export",
                    certainty=certainty,
                )
            )

    logger.debug("Found %d unused exports", len(findings))
    return findings


class UnusedExportAnalyzer(Analyzer):
    """Flags exported symbols that are never imported by name."""

    name = "unused-exports"

    def __init__(self, entry_point_names: Sequence[str] = DEFAULT_ENTRY_POINT_NAMES) -> None:
        self.entry_point_names = tuple(entry_point_names)

    @classmethod
    def from_config(cls, config: Any) -> "UnusedExportAnalyzer":
        return cls(entry_point_names=config.entry_points)

    def analyze(self, repo_map: RepoMap, index: UsageIndex) -> Iterable[Finding]:
        return find_unused_exports(
            repo_map, index, entry_point_names=self.entry_point_names
        )


__all__ = [
    "DEFAULT_ENTRY_POINT_NAMES",
    "UnusedExportAnalyzer",
    "find_unused_exports",
    "is_entry_point",
]
