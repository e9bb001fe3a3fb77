"""Analyzer for infrastructure classes and factories that nothing uses."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Pattern, Sequence

from .base import Analyzer
from ..logging import get_logger
from ..models import (
    FACTORY,
    HIGH,
    INFRASTRUCTURE,
    Finding,
    RepoMap,
    SymbolEntry,
    UsageIndex,
    coerce_repo_map,
)
from ..resolver import DEFAULT_EXTENSIONS
from ..usage_index import build_usage_index, is_file_imported, is_symbol_used

DEFAULT_INFRASTRUCTURE_SUFFIXES: tuple[str, ...] = (
    "Client",
    "Connection",
    "Pool",
    "Service",
    "Provider",
    "Manager",
    "Factory",
    "Repository",
    "Gateway",
    "Adapter",
    "Handler",
    "Broker",
    "Queue",
    "Cache",
    "Store",
    "Transport",
    "Channel",
    "Socket",
    "Server",
    "Database",
)

DEFAULT_FACTORY_PREFIXES: tuple[str, ...] = (
    "create",
    "make",
    "build",
    "new",
    "init",
    "setup",
    "connect",
)

logger = get_logger("analyzers.orphaned")


def infrastructure_pattern(suffixes: Sequence[str]) -> Pattern[str]:
    """Match class names ending in one of ``suffixes``."""
    return re.compile("(?:" + "|".join(re.escape(s) for s in suffixes) + ")$")


def factory_pattern(prefixes: Sequence[str]) -> Pattern[str]:
    """Match ``createFoo`` style names; the letter after the prefix must be uppercase."""
    return re.compile("^(?:" + "|".join(re.escape(p) for p in prefixes) + ")[A-Z]")


def find_orphaned_infrastructure(
    repo_map: RepoMap | Dict[str, Any] | None,
    usage_index: Optional[UsageIndex] = None,
    *,
    suffixes: Sequence[str] = DEFAULT_INFRASTRUCTURE_SUFFIXES,
    factory_prefixes: Sequence[str] = DEFAULT_FACTORY_PREFIXES,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> List[Finding]:
    """Return exported infrastructure classes and factory functions with no usage.

    An item is orphaned only when neither the symbol nor its file has any
    importer, so a namespace import of the file is enough to keep it.
    """
    repo = coerce_repo_map(repo_map)
    if not repo.files:
        return []
    index = usage_index if usage_index is not None else build_usage_index(repo, extensions)

    class_matcher = infrastructure_pattern(suffixes) if suffixes else None
    function_matcher = factory_pattern(factory_prefixes) if factory_prefixes else None

    orphaned: List[Finding] = []
    for file_path, record in repo.files.items():
        if class_matcher is not None:
            orphaned.extend(
                _orphans(index, file_path, record.classes, class_matcher, "class", INFRASTRUCTURE)
            )
        if function_matcher is not None:
            orphaned.extend(
                _orphans(index, file_path, record.functions, function_matcher, "function", FACTORY)
            )

    logger.debug("Found %d orphaned infrastructure items", len(orphaned))
    return orphaned


def _orphans(
    index: UsageIndex,
    file_path: str,
    symbols: Iterable[SymbolEntry],
    matcher: Pattern[str],
    kind: str,
    finding_type: str,
) -> Iterable[Finding]:
    for symbol in symbols:
        if not matcher.search(symbol.name) or not symbol.exported:
            continue
        if is_symbol_used(index, file_path, symbol.name) or is_file_imported(index, file_path):
            continue
        yield Finding(
            file=file_path,
            name=symbol.name,
            line=symbol.line,
            kind=kind,
            type=finding_type,
            certainty=HIGH,
        )


class OrphanedInfrastructureAnalyzer(Analyzer):
    """Flags exported clients, services, factories and similar that are never imported."""

    name = "orphaned-infrastructure"

    def __init__(
        self,
        suffixes: Sequence[str] = DEFAULT_INFRASTRUCTURE_SUFFIXES,
        factory_prefixes: Sequence[str] = DEFAULT_FACTORY_PREFIXES,
    ) -> None:
        self.suffixes = tuple(suffixes)
        self.factory_prefixes = tuple(factory_prefixes)

    @classmethod
    def from_config(cls, config: Any) -> "OrphanedInfrastructureAnalyzer":
        return cls(
            suffixes=config.infrastructure.suffixes,
            factory_prefixes=config.infrastructure.factory_prefixes,
        )

    def supports(self, repo_map: RepoMap) -> bool:
        return any(record.classes or record.functions for record in repo_map.files.values())

    def analyze(self, repo_map: RepoMap, index: UsageIndex) -> Iterable[Finding]:
        return find_orphaned_infrastructure(
            repo_map,
            index,
            suffixes=self.suffixes,
            factory_prefixes=self.factory_prefixes,
        )


__all__ = [
    "DEFAULT_FACTORY_PREFIXES",
    "DEFAULT_INFRASTRUCTURE_SUFFIXES",
    "OrphanedInfrastructureAnalyzer",
    "factory_pattern",
    "find_orphaned_infrastructure",
    "infrastructure_pattern",
]
