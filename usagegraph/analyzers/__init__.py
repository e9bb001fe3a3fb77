"""Analyzer plugin implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import TYPE_CHECKING, Any, Callable, Iterable, List, Sequence, Set

from .base import Analyzer
from .orphaned import OrphanedInfrastructureAnalyzer, find_orphaned_infrastructure
from .unused_exports import UnusedExportAnalyzer, find_unused_exports, is_entry_point

if TYPE_CHECKING:
    from ..config import UsageGraphConfig

_ENTRY_POINT_GROUP = "usagegraph.analyzers"

_BUILTIN_ANALYZERS: dict[str, type[Analyzer]] = {
    UnusedExportAnalyzer.name: UnusedExportAnalyzer,
    OrphanedInfrastructureAnalyzer.name: OrphanedInfrastructureAnalyzer,
}


def discover_analyzers(
    enabled: Sequence[str] | None = None, config: UsageGraphConfig | None = None
) -> List[Analyzer]:
    """Return instantiated analyzers, honoring optional enabled names.

    Built-in analyzers are configured from ``config`` (a
    :class:`~usagegraph.config.UsageGraphConfig`) when one is given.
    """

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    analyzers: List[Analyzer] = []
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[[], Analyzer]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory()
        if not isinstance(instance, Analyzer):
            raise TypeError(f"Analyzer factory for '{name}' did not return an Analyzer instance")
        analyzers.append(instance)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, analyzer_cls in _BUILTIN_ANALYZERS.items():

        def _builtin(cls: Any = analyzer_cls) -> Analyzer:
            return cls.from_config(config) if config is not None else cls()

        _add(name, _builtin)

    for entry in _iter_entry_points():
        name = entry.name
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - defensive guard
            raise RuntimeError(f"Failed to load analyzer entry point '{name}': {exc}") from exc

        def _factory(obj: object = loaded) -> Analyzer:
            return _coerce_analyzer(obj)

        _add(name, _factory)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown analyzers requested: {missing}")

    return analyzers


def _coerce_analyzer(obj: object) -> Analyzer:
    if isinstance(obj, Analyzer):
        return obj
    if isinstance(obj, type) and issubclass(obj, Analyzer):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, Analyzer):
            return instance
    raise TypeError("Analyzer entry point must be an Analyzer subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "Analyzer",
    "OrphanedInfrastructureAnalyzer",
    "UnusedExportAnalyzer",
    "discover_analyzers",
    "find_orphaned_infrastructure",
    "find_unused_exports",
    "is_entry_point",
]
