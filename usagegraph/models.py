"""Core data models shared across usagegraph components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

HIGH = "HIGH"
MEDIUM = "MEDIUM"
LOW = "LOW"

CERTAINTY_LEVELS = (HIGH, MEDIUM, LOW)

INFRASTRUCTURE = "infrastructure"
FACTORY = "factory"

NAMED = "named"
DEFAULT = "default"
NAMESPACE = "namespace"

# Older scanners emit "import" for plain named imports.
NAMED_IMPORT_KINDS = frozenset({NAMED, "import"})


class RepoMapError(ValueError):
    """Raised when a repo map payload has an invalid shape."""


@dataclass
class ExportEntry:
    """A symbol listed in a file's export table."""

    name: str
    kind: Optional[str] = None
    line: Optional[int] = None


@dataclass
class SymbolEntry:
    """A class or function declared in a file."""

    name: str
    exported: bool = False
    line: Optional[int] = None


@dataclass
class ImportEntry:
    """A single import statement recorded by the scanner."""

    source: str
    kind: Optional[str] = None
    names: Optional[List[str]] = None


@dataclass
class FileRecord:
    """Exports, declarations and imports of one source file."""

    exports: List[ExportEntry] = field(default_factory=list)
    classes: List[SymbolEntry] = field(default_factory=list)
    functions: List[SymbolEntry] = field(default_factory=list)
    imports: List[ImportEntry] = field(default_factory=list)

    def export_names(self) -> Set[str]:
        return {entry.name for entry in self.exports}

    @classmethod
    def from_dict(cls, payload: Any) -> "FileRecord":
        data = _as_dict(payload)
        symbols = _as_dict(data.get("symbols"))
        return cls(
            exports=[
                entry
                for entry in (_export_from_dict(item) for item in _as_list(symbols.get("exports")))
                if entry is not None
            ],
            classes=_symbols_from_list(symbols.get("classes")),
            functions=_symbols_from_list(symbols.get("functions")),
            imports=[
                entry
                for entry in (_import_from_dict(item) for item in _as_list(data.get("imports")))
                if entry is not None
            ],
        )


@dataclass
class RepoMap:
    """Per-file export/import facts produced by an upstream scanner."""

    files: Dict[str, FileRecord] = field(default_factory=dict)

    def __contains__(self, path: object) -> bool:
        return path in self.files

    def __len__(self) -> int:
        return len(self.files)

    def paths(self) -> List[str]:
        return list(self.files)

    @classmethod
    def from_dict(cls, payload: Any) -> "RepoMap":
        """Coerce a raw ``{"files": {...}}`` mapping into typed records.

        Missing or empty fields degrade to empty collections. Only a payload
        that is not a mapping at all (or a non-mapping ``files`` value) is
        rejected with :class:`RepoMapError`.
        """
        if payload is None:
            return cls()
        if isinstance(payload, RepoMap):
            return payload
        if not isinstance(payload, Mapping):
            raise RepoMapError(
                f"Repo map must be a mapping, got {type(payload).__name__}"
            )
        files = payload.get("files")
        if files is None:
            return cls()
        if not isinstance(files, Mapping):
            raise RepoMapError(
                f"Repo map 'files' must be a mapping, got {type(files).__name__}"
            )
        records: Dict[str, FileRecord] = {}
        for path, record in files.items():
            if not isinstance(path, str) or not path:
                continue
            records[path] = FileRecord.from_dict(record)
        return cls(files=records)


def coerce_repo_map(value: Any) -> RepoMap:
    """Return ``value`` as a :class:`RepoMap`, accepting raw payloads."""
    return RepoMap.from_dict(value)


@dataclass
class UsageIndex:
    """Reverse lookups of who imports what, derived from a repo map."""

    by_symbol: Dict[str, Set[str]] = field(default_factory=dict)
    by_file: Dict[str, Set[str]] = field(default_factory=dict)
    exports_by_file: Dict[str, Set[str]] = field(default_factory=dict)

    @staticmethod
    def symbol_key(file_path: str, name: str) -> str:
        return f"{file_path}:{name}"

    def symbol_importers(self, file_path: str, name: str) -> Set[str]:
        return self.by_symbol.get(self.symbol_key(file_path, name), set())

    def file_dependents(self, file_path: str) -> Set[str]:
        return self.by_file.get(file_path, set())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bySymbol": _sorted_sets(self.by_symbol),
            "byFile": _sorted_sets(self.by_file),
            "exportsByFile": _sorted_sets(self.exports_by_file),
        }


@dataclass(frozen=True)
class DependencyEdge:
    """Directed file-to-file edge for one resolved import."""

    source: str
    target: str

    def to_dict(self) -> Dict[str, str]:
        return {"from": self.source, "to": self.target}


@dataclass
class DependencyGraph:
    """Files and their resolved import edges."""

    nodes: List[str] = field(default_factory=list)
    edges: List[DependencyEdge] = field(default_factory=list)

    def adjacency(self) -> Dict[str, List[str]]:
        """Return outgoing neighbours per node, in edge order."""
        neighbours: Dict[str, List[str]] = {node: [] for node in self.nodes}
        for edge in self.edges:
            neighbours.setdefault(edge.source, []).append(edge.target)
        return neighbours

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": list(self.nodes),
            "edges": [edge.to_dict() for edge in self.edges],
        }


@dataclass
class Finding:
    """An unused export or orphaned infrastructure item."""

    file: str
    name: str
    line: Optional[int]
    kind: str
    certainty: str
    type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "file": self.file,
            "name": self.name,
            "line": self.line,
            "kind": self.kind,
            "certainty": self.certainty,
        }
        if self.type is not None:
            data["type"] = self.type
        return data


def _export_from_dict(payload: Any) -> Optional[ExportEntry]:
    data = _as_dict(payload)
    name = data.get("name")
    if not isinstance(name, str) or not name:
        return None
    kind = data.get("kind")
    return ExportEntry(
        name=name,
        kind=kind if isinstance(kind, str) and kind else None,
        line=_as_line(data.get("line")),
    )


def _symbols_from_list(value: Any) -> List[SymbolEntry]:
    entries: List[SymbolEntry] = []
    for item in _as_list(value):
        data = _as_dict(item)
        name = data.get("name")
        if not isinstance(name, str) or not name:
            continue
        entries.append(
            SymbolEntry(
                name=name,
                # Only a literal ``true`` counts; scanners sometimes emit "yes"/1.
                exported=data.get("exported") is True,
                line=_as_line(data.get("line")),
            )
        )
    return entries


def _import_from_dict(payload: Any) -> Optional[ImportEntry]:
    data = _as_dict(payload)
    source = data.get("source")
    if not isinstance(source, str) or not source:
        return None
    kind = data.get("kind")
    names = data.get("names")
    return ImportEntry(
        source=source,
        kind=kind if isinstance(kind, str) else None,
        names=[str(name) for name in names if isinstance(name, str)]
        if isinstance(names, list)
        else None,
    )


def _as_dict(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _as_line(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    return value if isinstance(value, int) else None


def _sorted_sets(mapping: Mapping[str, Iterable[str]]) -> Dict[str, List[str]]:
    return {key: sorted(values) for key, values in sorted(mapping.items())}


__all__ = [
    "CERTAINTY_LEVELS",
    "DEFAULT",
    "DependencyEdge",
    "DependencyGraph",
    "ExportEntry",
    "FACTORY",
    "FileRecord",
    "Finding",
    "HIGH",
    "INFRASTRUCTURE",
    "ImportEntry",
    "LOW",
    "MEDIUM",
    "NAMED",
    "NAMED_IMPORT_KINDS",
    "NAMESPACE",
    "RepoMap",
    "RepoMapError",
    "SymbolEntry",
    "UsageIndex",
    "coerce_repo_map",
]
