"""Helper utilities for constructing repo map payloads in tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

ImportSpec = Tuple[str, str, Optional[Sequence[str]]]


class RepoMapBuilder:
    """Accumulates file records and renders them as a scanner-style payload."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root
        self._files: Dict[str, Dict[str, Any]] = {}

    def file(
        self,
        path: str,
        *,
        exports: Iterable[str | Tuple[str, str]] = (),
        imports: Iterable[ImportSpec] = (),
        classes: Iterable[str] = (),
        functions: Iterable[str] = (),
        private: Iterable[str] = (),
    ) -> "RepoMapBuilder":
        """Add a file; ``imports`` are ``(source, kind, names)`` triples.

        Names listed in ``private`` are declared as non-exported classes or
        functions (whichever list they also appear in).
        """
        hidden = set(private)
        export_entries: List[Dict[str, Any]] = []
        for line, item in enumerate(exports, start=1):
            name, kind = (item, "function") if isinstance(item, str) else item
            export_entries.append({"name": name, "kind": kind, "line": line})
        symbols: Dict[str, Any] = {"exports": export_entries}
        if classes:
            symbols["classes"] = [
                {"name": name, "exported": name not in hidden, "line": line}
                for line, name in enumerate(classes, start=1)
            ]
        if functions:
            symbols["functions"] = [
                {"name": name, "exported": name not in hidden, "line": line}
                for line, name in enumerate(functions, start=1)
            ]
        import_entries = []
        for source, kind, names in imports:
            entry: Dict[str, Any] = {"source": source, "kind": kind}
            if names is not None:
                entry["names"] = list(names)
            import_entries.append(entry)
        self._files[path] = {"symbols": symbols, "imports": import_entries}
        return self

    def build(self) -> Dict[str, Any]:
        """Return the ``{"files": {...}}`` payload."""
        return {"files": json.loads(json.dumps(self._files))}

    def write(self, name: str = "repo-map.json") -> Path:
        """Write the payload under ``root`` and return its path."""
        if self.root is None:
            raise ValueError("RepoMapBuilder.write requires a root directory")
        target = self.root / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(self.build(), indent=2), encoding="utf-8")
        return target


__all__ = ["RepoMapBuilder"]
