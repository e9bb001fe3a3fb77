"""Aggregated analysis results and their JSON encoding."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from typing import Any, Dict, Iterable, List, Sequence

from .models import CERTAINTY_LEVELS, DependencyGraph, Finding


@dataclass
class AnalysisReport:
    """Findings, graph and cycles computed from one repo map snapshot."""

    findings: Dict[str, List[Finding]] = field(default_factory=dict)
    cycles: List[List[str]] = field(default_factory=list)
    graph: DependencyGraph = field(default_factory=DependencyGraph)

    @property
    def unused_exports(self) -> List[Finding]:
        return self.findings.get("unused-exports", [])

    @property
    def orphaned_infrastructure(self) -> List[Finding]:
        return self.findings.get("orphaned-infrastructure", [])

    def summary(self) -> Dict[str, Any]:
        by_certainty = {level: 0 for level in CERTAINTY_LEVELS}
        for findings in self.findings.values():
            for finding in findings:
                by_certainty[finding.certainty] = by_certainty.get(finding.certainty, 0) + 1
        return {
            "files": len(self.graph.nodes),
            "edges": len(self.graph.edges),
            "cycles": len(self.cycles),
            "findings": {name: len(items) for name, items in self.findings.items()},
            "by_certainty": by_certainty,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary(),
            "findings": {
                name: findings_to_list(items) for name, items in self.findings.items()
            },
            "cycles": [list(cycle) for cycle in self.cycles],
            "graph": self.graph.to_dict(),
        }


def findings_to_list(findings: Iterable[Finding]) -> List[Dict[str, Any]]:
    return [finding.to_dict() for finding in findings]


def filter_excluded(findings: Iterable[Finding], patterns: Sequence[str]) -> List[Finding]:
    """Drop findings whose file matches one of the glob ``patterns``."""
    if not patterns:
        return list(findings)
    return [
        finding
        for finding in findings
        if not any(fnmatchcase(finding.file, pattern) for pattern in patterns)
    ]


def dumps(payload: Any) -> str:
    return json.dumps(payload, indent=2)


__all__ = ["AnalysisReport", "dumps", "filter_excluded", "findings_to_list"]
