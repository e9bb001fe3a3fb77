"""Cross-file usage and dependency analysis over precomputed repo maps.

    from usagegraph import build_usage_index, find_unused_exports

    index = build_usage_index(repo_map)
    for finding in find_unused_exports(repo_map, index):
        print(finding.file, finding.name, finding.certainty)
"""

from .analyzers import (
    Analyzer,
    discover_analyzers,
    find_orphaned_infrastructure,
    find_unused_exports,
    is_entry_point,
)
from .graph import find_circular_dependencies, find_cycles, get_dependency_graph
from .models import (
    DependencyEdge,
    DependencyGraph,
    Finding,
    RepoMap,
    RepoMapError,
    UsageIndex,
)
from .resolver import resolve_import_source
from .usage_index import build_usage_index, find_dependents, find_usages

__all__ = [
    "Analyzer",
    "DependencyEdge",
    "DependencyGraph",
    "Finding",
    "RepoMap",
    "RepoMapError",
    "UsageIndex",
    "build_usage_index",
    "discover_analyzers",
    "find_circular_dependencies",
    "find_cycles",
    "find_dependents",
    "find_orphaned_infrastructure",
    "find_unused_exports",
    "find_usages",
    "get_dependency_graph",
    "is_entry_point",
    "resolve_import_source",
]
