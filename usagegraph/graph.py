"""File-level dependency graph and circular import detection."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Sequence, Set, Tuple

from .logging import get_logger
from .models import DependencyEdge, DependencyGraph, RepoMap, coerce_repo_map
from .resolver import DEFAULT_EXTENSIONS, resolve_import_source

logger = get_logger("graph")


def get_dependency_graph(
    repo_map: RepoMap | Dict[str, Any] | None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> DependencyGraph:
    """Return every file as a node and one edge per resolved import.

    Repeated imports of the same target produce repeated edges.
    """
    repo = coerce_repo_map(repo_map)
    graph = DependencyGraph(nodes=repo.paths())
    for file_path, record in repo.files.items():
        for entry in record.imports:
            target = resolve_import_source(file_path, entry.source, repo, extensions)
            if target is not None:
                graph.edges.append(DependencyEdge(source=file_path, target=target))
    return graph


def find_circular_dependencies(
    repo_map: RepoMap | Dict[str, Any] | None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> List[List[str]]:
    """Return import cycles as file lists that start and end on the same file.

    A file importing itself yields ``[file, file]``.
    """
    return find_cycles(get_dependency_graph(repo_map, extensions))


def find_cycles(graph: DependencyGraph) -> List[List[str]]:
    """Return the cycles of an already built dependency graph."""
    return _CycleFinder(graph).run()


class _CycleFinder:
    """Depth-first search tracking visited nodes and the active path."""

    def __init__(self, graph: DependencyGraph) -> None:
        self._nodes = graph.nodes
        self._neighbours = graph.adjacency()
        self._visited: Set[str] = set()
        self._on_stack: Set[str] = set()
        self._path: List[str] = []
        self.cycles: List[List[str]] = []

    def run(self) -> List[List[str]]:
        for node in self._nodes:
            if node not in self._visited:
                self._visit(node)
        logger.debug("Found %d import cycles across %d files", len(self.cycles), len(self._nodes))
        return self.cycles

    def _visit(self, root: str) -> None:
        # Frames mirror ``_path``; each holds the node's remaining neighbours.
        frames: List[Tuple[str, Iterator[str]]] = [self._enter(root)]
        while frames:
            node, neighbours = frames[-1]
            for neighbour in neighbours:
                if neighbour not in self._visited:
                    frames.append(self._enter(neighbour))
                    break
                if neighbour in self._on_stack:
                    start = self._path.index(neighbour)
                    self.cycles.append(self._path[start:] + [neighbour])
            else:
                frames.pop()
                self._path.pop()
                self._on_stack.discard(node)

    def _enter(self, node: str) -> Tuple[str, Iterator[str]]:
        self._visited.add(node)
        self._on_stack.add(node)
        self._path.append(node)
        return node, iter(self._neighbours.get(node, []))


__all__ = ["find_circular_dependencies", "find_cycles", "get_dependency_graph"]
