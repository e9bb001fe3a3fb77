"""Base classes for analyzer plugins."""

from abc import ABC, abstractmethod
from typing import Iterable

from ..models import Finding, RepoMap, UsageIndex


class Analyzer(ABC):
    """Contract for analyzers that emit findings from a repo map and its usage index."""

    name: str = ""

    def supports(self, repo_map: RepoMap) -> bool:
        """Return True when this analyzer should run for the repo map."""
        return bool(repo_map.files)

    @abstractmethod
    def analyze(self, repo_map: RepoMap, index: UsageIndex) -> Iterable[Finding]:
        """Produce findings for the reporting layer."""
