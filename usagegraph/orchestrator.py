"""Pipeline orchestration for repo map analysis runs."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Sequence

from .analyzers import Analyzer, discover_analyzers
from .config import UsageGraphConfig, load_config
from .graph import find_cycles, get_dependency_graph
from .loader import load_repo_map, resolve_repo_map_path
from .logging import get_logger
from .models import RepoMap, UsageIndex
from .report import AnalysisReport, filter_excluded
from .usage_index import build_usage_index


class Orchestrator:
    """Loads a repo map and configuration, then runs every selected analysis."""

    def __init__(self, analyzers: Optional[Iterable[Analyzer]] = None) -> None:
        self._analyzer_overrides = list(analyzers) if analyzers is not None else None
        self.logger = get_logger("orchestrator")

    def load(
        self, repo_map_path: str | Path, config_path: str | Path | None = None
    ) -> tuple[RepoMap, UsageGraphConfig]:
        """Return the repo map at ``repo_map_path`` and its effective configuration."""
        map_file = resolve_repo_map_path(Path(repo_map_path))
        config = self._load_config(map_file, config_path)
        repo_map = load_repo_map(map_file)
        self.logger.debug("Repo map lists %d files", len(repo_map))
        return repo_map, config

    def build_index(self, repo_map: RepoMap, config: UsageGraphConfig) -> UsageIndex:
        return build_usage_index(repo_map, config.resolver.extensions)

    def run(
        self, repo_map_path: str | Path, config_path: str | Path | None = None
    ) -> AnalysisReport:
        """Analyze the repo map at ``repo_map_path`` and return the full report."""
        self.logger.info("Starting analysis of %s", repo_map_path)
        repo_map, config = self.load(repo_map_path, config_path)
        return self.analyze(repo_map, config)

    def analyze(self, repo_map: RepoMap, config: UsageGraphConfig) -> AnalysisReport:
        extensions = config.resolver.extensions
        index = self.build_index(repo_map, config)

        analyzers = self._select_analyzers(config)
        self.logger.debug("Selected %d analyzers", len(analyzers))

        report = AnalysisReport()
        for analyzer in analyzers:
            if not analyzer.supports(repo_map):
                self.logger.debug("Skipping analyzer %s", analyzer.name)
                continue
            self.logger.debug("Running analyzer %s", analyzer.name)
            findings = filter_excluded(
                analyzer.analyze(repo_map, index), config.analyzers.exclude_paths
            )
            report.findings[analyzer.name or analyzer.__class__.__name__] = findings

        report.graph = get_dependency_graph(repo_map, extensions)
        report.cycles = find_cycles(report.graph)
        if report.cycles:
            self.logger.warning("Detected %d circular import chains", len(report.cycles))

        self.logger.info(
            "Analysis complete: %d files, %d findings",
            len(repo_map),
            sum(len(items) for items in report.findings.values()),
        )
        return report

    def _load_config(
        self, map_file: Path, config_path: str | Path | None
    ) -> UsageGraphConfig:
        target = Path(config_path) if config_path is not None else map_file.parent
        return load_config(target)

    def _select_analyzers(self, config: UsageGraphConfig) -> Sequence[Analyzer]:
        if self._analyzer_overrides is not None:
            return list(self._analyzer_overrides)
        return discover_analyzers(config.analyzers.enabled, config)


__all__ = ["Orchestrator"]
