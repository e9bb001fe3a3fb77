"""CLI entrypoints for usagegraph commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from .analyzers import find_orphaned_infrastructure, find_unused_exports
from .config import ConfigError
from .graph import find_cycles, get_dependency_graph
from .logging import configure_logging
from .models import RepoMapError
from .orchestrator import Orchestrator
from .report import dumps, filter_excluded, findings_to_list
from .usage_index import find_dependents, find_usages


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting (includes engine counts).",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only log warnings, such as detected import cycles.",
    )


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    _add_logging_options(parser, suppress_default=True)
    parser.add_argument(
        "--repo-map",
        default=".",
        help="Path to repo-map.json or the directory holding it (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to .usagegraph.yml (defaults to the repo map's directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="usagegraph",
        description="Report unused exports, orphaned infrastructure and import cycles from a repo map.",
    )
    _add_logging_options(parser)
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs, including engine debug counts, to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    report_parser = subparsers.add_parser(
        "report",
        help="Run every analysis and print the combined JSON report.",
    )
    _add_common_options(report_parser)
    report_parser.add_argument(
        "--output",
        default=None,
        help="Write the report to this file instead of stdout.",
    )

    unused_parser = subparsers.add_parser(
        "unused",
        help="List exports that no other file imports.",
    )
    _add_common_options(unused_parser)

    orphans_parser = subparsers.add_parser(
        "orphans",
        help="List infrastructure classes and factory functions with no usage.",
    )
    _add_common_options(orphans_parser)

    cycles_parser = subparsers.add_parser(
        "cycles",
        help="List circular import chains.",
    )
    _add_common_options(cycles_parser)

    graph_parser = subparsers.add_parser(
        "graph",
        help="Print the file dependency graph.",
    )
    _add_common_options(graph_parser)

    usages_parser = subparsers.add_parser(
        "usages",
        help="List files importing a symbol by name.",
    )
    _add_common_options(usages_parser)
    usages_parser.add_argument("file", help="Repo map key of the file declaring the symbol.")
    usages_parser.add_argument("symbol", help="Exported symbol name.")

    dependents_parser = subparsers.add_parser(
        "dependents",
        help="List files importing anything from a file.",
    )
    _add_common_options(dependents_parser)
    dependents_parser.add_argument("file", help="Repo map key of the imported file.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing the analyses.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for usagegraph commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose and args.quiet:
        parser.error("--verbose and --quiet cannot be combined")
    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=log_file)

    if args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return

    orchestrator = Orchestrator()

    try:
        payload = _run_command(orchestrator, args)
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except (ConfigError, RepoMapError) as exc:
        parser.exit(1, f"usagegraph {args.command} failed: {exc}\n")
    except Exception as exc:  # pragma: no cover - defensive guard
        parser.exit(1, f"usagegraph {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    output = getattr(args, "output", None)
    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(dumps(payload) + "\n", encoding="utf-8")
        print(f"Report written to {_relativize(out_path)}")
    else:
        print(dumps(payload))


def _run_command(orchestrator: Orchestrator, args: argparse.Namespace) -> Any:
    if args.command == "report":
        return orchestrator.run(args.repo_map, args.config).to_dict()

    repo_map, config = orchestrator.load(args.repo_map, args.config)
    extensions = config.resolver.extensions

    if args.command == "graph":
        return get_dependency_graph(repo_map, extensions).to_dict()
    if args.command == "cycles":
        return find_cycles(get_dependency_graph(repo_map, extensions))

    index = orchestrator.build_index(repo_map, config)
    excluded = config.analyzers.exclude_paths
    if args.command == "unused":
        findings = find_unused_exports(repo_map, index, entry_point_names=config.entry_points)
        return findings_to_list(filter_excluded(findings, excluded))
    if args.command == "orphans":
        findings = find_orphaned_infrastructure(
            repo_map,
            index,
            suffixes=config.infrastructure.suffixes,
            factory_prefixes=config.infrastructure.factory_prefixes,
        )
        return findings_to_list(filter_excluded(findings, excluded))
    if args.command == "usages":
        return find_usages(index, args.file, args.symbol)
    if args.command == "dependents":
        return find_dependents(index, args.file)
    raise ValueError(f"Unknown command: {args.command}")  # pragma: no cover - argparse enforces choices


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
