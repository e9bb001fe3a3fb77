"""Tests for usagegraph logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.repo_map_builder import RepoMapBuilder
from usagegraph.graph import find_circular_dependencies
from usagegraph.logging import configure_logging, get_logger, resolve_level


@pytest.fixture(autouse=True)
def _restore_logger() -> Iterator[None]:
    logger = logging.getLogger("usagegraph")
    level, propagate, handlers = logger.level, logger.propagate, list(logger.handlers)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


def _cyclic_map():
    return (
        RepoMapBuilder()
        .file("a.js", imports=[("./b", "named", ["b"])])
        .file("b.js", imports=[("./a", "named", ["a"])])
        .build()
    )


def test_resolve_level() -> None:
    assert resolve_level() == logging.INFO
    assert resolve_level(verbose=True) == logging.DEBUG
    assert resolve_level(quiet=True) == logging.WARNING
    with pytest.raises(ValueError):
        resolve_level(verbose=True, quiet=True)


def test_get_logger_nests_under_package_logger() -> None:
    assert get_logger().name == "usagegraph"
    assert get_logger("graph").name == "usagegraph.graph"


def test_engine_counts_only_shown_when_verbose(capsys) -> None:
    configure_logging()
    find_circular_dependencies(_cyclic_map())
    assert "import cycles" not in capsys.readouterr().err

    configure_logging(verbose=True)
    find_circular_dependencies(_cyclic_map())
    assert "[usagegraph.graph] DEBUG Found 1 import cycles across 2 files" in capsys.readouterr().err


def test_quiet_drops_info_but_keeps_warnings(capsys) -> None:
    logger = configure_logging(quiet=True)

    logger.info("progress")
    logger.warning("Detected 1 circular import chains")

    err = capsys.readouterr().err
    assert "progress" not in err
    assert "[usagegraph] WARNING Detected 1 circular import chains" in err


def test_log_file_records_engine_counts(tmp_path: Path, capsys) -> None:
    log_file = tmp_path / "usagegraph.log"
    configure_logging(quiet=True, log_file=log_file)

    find_circular_dependencies(_cyclic_map())

    assert "import cycles" not in capsys.readouterr().err
    assert "usagegraph.graph: Found 1 import cycles" in log_file.read_text(encoding="utf-8")


def test_reconfiguring_replaces_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert len(logger.handlers) == 1
    assert logger.propagate is False
