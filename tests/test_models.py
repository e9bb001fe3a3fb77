"""Tests for usagegraph.models."""

from __future__ import annotations

import pytest

from usagegraph.models import FileRecord, Finding, RepoMap, RepoMapError


def test_from_dict_coerces_records() -> None:
    repo_map = RepoMap.from_dict(
        {
            "files": {
                "a.js": {
                    "symbols": {
                        "exports": [{"name": "A", "kind": "class", "line": 3}],
                        "classes": [{"name": "A", "exported": True, "line": 3}],
                        "functions": [{"name": "helper", "exported": False}],
                    },
                    "imports": [{"source": "./b", "kind": "named", "names": ["B"]}],
                }
            }
        }
    )

    record = repo_map.files["a.js"]
    assert record.export_names() == {"A"}
    assert record.classes[0].exported is True
    assert record.functions[0].exported is False
    assert record.imports[0].source == "./b"
    assert record.imports[0].names == ["B"]
    assert "a.js" in repo_map
    assert len(repo_map) == 1


def test_from_dict_tolerates_missing_and_malformed_fields() -> None:
    record = FileRecord.from_dict(
        {
            "symbols": {
                "exports": [{"kind": "function"}, "oops", {"name": "ok", "line": True}],
                "classes": None,
            },
            "imports": [{"kind": "named"}, {"source": "", "kind": "named"}, {"source": "./x", "names": "y"}],
        }
    )

    assert [entry.name for entry in record.exports] == ["ok"]
    assert record.exports[0].line is None
    assert record.classes == []
    assert len(record.imports) == 1
    assert record.imports[0].kind is None
    assert record.imports[0].names is None


@pytest.mark.parametrize("payload", [None, {}, {"files": None}])
def test_from_dict_empty(payload) -> None:
    assert RepoMap.from_dict(payload).files == {}


@pytest.mark.parametrize("payload", [[], "files", 3, {"files": ["a.js"]}])
def test_from_dict_rejects_invalid_shapes(payload) -> None:
    with pytest.raises(RepoMapError):
        RepoMap.from_dict(payload)


def test_finding_to_dict_omits_missing_type() -> None:
    finding = Finding(file="a.js", name="x", line=None, kind="export", certainty="LOW")

    assert finding.to_dict() == {
        "file": "a.js",
        "name": "x",
        "line": None,
        "kind": "export",
        "certainty": "LOW",
    }
    finding.type = "factory"
    assert finding.to_dict()["type"] == "factory"
