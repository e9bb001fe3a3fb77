from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import pytest

from tests._fixtures.repo_map_builder import RepoMapBuilder


@pytest.fixture
def repo_map_builder(tmp_path: Path) -> RepoMapBuilder:
    """Provide a repo map builder that writes under the pytest tmp_path."""
    return RepoMapBuilder(tmp_path)


@pytest.fixture
def sample_repo_map() -> Dict[str, Any]:
    """A small project: shared utils, an API module, an app entry and infrastructure."""
    return (
        RepoMapBuilder()
        .file("src/utils.js", exports=["formatDate", "parseDate", "unusedHelper"])
        .file(
            "src/api.js",
            exports=["fetchData", ("ApiClient", "class")],
            imports=[("./utils", "named", ["formatDate"])],
        )
        .file(
            "src/app.js",
            imports=[
                ("./utils", "named", ["formatDate"]),
                ("./api", "named", ["fetchData", "ApiClient"]),
            ],
        )
        .file(
            "src/infrastructure/BaseService.js",
            exports=[("BaseService", "class")],
            classes=["BaseService"],
        )
        .file(
            "src/infrastructure/ServiceFactory.js",
            exports=["createService"],
            functions=["createService"],
            imports=[("./BaseService", "named", ["BaseService"])],
        )
        .build()
    )
