"""FastAPI application entrypoint for usagegraph service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ConfigError, UsageGraphConfig, load_config
from ..models import RepoMap, RepoMapError
from ..orchestrator import Orchestrator
from ..usage_index import find_dependents, find_usages

_T = TypeVar("_T")


class AnalyzeRequest(BaseModel):
    repo_map: Dict[str, Any]
    config_path: Optional[str] = None


class RunRequest(BaseModel):
    path: str
    config_path: Optional[str] = None


class UsagesRequest(BaseModel):
    repo_map: Dict[str, Any]
    file: str
    symbol: Optional[str] = None


class UsagesResponse(BaseModel):
    file: str
    symbol: Optional[str] = None
    importers: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing usagegraph analyses."""

    app = FastAPI(title="UsageGraph Service", version="0.1.0")

    async def get_orchestrator() -> Orchestrator:
        # Lazy-instantiate per request to keep state predictable.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze")
    async def analyze(
        payload: AnalyzeRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Dict[str, Any]:
        def _run() -> Dict[str, Any]:
            repo_map = RepoMap.from_dict(payload.repo_map)
            config = _request_config(payload.config_path)
            return orchestrator.analyze(repo_map, config).to_dict()

        return await _in_executor(_run)

    @app.post("/run")
    async def run(
        payload: RunRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Dict[str, Any]:
        def _run() -> Dict[str, Any]:
            return orchestrator.run(payload.path, payload.config_path).to_dict()

        return await _in_executor(_run)

    @app.post("/usages", response_model=UsagesResponse)
    async def usages(
        payload: UsagesRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> UsagesResponse:
        def _run() -> UsagesResponse:
            repo_map = RepoMap.from_dict(payload.repo_map)
            index = orchestrator.build_index(repo_map, UsageGraphConfig(root=Path.cwd()))
            if payload.symbol:
                importers = find_usages(index, payload.file, payload.symbol)
            else:
                importers = find_dependents(index, payload.file)
            return UsagesResponse(file=payload.file, symbol=payload.symbol, importers=importers)

        return await _in_executor(_run)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(RepoMapError)
    async def repo_map_error_handler(_: Any, exc: RepoMapError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(
        _: Any, exc: ConfigError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def _request_config(config_path: Optional[str]) -> UsageGraphConfig:
    if config_path is None:
        return UsageGraphConfig(root=Path.cwd())
    return load_config(Path(config_path))


async def _in_executor(func: Callable[[], _T]) -> _T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func)


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
