"""FastAPI application entrypoint for bindingdoc service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import BindingDocConfig, config_from_dict, load_config
from ..docstrings import parse_docstring, parse_native_doc
from ..models import DocModel
from ..orchestrator import Orchestrator
from ..serialization import from_dict, to_dict
from ..stores import ModelStore, ModelStoreError
from ..typemap import map_type


class HealthResponse(BaseModel):
    status: str


class ParseDocRequest(BaseModel):
    text: str = ""
    native: bool = False


class MapTypesRequest(BaseModel):
    types: List[str] = Field(default_factory=list)


class TypeMapping(BaseModel):
    native: str
    managed: str


class MapTypesResponse(BaseModel):
    mappings: List[TypeMapping]


class ResolveRequest(BaseModel):
    model: Optional[Dict[str, Any]] = None
    path: Optional[str] = None
    config: Optional[Dict[str, Any]] = None
    config_path: Optional[str] = None


OrchestratorFactory = Callable[[BindingDocConfig], Orchestrator]


def _default_orchestrator(config: BindingDocConfig) -> Orchestrator:
    return Orchestrator(config)


def _load_request_config(payload: ResolveRequest) -> BindingDocConfig:
    if payload.config is not None:
        return config_from_dict(payload.config, root=Path.cwd())
    return load_config(Path(payload.config_path or "."))


def _load_request_model(payload: ResolveRequest) -> DocModel:
    if payload.model is not None:
        try:
            return from_dict(DocModel, payload.model)
        except ValueError as exc:
            raise ModelStoreError(f"Invalid model payload: {exc}") from exc
    if payload.path:
        return ModelStore(Path(payload.path)).load()
    raise ModelStoreError("Either 'model' or 'path' is required")


def create_app(
    orchestrator_factory: OrchestratorFactory = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing bindingdoc operations."""

    app = FastAPI(title="bindingdoc Service", version="1.0.0")

    async def get_orchestrator_factory() -> OrchestratorFactory:
        return orchestrator_factory

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/docstrings/parse")
    async def parse_doc(payload: ParseDocRequest) -> Dict[str, Any]:
        parser = parse_native_doc if payload.native else parse_docstring
        return to_dict(parser(payload.text))

    @app.post("/types/map", response_model=MapTypesResponse)
    async def map_types(payload: MapTypesRequest) -> MapTypesResponse:
        return MapTypesResponse(
            mappings=[
                TypeMapping(native=native, managed=map_type(native))
                for native in payload.types
            ]
        )

    @app.post("/resolve")
    async def resolve(
        payload: ResolveRequest,
        factory: OrchestratorFactory = Depends(get_orchestrator_factory),
    ) -> Dict[str, Any]:
        def _run_resolve() -> Dict[str, Any]:
            config = _load_request_config(payload)
            model = _load_request_model(payload)
            resolved = factory(config).run(
                model.native_modules, model.managed_modules, metadata=model.metadata
            )
            return to_dict(resolved)

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _run_resolve)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
