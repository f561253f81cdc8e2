"""FastAPI application entrypoint for mdlink service mode."""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import Config, InvalidProfileNameError, load_config
from ..engine import Engine
from ..logging import get_logger

EngineFactory = Callable[[Optional[str]], Engine]

_LOGGER = get_logger("service")


class RenderRequest(BaseModel):
    urls: List[str] = Field(default_factory=list)
    profile: Optional[str] = None


class RenderResponse(BaseModel):
    lines: List[str]


class HealthResponse(BaseModel):
    status: str


def config_engine_factory(config: Config) -> EngineFactory:
    def _factory(profile: Optional[str]) -> Engine:
        return Engine(config, profile=profile)

    return _factory


def create_app(engine_factory: EngineFactory | None = None) -> FastAPI:
    """Create the FastAPI application exposing link rendering."""
    if engine_factory is None:
        engine_factory = config_engine_factory(load_config())
    factory = engine_factory

    app = FastAPI(title="mdlink service", version="0.2.5")

    async def get_engine_factory() -> EngineFactory:
        return factory

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/render", response_model=RenderResponse)
    async def render(
        payload: RenderRequest,
        make_engine: EngineFactory = Depends(get_engine_factory),
    ) -> RenderResponse:
        engine = make_engine(payload.profile)
        return RenderResponse(lines=list(engine.render_lines(payload.urls)))

    @app.exception_handler(InvalidProfileNameError)
    async def invalid_profile_handler(_: Any, exc: InvalidProfileNameError) -> JSONResponse:
        _LOGGER.warning("rejected render request: %s", exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    engine_factory: EngineFactory | None = None,
    *,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app(engine_factory)
    uvicorn.run(app, host=host, port=port)
