"""FastAPI application factory for the jobwire HTTP surface."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from jobwire.config import Config
from jobwire.state import PipelineState
from jobwire.web.models import ErrorResponse
from jobwire.web.routes import health_router, router


async def _http_error(request: Request, exc: HTTPException) -> JSONResponse:
    """Render every HTTP error as ``{"status": "error", "message": ...}``."""
    return JSONResponse(
        ErrorResponse(message=str(exc.detail)).model_dump(),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def create_app(
    config: Config,
    state: PipelineState | None = None,
    lifespan=None,
) -> FastAPI:
    """Build and return a configured FastAPI application."""
    app = FastAPI(title="jobwire", docs_url="/docs", lifespan=lifespan)
    app.state.config = config
    app.state.pipeline = state or PipelineState(config.concurrent_requests)
    app.add_exception_handler(HTTPException, _http_error)
    app.include_router(health_router)
    app.include_router(router)
    return app
