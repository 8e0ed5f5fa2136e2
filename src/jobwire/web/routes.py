"""API route handlers for the jobwire HTTP surface."""

from __future__ import annotations

import hmac
import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from jobwire.jobs import run_pipeline
from jobwire.web.models import (
    CheckJobsResponse,
    ErrorResponse,
    HealthResponse,
    JobsPayload,
    LastJobsPayload,
    LastJobsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()
health_router = APIRouter()


def require_secret(
    request: Request,
    secret: str | None = Query(None),
    x_middleware_secret: str | None = Header(None),
) -> None:
    """Reject the request unless it carries the configured shared secret.

    The secret may come from the ``secret`` query parameter or the
    ``x-middleware-secret`` header. No secret configured means open access.
    """
    expected = request.app.state.config.middleware_secret
    if not expected:
        return
    provided = secret or x_middleware_secret or ""
    if not hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("Rejected unauthorized request to %s", request.url.path)
        raise HTTPException(status_code=401, detail="Unauthorized")


@health_router.get("/_health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(ok=True)


@router.get(
    "/check-jobs",
    response_model=CheckJobsResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    dependencies=[Depends(require_secret)],
)
async def check_jobs(request: Request):
    """Run the pipeline synchronously and return the posts it produced."""
    config = request.app.state.config
    state = request.app.state.pipeline
    try:
        run = await run_pipeline(config, state)
    except Exception as exc:
        logger.exception("Pipeline run triggered over HTTP failed")
        return JSONResponse(
            ErrorResponse(message=str(exc) or type(exc).__name__).model_dump(),
            status_code=500,
        )
    return CheckJobsResponse(data=JobsPayload(jobs=run.posts))


@router.get(
    "/last-jobs",
    response_model=LastJobsResponse,
    responses={401: {"model": ErrorResponse}},
    dependencies=[Depends(require_secret)],
)
def last_jobs(request: Request) -> LastJobsResponse:
    """Return the posts of the latest completed run without starting one."""
    cache = request.app.state.pipeline.last_run
    return LastJobsResponse(
        data=LastJobsPayload(jobs=cache.posts, updated_at=cache.updated_at),
    )
