"""Pydantic v2 response models for the jobwire HTTP surface."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from jobwire.formatting.schema import FormattedPost


class HealthResponse(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------
class JobsPayload(BaseModel):
    jobs: list[FormattedPost]


class CheckJobsResponse(BaseModel):
    status: Literal["success"] = "success"
    data: JobsPayload


class LastJobsPayload(JobsPayload):
    updated_at: str | None = None


class LastJobsResponse(BaseModel):
    status: Literal["success"] = "success"
    data: LastJobsPayload
