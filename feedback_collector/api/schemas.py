"""Response schemas for the feedback collector API.

Every JSON body carries a ``success`` flag and, where useful, a
human-readable ``message`` -- the shape the form and admin panel expect.
Submission payloads are schema-free, so they are typed as plain dicts.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ActionResponse(BaseModel):
    """Generic success/failure body."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str


class SubmitFeedbackResponse(ActionResponse):
    """Body returned after a feedback submission is stored."""

    id: str = Field(description="Id assigned to the new submission.")


class SubmissionListResponse(BaseModel):
    """Every stored submission, oldest first."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    count: int = Field(ge=0)
    submissions: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Submissions flattened to {id, timestamp, ...fields}.",
    )


class HealthResponse(BaseModel):
    """Liveness probe body."""

    status: str = "ok"
    store: str


class ErrorResponse(BaseModel):
    """Sanitized body for unexpected application errors."""

    success: bool = False
    error: str
    message: str
