"""REST API routes for the feedback collector.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: API (FastAPI route handlers).
# Pattern: Singletons (store, auth gate) live on ``request.app.state`` and
#          are reached through small accessor dependencies.
#
# Endpoints:
#   POST   /api/submit-feedback          public   -- store a submission
#   GET    /api/submissions              admin    -- list every submission
#   DELETE /api/submissions/{id}         admin    -- delete one submission
#   GET    /api/health                   public   -- liveness probe
#
# Admin routes depend on ``require_admin``.  Store failures are caught
# here and turned into generic ``{success: false, message}`` bodies; the
# underlying I/O error is only logged.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import json
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from feedback_collector.api.schemas import (
    ActionResponse,
    HealthResponse,
    SubmissionListResponse,
    SubmitFeedbackResponse,
)
from feedback_collector.interfaces.submission_store import ISubmissionStore
from feedback_collector.services.auth_gate import DEFAULT_REALM, AuthDecision, BasicAuthGate
from feedback_collector.utils.errors import (
    StoreError,
    SubmissionNotFoundError,
    UnauthorizedError,
)

logger = structlog.get_logger(logger_name=__name__)

router = APIRouter(prefix="/api", tags=["feedback"])

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


# ── Dependencies ──────────────────────────────────────────────────────
def _get_submission_store(request: Request) -> ISubmissionStore:
    """Retrieve the submission store from app state; raise 503 if unavailable."""
    store = getattr(request.app.state, "submission_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Submission store unavailable")
    return store


def _get_auth_gate(request: Request) -> BasicAuthGate:
    """Retrieve the auth gate from app state; raise 503 if unavailable."""
    gate = getattr(request.app.state, "auth_gate", None)
    if gate is None:
        raise HTTPException(status_code=503, detail="Authentication unavailable")
    return gate


StoreDep = Annotated[ISubmissionStore, Depends(_get_submission_store)]
GateDep = Annotated[BasicAuthGate, Depends(_get_auth_gate)]


async def require_admin(request: Request, gate: GateDep) -> None:
    """Reject the request unless it carries the admin credentials.

    Missing, malformed and wrong credentials all raise the same
    ``UnauthorizedError``.
    """
    decision = await gate.authorize_request(request)
    if decision is AuthDecision.DENY:
        logger.warning("admin_auth_denied", path=str(request.url.path))
        raise UnauthorizedError()


# ── Helpers ───────────────────────────────────────────────────────────
def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


async def _read_feedback_fields(request: Request) -> dict[str, Any] | None:
    """Return the submitted field mapping, or None if the body is unusable.

    Accepts a JSON object or an HTML form.  Repeated form keys become lists;
    uploaded files are recorded by filename.  JSON bodies holding ``NaN``
    or ``Infinity`` are refused since the store cannot persist them.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        fields: dict[str, Any] = {}
        for key, value in form.multi_items():
            value = value if isinstance(value, str) else value.filename
            if key in fields:
                existing = fields[key]
                fields[key] = [*existing, value] if isinstance(existing, list) else [existing, value]
            else:
                fields[key] = value
        return fields

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def _failure(status_code: int, message: str) -> JSONResponse:
    body = ActionResponse(success=False, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


# ── Submit feedback (public) ──────────────────────────────────────────
@router.post("/submit-feedback", response_model=SubmitFeedbackResponse)
async def submit_feedback(request: Request, store: StoreDep) -> Any:
    """Store one feedback submission exactly as sent."""
    fields = await _read_feedback_fields(request)
    if fields is None:
        return _failure(400, "Feedback must be a JSON object or form data")

    try:
        submission = await store.append(fields)
    except StoreError as exc:
        logger.error("submit_feedback_failed", error=str(exc))
        return _failure(500, "Error submitting feedback")

    logger.info(
        "feedback_submitted",
        submission_id=submission.id,
        submitter=fields.get("fullName") or "Unknown",
    )
    return SubmitFeedbackResponse(
        success=True,
        message="Feedback submitted successfully",
        id=submission.id,
    )


# ── List submissions (admin) ──────────────────────────────────────────
@router.get(
    "/submissions",
    response_model=SubmissionListResponse,
    dependencies=[Depends(require_admin)],
)
async def list_submissions(store: StoreDep) -> Any:
    """Return every submission, oldest first, with a count."""
    try:
        submissions = await store.list_all()
    except StoreError as exc:
        logger.error("list_submissions_failed", error=str(exc))
        return _failure(500, "Error fetching submissions")

    return SubmissionListResponse(
        success=True,
        count=len(submissions),
        submissions=[s.to_flat_dict() for s in submissions],
    )


# ── Delete submission (admin) ─────────────────────────────────────────
@router.delete(
    "/submissions/{submission_id}",
    response_model=ActionResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_submission(submission_id: str, store: StoreDep) -> Any:
    """Delete one submission by id."""
    try:
        removed = await store.remove(submission_id)
    except StoreError as exc:
        logger.error("delete_submission_failed", submission_id=submission_id, error=str(exc))
        return _failure(500, "Error deleting submission")

    if not removed:
        raise SubmissionNotFoundError()

    return ActionResponse(success=True, message="Submission deleted")


# ── Health ────────────────────────────────────────────────────────────
@router.get("/health", response_model=HealthResponse)
async def health(store: StoreDep) -> HealthResponse:
    """Report that the service is up and which store backs it."""
    return HealthResponse(status="ok", store=store.get_provider_name())


# ── Exception handlers ────────────────────────────────────────────────
async def _unauthorized_handler(request: Request, exc: UnauthorizedError) -> JSONResponse:
    """401 with a Basic challenge so browsers prompt for credentials."""
    gate = getattr(request.app.state, "auth_gate", None)
    challenge = gate.challenge_header if gate is not None else f'Basic realm="{DEFAULT_REALM}"'
    response = _failure(401, exc.message)
    response.headers["WWW-Authenticate"] = challenge
    return response


async def _not_found_handler(request: Request, exc: SubmissionNotFoundError) -> JSONResponse:
    return _failure(404, exc.message)


def register_exception_handlers(app: FastAPI) -> None:
    """Map boundary outcomes (401, 404) to structured JSON responses."""
    app.add_exception_handler(UnauthorizedError, _unauthorized_handler)
    app.add_exception_handler(SubmissionNotFoundError, _not_found_handler)
