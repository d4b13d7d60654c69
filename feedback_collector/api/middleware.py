"""API middleware -- CORS, request logging, and error handling.

# ─── MIDDLEWARE EXECUTION ORDER ──────────────────────────────────────
#
# Starlette middleware is a stack (last added, first executed):
#
#   In main.py:
#     app.add_middleware(ErrorHandlingMiddleware)    # added 1st -> inner
#     app.add_middleware(RequestLoggingMiddleware)   # added 2nd -> outer
#
#   Request flow:
#     Client -> RequestLogging -> ErrorHandling -> route handler
#
# So RequestLoggingMiddleware sees the final status code, even when
# ErrorHandling replaced an exception with a structured JSON error.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from feedback_collector.api.schemas import ErrorResponse
from feedback_collector.utils.errors import FeedbackCollectorError
from feedback_collector.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware to the FastAPI application.

    Parameters
    ----------
    app:
        The FastAPI application instance.
    allowed_origins:
        Explicit list of allowed origins.  Defaults to ``["*"]``.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------

REQUEST_ID_HEADER = "X-Request-ID"


def request_area(path: str) -> str:
    """Classify a path as ``admin``, ``static`` or ``public`` for the access log."""
    if path == "/admin" or path.startswith("/api/submissions"):
        return "admin"
    if path.startswith("/public/"):
        return "static"
    return "public"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log one ``http_request`` line for it.

    The id is taken from an incoming ``X-Request-ID`` header or generated,
    bound into structlog's context vars while the route runs (so
    ``feedback_submitted`` and store events carry it) and echoed back on
    the response.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        start = time.perf_counter()
        response: Response | None = None

        try:
            with structlog.contextvars.bound_contextvars(request_id=request_id):
                response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            _logger.info(
                "http_request",
                request_id=request_id,
                area=request_area(request.url.path),
                method=request.method,
                path=request.url.path,
                status=response.status_code if response else 500,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Catch ``FeedbackCollectorError`` subclasses and return structured JSON errors.

    Routes handle the store errors they expect themselves; this is the net
    for anything else.  Details go to the log, never to the client.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except FeedbackCollectorError as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                file=exc.path,
                path=str(request.url.path),
            )
            body = ErrorResponse(
                error=type(exc).__name__,
                message="Internal server error",
            )
            return JSONResponse(
                status_code=500,
                content=body.model_dump(),
            )
