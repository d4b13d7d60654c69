"""Feedback collector API layer -- routes, schemas, and middleware."""

from feedback_collector.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from feedback_collector.api.routes import register_exception_handlers, require_admin, router
from feedback_collector.api.schemas import (
    ActionResponse,
    ErrorResponse,
    HealthResponse,
    SubmissionListResponse,
    SubmitFeedbackResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "register_exception_handlers",
    "require_admin",
    "router",
    "ActionResponse",
    "ErrorResponse",
    "HealthResponse",
    "SubmissionListResponse",
    "SubmitFeedbackResponse",
]
