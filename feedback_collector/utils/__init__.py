"""Utility modules for the feedback collector.

- **errors** -- Exception hierarchy rooted at FeedbackCollectorError; the
  store raises StoreReadError / StoreWriteError so the HTTP layer can map
  them to generic failure responses.
- **logging** -- structlog setup: console or JSON rendering as the caller
  chooses, a service tag and credential redaction on every event.
- **ids** -- Submission id and timestamp generation.
"""

from feedback_collector.utils.errors import (
    FeedbackCollectorError,
    StoreError,
    StoreReadError,
    StoreWriteError,
    SubmissionNotFoundError,
    UnauthorizedError,
)
from feedback_collector.utils.ids import generate_submission_id, utc_timestamp
from feedback_collector.utils.logging import configure_logging, get_logger

__all__ = [
    "FeedbackCollectorError",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
    "SubmissionNotFoundError",
    "UnauthorizedError",
    "configure_logging",
    "generate_submission_id",
    "get_logger",
    "utc_timestamp",
]
