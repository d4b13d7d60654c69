"""Submission persistence providers.

JSONFileSubmissionStore keeps the full collection in one JSON file
(``submissions.json`` by default), rewritten atomically on every change.
"""

from feedback_collector.providers.submission.json_file_submission_store import (
    JSONFileSubmissionStore,
)

__all__ = ["JSONFileSubmissionStore"]
