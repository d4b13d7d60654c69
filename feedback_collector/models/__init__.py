"""Domain models for the feedback collector."""

from feedback_collector.models.submission import RESERVED_KEYS, Submission

__all__ = ["RESERVED_KEYS", "Submission"]
