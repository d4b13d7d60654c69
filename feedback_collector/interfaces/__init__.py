"""Interface definitions for swappable backends.

    Interface          →  Concrete implementations (in feedback_collector/providers/)
    ─────────────────────────────────────────────────────────────────────
    ISubmissionStore   →  JSONFileSubmissionStore
"""

from feedback_collector.interfaces.submission_store import ISubmissionStore

__all__ = ["ISubmissionStore"]
