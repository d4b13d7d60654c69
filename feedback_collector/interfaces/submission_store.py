"""Abstract base class for submission persistence.

Defines the contract for storing feedback submissions.  The concrete
implementation is JSONFileSubmissionStore
(feedback_collector/providers/submission/json_file_submission_store.py),
which keeps the whole collection in one JSON file.  Routes only ever talk
to this interface, so the file can be swapped for an embedded database
without touching them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from feedback_collector.models.submission import Submission


class ISubmissionStore(ABC):
    """Contract for submission persistence.

    All operations are async to support network-backed stores.
    Implementations must serialize their read-modify-write sequences so
    concurrent ``append``/``remove`` calls cannot lose updates.
    """

    @abstractmethod
    async def ensure_initialized(self) -> None:
        """Create an empty collection if none exists.  Idempotent; called at startup."""

    @abstractmethod
    async def list_all(self) -> list[Submission]:
        """Return every submission in insertion order (oldest first).

        Raises
        ------
        StoreReadError
            If the collection is missing or cannot be parsed.
        """

    @abstractmethod
    async def append(self, fields: Mapping[str, Any]) -> Submission:
        """Create a submission from ``fields`` and persist it.

        Parameters
        ----------
        fields:
            Arbitrary submitter-supplied content; stored as given.

        Returns
        -------
        Submission
            The committed submission, including its assigned ``id`` and
            ``timestamp``.

        Raises
        ------
        StoreReadError
            If the current collection cannot be read.
        StoreWriteError
            If the updated collection cannot be persisted.
        """

    @abstractmethod
    async def remove(self, submission_id: str) -> bool:
        """Delete the submission with ``submission_id``.

        Returns
        -------
        bool
            ``True`` if a matching entry was removed, ``False`` if no entry
            matched (the collection is left untouched).
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this store."""
