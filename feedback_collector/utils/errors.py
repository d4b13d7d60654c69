"""Custom exception hierarchy for the feedback collector.

All application exceptions inherit from :class:`FeedbackCollectorError`,
which carries an optional ``path`` so error handlers can tell which backing
file (if any) was involved in the failure.

    FeedbackCollectorError  (base -- catch-all for any collector error)
    +-- StoreError                (submission store failures)
    |   +-- StoreReadError        (backing file missing or unparsable)
    |   +-- StoreWriteError       (backing file could not be rewritten)
    +-- SubmissionNotFoundError   (delete referenced an unknown id)
    +-- UnauthorizedError         (credential check failed or was absent)

Store errors are converted into generic failure responses at the HTTP
boundary.  The raw I/O detail is logged server-side and never sent to the
client.
"""


class FeedbackCollectorError(Exception):
    """Base exception for all feedback collector errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``path`` identifying the file involved.  ``__str__`` prefixes the path
    in brackets for log output, e.g. ``[submissions.json] Invalid JSON``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        path: str | None = None,
    ) -> None:
        self._message = message
        self._path = path
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def path(self) -> str | None:
        return self._path

    def __str__(self) -> str:
        if self._path:
            return f"[{self._path}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Submission store errors
# ---------------------------------------------------------------------------

class StoreError(FeedbackCollectorError):
    """Raised when the submission store cannot complete an operation."""

    def __init__(
        self,
        message: str = "Submission store operation failed",
        path: str | None = None,
    ) -> None:
        super().__init__(message=message, path=path)


class StoreReadError(StoreError):
    """Raised when the backing file is missing or cannot be parsed."""

    def __init__(
        self,
        message: str = "Could not read submissions",
        path: str | None = None,
    ) -> None:
        super().__init__(message=message, path=path)


class StoreWriteError(StoreError):
    """Raised when the backing file could not be rewritten.

    The attempted mutation is not committed.
    """

    def __init__(
        self,
        message: str = "Could not write submissions",
        path: str | None = None,
    ) -> None:
        super().__init__(message=message, path=path)


# ---------------------------------------------------------------------------
# Boundary outcomes
# ---------------------------------------------------------------------------

class SubmissionNotFoundError(FeedbackCollectorError):
    """Raised when a delete references an id absent from the collection."""

    def __init__(
        self,
        message: str = "Submission not found",
        path: str | None = None,
    ) -> None:
        super().__init__(message=message, path=path)


class UnauthorizedError(FeedbackCollectorError):
    """Raised when the admin credential check fails or no credentials were sent."""

    def __init__(
        self,
        message: str = "Authentication required",
        path: str | None = None,
    ) -> None:
        super().__init__(message=message, path=path)
