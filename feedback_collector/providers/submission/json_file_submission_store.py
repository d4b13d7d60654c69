"""JSON-file-backed submission store.

Keeps the whole submission collection in a single human-readable JSON
array (default ``submissions.json``).  Every mutation is a full
read-modify-write of that file under an ``asyncio.Lock``; the rewrite goes
to a temporary file that is atomically renamed over the original, so the
backing file is never left half-written.

Blocking file I/O runs in ``asyncio.to_thread`` to keep the event loop free.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from feedback_collector.interfaces.submission_store import ISubmissionStore
from feedback_collector.models.submission import Submission
from feedback_collector.utils.errors import StoreReadError, StoreWriteError
from feedback_collector.utils.ids import generate_submission_id, utc_timestamp

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_PATH = Path("submissions.json")


class JSONFileSubmissionStore(ISubmissionStore):
    """Submission persistence over a single JSON file.

    Assumes it is the only writer of ``path``.
    """

    def __init__(self, path: str | Path = _DEFAULT_PATH) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def ensure_initialized(self) -> None:
        """Write an empty collection if the backing file does not exist."""
        async with self._lock:
            if self._path.exists():
                return
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                logger.error("store_init_failed", path=str(self._path), error=str(exc))
                raise StoreWriteError(
                    "Could not create submissions directory", path=str(self._path)
                ) from exc
            await asyncio.to_thread(self._write_records, [])
        logger.info("submission_store_initialized", path=str(self._path))

    async def list_all(self) -> list[Submission]:
        """Return every stored submission, oldest first."""
        async with self._lock:
            return await asyncio.to_thread(self._read_submissions)

    async def append(self, fields: Mapping[str, Any]) -> Submission:
        """Assign an id and timestamp to ``fields`` and persist the new submission."""
        async with self._lock:
            submissions = await asyncio.to_thread(self._read_submissions)
            existing_ids = {s.id for s in submissions}

            submission_id = generate_submission_id()
            while submission_id in existing_ids:
                submission_id = generate_submission_id()

            submission = Submission(
                id=submission_id,
                timestamp=utc_timestamp(),
                fields=dict(fields),
            )
            submissions.append(submission)
            await asyncio.to_thread(
                self._write_records, [s.to_record() for s in submissions]
            )

        logger.info(
            "submission_appended",
            submission_id=submission.id,
            field_count=len(submission.fields),
            total=len(submissions),
        )
        return submission

    async def remove(self, submission_id: str) -> bool:
        """Delete the submission with ``submission_id``; return whether one existed."""
        async with self._lock:
            submissions = await asyncio.to_thread(self._read_submissions)
            remaining = [s for s in submissions if s.id != submission_id]
            if len(remaining) == len(submissions):
                return False
            await asyncio.to_thread(
                self._write_records, [s.to_record() for s in remaining]
            )

        logger.info(
            "submission_removed",
            submission_id=submission_id,
            total=len(remaining),
        )
        return True

    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this store."""
        return "json_file"

    # -- Sync helpers (executed via asyncio.to_thread) -------------------------

    def _read_submissions(self) -> list[Submission]:
        """Load and validate the whole collection."""
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as exc:
            logger.error("store_read_failed", path=str(self._path), reason="missing")
            raise StoreReadError("Submissions file does not exist", path=str(self._path)) from exc
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("store_read_failed", path=str(self._path), error=str(exc))
            raise StoreReadError("Could not read submissions file", path=str(self._path)) from exc
        except json.JSONDecodeError as exc:
            logger.error("store_read_failed", path=str(self._path), error=str(exc))
            raise StoreReadError("Submissions file is not valid JSON", path=str(self._path)) from exc

        if not isinstance(data, list):
            logger.error("store_read_failed", path=str(self._path), reason="not_a_list")
            raise StoreReadError("Submissions file must contain a JSON array", path=str(self._path))

        submissions: list[Submission] = []
        for index, record in enumerate(data):
            if not isinstance(record, dict) or not isinstance(record.get("id"), str):
                logger.error("store_read_failed", path=str(self._path), bad_record=index)
                raise StoreReadError(
                    f"Record {index} is not a submission", path=str(self._path)
                )
            try:
                submissions.append(Submission.from_record(record))
            except ValidationError as exc:
                logger.error("store_read_failed", path=str(self._path), bad_record=index)
                raise StoreReadError(
                    f"Record {index} is not a submission", path=str(self._path)
                ) from exc
        return submissions

    def _write_records(self, records: list[dict[str, Any]]) -> None:
        """Atomically replace the backing file with ``records``."""
        directory = self._path.parent
        tmp_name: str | None = None
        try:
            payload = json.dumps(records, indent=2, ensure_ascii=False, allow_nan=False)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self._path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            logger.error("store_write_failed", path=str(self._path), error=str(exc))
            raise StoreWriteError("Could not write submissions file", path=str(self._path)) from exc
