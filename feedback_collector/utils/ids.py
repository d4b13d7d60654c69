"""Identifier and timestamp generation for new submissions.

Ids are the current Unix time in milliseconds followed by a random base-36
suffix, so two submissions created within the same millisecond still get
different ids without any shared counter.
"""

from __future__ import annotations

import secrets
import string
import time
from datetime import datetime, timezone

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 9


def generate_submission_id() -> str:
    """Return a new id such as ``1760875200123k3j9x0q2a``."""
    millis = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"{millis}{suffix}"


def utc_timestamp(now: datetime | None = None) -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
