"""Submission domain model -- one feedback entry in the collection.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models (bottom of the dependency graph -- no imports from upper layers).
#
# A Submission is created once by the store's ``append`` operation and is
# never mutated afterwards, so the model is frozen.  ``fields`` is whatever
# the submitter sent; no schema is imposed on it.
#
# On disk a submission is a nested record:
#     {"id": "...", "timestamp": "...", "fields": {...}}
# Older files hold flat records
#     {"id": "...", "timestamp": "...", "fullName": "...", ...}
# which ``from_record`` still reads.  A record is taken as nested only when
# its keys are exactly id, timestamp and fields with ``fields`` an object.
# A legacy record whose submitter sent nothing but an object-valued
# ``fields`` key has that same shape and cannot be told apart; it is read
# as nested.  Any legacy record with one more key is read flat, keeping
# ``fields`` as an ordinary field.  Over the API submissions are returned
# flat (``to_flat_dict``), the shape the admin panel renders.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Keys owned by the store; never taken from submitter-supplied fields.
RESERVED_KEYS = frozenset({"id", "timestamp"})

NESTED_RECORD_KEYS = frozenset({"id", "timestamp", "fields"})


class Submission(BaseModel):
    """A single feedback record with its store-assigned id and timestamp."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Unique id assigned at creation.")
    timestamp: str = Field(description="Creation time, ISO-8601 UTC.")
    fields: dict[str, Any] = Field(default_factory=dict, description="Submitter-supplied content.")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Submission:
        """Build a Submission from a stored record (nested or legacy flat)."""
        nested = record.get("fields")
        if isinstance(nested, dict) and record.keys() == NESTED_RECORD_KEYS:
            fields = nested
        else:
            fields = {k: v for k, v in record.items() if k not in RESERVED_KEYS}
        return cls(
            id=record["id"],
            timestamp=str(record.get("timestamp", "")),
            fields=fields,
        )

    def to_record(self) -> dict[str, Any]:
        """Return the nested form written to the backing file."""
        return {"id": self.id, "timestamp": self.timestamp, "fields": dict(self.fields)}

    def to_flat_dict(self) -> dict[str, Any]:
        """Return ``fields`` merged with ``id`` and ``timestamp`` (store keys win)."""
        flat = {k: v for k, v in self.fields.items() if k not in RESERVED_KEYS}
        flat["id"] = self.id
        flat["timestamp"] = self.timestamp
        return flat
