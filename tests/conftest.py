"""Shared pytest fixtures for the feedback collector test suite."""

from __future__ import annotations

import base64
from pathlib import Path

import pytest

from feedback_collector.config.settings import Settings
from feedback_collector.providers.submission.json_file_submission_store import (
    JSONFileSubmissionStore,
)

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "secret"


def basic_auth_header(username: str, password: str) -> dict[str, str]:
    """Return an ``Authorization`` header dict for HTTP Basic auth."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def submissions_path(tmp_path: Path) -> Path:
    """Path of a not-yet-created backing file inside the test's temp dir."""
    return tmp_path / "data" / "submissions.json"


@pytest.fixture
async def store(submissions_path: Path) -> JSONFileSubmissionStore:
    """An initialized, empty JSON file store."""
    s = JSONFileSubmissionStore(submissions_path)
    await s.ensure_initialized()
    return s


@pytest.fixture
def app_settings(submissions_path: Path) -> Settings:
    """Settings with known admin credentials and a temp backing file."""
    return Settings(
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
        submissions_file=str(submissions_path),
        cors_allowed_origins=["*"],
    )


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return basic_auth_header(ADMIN_USERNAME, ADMIN_PASSWORD)
