"""Integration tests for the feedback collector HTTP API.

Runs the full app through FastAPI's TestClient with a JSON file store in
a temp directory, so requests go through middleware, the auth gate, the
store and the filesystem.
"""

from __future__ import annotations

import base64
import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

import feedback_collector
import feedback_collector.api.middleware as middleware_module
import feedback_collector.main as main_module
from feedback_collector.interfaces.submission_store import ISubmissionStore
from feedback_collector.main import create_app
from feedback_collector.utils.errors import (
    FeedbackCollectorError,
    StoreReadError,
    StoreWriteError,
)
from tests.conftest import basic_auth_header


@pytest.fixture
def client(app_settings):
    app = create_app(app_settings)
    with TestClient(app) as c:
        yield c


def _failing_store(**side_effects) -> MagicMock:
    """A store whose named async methods raise the given exceptions."""
    store = MagicMock(spec=ISubmissionStore)
    store.ensure_initialized = AsyncMock(return_value=None)
    store.get_provider_name.return_value = "mock_store"
    for name, exc in side_effects.items():
        setattr(store, name, AsyncMock(side_effect=exc))
    return store


# ─── Submit ───────────────────────────────────────────────────────

class TestSubmitFeedback:
    def test_submit_json(self, client, submissions_path) -> None:
        response = client.post("/api/submit-feedback", json={"fullName": "Ada", "rating": 5})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Feedback submitted successfully"
        assert data["id"]

        stored = json.loads(submissions_path.read_text(encoding="utf-8"))
        assert stored[0]["id"] == data["id"]
        assert stored[0]["fields"] == {"fullName": "Ada", "rating": 5}

    def test_submit_form_encoded(self, client, admin_headers) -> None:
        response = client.post(
            "/api/submit-feedback",
            data={"fullName": "Grace", "topics": ["cobol", "compilers"]},
        )
        assert response.status_code == 200

        listed = client.get("/api/submissions", headers=admin_headers).json()
        entry = listed["submissions"][0]
        assert entry["fullName"] == "Grace"
        assert entry["topics"] == ["cobol", "compilers"]

    def test_submit_empty_body_is_empty_mapping(self, client, admin_headers) -> None:
        response = client.post("/api/submit-feedback")
        assert response.status_code == 200

        entry = client.get("/api/submissions", headers=admin_headers).json()["submissions"][0]
        assert set(entry) == {"id", "timestamp"}

    def test_submit_invalid_json_is_rejected(self, client) -> None:
        response = client.post(
            "/api/submit-feedback",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_submit_non_finite_number_is_rejected(self, client, admin_headers, submissions_path, literal) -> None:
        response = client.post(
            "/api/submit-feedback",
            content=f'{{"fullName": "Eve", "score": {literal}}}'.encode(),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert json.loads(submissions_path.read_text(encoding="utf-8")) == []
        assert client.get("/api/submissions", headers=admin_headers).json()["count"] == 0

    def test_submit_non_object_is_rejected(self, client) -> None:
        response = client.post("/api/submit-feedback", json=["a", "b"])
        assert response.status_code == 400

    def test_submit_needs_no_credentials(self, client) -> None:
        response = client.post("/api/submit-feedback", json={"fullName": "Ada"})
        assert response.status_code == 200

    def test_write_failure_is_generic_500(self, app_settings) -> None:
        store = _failing_store(append=StoreWriteError("ENOSPC /data/submissions.json"))
        app = create_app(app_settings, submission_store=store)

        with TestClient(app) as client:
            response = client.post("/api/submit-feedback", json={"fullName": "Ada"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Error submitting feedback"}
        assert "ENOSPC" not in response.text


# ─── List ─────────────────────────────────────────────────────────

class TestListSubmissions:
    def test_requires_credentials(self, client) -> None:
        response = client.get("/api/submissions")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == 'Basic realm="Admin Area"'
        assert response.json()["success"] is False

    @pytest.mark.parametrize(
        "headers",
        [
            basic_auth_header("admin", "wrong"),
            basic_auth_header("admin", "secre"),
            basic_auth_header("Admin", "secret"),
            {"Authorization": "Basic %%%"},
            {"Authorization": "Basic"},
            {"Authorization": "Basic " + base64.b64encode(b"admin-secret").decode()},
            {"Authorization": "Bearer token"},
        ],
    )
    def test_denials_are_uniform(self, client, headers) -> None:
        denied = client.get("/api/submissions", headers=headers)
        missing = client.get("/api/submissions")

        assert denied.status_code == 401
        assert denied.json() == missing.json()
        assert denied.headers["www-authenticate"] == missing.headers["www-authenticate"]

    def test_challenge_uses_configured_realm(self, app_settings) -> None:
        settings = app_settings.model_copy(update={"admin_realm": "Feedback Admin"})
        with TestClient(create_app(settings)) as client:
            response = client.get("/api/submissions", headers={"Authorization": "Basic %%%"})

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == 'Basic realm="Feedback Admin"'

    def test_empty_list(self, client, admin_headers) -> None:
        response = client.get("/api/submissions", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "count": 0, "submissions": []}

    def test_read_failure_is_generic_500(self, app_settings, admin_headers) -> None:
        store = _failing_store(list_all=StoreReadError("Submissions file is not valid JSON"))
        app = create_app(app_settings, submission_store=store)

        with TestClient(app) as client:
            response = client.get("/api/submissions", headers=admin_headers)

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Error fetching submissions"}

    def test_corrupt_file_on_disk_is_500_not_crash(self, client, admin_headers, submissions_path) -> None:
        submissions_path.write_text("{corrupt", encoding="utf-8")

        response = client.get("/api/submissions", headers=admin_headers)
        assert response.status_code == 500

        submissions_path.write_text("[]", encoding="utf-8")
        assert client.get("/api/submissions", headers=admin_headers).status_code == 200


# ─── Delete ───────────────────────────────────────────────────────

class TestDeleteSubmission:
    def test_requires_credentials(self, client) -> None:
        created = client.post("/api/submit-feedback", json={"fullName": "Ada"}).json()

        response = client.delete(f"/api/submissions/{created['id']}")

        assert response.status_code == 401
        assert "www-authenticate" in response.headers

    def test_delete_unknown_is_404(self, client, admin_headers) -> None:
        response = client.delete("/api/submissions/nope", headers=admin_headers)

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Submission not found"}

    def test_delete_failure_is_generic_500(self, app_settings, admin_headers) -> None:
        store = _failing_store(remove=StoreWriteError("EACCES"))
        app = create_app(app_settings, submission_store=store)

        with TestClient(app) as client:
            response = client.delete("/api/submissions/abc", headers=admin_headers)

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Error deleting submission"}


# ─── End-to-end scenario ──────────────────────────────────────────

def test_add_list_delete_scenario(client, admin_headers) -> None:
    ada = client.post("/api/submit-feedback", json={"fullName": "Ada"}).json()
    listed = client.get("/api/submissions", headers=admin_headers).json()
    assert listed["count"] == 1
    assert listed["submissions"][0]["fullName"] == "Ada"
    assert listed["submissions"][0]["id"] == ada["id"]
    assert listed["submissions"][0]["timestamp"]

    grace = client.post("/api/submit-feedback", json={"fullName": "Grace"}).json()
    listed = client.get("/api/submissions", headers=admin_headers).json()
    assert [s["fullName"] for s in listed["submissions"]] == ["Ada", "Grace"]

    deleted = client.delete(f"/api/submissions/{ada['id']}", headers=admin_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"success": True, "message": "Submission deleted"}

    listed = client.get("/api/submissions", headers=admin_headers).json()
    assert listed["count"] == 1
    assert listed["submissions"][0]["id"] == grace["id"]

    again = client.delete(f"/api/submissions/{ada['id']}", headers=admin_headers)
    assert again.status_code == 404
    assert client.get("/api/submissions", headers=admin_headers).json()["count"] == 1


# ─── Pages, health, middleware ────────────────────────────────────

class TestPagesAndHealth:
    def test_feedback_form_is_public(self, client) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]

    def test_admin_page_is_gated(self, client, admin_headers) -> None:
        assert client.get("/admin").status_code == 401

        response = client.get("/admin", headers=admin_headers)
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]

    def test_static_assets(self, client) -> None:
        assert client.get("/public/style.css").status_code == 200

    def test_health(self, client) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "store": "json_file"}

    def test_cors_headers(self, client) -> None:
        response = client.get("/api/health", headers={"Origin": "https://example.org"})
        assert "access-control-allow-origin" in response.headers

    def test_unexpected_application_error_is_sanitized(self, app_settings, admin_headers) -> None:
        store = _failing_store(list_all=FeedbackCollectorError("secret internal detail"))
        app = create_app(app_settings, submission_store=store)

        with TestClient(app) as client:
            response = client.get("/api/submissions", headers=admin_headers)

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "FeedbackCollectorError"
        assert "secret internal detail" not in response.text

    def test_frontend_ships_inside_the_package(self) -> None:
        frontend = Path(feedback_collector.__file__).resolve().parent / "frontend"
        assert main_module._FRONTEND_DIR == frontend
        for name in ("index.html", "admin.html", "public/style.css"):
            assert (frontend / name).is_file()


# ─── Request logging ──────────────────────────────────────────────

class TestRequestLogging:
    def test_request_id_is_generated_and_echoed(self, client) -> None:
        first = client.get("/api/health")
        second = client.get("/api/health")

        assert first.headers["x-request-id"]
        assert first.headers["x-request-id"] != second.headers["x-request-id"]

    def test_incoming_request_id_is_kept(self, client) -> None:
        response = client.get("/api/health", headers={"X-Request-ID": "trace-42"})
        assert response.headers["x-request-id"] == "trace-42"

    def test_access_line_tags_admin_area(self, client, admin_headers, monkeypatch) -> None:
        fake_logger = MagicMock()
        monkeypatch.setattr(middleware_module, "_logger", fake_logger)

        client.get("/api/submissions", headers={**admin_headers, "X-Request-ID": "trace-7"})

        fake_logger.info.assert_called_once()
        args, kwargs = fake_logger.info.call_args
        assert args == ("http_request",)
        assert kwargs["request_id"] == "trace-7"
        assert kwargs["area"] == "admin"
        assert kwargs["status"] == 200
        assert "authorization" not in {k.lower() for k in kwargs}

    @pytest.mark.parametrize(
        ("path", "area"),
        [
            ("/admin", "admin"),
            ("/api/submissions/abc", "admin"),
            ("/public/style.css", "static"),
            ("/api/submit-feedback", "public"),
            ("/", "public"),
        ],
    )
    def test_request_area(self, path, area) -> None:
        assert middleware_module.request_area(path) == area
