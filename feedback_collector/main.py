"""Feedback collector FastAPI application entry point.

# ─── HOW THIS FILE WORKS ─────────────────────────────────────────────
#
# This is the composition root -- the single place where settings, the
# submission store, the auth gate and the routes are created and wired.
#
#   1. **Settings** -- built once (``load_settings``) and passed down;
#      nothing else reads the environment.
#   2. **Lifespan** -- at startup the store's backing file is created if
#      missing, and a warning is logged while the default admin password
#      is still in use.
#   3. **app.state** -- the store and the gate are stored on app.state for
#      the route dependencies in api/routes.py.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import structlog
import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from feedback_collector.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from feedback_collector.api.routes import register_exception_handlers, require_admin
from feedback_collector.api.routes import router as api_router
from feedback_collector.config.loader import load_settings
from feedback_collector.config.settings import Settings
from feedback_collector.interfaces.submission_store import ISubmissionStore
from feedback_collector.providers.submission.json_file_submission_store import (
    JSONFileSubmissionStore,
)
from feedback_collector.services.auth_gate import BasicAuthGate
from feedback_collector.utils.logging import configure_logging, get_logger

# Shipped inside the package as package data.
_FRONTEND_DIR = Path(__file__).resolve().parent / "frontend"

_logger: structlog.BoundLogger = get_logger(__name__)


# ─── Component assembly ───────────────────────────────────────────────

def _build_all(
    settings: Settings,
    submission_store: ISubmissionStore | None = None,
) -> dict[str, Any]:
    """Construct the store and the auth gate from settings.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    if submission_store is None:
        submission_store = JSONFileSubmissionStore(settings.submissions_file)

    auth_gate = BasicAuthGate(
        username=settings.admin_username,
        password=settings.admin_password,
        realm=settings.admin_realm,
    )

    return {
        "settings": settings,
        "submission_store": submission_store,
        "auth_gate": auth_gate,
    }


# ─── FastAPI lifespan ──────────────────────────────────────────────────

@asynccontextmanager
async def _lifespan(app: FastAPI):
    """Startup: initialize the store and flag insecure credentials."""
    settings: Settings = app.state.settings
    store: ISubmissionStore = app.state.submission_store

    await store.ensure_initialized()

    if settings.uses_default_password():
        _logger.warning(
            "default_admin_password_in_use",
            hint="Set the ADMIN_PASSWORD environment variable before deploying",
        )

    base_url = f"http://localhost:{settings.port}"
    _logger.info(
        "feedback_collector_started",
        store=store.get_provider_name(),
        feedback_form=f"{base_url}/",
        admin_panel=f"{base_url}/admin",
        admin_username=settings.admin_username,
        default_password=settings.uses_default_password(),
    )

    yield

    _logger.info("feedback_collector_shutdown")


# ─── App factory ───────────────────────────────────────────────────────

def create_app(
    settings: Settings | None = None,
    submission_store: ISubmissionStore | None = None,
) -> FastAPI:
    """Create and configure the feedback collector FastAPI application.

    Parameters
    ----------
    settings:
        Optional pre-built settings.  If None, settings are loaded from
        config/config.yaml, .env and the environment.
    submission_store:
        Optional store override (tests inject their own).  Defaults to a
        JSONFileSubmissionStore at ``settings.submissions_file``.
    """
    if settings is None:
        settings = load_settings()

    app = FastAPI(
        title="Feedback Collector",
        description="Collects feedback form submissions with a protected admin view",
        version="0.1.0",
        lifespan=_lifespan,
    )

    for key, value in _build_all(settings, submission_store).items():
        setattr(app.state, key, value)

    configure_cors(app, allowed_origins=settings.cors_allowed_origins)
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(api_router)

    if _FRONTEND_DIR.is_dir():
        public_dir = _FRONTEND_DIR / "public"
        if public_dir.is_dir():
            app.mount("/public", StaticFiles(directory=str(public_dir)), name="public")

        @app.get("/", include_in_schema=False)
        async def serve_feedback_form() -> FileResponse:
            return FileResponse(str(_FRONTEND_DIR / "index.html"))

        @app.get("/admin", include_in_schema=False, dependencies=[Depends(require_admin)])
        async def serve_admin_panel() -> FileResponse:
            return FileResponse(str(_FRONTEND_DIR / "admin.html"))

    return app


# ─── Entry point ───────────────────────────────────────────────────────

def main() -> None:
    """Launch the feedback collector on the configured port (default 3000)."""
    settings = load_settings()
    configure_logging(log_level=settings.log_level, json_output=settings.json_logs)
    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.app_host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
