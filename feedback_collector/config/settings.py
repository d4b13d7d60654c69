"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ───────────────────────────────────────────────
#
# Settings are read from TWO sources (in priority order):
#
#   1. **Environment variables** -- e.g. ADMIN_PASSWORD=s3cret
#   2. **.env file** -- key=value lines in the working directory
#
# Field ``admin_password`` maps to env var ``ADMIN_PASSWORD`` (matching is
# case-insensitive).  Defaults apply when neither source sets a field.
#
# The object is frozen: it is built once at startup and handed to the
# store, the auth gate and the app.  Nothing reads the environment later.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Shipped so the service starts out of the box; flagged loudly at startup.
INSECURE_DEFAULT_PASSWORD = "change-me-now"


class Settings(BaseSettings):
    """Feedback collector settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # === HTTP ===
    port: int = 3000
    app_host: str = "0.0.0.0"
    cors_allowed_origins: list[str] = ["*"]

    # === Admin credentials ===
    admin_username: str = "admin"
    admin_password: str = INSECURE_DEFAULT_PASSWORD
    admin_realm: str = "Admin Area"

    # === Storage ===
    submissions_file: str = "submissions.json"

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def uses_default_password(self) -> bool:
        """Return True while the shipped insecure admin password is in effect."""
        return self.admin_password == INSECURE_DEFAULT_PASSWORD

    @property
    def json_logs(self) -> bool:
        """Production renders JSON log lines; anything else uses the console."""
        return self.app_env == "production"
