"""HTTP Basic-Authentication gate for the admin endpoints.

# ─── HOW THE GATE WORKS ──────────────────────────────────────────────
#
# The admin panel is protected by one shared username/password pair that
# is configured at startup.  There are no sessions, tokens or logins:
# every request carries an ``Authorization: Basic <base64>`` header and is
# checked on its own.
#
# Validation steps:
#   1. ``fastapi.security.HTTPBasic`` extracts ``username:password`` from
#      the header (split on the first colon)
#   2. Both halves match the configured pair (constant-time comparison)
#
# A missing header, a malformed header and wrong credentials all produce
# the same ``AuthDecision.DENY``; the caller cannot tell them apart.
# ─────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import hmac
from enum import Enum

from fastapi import HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

DEFAULT_REALM = "Admin Area"


class AuthDecision(str, Enum):
    """Outcome of a credential check."""

    ALLOW = "allow"
    DENY = "deny"


class BasicAuthGate:
    """Checks presented credentials against the configured admin pair.

    Constructor injection: the pair comes from Settings in main.py, so the
    gate never reads configuration globals itself.
    """

    def __init__(self, username: str, password: str, realm: str = DEFAULT_REALM) -> None:
        self._username = username.encode("utf-8")
        self._password = password.encode("utf-8")
        self._realm = realm
        self._scheme = HTTPBasic(auto_error=False, realm=realm)

    @property
    def realm(self) -> str:
        return self._realm

    @property
    def challenge_header(self) -> str:
        """Value for the ``WWW-Authenticate`` response header on deny."""
        return f'Basic realm="{self._realm}"'

    async def read_credentials(self, request: Request) -> HTTPBasicCredentials | None:
        """Extract Basic credentials from *request*, or None if there are none.

        ``HTTPBasic`` returns None for a missing or non-Basic header but
        raises for an undecodable token; both collapse to None here.
        """
        try:
            return await self._scheme(request)
        except HTTPException:
            return None

    def authorize(self, credentials: HTTPBasicCredentials | None) -> AuthDecision:
        """Return ALLOW iff both username and password match byte-for-byte."""
        if credentials is None:
            return AuthDecision.DENY

        # Evaluate both comparisons so timing doesn't reveal which half failed.
        username_ok = hmac.compare_digest(credentials.username.encode("utf-8"), self._username)
        password_ok = hmac.compare_digest(credentials.password.encode("utf-8"), self._password)
        if username_ok and password_ok:
            return AuthDecision.ALLOW
        return AuthDecision.DENY

    async def authorize_request(self, request: Request) -> AuthDecision:
        """Read the request's credentials and authorize them."""
        return self.authorize(await self.read_credentials(request))
