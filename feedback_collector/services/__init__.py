"""Request-level services used by the HTTP layer."""

from feedback_collector.services.auth_gate import (
    DEFAULT_REALM,
    AuthDecision,
    BasicAuthGate,
)

__all__ = [
    "DEFAULT_REALM",
    "AuthDecision",
    "BasicAuthGate",
]
