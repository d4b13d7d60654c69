"""structlog configuration for the feedback collector.

The caller decides the output format: ``main()`` passes
``json_output=settings.json_logs`` so production gets one JSON object per
line and development gets the coloured console renderer.  This module
never reads the environment itself.

Every event is tagged with ``service`` and passes through
``redact_secrets`` so admin credentials cannot reach the log even when a
caller binds them by mistake.  Standard-library ``logging`` (uvicorn) is
routed through the same chain.
"""

import logging
import sys
from typing import Any

import structlog

SERVICE_NAME = "feedback-collector"

_SECRET_KEYS = frozenset({"password", "admin_password", "authorization"})
_REDACTED = "[redacted]"


def add_service_name(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def redact_secrets(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mask values bound under credential-like keys."""
    for key in event_dict.keys() & _SECRET_KEYS:
        event_dict[key] = _REDACTED
    return event_dict


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR.
        json_output: Render JSON lines instead of the console format.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        add_service_name,
        structlog.processors.add_log_level,
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    level = logging.getLevelName(log_level.upper())
    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *shared_processors,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # RequestLoggingMiddleware already emits one line per request.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger bound with ``logger_name``.

    Falls back to the development defaults when nothing has configured
    structlog yet (tests, library use).
    """
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
