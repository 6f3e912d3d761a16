"""structlog setup: JSON (or console) output, correlation ids, credential redaction."""

import logging
import sys
from typing import Any, Dict

import structlog

SENSITIVE_KEY_PARTS = ("password", "secret", "token", "authorization", "api_key", "otp")
REDACTED = "REDACTED"


def redact_sensitive(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Replace the value of any field whose name contains a sensitive part.

    Matching is case-insensitive. The ``event`` name itself is left alone.
    """
    for key in list(event_dict.keys()):
        if key == "event":
            continue
        key_lower = key.lower()
        if any(part in key_lower for part in SENSITIVE_KEY_PARTS):
            event_dict[key] = REDACTED

    return event_dict


def _level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure structlog and stdlib logging.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR; unknown names mean INFO
        log_format: ``json`` for one object per line, ``console`` for local development
    """
    level = _level(log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer = (
        structlog.dev.ConsoleRenderer()
        if log_format == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            redact_sensitive,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a logger, bound to ``logger_name`` when a name is given."""
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger_name=name)
    return logger
