"""
Structured logging on top of structlog.

Events are rendered as one JSON object per line, or as coloured key=value
lines when LOG_FORMAT=console. Request-scoped fields bound with
bind_request are merged into every event logged while the request runs.
"""

import logging
import sys
import uuid
from typing import Optional

import structlog

RENDERERS = {
    "json": structlog.processors.JSONRenderer,
    "console": structlog.dev.ConsoleRenderer,
}


def setup_logging(level: str = "WARNING", fmt: str = "json"):
    """
    Configure structlog once, on application startup.

    Until then structlog's defaults apply, which keeps tests free to
    capture events with structlog.testing.

    Args:
        level: Log level name, e.g. "info"
        fmt: "json" or "console"

    Raises:
        ValueError: For an unknown level or format
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"unknown log level: {level!r}")
    if fmt not in RENDERERS:
        raise ValueError(f"unknown log format: {fmt!r} (expected one of {sorted(RENDERERS)})")

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            RENDERERS[fmt](),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_request(method: str, path: str, request_id: Optional[str] = None) -> str:
    """
    Start a fresh logging context for one HTTP request.

    Returns:
        The request id, generated when the caller sent none
    """
    request_id = request_id or uuid.uuid4().hex[:16]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path)
    return request_id


def get_logger(name: str = None) -> structlog.BoundLogger:
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()
