"""
Tests for logging setup and request context binding.
"""

import pytest
import structlog

from ahactl.utils.logging import bind_request, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.mark.parametrize("fmt, renderer", [
    ("json", structlog.processors.JSONRenderer),
    ("console", structlog.dev.ConsoleRenderer),
])
def test_setup_logging_selects_renderer(fmt, renderer):
    setup_logging("info", fmt)

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], renderer)
    assert processors[0] is structlog.contextvars.merge_contextvars


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError, match="log level"):
        setup_logging("chatty")


def test_setup_logging_rejects_unknown_format():
    with pytest.raises(ValueError, match="log format"):
        setup_logging("info", "xml")


def test_bind_request_replaces_previous_context():
    bind_request("GET", "/devices", "first")
    request_id = bind_request("POST", "/toggle")

    context = structlog.contextvars.get_contextvars()
    assert context == {"request_id": request_id, "method": "POST", "path": "/toggle"}
    assert request_id != "first"
