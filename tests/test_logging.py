"""
Tests for Logging Setup
=======================
"""

import json
import logging

import pytest
import structlog

from otply_core.logging import setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


def test_json_output(restore_logging, capsys):
    """Records are rendered as JSON with the service bound."""
    setup_logging("auth-api", level="debug")

    structlog.get_logger("otply_core.test").info("otp_code_issued", identifier="u**r@test.com")

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line]
    record = lines[-1]
    assert record["event"] == "otp_code_issued"
    assert record["service"] == "auth-api"
    assert record["identifier"] == "u**r@test.com"
    assert record["level"] == "info"


def test_returns_root_logger(restore_logging):
    """Root logger gets a single handler at the requested level."""
    root = setup_logging("auth-api", level="WARNING", json_output=False)

    assert root is logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.WARNING
