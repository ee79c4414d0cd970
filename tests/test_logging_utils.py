"""Tests for logging helpers."""

import logging

import pytest

from common.logging_utils import configure_logging, extra_context, is_debug_enabled


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_extra_context_orders_known_keys():
    extra = extra_context(package="foo", outcome="ok", event="decision")
    assert list(extra["context"]) == ["event", "outcome", "package"]


def test_level_from_env(monkeypatch):
    monkeypatch.setenv("PACSTATE_LOG_LEVEL", "DEBUG")
    configure_logging()
    assert logging.getLogger().level == logging.DEBUG
    assert is_debug_enabled(logging.getLogger("pacstate.test"))


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("PACSTATE_LOG_LEVEL", "DEBUG")
    configure_logging(logging.ERROR)
    assert not is_debug_enabled(logging.getLogger("pacstate.test"))


def test_reconfigure_replaces_handlers():
    configure_logging()
    first = len(logging.getLogger().handlers)
    configure_logging()
    assert len(logging.getLogger().handlers) == first


def test_context_rendered_in_file(tmp_path):
    log_file = tmp_path / "out.log"
    configure_logging(logging.DEBUG, str(log_file))
    logging.getLogger("pacstate.test").debug("hello", extra=extra_context(event="x", component="y"))
    assert "hello [event=x component=y]" in log_file.read_text()
