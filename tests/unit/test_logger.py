"""Unit tests for logging helpers."""
import logging

import pytest

from logger import SessionIdFilter, clear_session_id, configure_logging, log_call, set_session_id


@pytest.mark.unit
def test_configure_logging_is_idempotent(tmp_path):
    first = configure_logging(log_dir=tmp_path)
    handlers = list(first.handlers)
    second = configure_logging(log_dir=tmp_path)
    assert first is second
    assert second.handlers == handlers
    assert first.name == "aptlearn"


@pytest.mark.unit
def test_session_id_is_attached_to_records():
    record = logging.LogRecord("aptlearn.test", logging.INFO, __file__, 1, "msg", None, None)
    sid = set_session_id("abc123")
    try:
        SessionIdFilter().filter(record)
        assert sid == "abc123"
        assert record.session_id == "abc123"
    finally:
        clear_session_id()
    SessionIdFilter().filter(record)
    assert record.session_id == "-"


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


@pytest.mark.unit
def test_log_call_reports_success_and_failure():
    log = logging.getLogger("aptlearn.test.log_call")
    log.setLevel(logging.INFO)
    handler = _ListHandler()
    log.addHandler(handler)
    try:
        with log_call(log, "GET /days"):
            pass
        with pytest.raises(RuntimeError):
            with log_call(log, "GET /modules"):
                raise RuntimeError("boom")
    finally:
        log.removeHandler(handler)

    assert handler.messages[0].startswith("GET /days ok duration_ms=")
    assert handler.messages[1].startswith("GET /modules failed duration_ms=")
    assert "boom" in handler.messages[1]


@pytest.mark.unit
def test_level_argument_wins_over_bare_env(tmp_path, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    log = logging.getLogger("aptlearn")
    saved = (list(log.handlers), log.level, log.propagate, getattr(log, "_configured", False))
    log.handlers = []
    log._configured = False
    try:
        configured = configure_logging(log_dir=tmp_path, level="DEBUG")
        assert configured.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in configured.handlers)
    finally:
        for handler in log.handlers:
            handler.close()
        log.handlers, level, log.propagate, log._configured = saved
        log.setLevel(level)
