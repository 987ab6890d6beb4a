"""Tests for logging setup and the Loki handler."""

import logging
from unittest import mock

import pytest

from reaper.log import handler as loki_module
from reaper.log import setup as log_setup
from reaper.log.handler import LokiHandler


@pytest.fixture
def loki(monkeypatch):
    post = mock.Mock(return_value=mock.Mock(status_code=204, text=""))
    monkeypatch.setattr(loki_module.requests, "post", post)
    handler = LokiHandler("http://loki:3100/", org_id="tenant", flush_interval=60, batch_size=2)
    yield handler, post
    handler.close()


def make_record(msg, level=logging.INFO):
    return logging.LogRecord("reaper.test", level, __file__, 1, msg, None, None)


def test_flushes_when_batch_is_full(loki):
    handler, post = loki
    handler.emit(make_record("one"))
    post.assert_not_called()

    handler.emit(make_record("two"))

    post.assert_called_once()
    args, kwargs = post.call_args
    assert args[0] == "http://loki:3100/loki/api/v1/push"
    assert kwargs["headers"]["X-Scope-OrgID"] == "tenant"
    streams = kwargs["json"]["streams"]
    assert [s["values"][0][1] for s in streams] == ["one", "two"]
    assert streams[0]["stream"]["logger"] == "reaper.test"


def test_close_flushes_remaining(loki):
    handler, post = loki
    handler.emit(make_record("last words"))
    handler.close()
    assert post.call_count == 1


def test_network_errors_do_not_raise(loki, capsys):
    handler, post = loki
    post.side_effect = loki_module.requests.ConnectionError("down")
    handler.emit(make_record("a"))
    handler.emit(make_record("b"))
    assert "Failed to send 2 logs to Loki" in capsys.readouterr().err


def test_setup_logging_installs_console_handler(monkeypatch):
    root = logging.getLogger()
    saved = list(root.handlers)
    saved_level = root.level
    monkeypatch.setattr(log_setup.config, "LOKI_ENABLED", False)
    try:
        log_setup.setup_logging(logging.WARNING)
        assert len(root.handlers) == 1
        console = root.handlers[0]
        assert isinstance(console, logging.StreamHandler)
        assert console.level == logging.WARNING
        assert isinstance(console.formatter, log_setup.MainFormatter)
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
        for h in saved:
            root.addHandler(h)
        root.setLevel(saved_level)
