"""Tests for shared logging helpers."""

import logging

import pytest

from common.logging_utils import Timer, configure_logging, extra_context, is_debug_enabled, safe_url


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_extra_context_drops_none():
    assert extra_context(event="x", target=None, count=0) == {"event": "x", "count": 0}


def test_safe_url_strips_credentials_and_query():
    assert safe_url("https://user:pw@example.com:8443/a/b.json?token=1#frag") == "https://example.com:8443/a/b.json"
    assert safe_url("https://example.com/v1/packages/1.20.json") == "https://example.com/v1/packages/1.20.json"


def test_timer_measures_elapsed():
    with Timer() as t:
        pass
    assert t.duration_ms() >= 0.0


class TestConfigureLogging:
    """Level selection for the root logger."""

    def test_explicit_level(self, restore_root_logger):
        configure_logging("debug")
        assert restore_root_logger.level == logging.DEBUG
        assert is_debug_enabled(logging.getLogger("launchermeta.bulk"))

    def test_env_level(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("MCMETA_LOG_LEVEL", "warning")
        configure_logging()
        assert restore_root_logger.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, restore_root_logger, monkeypatch):
        monkeypatch.delenv("MCMETA_LOG_LEVEL", raising=False)
        configure_logging("chatty")
        assert restore_root_logger.level == logging.INFO

    def test_single_handler(self, restore_root_logger):
        configure_logging()
        configure_logging()
        assert len(restore_root_logger.handlers) == 1
