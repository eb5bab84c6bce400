"""Tests for logging helpers."""

import logging

import pytest

from common.logging_utils import Timer, configure_logging, extra_context, is_debug_enabled


@pytest.fixture
def clean_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    def test_level_from_env(self, clean_root, monkeypatch):
        monkeypatch.setenv("NESTBUNDLE_LOG_LEVEL", "debug")
        configure_logging()
        assert clean_root.level == logging.DEBUG

    def test_unknown_env_level_defaults_to_info(self, clean_root, monkeypatch):
        monkeypatch.setenv("NESTBUNDLE_LOG_LEVEL", "chatty")
        configure_logging()
        assert clean_root.level == logging.INFO

    def test_handler_installed_once(self, clean_root):
        configure_logging(logging.WARNING)
        configure_logging(logging.ERROR)

        named = [h for h in clean_root.handlers if h.get_name() == "nestbundle-stderr"]
        assert len(named) == 1
        assert clean_root.level == logging.ERROR


class TestHelpers:
    def test_extra_context_drops_none(self):
        assert extra_context(event="x", outcome=None, count=0) == {"event": "x", "count": 0}

    def test_is_debug_enabled(self):
        logger = logging.getLogger("nestbundle.test")
        logger.setLevel(logging.DEBUG)
        assert is_debug_enabled(logger)
        logger.setLevel(logging.INFO)
        assert not is_debug_enabled(logger)

    def test_timer(self):
        with Timer() as t:
            pass
        assert t.duration_ms() >= 0
        assert Timer().duration_ms() == 0
