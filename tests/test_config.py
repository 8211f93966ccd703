"""Tests for RenderConfig terminal detection and setup_logging."""

from __future__ import annotations

import logging

import pytest

from canvas_pipeline.config import RenderConfig
from canvas_pipeline.logging_config import LOGGER_NAME, setup_logging


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved_handlers, saved_level = logger.handlers[:], logger.level
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


class TestRenderConfig:
    def test_defaults(self) -> None:
        config = RenderConfig()
        assert config.clear_color == "#ffffff"
        assert config.strict_geometry is True

    def test_utf8_xterm(self, monkeypatch) -> None:
        monkeypatch.setenv("TERM", "xterm-256color")
        monkeypatch.setenv("LANG", "en_US.UTF-8")
        config = RenderConfig.detect_terminal()
        assert config.use_color and config.use_braille

    def test_dumb_terminal(self, monkeypatch) -> None:
        monkeypatch.setenv("TERM", "dumb")
        monkeypatch.delenv("LANG", raising=False)
        config = RenderConfig.detect_terminal()
        assert not config.use_color
        assert not config.use_braille

    def test_linux_console_skips_braille(self, monkeypatch) -> None:
        monkeypatch.setenv("TERM", "linux")
        monkeypatch.setenv("LANG", "en_US.utf8")
        config = RenderConfig.detect_terminal()
        assert config.use_color
        assert not config.use_braille

    def test_overrides_win(self, monkeypatch) -> None:
        monkeypatch.setenv("TERM", "dumb")
        config = RenderConfig.detect_terminal(use_color=True, strict_geometry=False,
                                              clear_color="#000000")
        assert config.use_color
        assert config.strict_geometry is False
        assert config.clear_color == "#000000"


class TestSetupLogging:
    def test_console_handler(self, clean_logger) -> None:
        logger = setup_logging(logging.DEBUG)
        assert logger is clean_logger
        assert logger.level == logging.DEBUG
        assert [type(h) for h in logger.handlers] == [logging.StreamHandler]

    def test_repeat_calls_do_not_stack_handlers(self, clean_logger) -> None:
        setup_logging()
        setup_logging()
        assert len(clean_logger.handlers) == 1

    def test_quiet_gets_null_handler(self, clean_logger) -> None:
        setup_logging(console=False)
        assert [type(h) for h in clean_logger.handlers] == [logging.NullHandler]

    def test_file_handler(self, clean_logger, tmp_path) -> None:
        log_file = tmp_path / "render.log"
        setup_logging(logging.INFO, str(log_file), console=False)
        logging.getLogger("canvas_pipeline.renderer").info("frame done")
        for handler in clean_logger.handlers:
            handler.flush()
        assert "canvas_pipeline.renderer - INFO - frame done" in log_file.read_text()
