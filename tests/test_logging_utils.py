"""Tests for colored logging helpers, the injectable map logger and config."""

import contextlib
import io

import pytest

from worldmap.config import Config
from worldmap.logging_utils import (
    Color,
    LogLevel,
    MapLogger,
    colored,
    log_error,
    LOG_TAG_ERROR,
    LOG_TAG_INFO,
)


def test_colored_respects_no_color(monkeypatch):
    monkeypatch.delenv("WORLDMAP_NO_COLOR", raising=False)
    assert colored("hi", Color.RED) == f"{Color.RED.value}hi{Color.RESET.value}"
    assert colored("hi", Color.RED, bold=True).startswith(Color.BOLD.value)

    monkeypatch.setenv("WORLDMAP_NO_COLOR", "1")
    assert colored("hi", Color.RED) == "hi"


def test_log_helpers_print_to_stdout(monkeypatch):
    monkeypatch.setenv("WORLDMAP_NO_COLOR", "1")
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        log_error("boom")
    assert buf.getvalue() == "boom\n"


def test_map_logger_filters_by_level(monkeypatch):
    monkeypatch.setenv("WORLDMAP_NO_COLOR", "1")
    stream = io.StringIO()
    logger = MapLogger(MapLogger.INFO, stream=stream)

    logger.error("bad")
    logger.info("note")
    logger.debug("detail")

    lines = stream.getvalue().splitlines()
    assert lines == [f"{LOG_TAG_ERROR} bad", f"{LOG_TAG_INFO} note"]


def test_map_logger_defaults_to_stdout(monkeypatch):
    monkeypatch.setenv("WORLDMAP_NO_COLOR", "1")
    logger = MapLogger("debug")
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        logger.debug("grid built")
    assert "grid built" in buf.getvalue()


def test_map_logger_sends_errors_to_stderr(monkeypatch):
    monkeypatch.setenv("WORLDMAP_NO_COLOR", "1")
    logger = MapLogger("INFO")
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        logger.error("load failed")
        logger.info("map loaded")

    assert err.getvalue() == f"{LOG_TAG_ERROR} load failed\n"
    assert out.getvalue() == f"{LOG_TAG_INFO} map loaded\n"


def test_log_level_names():
    assert LogLevel.from_name("error") is LogLevel.ERROR
    assert LogLevel.ERROR < LogLevel.INFO < LogLevel.DEBUG
    with pytest.raises(ValueError):
        LogLevel.from_name("verbose")


def test_config_validate(monkeypatch):
    Config.validate()

    monkeypatch.setattr(Config, "ZONE_WIDTH", 0)
    with pytest.raises(ValueError):
        Config.validate()


def test_config_rejects_unknown_log_level(monkeypatch):
    monkeypatch.setattr(Config, "LOG_LEVEL", "chatty")
    with pytest.raises(ValueError):
        Config.validate()


def test_config_display_lists_zone_size():
    assert f"Zone Size: {Config.ZONE_WIDTH}x{Config.ZONE_HEIGHT}" in Config.display()
