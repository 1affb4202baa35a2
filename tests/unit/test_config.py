# tests/unit/test_config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import logging
from pathlib import Path

import pytest

from turntable.config import LOG_FORMAT, Settings, configure_logging
from turntable.core.state_machine import DEFAULT_CATALOG_TIMEOUT
from turntable.runtime.catalog import DEFAULT_CATALOG_PATH


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})
    assert settings.catalog_path == DEFAULT_CATALOG_PATH
    assert settings.catalog_timeout == DEFAULT_CATALOG_TIMEOUT
    assert settings.log_level == "INFO"


def test_values_from_environment(tmp_path):
    settings = Settings.from_env(
        {
            "TURNTABLE_CATALOG_PATH": str(tmp_path / "c.json"),
            "TURNTABLE_CATALOG_TIMEOUT": "0.5",
            "TURNTABLE_LOG_LEVEL": "debug",
        }
    )
    assert settings.catalog_path == Path(tmp_path / "c.json")
    assert settings.catalog_timeout == 0.5
    assert settings.log_level == "DEBUG"


def test_blank_values_fall_back_to_defaults():
    settings = Settings.from_env({"TURNTABLE_CATALOG_PATH": "", "TURNTABLE_CATALOG_TIMEOUT": "  "})
    assert settings.catalog_path == DEFAULT_CATALOG_PATH
    assert settings.catalog_timeout == DEFAULT_CATALOG_TIMEOUT


@pytest.mark.parametrize("raw", ["soon", "0", "-1"])
def test_bad_timeout_rejected(raw):
    with pytest.raises(ValueError, match="TURNTABLE_CATALOG_TIMEOUT"):
        Settings.from_env({"TURNTABLE_CATALOG_TIMEOUT": raw})


@pytest.mark.parametrize("raw", ["VERBOSE", "loud"])
def test_unknown_log_level_rejected(raw):
    with pytest.raises(ValueError, match="TURNTABLE_LOG_LEVEL"):
        Settings.from_env({"TURNTABLE_LOG_LEVEL": raw})


def test_reads_os_environ(monkeypatch):
    monkeypatch.setenv("TURNTABLE_LOG_LEVEL", "warning")
    assert Settings.from_env().log_level == "WARNING"


def test_settings_are_frozen():
    with pytest.raises(AttributeError):
        Settings().log_level = "DEBUG"


def test_configure_logging_installs_one_handler():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    try:
        first = configure_logging("DEBUG")
        second = configure_logging("WARNING")
        assert first is second
        assert root.handlers.count(first) == 1
        assert first.formatter._fmt == LOG_FORMAT
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_configure_logging_reinstalls_removed_handler():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    try:
        first = configure_logging("INFO")
        root.removeHandler(first)
        second = configure_logging("INFO")
        assert second in root.handlers
        assert first not in root.handlers
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
