"""Unit tests for shared configuration and logging."""

from __future__ import annotations

import logging
from unittest.mock import patch

from flashfs_detector.shared import AppConfig
from flashfs_detector.shared.logging import configure_logging


def test_configure_logging_calls_structlog_and_basicconfig() -> None:
    with (
        patch("flashfs_detector.shared.logging.logging.basicConfig") as basic_config,
        patch("flashfs_detector.shared.logging.structlog.configure") as configure,
    ):
        configure_logging(level=logging.DEBUG)

    basic_config.assert_called_once()
    configure.assert_called_once()


def test_app_config_defaults() -> None:
    config = AppConfig.default()

    assert config.partition_table_offset == 0x8000
    assert config.log_level == logging.INFO


def test_app_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("FLASHFS_PARTITION_TABLE_OFFSET", "0x9000")
    monkeypatch.setenv("FLASHFS_LOG_LEVEL", "debug")

    config = AppConfig.from_env()

    assert config.partition_table_offset == 0x9000
    assert config.log_level == logging.DEBUG


def test_app_config_ignores_invalid_env(monkeypatch) -> None:
    monkeypatch.setenv("FLASHFS_PARTITION_TABLE_OFFSET", "not-a-number")
    monkeypatch.setenv("FLASHFS_LOG_LEVEL", "LOUD")

    assert AppConfig.from_env() == AppConfig.default()


def test_app_config_has_no_sample_size_override(monkeypatch) -> None:
    # Rozmiar próbki jest stały; konfiguracja środowiskowa go nie zmienia.
    monkeypatch.setenv("FLASHFS_SAMPLE_SIZE", "16")

    config = AppConfig.from_env()

    assert not hasattr(config, "sample_size")
    assert config == AppConfig.default()
