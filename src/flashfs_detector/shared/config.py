"""Konfiguracja aplikacji."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from flashfs_detector.partitions import PARTITION_TABLE_OFFSET


@dataclass(slots=True)
class AppConfig:
    """Konfiguracja ogólna aplikacji."""

    partition_table_offset: int = PARTITION_TABLE_OFFSET
    log_level: int = logging.INFO

    @classmethod
    def default(cls) -> "AppConfig":
        """Tworzy domyślną konfigurację."""

        return cls()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Konfiguracja z nadpisaniami ze zmiennych ``FLASHFS_*``.

        Niepoprawne wartości są ignorowane (zostaje wartość domyślna).
        """

        config = cls.default()
        config.partition_table_offset = _env_int("FLASHFS_PARTITION_TABLE_OFFSET", config.partition_table_offset)

        level_name = (os.getenv("FLASHFS_LOG_LEVEL") or "").strip().upper()
        level = logging.getLevelName(level_name) if level_name else None
        if isinstance(level, int):
            config.log_level = level
        return config


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw, 0)
    except ValueError:
        return default
    return value if value >= 0 else default
