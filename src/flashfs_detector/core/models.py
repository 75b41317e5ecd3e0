"""Modele danych używane w rdzeniu aplikacji."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FilesystemType(str, Enum):
    """Rozpoznawane systemy plików partycji flash.

    Nie ma wartości "unknown": detekcja zawsze kończy się jednym z dwóch
    wyników, a w razie wątpliwości jest to SPIFFS.
    """

    LITTLEFS = "littlefs"
    SPIFFS = "spiffs"


@dataclass(frozen=True, slots=True)
class FlashRegion:
    """Opis badanego obszaru pamięci flash (tylko do odczytu)."""

    offset: int
    size: int

    @property
    def end(self) -> int:
        return self.offset + self.size


# Typy i podtypy partycji ESP-IDF.
PARTITION_TYPE_APP = 0x00
PARTITION_TYPE_DATA = 0x01

SUBTYPE_DATA_FAT = 0x81
SUBTYPE_DATA_SPIFFS = 0x82
SUBTYPE_DATA_LITTLEFS = 0x83

_TYPE_NAMES = {
    PARTITION_TYPE_APP: "app",
    PARTITION_TYPE_DATA: "data",
}

_APP_SUBTYPE_NAMES = {0x00: "factory", 0x20: "test"}
_APP_SUBTYPE_NAMES.update({0x10 + index: f"ota_{index}" for index in range(16)})

_DATA_SUBTYPE_NAMES = {
    0x00: "ota",
    0x01: "phy",
    0x02: "nvs",
    0x03: "coredump",
    0x04: "nvs_keys",
    0x05: "efuse",
    0x06: "undefined",
    SUBTYPE_DATA_FAT: "fat",
    SUBTYPE_DATA_SPIFFS: "spiffs",
    SUBTYPE_DATA_LITTLEFS: "littlefs",
}


@dataclass(frozen=True, slots=True)
class Partition:
    """Pojedynczy wpis tablicy partycji ESP32."""

    label: str
    type: int
    subtype: int
    offset: int
    size: int
    flags: int = 0

    @property
    def type_name(self) -> str:
        return _TYPE_NAMES.get(self.type, f"0x{self.type:02x}")

    @property
    def subtype_name(self) -> str:
        if self.type == PARTITION_TYPE_APP:
            names = _APP_SUBTYPE_NAMES
        elif self.type == PARTITION_TYPE_DATA:
            names = _DATA_SUBTYPE_NAMES
        else:
            names = {}
        return names.get(self.subtype, f"0x{self.subtype:02x}")

    @property
    def is_filesystem(self) -> bool:
        """Czy partycja może zawierać SPIFFS lub LittleFS."""

        return self.type == PARTITION_TYPE_DATA and self.subtype in (
            SUBTYPE_DATA_SPIFFS,
            SUBTYPE_DATA_LITTLEFS,
        )

    @property
    def region(self) -> FlashRegion:
        return FlashRegion(offset=self.offset, size=self.size)
