"""Heurystyki rozpoznawania SPIFFS/LittleFS na podstawie próbki partycji.

Każda heurystyka jest niezależną funkcją ``(sample, config) -> FilesystemType | None``.
Kolejność ich uruchamiania (od najsilniejszego dowodu do najsłabszego) ustala
``DEFAULT_HEURISTICS``; pierwsza heurystyka zwracająca wynik kończy detekcję.

Uwaga: test strukturalny nie weryfikuje sum kontrolnych. Akceptuje każde
słowo spełniające luźne ograniczenia pól ``type``/``length``, więc na
dowolnych danych binarnych może dawać fałszywe trafienia LittleFS, a ich
odsetek nie jest ograniczony. Tak ma działać i nie dodajemy tu walidacji CRC.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Callable, Optional

from flashfs_detector.core.models import FilesystemType

_WORD = struct.Struct("<I")


@dataclass(frozen=True, slots=True)
class HeuristicConfig:
    sample_size: int = 8 * 1024
    min_sample_size: int = 32
    block_sizes: tuple[int, ...] = (4096, 2048, 1024, 512)
    max_tag_type: int = 0x7FF
    max_tag_length: int = 1022
    magic_window: int = 4 * 1024
    spiffs_magics: frozenset[int] = frozenset({0x20140529, 0x20160529})
    littlefs_marker: str = "littlefs"


HeuristicCheck = Callable[[bytes, HeuristicConfig], Optional[FilesystemType]]


@dataclass(frozen=True, slots=True)
class Heuristic:
    """Heurystyka wraz z opisem dopasowania używanym w logach."""

    name: str
    check: HeuristicCheck
    description: str

    def __call__(self, sample: bytes, config: HeuristicConfig) -> FilesystemType | None:
        return self.check(sample, config)


def find_littlefs_marker(sample: bytes, config: HeuristicConfig) -> FilesystemType | None:
    """Szuka tekstowego znacznika ``littlefs`` w dowolnym miejscu próbki."""

    # Niepoprawne bajty zamieniane są na znak zastępczy i po prostu nie pasują.
    text = sample.decode("ascii", errors="replace")
    if config.littlefs_marker in text:
        return FilesystemType.LITTLEFS
    return None


def decode_tag(tag: int) -> tuple[int, int]:
    """Rozkłada słowo metadanych LittleFS na ``(type, length)``."""

    return (tag >> 20) & 0xFFF, tag & 0x3FF


def find_littlefs_metadata(sample: bytes, config: HeuristicConfig) -> FilesystemType | None:
    """Szuka wiarygodnego słowa tagu metadanych LittleFS w pierwszym bloku."""

    sample_length = len(sample)
    for block_size in config.block_sizes:
        if sample_length < block_size * 2:
            continue
        for offset in range(0, min(block_size, sample_length - 4), 4):
            try:
                (tag,) = _WORD.unpack_from(sample, offset)
            except struct.error:
                continue
            # Magiczne liczby SPIFFS spełniają zakresy pól tagu; nie są tagiem.
            if tag in config.spiffs_magics:
                continue
            tag_type, length = decode_tag(tag)
            if tag_type > config.max_tag_type:
                continue
            if not 0 < length <= config.max_tag_length:
                continue
            if offset + length + 4 <= sample_length:
                return FilesystemType.LITTLEFS
    return None


def find_spiffs_magic(sample: bytes, config: HeuristicConfig) -> FilesystemType | None:
    """Szuka magicznej liczby SPIFFS w wyrównanych słowach pierwszych 4 KiB."""

    for offset in range(0, min(config.magic_window, len(sample) - 4), 4):
        (value,) = _WORD.unpack_from(sample, offset)
        if value in config.spiffs_magics:
            return FilesystemType.SPIFFS
    return None


DEFAULT_HEURISTICS: tuple[Heuristic, ...] = (
    Heuristic(
        name="littlefs-marker",
        check=find_littlefs_marker,
        description='LittleFS detected: found "littlefs" signature',
    ),
    Heuristic(
        name="littlefs-metadata",
        check=find_littlefs_metadata,
        description="LittleFS detected: found valid metadata structure",
    ),
    Heuristic(
        name="spiffs-magic",
        check=find_spiffs_magic,
        description="SPIFFS detected: found SPIFFS magic number",
    ),
)


__all__ = [
    "DEFAULT_HEURISTICS",
    "Heuristic",
    "HeuristicConfig",
    "decode_tag",
    "find_littlefs_marker",
    "find_littlefs_metadata",
    "find_spiffs_magic",
]
