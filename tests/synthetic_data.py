"""Utilities for generating deterministic synthetic flash samples for tests.

It supports:
- deterministic random buffers (seeded),
- zero / erased (0xFF) buffers,
- LittleFS tag words and SPIFFS magic numbers injected at offsets,
- in-memory readers (async and sync) compatible with the detector,
- a recording diagnostic sink.
"""

from __future__ import annotations

import random
import struct
from dataclasses import dataclass, field
from typing import List

from flashfs_detector.readers import ReaderError

SPIFFS_MAGIC = 0x20140529
SPIFFS_MAGIC_ALT = 0x20160529


def deterministic_random_bytes(length: int, *, seed: int) -> bytes:
    """Return deterministic pseudo-random bytes."""

    return random.Random(seed).randbytes(length)


def zeros(length: int) -> bytes:
    return b"\x00" * int(length)


def erased(length: int) -> bytes:
    return b"\xff" * int(length)


def inject(base: bytes, *, offset: int, data: bytes) -> bytes:
    buf = bytearray(base)
    end = int(offset) + len(data)
    if end > len(buf):
        raise ValueError("Injected data exceeds buffer size")
    buf[int(offset) : end] = data
    return bytes(buf)


def le32(value: int) -> bytes:
    return struct.pack("<I", value)


def littlefs_tag(tag_type: int, length: int, *, tag_id: int = 0) -> int:
    """Builds a tag word with ``type`` in bits 20..31 and ``length`` in bits 0..9."""

    return ((tag_type & 0xFFF) << 20) | ((tag_id & 0x3FF) << 10) | (length & 0x3FF)


def spiffs_sample(length: int = 4096, *, offset: int = 0, magic: int = SPIFFS_MAGIC) -> bytes:
    """Erased-looking buffer whose words never pass the LittleFS tag test."""

    return inject(erased(length), offset=offset, data=le32(magic))


@dataclass
class InMemoryReader:
    """Async in-memory reader recording every request."""

    data: bytes
    calls: List[tuple[int, int]] = field(default_factory=list)

    async def read_flash(self, offset: int, length: int) -> bytes:
        self.calls.append((offset, length))
        return self.data[offset : offset + length]


@dataclass
class SyncReader:
    """Synchronous reader (returns bytes directly)."""

    data: bytes

    def read_flash(self, offset: int, length: int) -> bytes:
        return self.data[offset : offset + length]


@dataclass
class FailingReader:
    error: BaseException = field(default_factory=lambda: ReaderError("device disconnected"))

    async def read_flash(self, offset: int, length: int) -> bytes:
        raise self.error


@dataclass
class RecordingSink:
    messages: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def log(self, message: str) -> None:
        self.messages.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


def partition_entry(label: str, ptype: int, subtype: int, offset: int, size: int, flags: int = 0) -> bytes:
    return struct.pack("<HBBII16sI", 0x50AA, ptype, subtype, offset, size, label.encode("ascii"), flags)


def partition_table(*entries: bytes, md5: bool = False) -> bytes:
    table = b"".join(entries)
    if md5:
        table += b"\xeb\xeb" + b"\xff" * 14 + b"\x00" * 16
    return table + erased(0xC00 - len(table))
