"""Parser binarnej tablicy partycji ESP32.

Tablica zaczyna się domyślnie pod adresem 0x8000 i składa się z 32-bajtowych
wpisów (little-endian)::

    magic  u16  0x50AA (bajty AA 50)
    type   u8
    subtype u8
    offset u32
    size   u32
    label  16 bajtów, dopełnione NUL
    flags  u32

Lista kończy się wpisem wymazanym (FF FF) albo wpisem sumy MD5 (EB EB).
"""

from __future__ import annotations

import struct
from typing import List

from structlog import get_logger

from flashfs_detector.core.models import Partition
from flashfs_detector.readers.base import FlashReader, read_bytes

PARTITION_TABLE_OFFSET = 0x8000
PARTITION_TABLE_MAX_LENGTH = 0xC00

_ENTRY = struct.Struct("<HBBII16sI")
_ENTRY_MAGIC = 0x50AA
_MD5_MAGIC = 0xEBEB
_ERASED_MAGIC = 0xFFFF


class PartitionTableError(ValueError):
    """Tablica partycji nie istnieje lub jest uszkodzona."""


def parse_partition_table(data: bytes) -> List[Partition]:
    """Zwraca wpisy tablicy partycji zapisanej w ``data``."""

    partitions: List[Partition] = []
    for position in range(0, len(data) - _ENTRY.size + 1, _ENTRY.size):
        magic, ptype, subtype, offset, size, raw_label, flags = _ENTRY.unpack_from(data, position)
        if magic in (_ERASED_MAGIC, _MD5_MAGIC):
            break
        if magic != _ENTRY_MAGIC:
            raise PartitionTableError(f"Nieprawidłowy wpis tablicy partycji @ +0x{position:x}: magic 0x{magic:04x}")
        label = raw_label.split(b"\x00", 1)[0].decode("ascii", errors="replace")
        partitions.append(
            Partition(label=label, type=ptype, subtype=subtype, offset=offset, size=size, flags=flags)
        )

    if not partitions:
        raise PartitionTableError("Nie znaleziono tablicy partycji")
    return partitions


async def read_partition_table(
    reader: FlashReader,
    offset: int = PARTITION_TABLE_OFFSET,
) -> List[Partition]:
    """Czyta tablicę partycji przez ``reader`` i ją parsuje."""

    logger = get_logger(__name__)
    data = await read_bytes(reader, offset, PARTITION_TABLE_MAX_LENGTH)
    partitions = parse_partition_table(data)
    logger.debug("partition-table-read", offset=offset, entries=len(partitions))
    return partitions


__all__ = [
    "PARTITION_TABLE_MAX_LENGTH",
    "PARTITION_TABLE_OFFSET",
    "PartitionTableError",
    "parse_partition_table",
    "read_partition_table",
]
