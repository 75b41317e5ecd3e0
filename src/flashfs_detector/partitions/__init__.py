"""Obsługa tablicy partycji ESP32."""

from .table import (
    PARTITION_TABLE_MAX_LENGTH,
    PARTITION_TABLE_OFFSET,
    PartitionTableError,
    parse_partition_table,
    read_partition_table,
)

__all__ = [
    "PARTITION_TABLE_MAX_LENGTH",
    "PARTITION_TABLE_OFFSET",
    "PartitionTableError",
    "parse_partition_table",
    "read_partition_table",
]
