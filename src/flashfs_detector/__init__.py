"""flashfs-detector: rozpoznawanie systemu plików (SPIFFS/LittleFS) w pamięci flash."""

from .core.models import FilesystemType, FlashRegion
from .fs_detection import detect_filesystem_type

__all__ = [
    "core",
    "readers",
    "fs_detection",
    "partitions",
    "shared",
    "FilesystemType",
    "FlashRegion",
    "detect_filesystem_type",
]
