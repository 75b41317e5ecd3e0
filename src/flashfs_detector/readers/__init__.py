"""Źródła danych flash (obrazy plików, bufory w pamięci)."""

from .base import FlashReader, ReaderError, read_bytes
from .image import ImageFileReader
from .memory import MemoryFlashReader

__all__ = [
    "FlashReader",
    "ReaderError",
    "read_bytes",
    "ImageFileReader",
    "MemoryFlashReader",
]
