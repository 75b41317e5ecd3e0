"""Czytnik operujący na buforze w pamięci."""

from __future__ import annotations

from .base import ReaderError, check_range


class MemoryFlashReader:
    """Udostępnia zrzut pamięci flash trzymany w pamięci jako ``FlashReader``."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._closed = False

    @property
    def size(self) -> int:
        return len(self._data)

    async def read_flash(self, offset: int, length: int) -> bytes:
        if self._closed:
            raise ReaderError("Czytnik został zamknięty")
        available = check_range(int(offset), int(length), len(self._data))
        return self._data[offset : offset + available]

    def close(self) -> None:
        self._closed = True
