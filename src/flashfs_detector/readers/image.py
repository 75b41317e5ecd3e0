"""Czytnik obrazów pamięci flash zapisanych w plikach (np. ``esptool read_flash``)."""

from __future__ import annotations

import asyncio
from pathlib import Path

from structlog import get_logger

from .base import ReaderError, check_range


class ImageFileReader:
    """Czyta zakresy bajtów z surowego zrzutu pamięci flash.

    Każdy odczyt otwiera plik na nowo, więc równoległe wywołania
    ``read_flash`` nie współdzielą stanu. Blokujące operacje plikowe są
    wykonywane w wątku roboczym.
    """

    def __init__(self, path: Path | str) -> None:
        self._logger = get_logger(__name__)
        self._path = Path(path)
        try:
            self._size = self._path.stat().st_size
        except OSError as exc:
            raise ReaderError(f"Nie udało się otworzyć obrazu flash: {self._path}") from exc

    @property
    def size(self) -> int:
        return self._size

    async def read_flash(self, offset: int, length: int) -> bytes:
        available = check_range(int(offset), int(length), self._size)
        self._logger.debug("reading-flash-image", path=str(self._path), offset=offset, length=available)
        return await asyncio.to_thread(self._read_range, int(offset), available)

    def _read_range(self, offset: int, length: int) -> bytes:
        try:
            with self._path.open("rb") as handle:
                handle.seek(offset)
                return handle.read(length)
        except OSError as exc:
            raise ReaderError(f"Błąd odczytu obrazu flash {self._path} @ 0x{offset:x}") from exc
