"""Interfejs bazowy dla czytników pamięci flash."""

from __future__ import annotations

import inspect
from typing import Awaitable, Protocol, Union


class ReaderError(RuntimeError):
    """Błąd specyficzny czytników pamięci flash."""


class FlashReader(Protocol):
    """Minimalny interfejs źródła bajtów pamięci flash.

    Implementacja może być asynchroniczna (zwraca obiekt awaitable) albo
    synchroniczna (zwraca bajty od razu). Detektor obsługuje oba warianty.
    """

    def read_flash(self, offset: int, length: int) -> Union[bytes, Awaitable[bytes]]:
        """Czyta ``length`` bajtów począwszy od ``offset``."""


def check_range(offset: int, length: int, total: int) -> int:
    """Waliduje zakres odczytu i zwraca liczbę dostępnych bajtów."""

    if offset < 0 or length < 0:
        raise ReaderError(f"Nieprawidłowy zakres odczytu: offset={offset}, length={length}")
    if offset > total:
        raise ReaderError(f"Offset 0x{offset:x} poza obrazem o rozmiarze 0x{total:x}")
    return min(length, total - offset)


async def read_bytes(reader: FlashReader, offset: int, length: int) -> bytes:
    """Czyta zakres z czytnika synchronicznego lub asynchronicznego."""

    data = reader.read_flash(offset, length)
    if inspect.isawaitable(data):
        data = await data
    return bytes(data)
