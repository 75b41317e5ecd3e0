"""Detektor sygnatur systemu plików partycji flash."""

from __future__ import annotations

import asyncio
from typing import Any, Protocol, Sequence

from structlog import get_logger

from flashfs_detector.core.models import FilesystemType
from flashfs_detector.readers.base import FlashReader, read_bytes

from .heuristics import DEFAULT_HEURISTICS, Heuristic, HeuristicConfig

FALLBACK = FilesystemType.SPIFFS


class DiagnosticSink(Protocol):
    """Opcjonalny odbiorca czytelnych komunikatów diagnostycznych."""

    def log(self, message: str) -> None:
        """Komunikat informacyjny."""

    def error(self, message: str) -> None:
        """Komunikat o błędzie."""


class _Diagnostics:
    """Kieruje zdarzenia do structloga oraz, jeśli podano, do odbiorcy wywołującego."""

    def __init__(self, logger: Any, sink: DiagnosticSink | None) -> None:
        self._logger = logger
        self._sink = sink

    def info(self, event: str, message: str, **kw: Any) -> None:
        self._logger.info(event, message=message, **kw)
        self._forward("log", message)

    def warning(self, event: str, message: str, **kw: Any) -> None:
        self._logger.warning(event, message=message, **kw)
        self._forward("log", message)

    def error(self, event: str, message: str, **kw: Any) -> None:
        self._logger.error(event, message=message, **kw)
        self._forward("error", message)

    def _forward(self, method: str, message: str) -> None:
        if self._sink is None:
            return
        try:
            getattr(self._sink, method)(message)
        except Exception as exc:
            # Logowanie jest wyłącznie obserwacyjne i nie wpływa na wynik.
            self._logger.warning("diagnostic-sink-failed", method=method, error=str(exc))


class SignatureDetector:
    """Rozpoznaje SPIFFS lub LittleFS na podstawie próbki z początku partycji.

    Detektor jest bezstanowy: każde wywołanie ``detect`` czyta nową próbkę,
    uruchamia heurystyki w ustalonej kolejności i zwraca pierwszy wynik.
    Żaden błąd nie wydostaje się na zewnątrz; każda awaria kończy się
    bezpiecznym wynikiem SPIFFS.
    """

    def __init__(
        self,
        *,
        config: HeuristicConfig | None = None,
        heuristics: Sequence[Heuristic] | None = None,
    ) -> None:
        self._config = config or HeuristicConfig()
        self._heuristics = tuple(DEFAULT_HEURISTICS if heuristics is None else heuristics)
        self._logger = get_logger(__name__)

    async def detect(
        self,
        reader: FlashReader,
        offset: int,
        size: int,
        logger: DiagnosticSink | None = None,
    ) -> FilesystemType:
        read_size = max(0, min(self._config.sample_size, int(size)))
        diagnostics = _Diagnostics(self._logger.bind(offset=offset, size=size), logger)

        try:
            sample = await read_bytes(reader, offset, read_size)
        except asyncio.CancelledError as exc:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            diagnostics.error("flash-read-failed", f"Failed to detect filesystem type: read cancelled ({exc!r})")
            return FALLBACK
        except Exception as exc:
            diagnostics.error("flash-read-failed", f"Failed to detect filesystem type: {exc}", error_type=type(exc).__name__)
            return FALLBACK

        return self._classify(sample, diagnostics)

    def classify(self, sample: bytes, logger: DiagnosticSink | None = None) -> FilesystemType:
        """Klasyfikuje gotową próbkę bez odczytu z pamięci flash."""

        return self._classify(bytes(sample), _Diagnostics(self._logger, logger))

    def _classify(self, sample: bytes, diagnostics: _Diagnostics) -> FilesystemType:
        if len(sample) < self._config.min_sample_size:
            diagnostics.info("sample-too-small", "Partition too small, assuming SPIFFS", sample_length=len(sample))
            return FALLBACK

        try:
            for heuristic in self._heuristics:
                result = heuristic(sample, self._config)
                if result is not None:
                    diagnostics.info("filesystem-signature-found", heuristic.description, heuristic=heuristic.name, filesystem=result.value)
                    return result
        except Exception as exc:
            diagnostics.error("heuristic-failed", f"Failed to detect filesystem type: {exc}", error_type=type(exc).__name__)
            return FALLBACK

        diagnostics.warning("no-filesystem-signature", "No clear filesystem signature found, assuming SPIFFS")
        return FALLBACK


async def detect_filesystem_type(
    reader: FlashReader,
    offset: int,
    size: int,
    logger: DiagnosticSink | None = None,
    *,
    config: HeuristicConfig | None = None,
) -> FilesystemType:
    """Określa typ systemu plików partycji ``[offset, offset + size)``."""

    return await SignatureDetector(config=config).detect(reader, offset, size, logger)


def classify_sample(
    sample: bytes,
    logger: DiagnosticSink | None = None,
    *,
    config: HeuristicConfig | None = None,
) -> FilesystemType:
    """Czysta klasyfikacja już pobranej próbki."""

    return SignatureDetector(config=config).classify(sample, logger)


__all__ = [
    "DiagnosticSink",
    "SignatureDetector",
    "classify_sample",
    "detect_filesystem_type",
]
