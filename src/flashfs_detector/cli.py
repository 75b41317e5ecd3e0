"""Interfejs wiersza poleceń do rozpoznawania systemu plików w zrzutach flash."""

from __future__ import annotations

import asyncio
import sys
from argparse import ArgumentParser, ArgumentTypeError, Namespace
from pathlib import Path
from typing import List, Tuple

import structlog

from flashfs_detector.core.models import FilesystemType, FlashRegion
from flashfs_detector.fs_detection import SignatureDetector
from flashfs_detector.partitions import PartitionTableError, read_partition_table
from flashfs_detector.readers import ImageFileReader, ReaderError
from flashfs_detector.shared import AppConfig, configure_logging


def _int_arg(value: str) -> int:
    try:
        parsed = int(value, 0)
    except ValueError as exc:
        raise ArgumentTypeError(f"niepoprawna liczba: {value!r}") from exc
    if parsed < 0:
        raise ArgumentTypeError(f"wartość nie może być ujemna: {value!r}")
    return parsed


def _build_parser(config: AppConfig | None = None) -> ArgumentParser:
    config = config or AppConfig.default()
    parser = ArgumentParser(
        prog="flashfs-detector",
        description="Rozpoznaje system plików (SPIFFS/LittleFS) partycji w zrzucie pamięci flash.",
    )
    parser.add_argument(
        "image",
        type=Path,
        help="Ścieżka do zrzutu pamięci flash (np. z esptool read_flash)",
    )
    parser.add_argument(
        "--offset",
        type=_int_arg,
        help="Offset badanego obszaru; pomija tablicę partycji",
    )
    parser.add_argument(
        "--size",
        type=_int_arg,
        help="Rozmiar badanego obszaru (domyślnie: do końca obrazu)",
    )
    parser.add_argument(
        "--partition-table-offset",
        type=_int_arg,
        default=config.partition_table_offset,
        help=f"Adres tablicy partycji (domyślnie: 0x{config.partition_table_offset:x})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Wyświetla szczegółowe logi",
    )
    return parser


async def _collect_regions(reader: ImageFileReader, args: Namespace) -> List[Tuple[str, FlashRegion]]:
    if args.offset is not None or args.size is not None:
        offset = args.offset or 0
        size = args.size if args.size is not None else max(reader.size - offset, 0)
        return [(f"0x{offset:x}", FlashRegion(offset=offset, size=size))]

    partitions = await read_partition_table(reader, args.partition_table_offset)
    return [(partition.label, partition.region) for partition in partitions if partition.is_filesystem]


async def _detect_all(args: Namespace) -> int:
    logger = structlog.get_logger(__name__)

    try:
        reader = ImageFileReader(args.image)
        regions = await _collect_regions(reader, args)
    except (ReaderError, PartitionTableError) as exc:
        logger.error("partition-table-unavailable", image=str(args.image), error=str(exc))
        return 1

    if not regions:
        logger.error("no-filesystem-partitions", image=str(args.image))
        return 1

    detector = SignatureDetector()
    for label, region in regions:
        fs_type: FilesystemType = await detector.detect(reader, region.offset, region.size)
        logger.info(
            "filesystem-detected",
            partition=label,
            offset=region.offset,
            size=region.size,
            filesystem=fs_type.value,
        )
        print(f"{label:<16} 0x{region.offset:08x} {region.size:>10} {fs_type.value}")
    return 0


def _run_detection(args: Namespace) -> int:
    if not args.image.is_file():
        structlog.get_logger(__name__).error("image-not-found", path=str(args.image))
        return 1
    return asyncio.run(_detect_all(args))


def main(argv: List[str] | None = None) -> int:
    config = AppConfig.from_env()
    parser = _build_parser(config)
    args = parser.parse_args(argv)
    configure_logging(level=10 if args.verbose else config.log_level)
    return _run_detection(args)


if __name__ == "__main__":
    sys.exit(main())
