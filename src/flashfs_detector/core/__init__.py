"""Rdzeń: modele danych współdzielone przez pozostałe moduły."""

from .models import FilesystemType, FlashRegion, Partition

__all__ = ["FilesystemType", "FlashRegion", "Partition"]
