"""Logika wykrywania systemów plików partycji flash."""

from .detector import DiagnosticSink, SignatureDetector, classify_sample, detect_filesystem_type
from .heuristics import DEFAULT_HEURISTICS, Heuristic, HeuristicConfig

__all__ = [
    "DEFAULT_HEURISTICS",
    "DiagnosticSink",
    "Heuristic",
    "HeuristicConfig",
    "SignatureDetector",
    "classify_sample",
    "detect_filesystem_type",
]
