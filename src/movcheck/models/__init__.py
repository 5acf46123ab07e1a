"""Pydantic models for movcheck."""

from .box import Box, Truncation, TruncationKind, WalkResult, render_tag
from .file import format_duration, format_size
from .result import AnalysisResult, ScanFailure, ScanFailureKind, ScanOutcome

__all__ = [
    # Result
    "AnalysisResult",
    "ScanFailure",
    "ScanFailureKind",
    "ScanOutcome",
    # Structure
    "Box",
    "Truncation",
    "TruncationKind",
    "WalkResult",
    "render_tag",
    # Formatting
    "format_size",
    "format_duration",
]
