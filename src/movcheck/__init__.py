"""movcheck - QuickTime/MP4 container integrity checker.

Find where a movie file stops being structurally valid and estimate how
much of it still plays.

Usage:
    from movcheck import analyze_file, AnalysisResult

    result = analyze_file("clip.mov", total_duration=120.0)

    if isinstance(result, AnalysisResult):
        if result.has_issues:
            print(f"Breaks at offset {result.truncation_offset}")
            print(f"Playable: {result.playable_duration:.1f}s")
    else:
        print(f"Could not scan: {result.message}")

    # Export as JSON
    print(result.model_dump_json())
"""

from movcheck._version import __version__
from movcheck.analyze import analyze_file, analyze_files, analyze_stream
from movcheck.config import (
    DEFAULT_REGISTRY,
    BoxRegistry,
    MovcheckConfig,
    get_config,
    load_config,
)
from movcheck.formatters import (
    format_default,
    format_json,
    format_json_list,
    format_quiet,
    format_summary,
    to_dict,
)
from movcheck.models import (
    AnalysisResult,
    Box,
    ScanFailure,
    ScanFailureKind,
    ScanOutcome,
)

__all__ = [
    # Version
    "__version__",
    # Main functions
    "analyze_file",
    "analyze_files",
    "analyze_stream",
    # Models
    "AnalysisResult",
    "Box",
    "ScanFailure",
    "ScanFailureKind",
    "ScanOutcome",
    # Configuration
    "BoxRegistry",
    "DEFAULT_REGISTRY",
    "MovcheckConfig",
    "get_config",
    "load_config",
    # Formatters
    "format_default",
    "format_summary",
    "format_json",
    "format_json_list",
    "format_quiet",
    "to_dict",
]
