"""
Command-line interface for movcheck.

Usage:
  movcheck movie.mov                 # Detailed report
  movcheck -q *.mp4                  # One line per file
  movcheck -o report.json *.mov      # JSON export
  movcheck --duration 120 clip.mp4   # Known nominal duration, skip ffprobe
"""

from __future__ import annotations

import argparse
import logging
import sys

from movcheck._version import __version__
from movcheck.analyze import analyze_files
from movcheck.config import get_config
from movcheck.formatters import (
    format_default,
    format_json_list,
    format_quiet_list,
    format_summary,
)
from movcheck.models import AnalysisResult
from movcheck.probes import get_available_probe, get_probe_status


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="movcheck",
        description="Check QuickTime/MP4 files for truncation and structural damage.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit status:
  0  every file is structurally intact
  1  at least one file has issues or could not be scanned

Examples:
  movcheck movie.mov                 # Detailed report
  movcheck -q *.mp4                  # One line per file
  movcheck -o report.json *.mov      # JSON export
  movcheck --duration 120 clip.mp4   # Known nominal duration, skip ffprobe
        """,
    )
    parser.add_argument("files", nargs="*", help="Movie file(s) to check")
    parser.add_argument("-o", "--output", help="Save report to JSON file")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-q", "--quiet", action="store_true", help="One-line summary per file")
    parser.add_argument(
        "--duration",
        type=float,
        metavar="SECONDS",
        help="Nominal duration to use for every file (skips the probe)",
    )
    parser.add_argument(
        "--no-probe",
        action="store_true",
        help="Do not ask ffprobe for the nominal duration",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        metavar="N",
        help="Maximum box nesting depth to descend into",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show duration probe availability",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for movcheck CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.status:
        print("movcheck status:")
        print("-" * 40)
        for name, available in sorted(get_probe_status().items()):
            icon = "✓" if available else "✗"
            print(f"  {icon} {name}")
        return 0

    if not args.files:
        parser.error("the following arguments are required: files")

    registry = get_config().build_registry()
    if args.max_depth is not None:
        try:
            registry = registry.with_max_depth(args.max_depth)
        except ValueError as e:
            parser.error(str(e))

    probe = None
    if args.duration is None and not args.no_probe:
        probe = get_available_probe()

    durations = None
    if args.duration is not None:
        durations = {file_path: args.duration for file_path in args.files}

    outcomes = analyze_files(args.files, durations=durations, registry=registry, probe=probe)

    if args.quiet:
        print(format_quiet_list(outcomes))
    else:
        for outcome in outcomes:
            print(format_default(outcome))
            print()
        if len(outcomes) > 1:
            print(format_summary(outcomes))

    # JSON export
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(format_json_list(outcomes))
        print(f"Report saved to: {args.output}")

    intact = all(isinstance(o, AnalysisResult) and not o.has_issues for o in outcomes)
    return 0 if intact else 1


if __name__ == "__main__":
    sys.exit(main())
