"""Default output formatter - detailed per-file report and batch summary."""

from collections.abc import Sequence

from movcheck.models import AnalysisResult, ScanFailure, ScanOutcome, format_size

BAR_WIDTH = 50


def _timeline(result: AnalysisResult) -> list[str]:
    """Render the playable part of the duration as a bar."""
    lines = ["", "## DURATION"]
    lines.append(f"  Total:        {result.total_duration_formatted}")

    if result.playable_duration < result.total_duration:
        filled = int(BAR_WIDTH * result.playable_percentage / 100.0)
        lines.append(
            f"  Playable:     {result.playable_duration_formatted} "
            f"({result.playable_percentage:.1f}%)"
        )
        lines.append(f"  Missing:      {result.missing_duration:.1f}s")
        lines.append("  [" + "#" * filled + "-" * (BAR_WIDTH - filled) + "]")
    else:
        lines.append("  Playable:     complete playback expected")
        lines.append("  [" + "#" * BAR_WIDTH + "]")
    return lines


def _box_tree(result: AnalysisResult) -> list[str]:
    lines = ["", "## BOX STRUCTURE"]
    for box in result.boxes:
        status = "ok " if box.complete else "CUT"
        indent = "  " * box.depth
        unknown = "" if box.known else " (unknown)"
        line = f"  {status} {indent}[{box.type}]{unknown} size {box.size:,} @ {box.offset:,}"
        if not box.complete:
            line += f" (declared {box.declared_size:,})"
        lines.append(line)
    return lines


def format_default(outcome: ScanOutcome) -> str:
    """Format a scan outcome as a detailed report.

    Covers the structural summary, the duration timeline (when the nominal
    duration is known), the box tree, required boxes, issues, and the
    final verdict.
    """
    lines = []
    lines.append("=" * 70)
    lines.append(f"File: {outcome.filename}")
    lines.append("=" * 70)

    if isinstance(outcome, ScanFailure):
        lines.append("")
        lines.append(f"  Not scanned ({outcome.kind.value}): {outcome.message}")
        return "\n".join(lines)

    result = outcome
    lines.append("")
    lines.append("## SUMMARY")
    lines.append(f"  Size:         {result.file_size:,} bytes ({result.size_human})")
    lines.append(f"  Boxes:        {len(result.boxes)} ({len(result.top_level_boxes)} top-level)")
    lines.append(
        f"  Validated:    {result.validated_bytes:,} / {result.file_size:,} bytes "
        f"({result.validation_percentage:.1f}%)"
    )
    if result.truncation_offset is not None:
        lines.append(f"  Breaks at:    offset {result.truncation_offset:,}")

    if result.total_duration > 0:
        lines.extend(_timeline(result))

    if result.boxes:
        lines.extend(_box_tree(result))

    lines.append("")
    lines.append("## REQUIRED BOXES")
    for name, present in result.required_boxes.items():
        lines.append(f"  {name + ':':<16}{'found' if present else 'MISSING'}")

    if result.issues:
        lines.append("")
        lines.append(f"## ISSUES ({len(result.issues)})")
        for issue in result.issues:
            lines.append(f"  - {issue}")

    lines.append("")
    if result.has_issues:
        lines.append("Status: CORRUPTED or INCOMPLETE")
    else:
        lines.append("Status: VALID and COMPLETE")

    return "\n".join(lines)


def format_summary(outcomes: Sequence[ScanOutcome], max_issues: int = 3) -> str:
    """Format a summary of a batch of scans."""
    results = [o for o in outcomes if isinstance(o, AnalysisResult)]
    failures = [o for o in outcomes if isinstance(o, ScanFailure)]
    corrupted = [r for r in results if r.has_issues]
    total = max(1, len(outcomes))

    lines = ["=" * 70, "SUMMARY", "=" * 70]
    lines.append(f"  Files:        {len(outcomes)}")
    lines.append(
        f"  Valid:        {len(results) - len(corrupted)} "
        f"({(len(results) - len(corrupted)) * 100.0 / total:.1f}%)"
    )
    lines.append(f"  Corrupted:    {len(corrupted)} ({len(corrupted) * 100.0 / total:.1f}%)")
    if failures:
        lines.append(f"  Not scanned:  {len(failures)}")
    lines.append(f"  Total size:   {format_size(sum(r.file_size for r in results))}")

    for result in corrupted:
        lines.append(f"  x {result.filename}")
        for issue in result.issues[:max_issues]:
            lines.append(f"      - {issue}")
        if len(result.issues) > max_issues:
            lines.append(f"      ... and {len(result.issues) - max_issues} more issue(s)")
    for failure in failures:
        lines.append(f"  ? {failure.filename}: {failure.message}")

    return "\n".join(lines)
