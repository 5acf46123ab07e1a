"""Quiet output formatter - one-line summary."""

from collections.abc import Sequence

from movcheck.models import ScanFailure, ScanOutcome


def format_quiet(outcome: ScanOutcome) -> str:
    """Format a scan outcome as one-line summary.

    Format: filename | status | validated % | playable / total | issue count
    """
    if isinstance(outcome, ScanFailure):
        return f"{outcome.filename} | NOT SCANNED | {outcome.kind.value}: {outcome.message}"

    parts = [outcome.filename]
    parts.append("CORRUPT" if outcome.has_issues else "OK")
    parts.append(f"{outcome.validation_percentage:.1f}% validated")

    if outcome.total_duration > 0:
        parts.append(f"{outcome.playable_duration_formatted} / {outcome.total_duration_formatted} playable")
    else:
        parts.append("duration N/A")

    parts.append(f"{len(outcome.issues)} issue(s)")
    return " | ".join(parts)


def format_quiet_list(outcomes: Sequence[ScanOutcome]) -> str:
    """Format multiple outcomes as one-line summaries, one per file."""
    return "\n".join(format_quiet(o) for o in outcomes)
