"""Structural integrity classification."""

from __future__ import annotations

from dataclasses import dataclass, field

from movcheck.config import DEFAULT_REGISTRY, BoxRegistry
from movcheck.models import Truncation, TruncationKind, WalkResult, render_tag


@dataclass
class IntegrityReport:
    """Findings derived from one walk of a file."""

    issues: list[str] = field(default_factory=list)
    validated_bytes: int = 0
    required_boxes: dict[str, bool] = field(default_factory=dict)
    # Truncation that ended the top-level pass, if any
    truncation: Truncation | None = None


def _location(truncation: Truncation) -> str:
    text = f"at offset {truncation.offset:,}"
    if truncation.parent_tag is not None:
        text += (
            f" inside '{render_tag(truncation.parent_tag)}'"
            f" (offset {truncation.parent_offset:,}, depth {truncation.depth})"
        )
    return text


def describe_truncation(truncation: Truncation) -> str:
    """Return the issue text for one early stop."""
    where = _location(truncation)

    if truncation.kind == TruncationKind.TRUNCATED:
        declared = truncation.declared_size or 0
        available = truncation.available_size or 0
        missing = declared - available
        percent = missing * 100.0 / declared if declared else 0.0
        return (
            f"Incomplete box '{render_tag(truncation.tag or b'')}' {where}: "
            f"expected {declared:,} bytes, available {available:,} bytes, "
            f"missing {missing:,} bytes ({percent:.1f}%)"
        )

    if truncation.kind == TruncationKind.DEPTH_LIMIT:
        return f"Nesting limit reached {where}: {truncation.reason}"

    if truncation.tag is not None:
        return f"Malformed header for box '{render_tag(truncation.tag)}' {where}: {truncation.reason}"
    return f"Malformed box header {where}: {truncation.reason}"


def classify(
    walk: WalkResult,
    file_size: int,
    registry: BoxRegistry = DEFAULT_REGISTRY,
) -> IntegrityReport:
    """Check a walked box sequence against the structural invariants.

    Every early stop becomes an issue, in file order. Each required
    top-level box that never appeared adds a ``missing required box`` issue.
    Box order is not checked: writers legitimately place the media data
    before or after the movie metadata.

    Args:
        walk: Output of ``walk_boxes`` over the whole file
        file_size: Size of the file in bytes
        registry: Required box types to check for

    Returns:
        IntegrityReport with issues and the validated byte prefix
    """
    report = IntegrityReport(truncation=walk.top_level_truncation)

    for truncation in walk.truncations:
        report.issues.append(describe_truncation(truncation))

    # Top-level boxes are contiguous from offset 0, so the complete ones
    # before the first stop form the validated prefix.
    validated = 0
    top_level = walk.top_level_boxes
    for box in top_level:
        if not box.complete:
            break
        validated += box.size
    report.validated_bytes = validated if report.truncation else file_size

    top_level_tags = {box.tag for box in top_level}
    for tag, name in registry.required_types:
        present = tag in top_level_tags
        report.required_boxes[name] = present
        if not present:
            report.issues.append(f"missing required box: {name}")

    return report
