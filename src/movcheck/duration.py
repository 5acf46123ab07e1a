"""Playable duration estimation.

The estimate is byte-proportional: when the media data box is cut short,
the playable share of the nominal duration is taken to equal the share of
its declared bytes that are present. Frame-accurate figures would need the
sample tables, which are not inspected here.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from movcheck.config import DEFAULT_REGISTRY, BoxRegistry
from movcheck.models import Box, Truncation


def normalize_duration(total_duration: float | None) -> float:
    """Map missing, non-finite or non-positive durations to 0.0 (unknown)."""
    if total_duration is None:
        return 0.0
    value = float(total_duration)
    if not math.isfinite(value) or value <= 0:
        return 0.0
    return value


def reconcile_duration(
    boxes: Sequence[Box],
    truncation: Truncation | None,
    total_duration: float | None,
    registry: BoxRegistry = DEFAULT_REGISTRY,
) -> float:
    """Estimate how much of ``total_duration`` is still playable.

    When the file holds several top-level media data boxes the fraction is
    available over declared bytes summed across all of them, since the
    nominal duration covers every box and not only the one that was cut.
    With a single media data box this is its plain available/declared ratio.

    Args:
        boxes: Walked boxes (only top-level ones are considered)
        truncation: Truncation that ended the top-level pass, if any
        total_duration: Nominal duration in seconds; 0 or None means unknown
        registry: Supplies the media data box type

    Returns:
        Playable duration in seconds, within ``[0, total_duration]``
    """
    total = normalize_duration(total_duration)
    if total == 0.0:
        return 0.0

    media = [b for b in boxes if b.depth == 0 and b.tag == registry.media_data_type]
    if not media:
        return 0.0

    cut_in_media = (
        truncation is not None
        and truncation.is_top_level
        and truncation.tag == registry.media_data_type
        and not media[-1].complete
    )
    if not cut_in_media:
        return total

    declared = sum(b.declared_size for b in media)
    if declared <= 0:
        return 0.0
    available = sum(b.size for b in media)
    fraction = min(1.0, max(0.0, available / declared))
    return min(total, total * fraction)
