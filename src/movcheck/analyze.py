"""Core analysis functions."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Mapping
from typing import BinaryIO

from movcheck.config import DEFAULT_REGISTRY, BoxRegistry
from movcheck.duration import normalize_duration, reconcile_duration
from movcheck.integrity import classify
from movcheck.models import AnalysisResult, ScanFailure, ScanOutcome
from movcheck.parsing import walk_boxes

logger = logging.getLogger(__name__)

DurationProbe = Callable[[str], "float | None"]


def _stream_size(stream: BinaryIO) -> int:
    stream.seek(0, os.SEEK_END)
    return stream.tell()


def analyze_stream(
    stream: BinaryIO,
    path: str = "",
    total_duration: float | None = None,
    registry: BoxRegistry | None = None,
    file_size: int | None = None,
) -> AnalysisResult:
    """Check the box structure of an already opened stream.

    This is the whole integrity pipeline: walk the boxes, classify the
    walk, then estimate the playable duration. Only box headers are read;
    payloads are skipped by seeking. The result depends on nothing but
    the stream bytes and the arguments.

    Args:
        stream: Seekable binary stream
        path: Path reported in the result (not opened or interpreted)
        total_duration: Nominal duration in seconds, 0 or None if unknown
        registry: Box type tables, defaults to ``DEFAULT_REGISTRY``
        file_size: Size in bytes; measured from the stream when omitted

    Returns:
        AnalysisResult for the stream

    Raises:
        OSError: If the stream cannot be read
    """
    registry = registry or DEFAULT_REGISTRY
    if file_size is None:
        file_size = _stream_size(stream)

    walk = walk_boxes(stream, 0, file_size, registry)
    report = classify(walk, file_size, registry)
    total = normalize_duration(total_duration)
    playable = reconcile_duration(walk.boxes, report.truncation, total, registry)

    logger.debug(
        "%s: %d boxes, %d/%d bytes validated, %d issue(s)",
        path or "<stream>",
        len(walk.boxes),
        report.validated_bytes,
        file_size,
        len(report.issues),
    )

    return AnalysisResult(
        path=path,
        boxes=walk.boxes,
        file_size=file_size,
        validated_bytes=report.validated_bytes,
        total_duration=total,
        playable_duration=playable,
        issues=report.issues,
        required_boxes=report.required_boxes,
    )


def analyze_file(
    path: str,
    total_duration: float | None = None,
    registry: BoxRegistry | None = None,
) -> ScanOutcome:
    """Check the box structure of a movie file.

    The file is opened read-only and never written. Failure to open or
    read it is returned as a ScanFailure rather than raised, so callers
    can tell "checked and broken" apart from "could not check".

    Args:
        path: Path to the movie file
        total_duration: Nominal duration in seconds, 0 or None if unknown
        registry: Box type tables, defaults to ``DEFAULT_REGISTRY``

    Returns:
        AnalysisResult, or ScanFailure if the file could not be read
    """
    try:
        with open(path, "rb") as f:
            return analyze_stream(f, path=path, total_duration=total_duration, registry=registry)
    except OSError as e:
        failure = ScanFailure.from_os_error(path, e)
        logger.warning("Could not scan %s: %s (%s)", path, failure.message, failure.kind.value)
        return failure


def analyze_files(
    paths: Iterable[str],
    durations: Mapping[str, float] | None = None,
    registry: BoxRegistry | None = None,
    probe: DurationProbe | None = None,
) -> list[ScanOutcome]:
    """Analyze multiple movie files, one after another.

    Args:
        paths: File paths
        durations: Known nominal durations keyed by path
        registry: Box type tables shared by every scan
        probe: Called for the duration of paths missing from ``durations``

    Returns:
        One AnalysisResult or ScanFailure per path, in order
    """
    results: list[ScanOutcome] = []
    for path in paths:
        total = durations.get(path) if durations else None
        if total is None and probe is not None and os.path.isfile(path):
            total = probe(path)
        results.append(analyze_file(path, total_duration=total, registry=registry))
    return results
