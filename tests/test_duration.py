"""Tests for playable duration estimation."""

import io
import math

import pytest
from conftest import box, box_header, make_movie

from movcheck.duration import normalize_duration, reconcile_duration
from movcheck.integrity import classify
from movcheck.parsing import walk_boxes


def playable(data: bytes, total: float | None) -> float:
    walk = walk_boxes(io.BytesIO(data), 0, len(data))
    report = classify(walk, len(data))
    return reconcile_duration(walk.boxes, report.truncation, total)


@pytest.mark.parametrize("value", [None, 0, 0.0, -5.0, math.nan, math.inf])
def test_unknown_duration(value):
    assert normalize_duration(value) == 0.0


def test_complete_file(movie_bytes):
    assert playable(movie_bytes, 120.0) == 120.0


def test_unknown_total_gives_zero():
    data = make_movie(b"")[:-8] + box_header(b"mdat", 1000) + b"\x00" * 100
    assert playable(data, None) == 0.0
    assert playable(data, 0.0) == 0.0


def test_half_of_mdat():
    """Test a media data box cut at half its declared size plays half."""
    head = make_movie(b"")[:-8]
    data = head + box_header(b"mdat", 2000) + b"\x00" * 992
    assert playable(data, 90.0) == pytest.approx(45.0)


def test_damage_after_complete_mdat():
    """Test damage outside the media payload does not reduce playability."""
    data = box(b"ftyp", b"qt  ") + box(b"mdat", b"\x00" * 500) + box_header(b"moov", 800) + b"\x00"
    assert playable(data, 60.0) == 60.0


def test_mdat_never_reached():
    data = box(b"ftyp", b"qt  ") + box_header(b"moov", 800) + b"\x00" * 40
    assert playable(data, 60.0) == 0.0


def test_no_mdat_at_all():
    data = box(b"ftyp", b"qt  ") + box(b"moov")
    assert playable(data, 60.0) == 0.0


def test_multiple_mdat_boxes():
    """Test the estimate spans every top-level media data box."""
    data = (
        box(b"ftyp", b"qt  ")
        + box(b"moov")
        + box(b"mdat", b"\x00" * 992)
        + box_header(b"mdat", 1000)
        + b"\x00" * 492
    )
    # (1000 + 500) / (1000 + 1000)
    assert playable(data, 100.0) == pytest.approx(75.0)


def test_never_exceeds_total():
    head = make_movie(b"")[:-8]
    for cut in (0, 1, 500, 991):
        data = head + box_header(b"mdat", 1000) + b"\x00" * cut
        value = playable(data, 10.0)
        assert 0.0 <= value <= 10.0
