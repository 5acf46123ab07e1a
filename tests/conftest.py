"""Pytest configuration and fixtures."""

import io
import os
import struct
import subprocess

import pytest

from movcheck import config


def command_exists(cmd: str) -> bool:
    """Check if a command exists in PATH."""
    try:
        subprocess.run(
            [cmd, "-version"],
            capture_output=True,
            timeout=5,
        )
        return True
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return False


def box(tag: bytes, payload: bytes = b"") -> bytes:
    """Build a box with a 32-bit size."""
    return struct.pack(">I4s", 8 + len(payload), tag) + payload


def large_box_header(tag: bytes, size: int) -> bytes:
    """Build the 16-byte header of a box with a 64-bit size."""
    return struct.pack(">I4sQ", 1, tag, size)


def box_header(tag: bytes, size: int) -> bytes:
    """Build an 8-byte header declaring ``size``, regardless of payload."""
    return struct.pack(">I4s", size, tag)


def make_movie(mdat_payload: bytes = b"\x00" * 1000) -> bytes:
    """Build a small well-formed movie: ftyp, moov with one track, mdat."""
    ftyp = box(b"ftyp", b"qt  \x00\x00\x02\x00qt  ")
    stbl = box(b"stbl", box(b"stsd", b"\x00" * 8) + box(b"stts", b"\x00" * 8))
    minf = box(b"minf", box(b"vmhd", b"\x00" * 12) + stbl)
    mdia = box(b"mdia", box(b"mdhd", b"\x00" * 24) + box(b"hdlr", b"\x00" * 25) + minf)
    trak = box(b"trak", box(b"tkhd", b"\x00" * 84) + mdia)
    moov = box(b"moov", box(b"mvhd", b"\x00" * 100) + trak)
    return ftyp + moov + box(b"mdat", mdat_payload)


class SparseStream(io.RawIOBase):
    """Read-only stream of ``size`` bytes, zero except for the given regions.

    Lets tests present multi-gigabyte files without allocating them.
    """

    def __init__(self, size: int, regions: dict[int, bytes]):
        self._size = size
        self._regions = regions
        self._pos = 0

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def tell(self) -> int:
        return self._pos

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if whence == io.SEEK_SET:
            self._pos = offset
        elif whence == io.SEEK_CUR:
            self._pos += offset
        else:
            self._pos = self._size + offset
        return self._pos

    def readinto(self, buffer) -> int:
        count = max(0, min(len(buffer), self._size - self._pos))
        data = bytearray(count)
        for start, chunk in self._regions.items():
            lo = max(start, self._pos)
            hi = min(start + len(chunk), self._pos + count)
            if lo < hi:
                data[lo - self._pos : hi - self._pos] = chunk[lo - start : hi - start]
        buffer[:count] = data
        self._pos += count
        return count


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config files and MOVCHECK_* variables out of tests."""
    monkeypatch.setattr(config, "CONFIG_LOCATIONS", [tmp_path / "no-such-config.yaml"])
    for key in list(os.environ):
        if key.startswith("MOVCHECK_"):
            monkeypatch.delenv(key)
    config.reset_config()
    yield
    config.reset_config()


@pytest.fixture
def movie_bytes() -> bytes:
    return make_movie()


@pytest.fixture
def write_movie(tmp_path):
    """Write bytes to a file under tmp_path and return its path."""

    def _write(data: bytes, name: str = "movie.mov") -> str:
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)

    return _write


@pytest.fixture
def has_ffprobe() -> bool:
    """Check if ffprobe is available."""
    return command_exists("ffprobe")
