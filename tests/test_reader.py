"""Tests for box header decoding."""

import io

import pytest
from conftest import box, box_header, large_box_header

from movcheck.parsing import MalformedHeaderError, read_box_header


class TestReadBoxHeader:
    """Test read_box_header."""

    def test_compact_size(self):
        """Test the common 8-byte header."""
        data = box(b"ftyp", b"isom" * 4)
        header = read_box_header(io.BytesIO(data), 0, len(data))
        assert header.tag == b"ftyp"
        assert header.size == 24
        assert header.header_size == 8

    def test_reads_at_offset(self):
        """Test decoding a header that does not start at zero."""
        data = box(b"free", b"\x00" * 4) + box(b"mdat", b"\x01" * 10)
        header = read_box_header(io.BytesIO(data), 12, len(data))
        assert header.tag == b"mdat"
        assert header.size == 18

    def test_reads_header_bytes_only(self):
        """Test the stream is left just past the header."""
        stream = io.BytesIO(box(b"mdat", b"\x00" * 500))
        read_box_header(stream, 0, 508)
        assert stream.tell() == 8

    def test_extended_size(self):
        """Test size == 1 reads a 64-bit size after the tag."""
        data = large_box_header(b"mdat", 40) + b"\x00" * 24
        header = read_box_header(io.BytesIO(data), 0, len(data))
        assert header.tag == b"mdat"
        assert header.size == 40
        assert header.header_size == 16

    def test_extended_size_beyond_4gib(self):
        """Test 64-bit sizes larger than any 32-bit value survive."""
        size = 6 * 1024**3 + 17
        data = large_box_header(b"mdat", size)
        header = read_box_header(io.BytesIO(data), 0, size)
        assert header.size == size

    def test_size_zero_runs_to_range_end(self):
        """Test size == 0 resolves to the bytes left in the range."""
        data = b"\x00" * 16 + box_header(b"mdat", 0) + b"\x00" * 92
        header = read_box_header(io.BytesIO(data), 16, len(data))
        assert header.size == 100

    def test_size_zero_uses_enclosing_range(self):
        """Test size == 0 inside a container ends at the container, not the file."""
        data = box_header(b"udta", 0) + b"\x00" * 100
        header = read_box_header(io.BytesIO(data), 0, 40)
        assert header.size == 40

    def test_non_printable_tag_kept_raw(self):
        """Test garbage tags are returned byte for byte."""
        data = box(b"\x00\xff\x10a", b"\x00" * 4)
        header = read_box_header(io.BytesIO(data), 0, len(data))
        assert header.tag == b"\x00\xff\x10a"

    def test_too_few_bytes(self):
        """Test fewer than 8 bytes is a malformed header."""
        with pytest.raises(MalformedHeaderError) as exc_info:
            read_box_header(io.BytesIO(b"\x00\x00\x00\x10moo"), 0, 7)
        assert exc_info.value.offset == 0
        assert "7 byte(s) left" in exc_info.value.reason

    def test_short_read(self):
        """Test a stream shorter than the claimed range is a malformed header."""
        with pytest.raises(MalformedHeaderError):
            read_box_header(io.BytesIO(b"\x00\x00\x00\x10"), 0, 100)

    def test_size_smaller_than_header(self):
        """Test a declared size below 8 is structurally impossible."""
        data = box_header(b"moov", 4) + b"\x00" * 16
        with pytest.raises(MalformedHeaderError) as exc_info:
            read_box_header(io.BytesIO(data), 0, len(data))
        assert exc_info.value.tag == b"moov"
        assert "smaller than the 8-byte header" in exc_info.value.reason

    def test_extended_size_smaller_than_header(self):
        """Test a 64-bit size below 16 is structurally impossible."""
        data = large_box_header(b"mdat", 12) + b"\x00" * 16
        with pytest.raises(MalformedHeaderError) as exc_info:
            read_box_header(io.BytesIO(data), 0, len(data))
        assert "16-byte header" in exc_info.value.reason

    def test_extended_size_cut_short(self):
        """Test an extended header needs 16 bytes in range."""
        data = large_box_header(b"mdat", 1000)[:12]
        with pytest.raises(MalformedHeaderError) as exc_info:
            read_box_header(io.BytesIO(data), 0, len(data))
        assert "64-bit size" in exc_info.value.reason
