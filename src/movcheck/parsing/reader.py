"""Box header decoding."""

from __future__ import annotations

import struct
from typing import BinaryIO, NamedTuple

HEADER_SIZE = 8
EXTENDED_HEADER_SIZE = 16

# size == 1: a 64-bit size follows the tag
EXTENDED_SIZE_MARKER = 1
# size == 0: the box runs to the end of the enclosing range
TO_END_MARKER = 0


class BoxHeader(NamedTuple):
    """Decoded box header."""

    tag: bytes
    size: int
    header_size: int


class MalformedHeaderError(Exception):
    """Raised when no valid box header can be decoded at ``offset``."""

    def __init__(self, offset: int, reason: str, tag: bytes | None = None):
        self.offset = offset
        self.reason = reason
        self.tag = tag
        super().__init__(f"Malformed box header at offset {offset}: {reason}")


def _read_exact(stream: BinaryIO, count: int) -> bytes | None:
    data = stream.read(count)
    if data is None or len(data) < count:
        return None
    return data


def read_box_header(stream: BinaryIO, offset: int, end: int) -> BoxHeader:
    """Decode the box header at ``offset`` within the range ``[offset, end)``.

    Only the header bytes are read; the payload is left untouched.

    Args:
        stream: Seekable binary stream
        offset: Absolute offset of the box
        end: Absolute end of the enclosing range

    Returns:
        BoxHeader with the raw tag, the resolved size and the header length

    Raises:
        MalformedHeaderError: If the header is cut short or its size is
            smaller than the header itself
    """
    remaining = end - offset
    if remaining < HEADER_SIZE:
        raise MalformedHeaderError(
            offset, f"only {remaining} byte(s) left, need {HEADER_SIZE} for a box header"
        )

    stream.seek(offset)
    header = _read_exact(stream, HEADER_SIZE)
    if header is None:
        raise MalformedHeaderError(offset, "unexpected end of file in box header")

    size, tag = struct.unpack(">I4s", header)
    header_size = HEADER_SIZE

    if size == EXTENDED_SIZE_MARKER:
        if remaining < EXTENDED_HEADER_SIZE:
            raise MalformedHeaderError(
                offset, f"only {remaining} byte(s) left, need {EXTENDED_HEADER_SIZE} for a 64-bit size"
            )
        ext_size = _read_exact(stream, 8)
        if ext_size is None:
            raise MalformedHeaderError(offset, "unexpected end of file in 64-bit size")
        size = struct.unpack(">Q", ext_size)[0]
        header_size = EXTENDED_HEADER_SIZE
    elif size == TO_END_MARKER:
        size = remaining

    if size < header_size:
        raise MalformedHeaderError(
            offset, f"declared size {size} is smaller than the {header_size}-byte header",
            tag=tag,
        )

    return BoxHeader(tag=tag, size=size, header_size=header_size)
