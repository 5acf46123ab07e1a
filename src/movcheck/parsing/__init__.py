"""ISO base media file format structure parsing."""

from .reader import BoxHeader, MalformedHeaderError, read_box_header
from .walker import walk_boxes

__all__ = [
    "BoxHeader",
    "MalformedHeaderError",
    "read_box_header",
    "walk_boxes",
]
