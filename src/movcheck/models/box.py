"""Box structure models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


def render_tag(tag: bytes) -> str:
    """Return a printable rendition of a four-character tag.

    Printable ASCII bytes are kept as-is, anything else is shown as ``\\xNN``
    so garbage tags from corrupted data still read unambiguously.
    """
    return "".join(chr(b) if 32 <= b <= 126 else f"\\x{b:02x}" for b in tag)


def _tag_from_text(value: object) -> object:
    """Undo the latin-1 text form tags are serialized in."""
    if isinstance(value, str):
        return value.encode("latin-1")
    return value


class Box(BaseModel):
    """One box (atom) observed while walking the file."""

    model_config = ConfigDict(frozen=True)

    tag: bytes
    offset: int
    size: int
    declared_size: int
    header_size: int = 8
    depth: int = 0
    complete: bool = True
    container: bool = False
    known: bool = False

    @field_validator("tag", mode="before")
    @classmethod
    def _parse_tag(cls, value: object) -> object:
        return _tag_from_text(value)

    @field_serializer("tag")
    def _serialize_tag(self, tag: bytes) -> str:
        # latin-1 maps every byte to one code point, so the tag survives verbatim
        return tag.decode("latin-1")

    @property
    def type(self) -> str:
        """Return the tag as printable text."""
        return render_tag(self.tag)

    @property
    def end(self) -> int:
        """Return the offset just past the reported extent."""
        return self.offset + self.size

    @property
    def payload_offset(self) -> int:
        return self.offset + self.header_size

    @property
    def missing_bytes(self) -> int:
        """Bytes the header promised but the file does not hold."""
        return self.declared_size - self.size


class TruncationKind(str, Enum):
    """Why a walked range stopped before its end."""

    TRUNCATED = "truncated"
    MALFORMED = "malformed"
    DEPTH_LIMIT = "depth_limit"


class Truncation(BaseModel):
    """A point where the declared structure stops matching the bytes on disk."""

    model_config = ConfigDict(frozen=True)

    kind: TruncationKind
    offset: int
    depth: int = 0
    reason: str = ""
    # Only set for TRUNCATED
    tag: bytes | None = None
    declared_size: int | None = None
    available_size: int | None = None
    # Enclosing container, None at top level
    parent_tag: bytes | None = None
    parent_offset: int | None = None

    @field_validator("tag", "parent_tag", mode="before")
    @classmethod
    def _parse_tags(cls, value: object) -> object:
        return _tag_from_text(value)

    @field_serializer("tag", "parent_tag")
    def _serialize_tags(self, tag: bytes | None) -> str | None:
        return tag.decode("latin-1") if tag is not None else None

    @property
    def is_top_level(self) -> bool:
        return self.depth == 0


class WalkResult(BaseModel):
    """Flattened pre-order box sequence plus every range that stopped early."""

    boxes: list[Box] = Field(default_factory=list)
    truncations: list[Truncation] = Field(default_factory=list)

    @property
    def top_level_boxes(self) -> list[Box]:
        return [box for box in self.boxes if box.depth == 0]

    @property
    def top_level_truncation(self) -> Truncation | None:
        """Return the truncation that ended the top-level pass, if any."""
        for truncation in self.truncations:
            if truncation.is_top_level:
                return truncation
        return None
