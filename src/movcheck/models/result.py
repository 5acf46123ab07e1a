"""Per-file scan outcome models."""

from __future__ import annotations

import os
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .box import Box
from .file import format_duration, format_size


class AnalysisResult(BaseModel):
    """Structural integrity verdict for one file.

    Built once per scan and handed to the caller as an immutable value.
    ``has_issues`` is derived from ``issues`` and cannot be set.

    - path: Opaque path string supplied by the caller
    - boxes: Every box observed, flattened in pre-order
    - file_size: Total bytes in the file
    - validated_bytes: Contiguous prefix of complete top-level boxes
    - total_duration: Externally supplied nominal duration (0.0 = unknown)
    - playable_duration: Estimated playable part of ``total_duration``
    - issues: Human-readable findings, in the order they were found
    - required_boxes: Presence of each required top-level box, by name
    """

    model_config = ConfigDict(frozen=True)

    path: str
    boxes: list[Box] = Field(default_factory=list)
    file_size: int = 0
    validated_bytes: int = 0
    total_duration: float = 0.0
    playable_duration: float = 0.0
    issues: list[str] = Field(default_factory=list)
    required_boxes: dict[str, bool] = Field(default_factory=dict)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_issues(self) -> bool:
        """True when at least one issue was found."""
        return len(self.issues) > 0

    @property
    def filename(self) -> str:
        return os.path.basename(self.path)

    @property
    def top_level_boxes(self) -> list[Box]:
        return [box for box in self.boxes if box.depth == 0]

    @property
    def truncation_offset(self) -> int | None:
        """Return the offset where the top-level structure stops, if it does."""
        if self.validated_bytes < self.file_size:
            return self.validated_bytes
        return None

    @property
    def validation_percentage(self) -> float:
        if self.file_size <= 0:
            return 0.0
        return self.validated_bytes * 100.0 / self.file_size

    @property
    def playable_percentage(self) -> float:
        if self.total_duration <= 0:
            return 0.0
        return self.playable_duration * 100.0 / self.total_duration

    @property
    def missing_duration(self) -> float:
        return max(0.0, self.total_duration - self.playable_duration)

    @property
    def size_human(self) -> str:
        return format_size(self.file_size)

    @property
    def total_duration_formatted(self) -> str:
        return format_duration(self.total_duration)

    @property
    def playable_duration_formatted(self) -> str:
        return format_duration(self.playable_duration)


class ScanFailureKind(str, Enum):
    """Reasons a file could not be scanned at all."""

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    NOT_A_FILE = "not_a_file"
    IO_ERROR = "io_error"


class ScanFailure(BaseModel):
    """A file that could not be checked, as opposed to one found broken."""

    model_config = ConfigDict(frozen=True)

    path: str
    kind: ScanFailureKind
    message: str

    @property
    def filename(self) -> str:
        return os.path.basename(self.path)

    @classmethod
    def from_os_error(cls, path: str, error: OSError) -> ScanFailure:
        """Classify an ``OSError`` raised while opening or reading ``path``."""
        if isinstance(error, FileNotFoundError):
            kind = ScanFailureKind.NOT_FOUND
        elif isinstance(error, PermissionError):
            kind = ScanFailureKind.PERMISSION_DENIED
        elif isinstance(error, (IsADirectoryError, NotADirectoryError)):
            kind = ScanFailureKind.NOT_A_FILE
        else:
            kind = ScanFailureKind.IO_ERROR
        message = error.strerror or str(error)
        return cls(path=path, kind=kind, message=message)


ScanOutcome = AnalysisResult | ScanFailure
