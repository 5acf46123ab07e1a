"""Configuration management for movcheck.

Supports loading configuration from:
1. Environment variables (MOVCHECK_*)
2. Config file (~/.movcheck/config.yaml)
3. Default values

Example config file (~/.movcheck/config.yaml):
    scan:
      max_depth: 32
      extra_container_types: ["meta", "dinf"]
      extra_known_types: ["uuid"]
    probe:
      ffprobe_path: "/usr/local/bin/ffprobe"
      timeout_seconds: 60
"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# Config file search locations (in priority order)
CONFIG_LOCATIONS = [
    Path.home() / ".movcheck" / "config.yaml",
    Path.home() / ".config" / "movcheck" / "config.yaml",
    Path(".movcheck.yaml"),
]

DEFAULT_MAX_DEPTH = 32

# Boxes whose payload is a plain sequence of child boxes
CONTAINER_TYPES = [
    "moov",
    "trak",
    "mdia",
    "minf",
    "stbl",
    "udta",
    "edts",
]

# Boxes commonly found in healthy files; informational only
KNOWN_TYPES = [
    "ftyp", "moov", "mdat", "free", "skip", "wide", "pnot",
    "mvhd", "trak", "tkhd", "mdia", "mdhd", "hdlr", "minf",
    "vmhd", "smhd", "dinf", "stbl", "stsd", "stts", "stsc",
    "stsz", "stco", "co64", "edts", "elst", "udta", "meta",
]

# Top-level boxes every playable file must have, with their report names
REQUIRED_TYPES = [
    ("ftyp", "file-type"),
    ("moov", "movie-metadata"),
    ("mdat", "media-data"),
]

MEDIA_DATA_TYPE = "mdat"


def to_tag(value: str | bytes) -> bytes:
    """Convert a four-character code to its raw tag bytes."""
    tag = value if isinstance(value, bytes) else value.encode("latin-1")
    if len(tag) != 4:
        raise ValueError(f"Box type must be exactly 4 bytes, got {value!r}")
    return tag


def _to_tags(values: Iterable[str | bytes]) -> frozenset[bytes]:
    return frozenset(to_tag(v) for v in values)


@dataclass(frozen=True)
class BoxRegistry:
    """Box type tables that drive the walker and the classifier.

    Instances are immutable; use the ``with_*`` helpers to derive a new
    registry for an extension type or a different depth bound.
    """

    container_types: frozenset[bytes] = field(default_factory=lambda: _to_tags(CONTAINER_TYPES))
    known_types: frozenset[bytes] = field(default_factory=lambda: _to_tags(KNOWN_TYPES))
    required_types: tuple[tuple[bytes, str], ...] = field(
        default_factory=lambda: tuple((to_tag(t), name) for t, name in REQUIRED_TYPES)
    )
    media_data_type: bytes = field(default_factory=lambda: to_tag(MEDIA_DATA_TYPE))
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")

    def is_container(self, tag: bytes) -> bool:
        return tag in self.container_types

    def is_known(self, tag: bytes) -> bool:
        return tag in self.known_types or tag in self.container_types

    def with_containers(self, *types: str | bytes) -> BoxRegistry:
        """Return a copy that also descends into ``types``."""
        return dataclasses.replace(self, container_types=self.container_types | _to_tags(types))

    def with_known(self, *types: str | bytes) -> BoxRegistry:
        return dataclasses.replace(self, known_types=self.known_types | _to_tags(types))

    def with_max_depth(self, max_depth: int) -> BoxRegistry:
        return dataclasses.replace(self, max_depth=max_depth)


DEFAULT_REGISTRY = BoxRegistry()


@dataclass
class ScanConfig:
    """Structure walk configuration."""

    max_depth: int = DEFAULT_MAX_DEPTH
    extra_container_types: list[str] = field(default_factory=list)
    extra_known_types: list[str] = field(default_factory=list)


@dataclass
class ProbeConfig:
    """Duration probe configuration."""

    ffprobe_path: str = "ffprobe"
    timeout_seconds: int = 60


@dataclass
class MovcheckConfig:
    """Main configuration for movcheck."""

    scan: ScanConfig = field(default_factory=ScanConfig)
    probe: ProbeConfig = field(default_factory=ProbeConfig)

    def build_registry(self) -> BoxRegistry:
        """Return the box registry described by this configuration."""
        return (
            DEFAULT_REGISTRY.with_containers(*self.scan.extra_container_types)
            .with_known(*self.scan.extra_known_types)
            .with_max_depth(self.scan.max_depth)
        )


def _load_yaml_config() -> dict[str, Any]:
    """Load configuration from the first YAML file found."""
    for config_path in CONFIG_LOCATIONS:
        if config_path.exists():
            try:
                with open(config_path) as f:
                    data = yaml.safe_load(f)
                    return data if data else {}
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Ignoring unreadable config file %s: %s", config_path, e)
                continue
    return {}


def _get_env(key: str, default: Any = None) -> Any:
    """Get environment variable with MOVCHECK_ prefix."""
    return os.environ.get(f"MOVCHECK_{key}", default)


def _parse_list(value: str | None) -> list[str] | None:
    """Parse a comma separated list of box types."""
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config() -> MovcheckConfig:
    """Load configuration from file and environment variables.

    Priority (highest first):
    1. Environment variables (MOVCHECK_*)
    2. Config file (~/.movcheck/config.yaml)
    3. Default values
    """
    file_config = _load_yaml_config()

    # Scan config
    scan_config = file_config.get("scan", {})
    scan = ScanConfig(
        max_depth=int(_get_env("MAX_DEPTH") or scan_config.get("max_depth", DEFAULT_MAX_DEPTH)),
        extra_container_types=_parse_list(_get_env("CONTAINER_TYPES"))
        or list(scan_config.get("extra_container_types", [])),
        extra_known_types=_parse_list(_get_env("KNOWN_TYPES"))
        or list(scan_config.get("extra_known_types", [])),
    )

    # Probe config
    probe_config = file_config.get("probe", {})
    probe = ProbeConfig(
        ffprobe_path=_get_env("FFPROBE") or probe_config.get("ffprobe_path", "ffprobe"),
        timeout_seconds=int(
            _get_env("PROBE_TIMEOUT") or probe_config.get("timeout_seconds", 60)
        ),
    )

    return MovcheckConfig(scan=scan, probe=probe)


# Global config instance (lazy loaded)
_config: MovcheckConfig | None = None


def get_config() -> MovcheckConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
