"""Nominal duration probes for movcheck."""

from movcheck.probes.base import BaseProbe
from movcheck.probes.ffprobe import FFprobeProbe

_PROBES: list[type[BaseProbe]] = [
    FFprobeProbe,
]


def get_available_probe() -> BaseProbe | None:
    """Return the first probe whose tool is installed, if any."""
    for probe_cls in _PROBES:
        if probe_cls.is_available():
            return probe_cls()
    return None


def get_probe_status() -> dict[str, bool]:
    """Get availability status of all probes."""
    return {probe_cls.name: probe_cls.is_available() for probe_cls in _PROBES}


__all__ = [
    "BaseProbe",
    "FFprobeProbe",
    "get_available_probe",
    "get_probe_status",
]
