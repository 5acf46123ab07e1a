"""Base duration probe class."""

from abc import ABC, abstractmethod
from typing import ClassVar


class BaseProbe(ABC):
    """Abstract base class for nominal duration probes.

    Probes ask an external tool how long a movie is supposed to be. The
    integrity check itself never calls them; drivers use them to supply
    the total duration.

    Attributes:
        name: Human-readable name of the probe
    """

    name: ClassVar[str] = "base"

    @classmethod
    @abstractmethod
    def is_available(cls) -> bool:
        """Check if this probe's tool is installed."""

    @abstractmethod
    def probe_duration(self, path: str) -> float | None:
        """Return the nominal duration in seconds, or None if unknown."""

    def __call__(self, path: str) -> float | None:
        return self.probe_duration(path)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
