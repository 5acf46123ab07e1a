"""FFprobe duration probe."""

from __future__ import annotations

import contextlib
import json
import logging
import shutil
import subprocess
from typing import Any, ClassVar

from movcheck.config import get_config
from movcheck.probes.base import BaseProbe

logger = logging.getLogger(__name__)


class FFprobeProbe(BaseProbe):
    """Read the container's nominal duration with ffprobe."""

    name: ClassVar[str] = "ffprobe"

    def __init__(self, executable: str | None = None, timeout: int | None = None):
        probe_config = get_config().probe
        self.executable = executable or probe_config.ffprobe_path
        self.timeout = timeout or probe_config.timeout_seconds

    @classmethod
    def is_available(cls) -> bool:
        """Check if ffprobe is available."""
        return shutil.which(get_config().probe.ffprobe_path) is not None

    def probe_duration(self, path: str) -> float | None:
        """Return ``format.duration`` reported by ffprobe."""
        fmt = self._run_ffprobe(path).get("format", {})
        if "duration" in fmt:
            with contextlib.suppress(ValueError, TypeError):
                return float(fmt["duration"])
        return None

    def _run_ffprobe(self, path: str) -> dict[str, Any]:
        """Run ffprobe and return JSON output."""
        cmd = [
            self.executable,
            "-v",
            "error",
            "-print_format",
            "json",
            "-show_format",
            path,
        ]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except (subprocess.TimeoutExpired, FileNotFoundError) as e:
            logger.warning("ffprobe failed for %s: %s", path, e)
            return {}

        if result.returncode != 0 or not result.stdout:
            logger.warning("ffprobe exited with %d for %s", result.returncode, path)
            return {}
        try:
            data: dict[str, Any] = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            logger.warning("Unparseable ffprobe output for %s: %s", path, e)
            return {}
        return data
