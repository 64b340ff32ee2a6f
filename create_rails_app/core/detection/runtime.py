"""
Runtime detection — Ruby and RubyGems versions.

Runs ``ruby --version`` and ``gem --version`` and parses the output.
A missing or broken tool yields ``None`` for that part.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)

VERSION_COMMANDS: dict[str, tuple[list[str], str]] = {
    "ruby":     (["ruby", "--version"], r"ruby\s+(\d+\.\d+\.\d+)"),
    "rubygems": (["gem", "--version"],  r"(\d+\.\d+\.\d+)"),
}


@dataclass
class RuntimeInfo:
    """Detected Ruby toolchain versions."""

    ruby: str | None = None
    rubygems: str | None = None

    def to_dict(self) -> dict:
        return {"ruby": self.ruby, "rubygems": self.rubygems}


def probe_version(cmd: list[str], pattern: str) -> str | None:
    """Run a ``--version`` style command and extract the version."""
    if not shutil.which(cmd[0]):
        return None

    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=10)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("Version probe %s failed: %s", cmd[0], e)
        return None

    output = (result.stdout or "") + (result.stderr or "")
    match = re.search(pattern, output)
    return match.group(1) if match else None


class RuntimeDetector:
    """Detect the Ruby and RubyGems versions on PATH."""

    def detect(self) -> RuntimeInfo:
        info = RuntimeInfo(
            ruby=probe_version(*VERSION_COMMANDS["ruby"]),
            rubygems=probe_version(*VERSION_COMMANDS["rubygems"]),
        )
        logger.debug("Runtime: ruby=%s rubygems=%s", info.ruby, info.rubygems)
        return info
