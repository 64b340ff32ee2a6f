"""
Rails version detection — which Rails series are installed locally.

Read-only probe: runs ``gem list rails --local --exact`` and keeps the
latest patch release of each supported series. Any failure (missing
``gem`` binary, timeout, non-zero exit) is treated as "nothing
installed" and never raised.
"""

from __future__ import annotations

import logging
import re
import subprocess
from functools import cmp_to_key

from create_rails_app.core.compatibility.matrix import SUPPORTED_SERIES
from create_rails_app.core.compatibility.version_constraint import (
    Version,
    compare,
    parse_version,
    satisfies,
)

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"\d+\.\d+\.\d+(?:\.\w+)?")
RAILS_LINE_PATTERN = re.compile(r"^rails\s")
DETECT_TIMEOUT = 10


def parse_gem_list(output: str) -> list[Version]:
    """Extract Rails versions from ``gem list`` output, newest first."""
    rails_line = next(
        (line for line in output.splitlines() if RAILS_LINE_PATTERN.match(line)), None
    )
    if rails_line is None:
        return []

    versions: list[Version] = []
    for raw in VERSION_PATTERN.findall(rails_line):
        try:
            versions.append(parse_version(raw))
        except ValueError:
            continue

    return sorted(versions, key=cmp_to_key(compare), reverse=True)


def group_by_series(
    versions: list[Version], series_list: tuple[str, ...] = SUPPORTED_SERIES
) -> dict[str, str]:
    """Latest version per supported series, from a newest-first list."""
    result: dict[str, str] = {}
    for series in series_list:
        match = next((v for v in versions if satisfies(v, f"~> {series}.0")), None)
        if match is not None:
            result[series] = str(match)
    return result


class RailsVersionDetector:
    """Detect installed Rails versions grouped by supported series."""

    def __init__(self, gem_command: str = "gem"):
        self.gem_command = gem_command

    def detect(self) -> dict[str, str]:
        """``{"8.1": "8.1.2", "8.0": "8.0.7"}`` — empty when nothing is found."""
        output = self._gem_list()
        if output is None:
            return {}
        installed = group_by_series(parse_gem_list(output))
        logger.debug("Installed Rails series: %s", installed or "none")
        return installed

    def _gem_list(self) -> str | None:
        cmd = [self.gem_command, "list", "rails", "--local", "--exact"]
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=DETECT_TIMEOUT,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Cannot run %s: %s", " ".join(cmd), e)
            return None

        if result.returncode != 0:
            logger.debug("%s exited with %d", " ".join(cmd), result.returncode)
            return None
        return result.stdout or ""
