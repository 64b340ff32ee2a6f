"""
Version constraints — RubyGems-style version parsing and matching (pure).

Rails versions follow RubyGems conventions: dot-separated numeric
segments, optionally followed by a prerelease tag (``8.1.0.rc1``,
``8.0.0.beta2``). A prerelease sorts below its release.

Requirement operators:
    - ``~>``: pessimistic — ``~> 8.1.0`` means ``>= 8.1.0`` and ``< 8.2``
    - ``>=`` ``>`` ``<=`` ``<`` ``=`` ``!=``: plain comparisons

No I/O, no subprocess.
"""

from __future__ import annotations

import re
from typing import NamedTuple

_VERSION_RE = re.compile(
    r"^v?(?P<release>\d+(?:\.\d+)*)(?:[.-]?(?P<pre>[A-Za-z][0-9A-Za-z.]*))?$"
)
_REQUIREMENT_RE = re.compile(r"^\s*(?P<op>~>|>=|<=|!=|>|<|=)?\s*(?P<version>\S+)\s*$")


class Version(NamedTuple):
    release: tuple[int, ...]
    prerelease: str | None = None

    def __str__(self) -> str:
        text = ".".join(str(part) for part in self.release)
        return f"{text}.{self.prerelease}" if self.prerelease else text

    @property
    def segments(self) -> int:
        return len(self.release)

    def series(self) -> str:
        """The ``major.minor`` series, e.g. ``"8.1"``."""
        return ".".join(str(part) for part in (self.release + (0,))[:2])


class Requirement(NamedTuple):
    operator: str
    version: Version

    def __str__(self) -> str:
        return f"{self.operator} {self.version}"


def parse_version(text: str) -> Version:
    """Parse ``"8.1.2"`` / ``"8.1.0.rc1"`` into a :class:`Version`.

    Raises:
        ValueError: If the string is not a version.
    """
    match = _VERSION_RE.match(str(text).strip())
    if not match:
        raise ValueError(f"Malformed version: {text!r}")
    release = tuple(int(part) for part in match.group("release").split("."))
    return Version(release=release, prerelease=match.group("pre"))


def parse_requirement(text: str) -> Requirement:
    """Parse ``"~> 8.1.0"`` into a :class:`Requirement` (default operator ``=``)."""
    match = _REQUIREMENT_RE.match(text)
    if not match:
        raise ValueError(f"Malformed requirement: {text!r}")
    return Requirement(
        operator=match.group("op") or "=",
        version=parse_version(match.group("version")),
    )


def compare(left: Version, right: Version) -> int:
    """Three-way comparison; missing segments count as zero."""
    width = max(len(left.release), len(right.release))
    lrel = left.release + (0,) * (width - len(left.release))
    rrel = right.release + (0,) * (width - len(right.release))
    if lrel != rrel:
        return -1 if lrel < rrel else 1

    # Same release: a prerelease is lower than the final release
    lkey = (0, left.prerelease) if left.prerelease else (1, "")
    rkey = (0, right.prerelease) if right.prerelease else (1, "")
    if lkey == rkey:
        return 0
    return -1 if lkey < rkey else 1


def bump(version: Version) -> Version:
    """Upper bound for ``~>``: drop the last segment, increment the new last.

    ``8.1.0`` → ``8.2``;  ``8.1`` → ``9``;  ``8`` → ``9``.
    """
    release = version.release[:-1] if len(version.release) > 1 else version.release
    return Version(release=release[:-1] + (release[-1] + 1,))


def satisfies(version: Version | str, requirement: Requirement | str) -> bool:
    """Check a version against a single requirement."""
    if isinstance(version, str):
        version = parse_version(version)
    if isinstance(requirement, str):
        requirement = parse_requirement(requirement)

    op, ref = requirement
    cmp = compare(version, ref)

    if op == "~>":
        # Prerelease of the next series is still outside the range
        release_only = Version(release=version.release)
        return cmp >= 0 and compare(release_only, bump(ref)) < 0
    if op == ">=":
        return cmp >= 0
    if op == ">":
        return cmp > 0
    if op == "<=":
        return cmp <= 0
    if op == "<":
        return cmp < 0
    if op == "!=":
        return cmp != 0
    return cmp == 0
