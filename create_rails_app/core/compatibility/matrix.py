"""
Compatibility matrix — which ``rails new`` options each Rails series supports.

This is the single source of truth for what a Rails version can do.
The wizard, the validator and the command builder all consult the
:class:`Entry` returned by :func:`resolve`.

An entry maps option key → allowed values:

    list[str]   enum values valid for this series
    BOOLEAN     the option exists but takes no value (include / skip)
    (absent)    the option does not exist for this series
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

from create_rails_app.core.compatibility.version_constraint import (
    Requirement,
    parse_requirement,
    parse_version,
    satisfies,
)
from create_rails_app.core.errors import UnsupportedVersionError
from create_rails_app.core.options.catalog import (
    BASE_DATABASE_VALUES,
    DEFINITIONS,
)

logger = logging.getLogger(__name__)


class ValueRule(enum.Enum):
    BOOLEAN = "boolean"

    def __repr__(self) -> str:
        return f"<{self.name}>"


# "Any boolean accepted"; distinct from an empty list and from None.
BOOLEAN = ValueRule.BOOLEAN

AllowedValues = list[str] | Literal[ValueRule.BOOLEAN]


@dataclass(frozen=True)
class Entry:
    """One row of the compatibility table."""

    requirement: str
    supported_options: Mapping[str, tuple[str, ...] | ValueRule] = field(
        default_factory=dict
    )

    @property
    def parsed_requirement(self) -> Requirement:
        return parse_requirement(self.requirement)

    def matches(self, version: str) -> bool:
        return satisfies(version, self.parsed_requirement)

    def supports(self, key: str) -> bool:
        return key in self.supported_options

    def allowed_values(self, key: str) -> AllowedValues | None:
        """Allowed values for ``key``.

        Returns a fresh list of strings for enums, ``BOOLEAN`` for
        options that take no value, or ``None`` when the option does
        not exist for this entry.
        """
        rule = self.supported_options.get(key)
        if rule is None:
            return None
        if rule is BOOLEAN:
            return BOOLEAN
        return list(rule)

    def supported_keys(self, order: tuple[str, ...] | list[str]) -> list[str]:
        """``order`` filtered down to the keys this entry supports."""
        return [key for key in order if self.supports(key)]


def make_entry(
    requirement: str, supported_options: Mapping[str, list[str] | tuple[str, ...] | ValueRule]
) -> Entry:
    """Build an :class:`Entry` with an immutable option map."""
    frozen = {
        key: rule if rule is BOOLEAN else tuple(rule)
        for key, rule in supported_options.items()
    }
    return Entry(requirement=requirement, supported_options=MappingProxyType(frozen))


def _values(key: str) -> tuple[str, ...]:
    return tuple(DEFINITIONS[key].values)


# Supported Rails series for detection, installation and the version prompt.
SUPPORTED_SERIES: tuple[str, ...] = ("7.2", "8.0", "8.1")

# Options shared across every supported series.
COMMON_OPTIONS: dict[str, tuple[str, ...] | ValueRule] = {
    "api": BOOLEAN,
    "active_record": BOOLEAN,
    "database": BASE_DATABASE_VALUES,
    "javascript": _values("javascript"),
    "css": _values("css"),
    "asset_pipeline": _values("asset_pipeline"),
    "hotwire": BOOLEAN,
    "jbuilder": BOOLEAN,
    "action_mailer": BOOLEAN,
    "action_mailbox": BOOLEAN,
    "action_text": BOOLEAN,
    "active_job": BOOLEAN,
    "active_storage": BOOLEAN,
    "action_cable": BOOLEAN,
    "test": BOOLEAN,
    "system_test": BOOLEAN,
    "brakeman": BOOLEAN,
    "rubocop": BOOLEAN,
    "ci": BOOLEAN,
    "docker": BOOLEAN,
    "devcontainer": BOOLEAN,
    "bootsnap": BOOLEAN,
    "git": BOOLEAN,
    "bundle": BOOLEAN,
}

# Rails 8.0: Kamal/Thruster/Solid, MariaDB adapters, and Propshaft as the
# only asset pipeline (the choice collapses to include / skip).
RAILS_8_OPTIONS: dict[str, tuple[str, ...] | ValueRule] = {
    "database": _values("database"),
    "asset_pipeline": BOOLEAN,
    "kamal": BOOLEAN,
    "thruster": BOOLEAN,
    "solid": BOOLEAN,
}

RAILS_8_1_OPTIONS: dict[str, tuple[str, ...] | ValueRule] = {
    "bundler_audit": BOOLEAN,
}

TABLE: tuple[Entry, ...] = (
    make_entry("~> 7.2.0", COMMON_OPTIONS),
    make_entry("~> 8.0.0", {**COMMON_OPTIONS, **RAILS_8_OPTIONS}),
    make_entry("~> 8.1.0", {**COMMON_OPTIONS, **RAILS_8_OPTIONS, **RAILS_8_1_OPTIONS}),
)


def supported_ranges(table: tuple[Entry, ...] = TABLE) -> list[str]:
    """Human-readable version ranges, one per entry."""
    return [str(entry.parsed_requirement) for entry in table]


def resolve(version: str, table: tuple[Entry, ...] = TABLE) -> Entry:
    """Find the compatibility entry for a Rails version (first match wins).

    Raises:
        UnsupportedVersionError: If the version is malformed or no
            entry matches. ``supported_ranges`` carries the ranges
            for display.
    """
    ranges = supported_ranges(table)
    try:
        parsed = parse_version(version)
    except ValueError:
        raise UnsupportedVersionError(
            f"Invalid Rails version: {version!r}. Supported ranges: {' | '.join(ranges)}",
            supported_ranges=ranges,
        ) from None

    for entry in table:
        if satisfies(parsed, entry.parsed_requirement):
            logger.debug("Rails %s matched compatibility range %s", parsed, entry.requirement)
            return entry

    raise UnsupportedVersionError(
        f"Unsupported Rails version: {parsed}. Supported ranges: {' | '.join(ranges)}",
        supported_ranges=ranges,
    )
