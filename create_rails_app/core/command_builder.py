"""
Command builder — answer map → ``rails new`` argument list.

Pure rendering: no validation (callers validate first), no I/O.

    build("myapp", "8.1.2", {"api": True, "database": "postgresql"})
    → ["rails", "_8.1.2_", "new", "myapp", "--api", "--database=postgresql"]
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from typing import Any

from create_rails_app.core.options import catalog

RAILS_EXECUTABLE = "rails"
NEW_SUBCOMMAND = "new"
MINIMAL_FLAG = "--minimal"


def build(
    app_name: str,
    version: str | None,
    answers: Mapping[str, Any],
    minimal: bool = False,
) -> list[str]:
    """Build the ``rails new`` command.

    Options are emitted in ``catalog.ORDER``, not in the answer map's
    own order. With ``minimal`` only ``--minimal`` is appended.
    """
    command = [RAILS_EXECUTABLE]
    if version:
        command.append(f"_{version}_")
    command.extend([NEW_SUBCOMMAND, app_name])

    if minimal:
        command.append(MINIMAL_FLAG)
        return command

    for key in catalog.ORDER:
        if key in answers:
            command.extend(_option_tokens(key, answers[key]))
    return command


def _option_tokens(key: str, value: Any) -> list[str]:
    definition = catalog.fetch(key)

    if definition.type == "flag":
        return [definition.on] if value is True and definition.on else []

    if definition.type == "skip":
        return [definition.skip_flag] if value is False and definition.skip_flag else []

    # enum
    if isinstance(value, str):
        return [f"{definition.flag}={value}"]
    if value is False and definition.none_flag:
        return [definition.none_flag]
    return []


def install_command(version: str | None, series: str) -> list[str]:
    """``gem install rails`` pinned to an exact version, or to a series."""
    constraint = version or f"~> {series}.0"
    return ["gem", "install", "rails", "-v", constraint]


def format_command(command: list[str]) -> str:
    """Shell-quoted single-line rendering of an argument list."""
    return shlex.join(command)
