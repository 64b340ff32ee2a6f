"""
Palette — semantic colour roles for terminal output.

Maps roles (``summary_label``, ``arg_name`` …) to click colour names.
``Palette.color`` is the colouring callable handed to the create use case.
Colour is dropped when ``NO_COLOR`` is set; ``click.echo`` also strips it
when the output is not a terminal.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

import click

ROLE_COLORS: dict[str, str] = {
    "control_back": "cyan",
    "control_exit": "red",
    "summary_label": "magenta",
    "runtime_name": "blue",
    "runtime_value": "green",
    "command_base": "blue",
    "command_app": "green",
    "arg_name": "bright_blue",
    "arg_eq": "white",
    "arg_value": "yellow",
    "install_cmd": "yellow",
}


class Palette:
    def __init__(self, env: Mapping[str, str] | None = None):
        self.env = os.environ if env is None else env

    @property
    def enabled(self) -> bool:
        return not self.env.get("NO_COLOR")

    def color(self, role: str, text: str) -> str:
        """Wrap ``text`` in the colour for ``role``.

        Raises:
            KeyError: For an unknown role, even with colour disabled.
        """
        fg = ROLE_COLORS[role]
        if not self.enabled:
            return text
        return click.style(text, fg=fg)
