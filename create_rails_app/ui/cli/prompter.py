"""
Terminal prompter — the click implementation of the wizard's Prompter.

Choices are printed as a numbered list; the user answers with a
number, the option text, or its first word. Typing ``<`` (or Ctrl+B
followed by Enter) asks to go back one step. Ctrl+C raises
``click.Abort`` and ends the session.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import click

from create_rails_app.core.wizard.answers import BACK, Answer, PromptResult
from create_rails_app.core.wizard.prompter import Prompter

CTRL_B = "\x02"
BACK_KEYS = frozenset({"<", CTRL_B})

CHOICE_PROMPT = "Choose"
FRAME_WIDTH = 60


def resolve_choice(raw: str, options: list[str]) -> str | None:
    """Map user input to one of ``options``.

    Accepts a 1-based number, the full option text, or the option's
    first word (``"postgresql"`` for ``"postgresql - full-featured…"``).
    """
    if raw.isdigit():
        number = int(raw)
        if 1 <= number <= len(options):
            return options[number - 1]
        return None

    if raw in options:
        return raw

    lowered = raw.lower()
    for option in options:
        if option.split(" ", 1)[0].lower() == lowered:
            return option
    return None


class ClickPrompter(Prompter):
    """Line-based prompts on top of ``click.prompt``."""

    def choose(self, question: str, options: list[str], default: str | None = None) -> PromptResult:
        if not options:
            raise ValueError(f"No options to choose from for: {question}")

        click.echo()
        click.secho(question, bold=True)
        for number, option in enumerate(options, start=1):
            marker = ">" if option == default else " "
            click.echo(f"  {marker} {number:>2}. {option}")

        default_number = str(options.index(default) + 1) if default in options else None

        while True:
            raw = click.prompt(
                CHOICE_PROMPT, default=default_number, type=str, show_default=True,
            ).strip()
            if raw in BACK_KEYS:
                return BACK
            resolved = resolve_choice(raw, options)
            if resolved is not None:
                return Answer(resolved)
            click.secho(
                f"Please enter a number between 1 and {len(options)}.", fg="yellow"
            )

    def text(
        self, question: str, default: str | None = None, allow_empty: bool = True
    ) -> PromptResult:
        while True:
            raw = click.prompt(
                question,
                default=default if default is not None else "",
                type=str,
                show_default=bool(default),
            ).strip()
            if raw in BACK_KEYS:
                return BACK
            if raw or allow_empty:
                return Answer(raw)
            click.secho("A value is required.", fg="yellow")

    def confirm(self, question: str, default: bool = True) -> bool:
        suffix = "[Y/n]" if default else "[y/N]"
        while True:
            raw = click.prompt(
                f"{question} {suffix}", default="", type=str, show_default=False,
            ).strip().lower()
            # Back answers with the default
            if not raw or raw in BACK_KEYS:
                return default
            if raw in ("y", "yes"):
                return True
            if raw in ("n", "no"):
                return False
            click.secho("Please answer y or n.", fg="yellow")

    def say(self, message: str) -> None:
        click.echo(message)

    @contextmanager
    def frame(self, title: str) -> Iterator[None]:
        header = f"┏━━ {title} "
        click.secho(header.ljust(FRAME_WIDTH, "━"), fg="cyan")
        yield
        click.secho("┗".ljust(FRAME_WIDTH, "━"), fg="cyan")
