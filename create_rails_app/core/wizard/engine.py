"""
Wizard engine — the step-by-step walk over ``rails new`` options.

The wizard visits ``catalog.ORDER`` filtered by the compatibility
entry, asking one question per step:

    1. If the step's skip rule holds, stash its value and move on.
    2. Otherwise restore a stashed value (if the answer map has none),
       ask, and either store the normalized answer and advance, or, on
       BACK, jump to the nearest earlier step that is not skipped.

Terminates when the index reaches the end of the key list. An
interrupt (``KeyboardInterrupt`` / ``click.Abort``) raised by the
prompter propagates and the in-progress answers are discarded.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from create_rails_app.core.compatibility.matrix import BOOLEAN, Entry
from create_rails_app.core.options import catalog
from create_rails_app.core.options.catalog import OptionDefinition
from create_rails_app.core.wizard.answers import BACK, Back
from create_rails_app.core.wizard.presentation import (
    render_choice_label,
    render_question,
)
from create_rails_app.core.wizard.prompter import Prompter
from create_rails_app.core.wizard.skip_rules import is_skipped
from create_rails_app.core.wizard.stash import Stash

logger = logging.getLogger(__name__)

AnswerValue = bool | str

SKIP_CHOICES = ("include", "skip")
FLAG_CHOICES = ("yes", "no")
NONE_CHOICE = "none"


def sanitize_defaults(defaults: Mapping[Any, Any] | None, entry: Entry) -> dict[str, Any]:
    """Stringify keys and drop options this Rails version does not have."""
    sanitized: dict[str, Any] = {}
    for key, value in (defaults or {}).items():
        key = str(key)
        if entry.supports(key):
            sanitized[key] = value
    return sanitized


def find_previous_unskipped(keys: list[str], index: int, answers: Mapping[str, Any]) -> int:
    """Index of the nearest earlier step that is not currently skipped.

    Returns ``index`` unchanged when every earlier step is skipped or
    there is no earlier step.
    """
    i = index - 1
    while i > 0 and is_skipped(keys[i], answers):
        i -= 1
    if i < 0 or is_skipped(keys[i], answers):
        return index
    return i


class Wizard:
    """Interactive option selection for one compatibility entry."""

    def __init__(
        self,
        entry: Entry,
        defaults: Mapping[Any, Any] | None,
        prompter: Prompter,
    ):
        self.entry = entry
        self.prompter = prompter
        self.keys = entry.supported_keys(catalog.ORDER)
        self.values: dict[str, Any] = sanitize_defaults(defaults, entry)
        self.stash = Stash()

    def run(self) -> dict[str, AnswerValue]:
        """Walk every step and return a copy of the final answer map."""
        total = len(self.keys)
        index = 0

        while index < total:
            key = self.keys[index]

            if is_skipped(key, self.values):
                self.stash.stash(self.values, key)
                logger.debug("Step %d/%d %s skipped", index + 1, total, key)
                index += 1
                continue

            self.stash.restore(self.values, key)

            result = self._ask(key, index, total)
            if isinstance(result, Back):
                target = find_previous_unskipped(self.keys, index, self.values)
                logger.debug("Back from %s to %s", key, self.keys[target])
                index = target
                continue

            self._assign(key, result)
            index += 1

        return dict(self.values)

    # ── Per-type questions ──────────────────────────────────────

    def _ask(self, key: str, index: int, total: int) -> AnswerValue | None | Back:
        definition = catalog.fetch(key)
        question = render_question(index, total, key)

        if definition.type == "skip":
            return self._ask_skip(question, key)
        if definition.type == "flag":
            return self._ask_flag(question, key)

        # An enum with no value list for this version is a plain
        # include / skip choice.
        allowed = self.entry.allowed_values(key)
        if allowed is BOOLEAN or not allowed:
            return self._ask_skip(question, key)
        return self._ask_enum(question, key, definition, allowed)

    def _ask_skip(self, question: str, key: str) -> bool | Back:
        selected = "skip" if self.values.get(key) is False else "include"
        answer = self._choose(
            question, key, list(SKIP_CHOICES), rails_default="include", selected=selected
        )
        if isinstance(answer, Back):
            return answer
        return answer != "skip"

    def _ask_flag(self, question: str, key: str) -> bool | None | Back:
        selected = "yes" if self.values.get(key) is True else "no"
        answer = self._choose(
            question, key, list(FLAG_CHOICES), rails_default="no", selected=selected
        )
        if isinstance(answer, Back):
            return answer
        # A flag that is off is simply not mentioned
        return True if answer == "yes" else None

    def _ask_enum(
        self,
        question: str,
        key: str,
        definition: OptionDefinition,
        allowed: list[str],
    ) -> str | bool | Back:
        choices = list(allowed)
        if definition.has_none:
            choices.append(NONE_CHOICE)

        rails_default = definition.rails_default
        if rails_default not in choices:
            rails_default = choices[0]

        selected = self._enum_selected(self.values.get(key), choices, rails_default)
        answer = self._choose(
            question, key, choices, rails_default=rails_default, selected=selected
        )
        if isinstance(answer, Back):
            return answer
        if answer == NONE_CHOICE:
            return False
        return answer

    @staticmethod
    def _enum_selected(current: Any, choices: list[str], rails_default: str) -> str:
        if current is False and NONE_CHOICE in choices:
            return NONE_CHOICE
        if isinstance(current, str) and current in choices:
            return current
        return rails_default

    def _choose(
        self,
        question: str,
        key: str,
        choices: list[str],
        rails_default: str,
        selected: str,
    ) -> str | Back:
        """Ask with the Rails default labeled and the user's pick pre-selected.

        Returns the raw choice (not the rendered label), or BACK.
        """
        if selected not in choices:
            selected = choices[0]
        rendered = [render_choice_label(key, choice, rails_default) for choice in choices]
        default_label = rendered[choices.index(selected)]

        result = self.prompter.choose(question, rendered, default=default_label)
        if isinstance(result, Back):
            return BACK
        if result.value in rendered:
            return choices[rendered.index(result.value)]
        if result.value in choices:
            return result.value

        logger.debug("Unrecognized answer %r for %s, keeping %s", result.value, key, selected)
        return selected

    def _assign(self, key: str, value: AnswerValue | None) -> None:
        if value is None:
            self.values.pop(key, None)
        else:
            self.values[key] = value
        logger.debug("Answer %s=%r", key, value)
