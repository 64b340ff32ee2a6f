"""
Prompt results — what a prompter hands back to the wizard.

A prompt either produces a value (:class:`Answer`) or asks to revisit
the previous step (:class:`Back`). Callers branch on the type:

    result = prompter.choose(question, options, default)
    if isinstance(result, Back):
        ...
    value = result.value
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Answer:
    """A value entered or selected by the user."""

    value: str


@dataclass(frozen=True)
class Back:
    """The user asked to go back one step."""

    def __repr__(self) -> str:
        return "<BACK>"


BACK = Back()

PromptResult = Answer | Back
