"""
Prompter — the contract between the wizard and the terminal.

The wizard and the create use case only talk to the user through this
interface, so tests can script the conversation with a fake and the
terminal implementation (``ui/cli/prompter.py``) stays swappable.

To create a new prompter:
    1. Subclass Prompter
    2. Implement choose, text, confirm, say
    3. Override frame if the UI can group output visually
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from create_rails_app.core.wizard.answers import PromptResult


class Prompter(ABC):
    """Abstract user interaction for the wizard."""

    @abstractmethod
    def choose(self, question: str, options: list[str], default: str | None = None) -> PromptResult:
        """Single choice from ``options``.

        Returns ``Answer(option)`` with one of the given option strings,
        or ``BACK`` when the user asks to go back.
        """

    @abstractmethod
    def text(
        self, question: str, default: str | None = None, allow_empty: bool = True
    ) -> PromptResult:
        """Free-text input, or ``BACK``."""

    @abstractmethod
    def confirm(self, question: str, default: bool = True) -> bool:
        """Yes/no question. A back request answers with ``default``."""

    @abstractmethod
    def say(self, message: str) -> None:
        """Print an informational line."""

    @contextmanager
    def frame(self, title: str) -> Iterator[None]:
        """Group the output produced inside the block under a title."""
        self.say(title)
        yield
