"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from create_rails_app.core.compatibility import matrix
from create_rails_app.core.detection.runtime import RuntimeInfo
from create_rails_app.core.persistence.config_store import ConfigStore
from create_rails_app.core.wizard.answers import Answer, Back
from create_rails_app.core.wizard.presentation import DEFAULT_MARKER
from create_rails_app.core.wizard.prompter import Prompter


def strip_label(option: str) -> str:
    """``"postgresql - full-featured… (default)"`` → ``"postgresql"``."""
    return option.removesuffix(DEFAULT_MARKER).split(" - ", 1)[0]


class FakePrompter(Prompter):
    """Scripted prompter.

    ``choices`` / ``texts`` / ``confirms`` are consumed in order. ``None``
    (or an exhausted script) takes the default. A choice may be given
    as the bare value (``"postgresql"``); it is matched against the
    rendered labels. ``BACK`` is passed through.
    """

    def __init__(self, choices=None, texts=None, confirms=None):
        self.choices = list(choices or [])
        self.texts = list(texts or [])
        self.confirms = list(confirms or [])
        self.seen_questions: list[str] = []
        self.seen_options: list[list[str]] = []
        self.seen_defaults: list[str | None] = []
        self.messages: list[str] = []
        self.frames: list[str] = []
        self.confirm_questions: list[str] = []
        self.text_questions: list[str] = []

    def choose(self, question, options, default=None):
        self.seen_questions.append(question)
        self.seen_options.append(list(options))
        self.seen_defaults.append(default)

        value = self.choices.pop(0) if self.choices else None
        if isinstance(value, Back):
            return value
        if value is None:
            value = default if default is not None else options[0]

        if value not in options:
            labeled = [option for option in options if strip_label(option) == value]
            if not labeled:
                raise AssertionError(f"invalid choice {value!r} for {question!r}: {options}")
            value = labeled[0]
        return Answer(value)

    def text(self, question, default=None, allow_empty=True):
        self.text_questions.append(question)
        value = self.texts.pop(0) if self.texts else None
        if isinstance(value, Back):
            return value
        if value is None:
            value = default if default is not None else ""
        return Answer(value)

    def confirm(self, question, default=True):
        self.confirm_questions.append(question)
        value = self.confirms.pop(0) if self.confirms else None
        return default if value is None else value

    def say(self, message):
        self.messages.append(message)

    def frame(self, title):
        self.frames.append(title)
        return super().frame(title)


class FakeRunner:
    """Records commands instead of executing them."""

    def __init__(self):
        self.commands: list[tuple[list[str], bool]] = []

    def run(self, command, dry_run=False):
        self.commands.append((list(command), dry_run))


class FakeRailsDetector:
    """Returns scripted ``detect()`` results, repeating the last one."""

    def __init__(self, *results):
        self.results = list(results) or [{}]
        self.calls = 0

    def detect(self):
        self.calls += 1
        index = min(self.calls - 1, len(self.results) - 1)
        return dict(self.results[index])


class FakeRuntimeDetector:
    def __init__(self, ruby="3.3.6", rubygems="3.5.22"):
        self.info = RuntimeInfo(ruby=ruby, rubygems=rubygems)

    def detect(self):
        return self.info


@pytest.fixture
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config" / "create-rails-app" / "config.yml"


@pytest.fixture
def store(config_path: Path) -> ConfigStore:
    return ConfigStore(config_path)


@pytest.fixture
def full_entry() -> matrix.Entry:
    """The Rails 8.1 entry (supports every catalog option)."""
    return matrix.resolve("8.1.0")


@pytest.fixture(autouse=True)
def _no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("CRA_CONFIG", raising=False)
    monkeypatch.delenv("CRA_LOG_FILE", raising=False)


@pytest.fixture
def make_prompter():
    """Factory: ``make_prompter(choices=[...], texts=[...], confirms=[...])``."""
    return FakePrompter


@pytest.fixture
def make_rails_detector():
    """Factory: ``make_rails_detector({"8.1": "8.1.2"}, ...)``."""
    return FakeRailsDetector


@pytest.fixture
def runtime_detector() -> FakeRuntimeDetector:
    return FakeRuntimeDetector()
