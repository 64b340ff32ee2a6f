"""
Create use case — from CLI flags to a generated Rails app.

This is the top-level orchestrator for ``create-rails-app new``:

    1. Reject conflicting flags
    2. Resolve the Rails version (flag or prompt), deferring installation
    3. Resolve the app name
    4. Pick options: --minimal, a preset, or the interactive wizard
    5. Validate the answer set against the compatibility entry
    6. Install Rails if needed, then build and run ``rails new``
    7. Persist last-used answers and, optionally, a preset
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from create_rails_app.adapters.shell.command import CommandRunner
from create_rails_app.core import command_builder
from create_rails_app.core.compatibility import matrix
from create_rails_app.core.compatibility.matrix import Entry
from create_rails_app.core.compatibility.version_constraint import parse_version
from create_rails_app.core.detection.rails_versions import RailsVersionDetector
from create_rails_app.core.detection.runtime import RuntimeDetector, RuntimeInfo
from create_rails_app.core.errors import UnsupportedVersionError, ValidationError
from create_rails_app.core.options.validator import validate
from create_rails_app.core.persistence.config_store import ConfigStore
from create_rails_app.core.wizard.answers import Back
from create_rails_app.core.wizard.engine import Wizard
from create_rails_app.core.wizard.prompter import Prompter

logger = logging.getLogger(__name__)

PRESET_NAME_PATTERN = re.compile(r"\A[A-Za-z0-9][A-Za-z0-9_-]{0,63}\Z")

VERSION_QUESTION = "Select Rails version"
APP_NAME_QUESTION = "App name:"
NEXT_STEP_QUESTION = "Next step"
NEXT_STEP_CREATE = "create"
NEXT_STEP_EDIT = "edit again"
SAVE_PRESET_QUESTION = "Save these options as a preset?"
PRESET_NAME_QUESTION = "Preset name:"

# (role, text) -> text, possibly wrapped in terminal colour codes.
Colorize = Callable[[str, str], str]


def plain(role: str, text: str) -> str:
    return text


@dataclass
class VersionChoice:
    """The Rails version to generate with.

    ``version`` is ``None`` when only a series was picked and nothing of
    that series is installed yet.
    """

    version: str | None
    series: str
    needs_install: bool = False

    @property
    def constraint(self) -> str:
        return self.version or f"~> {self.series}.0"

    @property
    def lookup_version(self) -> str:
        """A concrete version to resolve the compatibility entry with."""
        return self.version or f"{self.series}.0"


@dataclass
class CreateRequest:
    """Flags for one ``create-rails-app new`` invocation."""

    app_name: str | None = None
    preset: str | None = None
    save_preset: str | None = None
    rails_version: str | None = None
    minimal: bool = False
    dry_run: bool = False


@dataclass
class Collaborators:
    """External services the use case talks to. Tests swap in fakes."""

    store: ConfigStore
    prompter: Prompter
    runner: CommandRunner
    runtime_detector: RuntimeDetector = field(default_factory=RuntimeDetector)
    rails_detector: RailsVersionDetector = field(default_factory=RailsVersionDetector)
    color: Colorize = plain


@dataclass
class CreateResult:
    """What was (or, in dry-run, would have been) executed."""

    app_name: str = ""
    rails_version: str | None = None
    options: dict[str, Any] = field(default_factory=dict)
    command: list[str] = field(default_factory=list)
    install_command: list[str] | None = None
    dry_run: bool = False
    saved_preset: str | None = None

    def to_dict(self) -> dict:
        return {
            "app_name": self.app_name,
            "rails_version": self.rails_version,
            "options": dict(self.options),
            "command": list(self.command),
            "install_command": self.install_command,
            "dry_run": self.dry_run,
            "saved_preset": self.saved_preset,
        }


def create_app(request: CreateRequest, collaborators: Collaborators) -> CreateResult:
    """Run the full create flow.

    Raises:
        ValidationError: Conflicting flags, bad names or invalid answers.
        UnsupportedVersionError: The Rails version cannot be used.
        ConfigError: The config file cannot be read or written.
        CommandFailedError: ``gem install`` or ``rails new`` failed.
    """
    check_flags(request)

    store = collaborators.store
    prompter = collaborators.prompter

    installed = collaborators.rails_detector.detect()
    choice = resolve_rails_version(request.rails_version, installed, prompter)
    entry = matrix.resolve(choice.lookup_version)
    logger.info(
        "Using Rails %s (install needed: %s)", choice.constraint, choice.needs_install
    )

    app_name = resolve_app_name(request, prompter)

    if request.minimal:
        options: dict[str, Any] = {}
    elif request.preset:
        options = load_preset(store, request.preset)
    else:
        runtime = collaborators.runtime_detector.detect()
        options = run_interactive_wizard(
            app_name, entry, store.last_used(), choice, runtime, collaborators
        )

    validate(app_name, options, entry)

    result = CreateResult(app_name=app_name, options=options, dry_run=request.dry_run)

    if choice.needs_install:
        result.install_command = command_builder.install_command(choice.version, choice.series)
        choice = install_rails(choice, request.dry_run, collaborators)

    result.rails_version = choice.version
    result.command = command_builder.build(
        app_name, choice.version, options, minimal=request.minimal
    )
    collaborators.runner.run(result.command, dry_run=request.dry_run)

    if not request.minimal:
        store.save_last_used(options)
        result.saved_preset = save_preset_if_requested(request, options, store, prompter)

    return result


# ── Flags ───────────────────────────────────────────────────────


def check_flags(request: CreateRequest) -> None:
    """Reject flag combinations that make no sense together."""
    if request.minimal and request.preset:
        raise ValidationError("--minimal cannot be combined with --preset")
    if request.minimal and request.save_preset:
        raise ValidationError("--minimal cannot be combined with --save-preset")
    if request.save_preset is not None:
        validate_preset_name(request.save_preset)


def validate_preset_name(name: Any) -> None:
    if isinstance(name, str) and PRESET_NAME_PATTERN.match(name):
        return
    raise ValidationError(
        f"Invalid preset name: {name!r}. "
        "Use alphanumeric characters, dashes, or underscores (max 64 chars)."
    )


# ── Rails version ───────────────────────────────────────────────


def resolve_rails_version(
    requested: str | None,
    installed: Mapping[str, str],
    prompter: Prompter,
) -> VersionChoice:
    """Pick the Rails version from the flag or by asking.

    Installation is never performed here; ``needs_install`` defers it
    until the options are confirmed.
    """
    if requested:
        return version_from_flag(requested, installed)

    choices = build_version_choices(installed)
    labels = [label for label, _ in choices]
    while True:
        answer = prompter.choose(VERSION_QUESTION, labels, default=labels[0])
        if isinstance(answer, Back):
            continue
        if answer.value in labels:
            return choices[labels.index(answer.value)][1]
        logger.debug("Unrecognized version choice %r", answer.value)


def version_from_flag(requested: str, installed: Mapping[str, str]) -> VersionChoice:
    try:
        parsed = parse_version(requested)
    except ValueError:
        parsed = None
    if parsed is None or parsed.segments < 2:
        raise ValidationError(
            f"Rails version must have at least major.minor (e.g. 8.1), got: {requested}"
        )

    matrix.resolve(requested)
    series = parsed.series()
    needs_install = installed.get(series) != requested
    return VersionChoice(version=requested, series=series, needs_install=needs_install)


def build_version_choices(
    installed: Mapping[str, str],
    series_list: tuple[str, ...] = matrix.SUPPORTED_SERIES,
) -> list[tuple[str, VersionChoice]]:
    """Prompt labels paired with their choice, newest series first."""
    choices: list[tuple[str, VersionChoice]] = []
    for series in reversed(series_list):
        version = installed.get(series)
        label = f"Rails {series}" if version else f"Rails {series} (not installed)"
        choices.append(
            (label, VersionChoice(version=version, series=series, needs_install=version is None))
        )
    return choices


def install_rails(
    choice: VersionChoice, dry_run: bool, collaborators: Collaborators
) -> VersionChoice:
    """Install the chosen Rails and return the now-installed choice.

    Raises:
        UnsupportedVersionError: The series is still missing after install.
    """
    command = command_builder.install_command(choice.version, choice.series)
    collaborators.runner.run(command, dry_run=dry_run)

    if dry_run or choice.version:
        return VersionChoice(version=choice.version, series=choice.series)

    refreshed = collaborators.rails_detector.detect()
    version = refreshed.get(choice.series)
    if version is None:
        raise UnsupportedVersionError(
            f"Failed to detect Rails {choice.series} after installation",
            supported_ranges=matrix.supported_ranges(),
        )
    return VersionChoice(version=version, series=choice.series)


# ── App name and options ────────────────────────────────────────


def resolve_app_name(request: CreateRequest, prompter: Prompter) -> str:
    if request.app_name:
        return request.app_name
    if request.preset:
        raise ValidationError("App name is required when --preset is provided")

    while True:
        answer = prompter.text(APP_NAME_QUESTION, allow_empty=False)
        if not isinstance(answer, Back) and answer.value:
            return answer.value


def load_preset(store: ConfigStore, name: str) -> dict[str, Any]:
    preset = store.preset(name)
    if preset is None:
        raise ValidationError(f"Preset not found: {name}")
    return preset


def run_interactive_wizard(
    app_name: str,
    entry: Entry,
    defaults: Mapping[str, Any],
    choice: VersionChoice,
    runtime: RuntimeInfo,
    collaborators: Collaborators,
) -> dict[str, Any]:
    """Wizard → summary → "create" or "edit again" (seeded with the last run)."""
    prompter = collaborators.prompter
    color = collaborators.color

    with prompter.frame("Controls"):
        prompter.say(f"Type {color('control_back', '<')} to go back one step.")
        prompter.say(f"Press {color('control_exit', 'Ctrl+C')} to exit.")

    while True:
        options = Wizard(entry, defaults, prompter).run()
        command = command_builder.build(app_name, choice.version, options)
        show_summary(app_name, command, runtime, choice, collaborators)

        action = prompter.choose(
            NEXT_STEP_QUESTION, [NEXT_STEP_CREATE, NEXT_STEP_EDIT], default=NEXT_STEP_CREATE
        )
        if not isinstance(action, Back) and action.value == NEXT_STEP_CREATE:
            return options
        defaults = options


def show_summary(
    app_name: str,
    command: list[str],
    runtime: RuntimeInfo,
    choice: VersionChoice,
    collaborators: Collaborators,
) -> None:
    prompter = collaborators.prompter
    color = collaborators.color

    new_index = command.index(command_builder.NEW_SUBCOMMAND)
    args = command[new_index + 2:]

    with prompter.frame("create-rails-app summary"):
        prompter.say(
            f"{color('summary_label', 'Runtime:')} "
            + format_runtime(runtime, choice, color)
        )
        if choice.needs_install:
            install_line = command_builder.format_command(
                command_builder.install_command(choice.version, choice.series)
            )
            prompter.say(
                f"{color('summary_label', 'Install:')} "
                f"{color('install_cmd', install_line)}"
            )

        command_line = (
            f"{color('command_base', 'rails new')} "
            f"{color('command_app', app_name)}"
        )
        if args:
            command_line += " " + " ".join(format_argument(arg, color) for arg in args)
        prompter.say(f"{color('summary_label', 'Command:')} {command_line}")


def format_runtime(runtime: RuntimeInfo, choice: VersionChoice, color: Colorize) -> str:
    rails_display = choice.version or f"~> {choice.series}"
    parts = [
        ("ruby", runtime.ruby),
        ("rubygems", runtime.rubygems),
        ("rails", rails_display),
    ]
    return ", ".join(
        f"{color('runtime_name', name)} {color('runtime_value', str(value))}"
        for name, value in parts
    )


def format_argument(argument: str, color: Colorize = plain) -> str:
    """Colour one ``rails new`` argument (``--name=value`` aware)."""
    if not argument.startswith("--"):
        return color("arg_value", argument)
    if "=" not in argument:
        return color("arg_name", argument)
    name, value = argument.split("=", 1)
    return color("arg_name", name) + color("arg_eq", "=") + color("arg_value", value)


# ── Presets ─────────────────────────────────────────────────────


def save_preset_if_requested(
    request: CreateRequest,
    options: Mapping[str, Any],
    store: ConfigStore,
    prompter: Prompter,
) -> str | None:
    """Save a preset from ``--save-preset`` or after asking.

    Returns the saved preset's name, or None.
    """
    if request.save_preset:
        return save_preset_with_overwrite_check(request.save_preset, options, store, prompter)

    if request.preset:
        return None
    if not prompter.confirm(SAVE_PRESET_QUESTION, default=False):
        return None

    answer = prompter.text(PRESET_NAME_QUESTION, allow_empty=False)
    if isinstance(answer, Back):
        return None
    return save_preset_with_overwrite_check(answer.value, options, store, prompter)


def save_preset_with_overwrite_check(
    name: str,
    options: Mapping[str, Any],
    store: ConfigStore,
    prompter: Prompter,
) -> str | None:
    validate_preset_name(name)
    if store.preset(name) is not None:
        if not prompter.confirm(f"Preset '{name}' already exists. Overwrite?", default=False):
            logger.info("Kept existing preset '%s'", name)
            return None
    store.save_preset(name, options)
    return name
