"""
Shared helpers for click commands — collaborators and error reporting.

Commands read their collaborators from ``ctx.obj`` so tests can inject
fakes with ``CliRunner().invoke(cli, args, obj={...})``. Anything not
injected is built on first use.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import click

from create_rails_app.adapters.shell.command import CommandRunner
from create_rails_app.core.detection.rails_versions import RailsVersionDetector
from create_rails_app.core.detection.runtime import RuntimeDetector
from create_rails_app.core.errors import CreateRailsAppError
from create_rails_app.core.persistence.config_store import ConfigStore
from create_rails_app.core.use_cases.create_app import Collaborators
from create_rails_app.ui.cli.palette import Palette
from create_rails_app.ui.cli.prompter import ClickPrompter

logger = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def resolve_store(ctx: click.Context) -> ConfigStore:
    obj = ctx.ensure_object(dict)
    if obj.get("store") is None:
        obj["store"] = ConfigStore(obj.get("config_path"))
    return obj["store"]


def resolve_collaborators(ctx: click.Context) -> Collaborators:
    obj = ctx.ensure_object(dict)
    return Collaborators(
        store=resolve_store(ctx),
        prompter=obj.get("prompter") or ClickPrompter(),
        runner=obj.get("runner") or CommandRunner(),
        runtime_detector=obj.get("runtime_detector") or RuntimeDetector(),
        rails_detector=obj.get("rails_detector") or RailsVersionDetector(),
        color=(obj.get("palette") or Palette()).color,
    )


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn domain errors and interrupts into messages and exit codes."""
    try:
        yield
    except CreateRailsAppError as e:
        logger.debug("Command failed", exc_info=True)
        click.secho(str(e), fg="red", err=True)
        sys.exit(EXIT_ERROR)
    except (KeyboardInterrupt, click.Abort):
        click.echo(err=True)
        click.secho("See ya!", fg="green", err=True)
        sys.exit(EXIT_INTERRUPTED)
