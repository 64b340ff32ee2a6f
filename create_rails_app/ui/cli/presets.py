"""
CLI commands for saved presets.

Thin wrappers over ``ConfigStore``: list, show and delete.
"""

from __future__ import annotations

import json

import click

from create_rails_app.core.errors import ValidationError
from create_rails_app.ui.cli.context import reported_errors, resolve_store


@click.group("presets")
def presets() -> None:
    """Presets — saved option sets for ``new --preset``."""


@presets.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_presets(ctx: click.Context, as_json: bool) -> None:
    """List saved preset names."""
    with reported_errors():
        names = resolve_store(ctx).preset_names()

    if as_json:
        click.echo(json.dumps(names, indent=2))
        return

    if not names:
        click.echo("No presets saved.")
        return
    for name in names:
        click.echo(name)


@presets.command("show")
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show_preset(ctx: click.Context, name: str, as_json: bool) -> None:
    """Show the options stored in a preset."""
    with reported_errors():
        preset = resolve_store(ctx).preset(name)
        if preset is None:
            raise ValidationError(f"Preset not found: {name}")

    if as_json:
        click.echo(json.dumps({"name": name, "options": preset}, indent=2))
        return

    click.secho(name, bold=True)
    for key, value in sorted(preset.items()):
        click.echo(f"  {key}: {json.dumps(value)}")


@presets.command("delete")
@click.argument("name")
@click.pass_context
def delete_preset(ctx: click.Context, name: str) -> None:
    """Delete a preset (a missing preset is not an error)."""
    with reported_errors():
        store = resolve_store(ctx)
        existed = store.preset(name) is not None
        store.delete_preset(name)

    if existed:
        click.secho(f"Deleted preset '{name}'", fg="green")
    else:
        click.echo(f"No preset named '{name}'")
