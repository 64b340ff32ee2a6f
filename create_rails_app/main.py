"""
create-rails-app — CLI entrypoint.

Usage:
    create-rails-app new myapp
    create-rails-app new myapp --preset api --dry-run
    create-rails-app doctor
    create-rails-app presets list
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from create_rails_app import __version__
from create_rails_app.core.observability.logging_config import configure_logging
from create_rails_app.ui.cli.context import reported_errors, resolve_collaborators
from create_rails_app.ui.cli.presets import presets


@click.group()
@click.version_option(version=__version__, prog_name="create-rails-app")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to config.yml (default: $CRA_CONFIG or ~/.config/create-rails-app).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """create-rails-app — an interactive wizard for ``rails new``."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    if config_path:
        ctx.obj["config_path"] = Path(config_path)
    else:
        ctx.obj.setdefault("config_path", None)

    # ── Logging setup (once, at process start) ──────────────────
    configure_logging(debug=debug, verbose=verbose, quiet=quiet)


@cli.command()
@click.argument("app_name", required=False)
@click.option("--preset", default=None, help="Use a saved preset instead of the wizard.")
@click.option("--save-preset", default=None, help="Save the chosen options under this name.")
@click.option("--rails-version", default=None, help="Exact Rails version (e.g. 8.1.2).")
@click.option("--minimal", is_flag=True, help="Pass --minimal and skip the wizard.")
@click.option("--dry-run", is_flag=True, help="Print the commands instead of running them.")
@click.pass_context
def new(
    ctx: click.Context,
    app_name: str | None,
    preset: str | None,
    save_preset: str | None,
    rails_version: str | None,
    minimal: bool,
    dry_run: bool,
) -> None:
    """Generate a new Rails app."""
    from create_rails_app.core.use_cases.create_app import CreateRequest, create_app

    request = CreateRequest(
        app_name=app_name,
        preset=preset,
        save_preset=save_preset,
        rails_version=rails_version,
        minimal=minimal,
        dry_run=dry_run,
    )

    with reported_errors():
        result = create_app(request, resolve_collaborators(ctx))

    if result.saved_preset and not ctx.obj.get("quiet"):
        click.secho(f"Saved preset '{result.saved_preset}'", fg="green")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def doctor(ctx: click.Context, as_json: bool) -> None:
    """Show Ruby, RubyGems and Rails versions and supported options."""
    from create_rails_app.core.use_cases.doctor import run_doctor

    collaborators = ctx.obj or {}
    with reported_errors():
        report = run_doctor(
            runtime_detector=collaborators.get("runtime_detector"),
            rails_detector=collaborators.get("rails_detector"),
        )

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    click.echo(f"ruby: {report.runtime.ruby}")
    click.echo(f"rubygems: {report.runtime.rubygems}")
    if not report.installed_rails:
        click.echo("rails: not installed")
    for series, version in report.installed_rails.items():
        click.echo(f"rails {series}: {version}")
    for requirement, keys in report.options_by_range.items():
        click.echo(f"options ({requirement}): {', '.join(keys)}")


cli.add_command(presets)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
