"""
Option catalog — every ``rails new`` option the wizard knows about.

Each definition carries its type and the CLI syntax the command
builder emits for it:

    flag   opt-in;  ``on`` is emitted when the value is True
    skip   opt-out; ``skip_flag`` is emitted when the value is False
    enum   ``--flag=value`` for a string value; ``none`` decides what
           an explicit False means (a literal flag, or True for
           "nothing to emit")

``ORDER`` is the wizard presentation order. It lists every key in
``DEFINITIONS``; a given Rails version only supports a subset and the
rest are filtered out at runtime.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from create_rails_app.core.errors import UnknownOptionError

OptionType = Literal["flag", "enum", "skip"]


class OptionDefinition(BaseModel):
    """Static description of one ``rails new`` option."""

    key: str
    type: OptionType

    # flag
    on: str | None = None
    # skip
    skip_flag: str | None = None
    # enum
    flag: str | None = None
    none: str | bool | None = None
    values: list[str] = Field(default_factory=list)
    rails_default: str | None = None

    @property
    def has_none(self) -> bool:
        """Whether an explicit False ("no value selected") is meaningful."""
        return self.none is not None and self.none is not False

    @property
    def none_flag(self) -> str | None:
        """The literal flag emitted for an explicit False, if any."""
        return self.none if isinstance(self.none, str) else None


def _flag(key: str, on: str) -> OptionDefinition:
    return OptionDefinition(key=key, type="flag", on=on)


def _skip(key: str) -> OptionDefinition:
    return OptionDefinition(
        key=key, type="skip", skip_flag=f"--skip-{key.replace('_', '-')}"
    )


def _enum(key: str, values: list[str], **kwargs) -> OptionDefinition:
    return OptionDefinition(
        key=key,
        type="enum",
        flag=f"--{key.replace('_', '-')}",
        values=values,
        **kwargs,
    )


# Database adapters available on every supported Rails series.
BASE_DATABASE_VALUES: tuple[str, ...] = ("sqlite3", "postgresql", "mysql", "trilogy")

# MariaDB adapters arrived with Rails 8.0.
MARIADB_DATABASE_VALUES: tuple[str, ...] = ("mariadb-mysql", "mariadb-trilogy")

DEFINITIONS: dict[str, OptionDefinition] = {
    d.key: d
    for d in (
        _flag("api", "--api"),
        _skip("active_record"),
        _enum(
            "database",
            [*BASE_DATABASE_VALUES, *MARIADB_DATABASE_VALUES],
            rails_default="sqlite3",
        ),
        _enum(
            "javascript",
            ["importmap", "bun", "webpack", "esbuild", "rollup"],
            none="--skip-javascript",
            rails_default="importmap",
        ),
        # Rails ships without a CSS framework, so "none" is the default
        # and needs no flag.
        _enum(
            "css",
            ["tailwind", "bootstrap", "bulma", "postcss", "sass"],
            none=True,
            rails_default="none",
        ),
        _enum(
            "asset_pipeline",
            ["propshaft", "sprockets"],
            none="--skip-asset-pipeline",
            rails_default="propshaft",
        ),
        _skip("hotwire"),
        _skip("jbuilder"),
        _skip("action_mailer"),
        _skip("action_mailbox"),
        _skip("action_text"),
        _skip("active_job"),
        _skip("active_storage"),
        _skip("action_cable"),
        _skip("test"),
        _skip("system_test"),
        _skip("brakeman"),
        _skip("bundler_audit"),
        _skip("rubocop"),
        _skip("ci"),
        _skip("docker"),
        _skip("kamal"),
        _skip("thruster"),
        _skip("solid"),
        _flag("devcontainer", "--devcontainer"),
        _skip("bootsnap"),
        _skip("git"),
        _skip("bundle"),
    )
}

ORDER: tuple[str, ...] = (
    "api",
    "active_record",
    "database",
    "javascript",
    "css",
    "asset_pipeline",
    "hotwire",
    "jbuilder",
    "action_mailer",
    "action_mailbox",
    "action_text",
    "active_job",
    "active_storage",
    "action_cable",
    "test",
    "system_test",
    "brakeman",
    "bundler_audit",
    "rubocop",
    "ci",
    "docker",
    "kamal",
    "thruster",
    "solid",
    "devcontainer",
    "bootsnap",
    "git",
    "bundle",
)


def fetch(key: str) -> OptionDefinition:
    """Look up an option definition.

    Raises:
        UnknownOptionError: If the key is not in the catalog.
    """
    try:
        return DEFINITIONS[key]
    except KeyError:
        raise UnknownOptionError(key) from None


def is_known(key: str) -> bool:
    return key in DEFINITIONS
