"""
Config store — YAML persistence for last-used answers and presets.

The file lives at (first match):

    $CRA_CONFIG
    $XDG_CONFIG_HOME/create-rails-app/config.yml
    ~/.config/create-rails-app/config.yml

Writes are atomic (write to temp file, then rename) so a crash
mid-write never leaves a truncated config behind. Every read goes
back to disk; the store holds no cached state.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from create_rails_app.core.errors import ConfigError
from create_rails_app.core.models.config_document import SCHEMA_VERSION, ConfigDocument

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CRA_CONFIG"
CONFIG_DIR_NAME = "create-rails-app"
CONFIG_FILE_NAME = "config.yml"


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Resolve the config file path from the environment.

    Raises:
        ConfigError: If no home directory can be determined.
    """
    env = os.environ if env is None else env

    explicit = env.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser()

    config_home = env.get("XDG_CONFIG_HOME")
    if not config_home:
        try:
            config_home = str(Path.home() / ".config")
        except RuntimeError as e:
            raise ConfigError(
                "Cannot determine home directory. Set HOME or XDG_CONFIG_HOME."
            ) from e

    return Path(config_home) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


class ConfigStore:
    """Read/write access to the config file."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else default_config_path()

    # ── Last used ───────────────────────────────────────────────

    def last_used(self) -> dict[str, Any]:
        """The last-used answer map (empty if none saved)."""
        return dict(self.load().last_used)

    def save_last_used(self, answers: Mapping[Any, Any]) -> None:
        document = self.load()
        document.last_used = _stringify_keys(answers)
        self.save(document)

    # ── Presets ─────────────────────────────────────────────────

    def preset(self, name: str) -> dict[str, Any] | None:
        """A preset's answer map, or None if it does not exist."""
        found = self.load().presets.get(str(name))
        return dict(found) if found is not None else None

    def preset_names(self) -> list[str]:
        return self.load().preset_names()

    def save_preset(self, name: str, answers: Mapping[Any, Any]) -> None:
        document = self.load()
        document.presets[str(name)] = _stringify_keys(answers)
        self.save(document)
        logger.info("Saved preset '%s' to %s", name, self.path)

    def delete_preset(self, name: str) -> None:
        """Remove a preset. Deleting a missing preset is a no-op."""
        document = self.load()
        if document.presets.pop(str(name), None) is None:
            logger.debug("Preset '%s' not found, nothing to delete", name)
            return
        self.save(document)
        logger.info("Deleted preset '%s'", name)

    # ── File I/O ────────────────────────────────────────────────

    def load(self) -> ConfigDocument:
        """Read and validate the config file.

        Returns a fresh document when the file does not exist.

        Raises:
            ConfigError: On unreadable files, malformed YAML, a
                non-mapping document, an unsupported schema version, or
                entries that do not fit the document model.
        """
        if not self.path.is_file():
            logger.debug("No config file at %s — using empty config", self.path)
            return ConfigDocument()

        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read config file at {self.path}: {e}") from e

        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid config file at {self.path}: {e}") from e

        if data is None:
            return ConfigDocument()
        if not isinstance(data, dict):
            raise ConfigError(
                f"Invalid config file at {self.path}: expected a YAML mapping, "
                f"got {type(data).__name__}"
            )

        version = data.get("version", SCHEMA_VERSION)
        if not isinstance(version, int) or isinstance(version, bool):
            raise ConfigError(
                f"Invalid config version at {self.path}: expected integer, got {version!r}"
            )
        if version > SCHEMA_VERSION:
            raise ConfigError(
                f"Config file at {self.path} has unsupported version {version} "
                f"(expected {SCHEMA_VERSION}). "
                "Please upgrade create-rails-app or delete the config file."
            )

        try:
            document = ConfigDocument.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid config file at {self.path}: {e}") from e
        logger.debug(
            "Loaded config from %s (%d preset(s))", self.path, len(document.presets)
        )
        return document

    def save(self, document: ConfigDocument) -> None:
        """Write the document atomically.

        Raises:
            ConfigError: If the directory or file cannot be written.
        """
        document.version = SCHEMA_VERSION
        content = yaml.safe_dump(
            document.model_dump(mode="json"),
            default_flow_style=False,
            sort_keys=False,
        )

        tmp: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=".config_",
                suffix=".yml.tmp",
            )
            tmp = Path(tmp_name)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            tmp.replace(self.path)
            logger.debug("Config saved to %s", self.path)
        except OSError as e:
            if tmp is not None:
                tmp.unlink(missing_ok=True)
            raise ConfigError(f"Failed to write config to {self.path}: {e}") from e


def _stringify_keys(answers: Mapping[Any, Any]) -> dict[str, Any]:
    return {str(key): value for key, value in answers.items()}
