"""
ConfigDocument — the persisted config file model.

Serialized as YAML to ``~/.config/create-rails-app/config.yml``:

    version: 1
    last_used:
      api: true
      database: postgresql
    presets:
      fast:
        database: sqlite3
        hotwire: false

Sections that are not mappings are read as empty rather than failing,
so a hand-edited file degrades to "no saved answers".
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

SCHEMA_VERSION = 1


class ConfigDocument(BaseModel):
    """Root config model — last-used answers and named presets."""

    version: int = SCHEMA_VERSION
    last_used: dict[str, Any] = Field(default_factory=dict)
    presets: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @field_validator("last_used", mode="before")
    @classmethod
    def _mapping_or_empty(cls, value: Any) -> dict:
        return value if isinstance(value, dict) else {}

    @field_validator("presets", mode="before")
    @classmethod
    def _preset_mappings(cls, value: Any) -> dict:
        if not isinstance(value, dict):
            return {}
        return {str(name): opts for name, opts in value.items() if isinstance(opts, dict)}

    def preset_names(self) -> list[str]:
        return sorted(self.presets)
