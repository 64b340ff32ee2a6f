"""
Option validation — check an answer set before anything is run.

Validates the app name, then every (key, value) pair against the
catalog and the compatibility entry for the selected Rails version.
The first failure wins and is raised as a ``ValidationError`` subclass
with a human-readable message.

A ``None`` value always passes: it means "no decision made", not "off".
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from create_rails_app.core.compatibility.matrix import BOOLEAN, Entry
from create_rails_app.core.errors import (
    InvalidAppNameError,
    InvalidValueError,
    UnknownOptionKeyError,
    UnsupportedOptionError,
    UnsupportedValueError,
)
from create_rails_app.core.options import catalog

logger = logging.getLogger(__name__)

# Starts with a letter, then letters, digits, underscores or dashes
APP_NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*\Z")


class Validator:
    """Validate answer sets against one compatibility entry."""

    def __init__(self, entry: Entry):
        self.entry = entry

    def validate(self, app_name: str | None, answers: Mapping[str, Any]) -> None:
        """Raise on the first invalid item; return None when all pass."""
        self.validate_app_name(app_name)

        for key, value in answers.items():
            self._validate_key(key)
            self._validate_supported_option(key)
            self._validate_value(key, value)
            self._validate_supported_value(key, value)

        logger.debug("Validated %d option(s) for app %r", len(answers), app_name)

    @staticmethod
    def validate_app_name(app_name: str | None) -> None:
        if isinstance(app_name, str) and APP_NAME_PATTERN.match(app_name):
            return
        raise InvalidAppNameError(f"Invalid app name: {app_name!r}")

    def _validate_key(self, key: str) -> None:
        if not catalog.is_known(key):
            raise UnknownOptionKeyError(f"Unknown option: {key}")

    def _validate_supported_option(self, key: str) -> None:
        if not self.entry.supports(key):
            raise UnsupportedOptionError(
                f"Option {key} is not supported by this Rails version"
            )

    def _validate_value(self, key: str, value: Any) -> None:
        if value is None:
            return

        definition = catalog.fetch(key)
        if definition.type in ("flag", "skip"):
            if isinstance(value, bool):
                return
        elif definition.type == "enum":
            if value is True:
                return
            if value is False and definition.has_none:
                return
            if isinstance(value, str) and value in definition.values:
                return

        raise InvalidValueError(f"Invalid value for {key}: {value!r}")

    def _validate_supported_value(self, key: str, value: Any) -> None:
        if value is None or isinstance(value, bool):
            return

        allowed = self.entry.allowed_values(key)
        if allowed is BOOLEAN or (allowed is not None and value in allowed):
            return

        raise UnsupportedValueError(
            f"Value {value!r} for {key} is not supported by this Rails version"
        )


def validate(app_name: str | None, answers: Mapping[str, Any], entry: Entry) -> None:
    """Module-level shortcut for ``Validator(entry).validate(...)``."""
    Validator(entry).validate(app_name, answers)
