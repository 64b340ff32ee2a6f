"""
Error hierarchy for create-rails-app.

Core modules raise these; only the click layer (``main.py`` and
``ui/cli/``) catches them, prints the message and picks an exit code.

    CreateRailsAppError
    ├── ConfigError               config file unreadable / corrupt / unwritable
    ├── UnknownOptionError        catalog lookup miss (programmer error)
    ├── UnsupportedVersionError   no compatibility entry for a Rails version
    ├── CommandFailedError        external command exited non-zero
    └── ValidationError           answer set rejected before running rails
        ├── InvalidAppNameError
        ├── UnknownOptionKeyError
        ├── UnsupportedOptionError
        ├── InvalidValueError
        └── UnsupportedValueError
"""

from __future__ import annotations


class CreateRailsAppError(Exception):
    """Base error for all create-rails-app failures."""


class ConfigError(CreateRailsAppError):
    """Raised when the config file is corrupt, unreadable or unwritable."""


class UnknownOptionError(CreateRailsAppError):
    """Raised when an option key is not in the catalog."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown option: {key}")


class UnsupportedVersionError(CreateRailsAppError):
    """Raised when no compatibility entry matches a Rails version."""

    def __init__(self, message: str, supported_ranges: list[str] | None = None):
        self.supported_ranges = list(supported_ranges or [])
        super().__init__(message)


class CommandFailedError(CreateRailsAppError):
    """Raised when an external command cannot be run or exits non-zero."""

    def __init__(self, message: str, command: list[str], return_code: int | None = None):
        self.command = list(command)
        self.return_code = return_code
        super().__init__(message)


class ValidationError(CreateRailsAppError):
    """Raised when CLI flags, the app name or option values are invalid."""


class InvalidAppNameError(ValidationError):
    pass


class UnknownOptionKeyError(ValidationError):
    pass


class UnsupportedOptionError(ValidationError):
    pass


class InvalidValueError(ValidationError):
    pass


class UnsupportedValueError(ValidationError):
    pass
