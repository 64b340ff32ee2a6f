"""Adapters — bindings to external programs.

Public re-exports for convenient access.
"""

from create_rails_app.adapters.shell.command import CommandRunner, RunReceipt

__all__ = [
    "CommandRunner",
    "RunReceipt",
]
