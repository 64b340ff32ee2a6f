"""create-rails-app — interactive wizard for ``rails new``."""

__version__ = "0.1.0"
