"""
Domain models — Pydantic types for create-rails-app.

    from create_rails_app.core.models import ConfigDocument
"""

from create_rails_app.core.models.config_document import SCHEMA_VERSION, ConfigDocument

__all__ = [
    "SCHEMA_VERSION",
    "ConfigDocument",
]
