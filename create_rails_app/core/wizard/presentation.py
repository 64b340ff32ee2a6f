"""
Wizard presentation — labels, help lines and choice rendering.

Two independent display attributes exist on a choice list:

    "(default)" suffix   the Rails canonical default
    pre-selection        the user's current / last-used pick

They can land on different choices, or on the same one.
"""

from __future__ import annotations

LABELS: dict[str, str] = {
    "api": "API-only mode",
    "active_record": "Active Record (ORM)",
    "database": "Database",
    "javascript": "JavaScript approach",
    "css": "CSS framework",
    "asset_pipeline": "Asset pipeline",
    "hotwire": "Hotwire (Turbo + Stimulus)",
    "jbuilder": "Jbuilder (JSON templates)",
    "action_mailer": "Action Mailer",
    "action_mailbox": "Action Mailbox",
    "action_text": "Action Text (rich text)",
    "active_job": "Active Job",
    "active_storage": "Active Storage (file uploads)",
    "action_cable": "Action Cable (WebSockets)",
    "test": "Test framework",
    "system_test": "System tests",
    "brakeman": "Brakeman (security scanner)",
    "bundler_audit": "Bundler Audit (dependency checker)",
    "rubocop": "RuboCop (linter)",
    "ci": "CI files",
    "docker": "Dockerfile",
    "kamal": "Kamal (deployment)",
    "thruster": "Thruster (HTTP/2 proxy)",
    "solid": "Solid (Cache/Queue/Cable)",
    "devcontainer": "Dev Container",
    "bootsnap": "Bootsnap (boot speedup)",
    "git": "Initialize git",
    "bundle": "Run bundle install",
}

HELP_TEXT: dict[str, str] = {
    "api": "Generates a slimmed-down app optimized for API backends.",
    "active_record": "Database ORM layer. Skipping also skips the database choice.",
    "database": "Which database adapter to configure.",
    "javascript": "How JavaScript is managed in the asset pipeline.",
    "css": "Which CSS framework to pre-install.",
    "asset_pipeline": "Which asset pipeline to use for JS/CSS bundling.",
    "hotwire": "Turbo + Stimulus for SPA-like behavior over HTML.",
    "jbuilder": "DSL for building JSON views.",
    "action_mailer": "Framework for sending emails.",
    "action_mailbox": "Routes inbound emails to controller-like mailboxes.",
    "action_text": "Rich text content and editing with Trix.",
    "active_job": "Framework for declaring and running background jobs.",
    "active_storage": "Upload files to cloud services like S3 or GCS.",
    "action_cable": "WebSocket framework for real-time features.",
    "test": "Generates test directory and helpers.",
    "system_test": "Browser-based integration tests via Capybara.",
    "brakeman": "Static analysis for security vulnerabilities.",
    "bundler_audit": "Checks dependencies for known vulnerabilities.",
    "rubocop": "Ruby style and lint checking.",
    "ci": "Generates CI workflow configuration.",
    "docker": "Generates Dockerfile for containerized deployment.",
    "kamal": "Generates Kamal deploy configuration.",
    "thruster": "HTTP/2 proxy with asset caching and X-Sendfile.",
    "solid": "Solid Cache, Solid Queue, and Solid Cable adapters.",
    "devcontainer": "Generates VS Code dev container configuration.",
    "bootsnap": "Speeds up boot times with caching.",
    "git": "Initializes a git repository for the new app.",
    "bundle": "Runs bundle install after generating the app.",
}

# Per-choice hints for enum options. Missing entries simply render bare.
CHOICE_HELP: dict[str, dict[str, str]] = {
    "database": {
        "sqlite3": "simple file-based, great for development",
        "postgresql": "full-featured, most popular for production",
        "mysql": "widely used relational database",
        "trilogy": "modern MySQL-compatible client",
        "mariadb-mysql": "MariaDB with mysql2 adapter",
        "mariadb-trilogy": "MariaDB with Trilogy adapter",
    },
    "javascript": {
        "importmap": "no bundler, uses browser-native import maps",
        "bun": "fast all-in-one JS runtime and bundler",
        "webpack": "established full-featured bundler",
        "esbuild": "extremely fast JS bundler",
        "rollup": "ES module-focused bundler",
        "none": "no JavaScript setup",
    },
    "asset_pipeline": {
        "propshaft": "modern, lightweight asset pipeline",
        "sprockets": "classic asset pipeline with preprocessing",
        "none": "no asset pipeline",
    },
    "css": {
        "tailwind": "utility-first CSS framework",
        "bootstrap": "popular component-based framework",
        "bulma": "modern CSS-only framework",
        "postcss": "CSS transformations via plugins",
        "sass": "CSS with variables, nesting, and mixins",
        "none": "no CSS framework",
    },
}

DEFAULT_MARKER = " (default)"


def label_for(key: str) -> str:
    return LABELS.get(key, key.replace("_", " ").capitalize())


def render_question(index: int, total: int, key: str) -> str:
    """``"03/27 Database - Which database adapter to configure."``"""
    step = f"{index + 1:02d}/{total:02d}"
    help_line = HELP_TEXT.get(key)
    question = f"{step} {label_for(key)}"
    return f"{question} - {help_line}" if help_line else question


def render_choice_label(key: str, choice: str, rails_default: str | None) -> str:
    """Choice text with its hint and, for the Rails default, a marker."""
    label = choice
    hint = CHOICE_HELP.get(key, {}).get(choice)
    if hint:
        label = f"{label} - {hint}"
    if choice == rails_default:
        label = f"{label}{DEFAULT_MARKER}"
    return label
