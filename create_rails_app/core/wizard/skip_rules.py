"""
Skip rules — when a wizard step is silently bypassed.

Each rule is a pure predicate over a read-only snapshot of the answer
map. A step whose rule returns True is not asked, and any value it
holds is moved to the stash (see ``stash.py``).

    database                          active_record is False
    javascript, css, asset_pipeline,
    hotwire, jbuilder                 api is True
    action_mailbox, active_storage    active_record is False
    action_text                       api is True or active_record is False
    system_test                       test is False or api is True
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

AnswerSnapshot = Mapping[str, Any]
SkipRule = Callable[[AnswerSnapshot], bool]


def snapshot(answers: Mapping[str, Any]) -> AnswerSnapshot:
    """Immutable copy of the answer map for rule evaluation."""
    return MappingProxyType(dict(answers))


def api_only(answers: AnswerSnapshot) -> bool:
    return answers.get("api") is True


def without_active_record(answers: AnswerSnapshot) -> bool:
    return answers.get("active_record") is False


def without_rich_text(answers: AnswerSnapshot) -> bool:
    return api_only(answers) or without_active_record(answers)


def without_system_tests(answers: AnswerSnapshot) -> bool:
    return answers.get("test") is False or api_only(answers)


SKIP_RULES: dict[str, SkipRule] = {
    "database": without_active_record,
    "javascript": api_only,
    "css": api_only,
    "asset_pipeline": api_only,
    "hotwire": api_only,
    "jbuilder": api_only,
    "action_mailbox": without_active_record,
    "action_text": without_rich_text,
    "active_storage": without_active_record,
    "system_test": without_system_tests,
}


def is_skipped(key: str, answers: Mapping[str, Any]) -> bool:
    """Whether ``key`` is bypassed given the current answers."""
    rule = SKIP_RULES.get(key)
    if rule is None:
        return False
    return rule(snapshot(answers))
