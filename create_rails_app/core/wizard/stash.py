"""
Stash — keeps a skipped step's value so it can come back.

When a gating answer makes a step skipped (e.g. ``active_record`` set
to False bypasses ``database``), the step's value is moved out of the
answer map into the stash. If the step later becomes reachable again
and the answer map has no value for it, the stashed value is moved
back and shows up pre-selected.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class Stash:
    """Side storage for values of currently-skipped steps."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def stash(self, answers: dict[str, Any], key: str) -> bool:
        """Move ``answers[key]`` into the stash.

        Returns True if a value was moved. A key absent from the answer
        map leaves any earlier stashed value untouched.
        """
        if key not in answers:
            return False
        self._values[key] = answers.pop(key)
        logger.debug("Stashed %s=%r", key, self._values[key])
        return True

    def restore(self, answers: dict[str, Any], key: str) -> bool:
        """Move a stashed value back into ``answers`` if it has none.

        The stashed value is consumed only when it is restored; when the
        answer map already holds a value it wins and the stash keeps
        its copy.
        """
        if key not in self._values or key in answers:
            return False
        answers[key] = self._values.pop(key)
        logger.debug("Restored %s=%r from stash", key, answers[key])
        return True
