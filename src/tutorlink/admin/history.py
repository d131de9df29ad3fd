# SPDX-FileCopyrightText: 2026 Tutorlink authors
#
# SPDX-License-Identifier: Apache-2.0

"""Permission-gated LIFO history of executed administrative actions."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from tutorlink.admin.action import ReversibleAction
from tutorlink.logging import EventLog, log_method

_log = logging.getLogger(__name__)


class HistoryOutcome(enum.Enum):
    EXECUTED = "executed"
    DENIED = "denied"
    UNDONE = "undone"
    NOTHING_TO_UNDO = "nothing_to_undo"


_MESSAGES: dict[HistoryOutcome, str] = {
    HistoryOutcome.EXECUTED: "Executed: {label}.",
    HistoryOutcome.DENIED: "Permission denied: {label}.",
    HistoryOutcome.UNDONE: "Undone: {label}.",
    HistoryOutcome.NOTHING_TO_UNDO: "Nothing to undo.",
}


@dataclass(frozen=True)
class HistoryResult:
    """What execute() or undo_last() did. `action` is None when nothing ran."""

    outcome: HistoryOutcome
    action: ReversibleAction | None = None

    @property
    def ok(self) -> bool:
        return self.outcome in (HistoryOutcome.EXECUTED, HistoryOutcome.UNDONE)

    @property
    def message(self) -> str:
        label = self.action.label if self.action is not None else ""
        return _MESSAGES[self.outcome].format(label=label)


class ActionHistory:
    """An administrator's stack of executed actions.

    Permission is fixed at construction and checked on execute only.
    Every action on the stack has been executed and not yet undone.
    """

    def __init__(
        self, has_permission: bool, *, event_log: EventLog | None = None
    ) -> None:
        self._has_permission = has_permission
        self._executed: list[ReversibleAction] = []
        self.event_log = event_log

    @property
    def has_permission(self) -> bool:
        return self._has_permission

    @property
    def executed(self) -> list[ReversibleAction]:
        """Snapshot of the stack, oldest first."""
        return list(self._executed)

    def __len__(self) -> int:
        return len(self._executed)

    @log_method(after=True)
    def execute(self, action: ReversibleAction) -> HistoryResult:
        """Run `action` and push it, or deny without running it."""
        if not isinstance(action, ReversibleAction):
            raise TypeError(f"not a reversible action: {action!r}")
        if not self._has_permission:
            _log.warning("denied %s: no permission", action.label)
            return HistoryResult(HistoryOutcome.DENIED, action)
        action.execute()
        self._executed.append(action)
        return HistoryResult(HistoryOutcome.EXECUTED, action)

    @log_method(after=True)
    def undo_last(self) -> HistoryResult:
        """Pop the most recent action and undo it."""
        if not self._executed:
            return HistoryResult(HistoryOutcome.NOTHING_TO_UNDO)
        action = self._executed.pop()
        action.undo()
        return HistoryResult(HistoryOutcome.UNDONE, action)
