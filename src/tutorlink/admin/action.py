# SPDX-FileCopyrightText: 2026 Tutorlink authors
#
# SPDX-License-Identifier: Apache-2.0

"""Reversible administrative actions against a session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from tutorlink.session.model import Session
from tutorlink.session.notify import Tutor

_log = logging.getLogger(__name__)


@runtime_checkable
class ReversibleAction(Protocol):
    """An effect with a paired inverse.

    undo() is only ever called after execute(), and only on the most
    recently executed action still on the history.
    """

    @property
    def label(self) -> str:
        """Short human description, e.g. "assign tutor Ana"."""
        ...

    def execute(self) -> None: ...

    def undo(self) -> None: ...


@dataclass
class AssignTutor:
    """Assign `tutor` to `session`, remembering who was assigned before.

    Not a state transition: works in any session state and notifies nobody.
    """

    session: Session
    tutor: Tutor
    # One entry per execute not yet undone, newest last.
    _previous: list[Tutor | None] = field(
        default_factory=list, init=False, repr=False
    )

    @property
    def label(self) -> str:
        return f"assign tutor {self.tutor.name}"

    def execute(self) -> None:
        self._previous.append(self.session.assigned_tutor)
        self.session.assigned_tutor = self.tutor
        _log.info("assigned tutor %s to session %s", self.tutor.name, self.session.id)

    def undo(self) -> None:
        self.session.assigned_tutor = self._previous.pop()
        _log.info(
            "undid assignment of tutor %s on session %s",
            self.tutor.name,
            self.session.id,
        )
