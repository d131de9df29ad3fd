# SPDX-FileCopyrightText: 2026 Tutorlink authors
#
# SPDX-License-Identifier: Apache-2.0

"""Tutoring desk — composition root for one session and its administrator."""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

from tutorlink.admin import ActionHistory, AssignTutor, HistoryResult
from tutorlink.logging import EventLog
from tutorlink.session import Session, Student, TransitionResult, Tutor

_log = logging.getLogger(__name__)


class TutoringDesk:
    """Wires a session, its two participants and an administrator.

    The tutor and student are subscribed in that order, so the tutor is
    always notified first. When `log_root` is given, session transitions
    and admin actions share one event log under
    `log_root/<session-id-hex>/events.jsonl`.
    """

    def __init__(
        self,
        tutor_name: str,
        student_name: str,
        description: str,
        *,
        has_permission: bool = True,
        log_root: Path | None = None,
    ) -> None:
        self._tutor = Tutor(tutor_name)
        self._student = Student(student_name)
        self._session = Session(description=description)
        self._history = ActionHistory(has_permission)
        self._session.subscribe(self._tutor)
        self._session.subscribe(self._student)

        # Opened after wiring; closed again if the first write fails.
        self._log: EventLog | None = None
        if log_root is not None:
            log = EventLog(
                log_root / self._session.id.hex / "events.jsonl",
                context={"session_id": self._session.id.hex},
            )
            log.open()
            self._log = log
            self._session.event_log = log
            self._history.event_log = log
        try:
            self._log_lifecycle(
                "session.created",
                {
                    "description": description,
                    "tutor": tutor_name,
                    "student": student_name,
                    "has_permission": has_permission,
                },
            )
        except BaseException:
            if self._log is not None:
                self._log.close()
            raise

    @property
    def session(self) -> Session:
        return self._session

    @property
    def tutor(self) -> Tutor:
        return self._tutor

    @property
    def student(self) -> Student:
        return self._student

    @property
    def history(self) -> ActionHistory:
        return self._history

    # -- Public API -----------------------------------------------------------

    def accept_session(self) -> TransitionResult:
        return self._session.accept()

    def reject_session(self) -> TransitionResult:
        return self._session.reject()

    def complete_session(self) -> TransitionResult:
        return self._session.complete()

    def assign_tutor(self, tutor: Tutor | None = None) -> HistoryResult:
        """Submit an AssignTutor through the administrator.

        Defaults to the desk's own tutor.
        """
        target = self._tutor if tutor is None else tutor
        return self._history.execute(AssignTutor(self._session, target))

    def undo_last_admin_action(self) -> HistoryResult:
        return self._history.undo_last()

    def current_state_name(self) -> str:
        return self._session.state_name

    def close(self) -> None:
        """Close the event log, if any. Safe to call twice."""
        if self._log is not None and self._log.is_open:
            self._log_lifecycle("session.closed", {"state": self.current_state_name()})
            self._log.close()

    def __enter__(self) -> TutoringDesk:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    # -- Internal -------------------------------------------------------------

    def _log_lifecycle(self, event: str, data: dict[str, object]) -> None:
        _log.debug("session %s: %s", self._session.id, event)
        if self._log is not None:
            self._log.log(event, data)
