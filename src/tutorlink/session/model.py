# SPDX-FileCopyrightText: 2026 Tutorlink authors
#
# SPDX-License-Identifier: Apache-2.0

"""Tutoring session data model and state machine."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from tutorlink import now_iso
from tutorlink.logging import EventLog, log_method
from tutorlink.session.notify import Notifiable, Tutor

_log = logging.getLogger(__name__)


class SessionState(enum.Enum):
    REQUESTED = "Requested"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    COMPLETED = "Completed"


class SessionAction(enum.Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    COMPLETE = "complete"


_Key = tuple[SessionState, SessionAction]

# Legal transitions: target state and the message broadcast to subscribers.
_TRANSITIONS: dict[_Key, tuple[SessionState, str]] = {
    (SessionState.REQUESTED, SessionAction.ACCEPT): (
        SessionState.ACCEPTED,
        "Tutoring session accepted.",
    ),
    (SessionState.REQUESTED, SessionAction.REJECT): (
        SessionState.REJECTED,
        "Tutoring session rejected.",
    ),
    (SessionState.ACCEPTED, SessionAction.REJECT): (
        SessionState.REJECTED,
        "Tutoring session rejected.",
    ),
    (SessionState.ACCEPTED, SessionAction.COMPLETE): (
        SessionState.COMPLETED,
        "Tutoring session completed.",
    ),
}

# Every other (state, action) pair is refused with one of these.
_REFUSALS: dict[_Key, str] = {
    (SessionState.REQUESTED, SessionAction.COMPLETE): (
        "cannot complete a requested session"
    ),
    (SessionState.ACCEPTED, SessionAction.ACCEPT): "session is already accepted",
    (SessionState.REJECTED, SessionAction.ACCEPT): "cannot accept a rejected session",
    (SessionState.REJECTED, SessionAction.REJECT): "session is already rejected",
    (SessionState.REJECTED, SessionAction.COMPLETE): (
        "cannot complete a rejected session"
    ),
    (SessionState.COMPLETED, SessionAction.ACCEPT): (
        "cannot accept a completed session"
    ),
    (SessionState.COMPLETED, SessionAction.REJECT): (
        "cannot reject a completed session"
    ),
    (SessionState.COMPLETED, SessionAction.COMPLETE): "session is already completed",
}


@dataclass(frozen=True)
class Transitioned:
    """A legal transition. Subscribers were told `message`."""

    action: SessionAction
    source: SessionState
    target: SessionState
    message: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Refused:
    """An illegal transition. Nothing changed, nobody was notified."""

    action: SessionAction
    state: SessionState
    reason: str

    @property
    def ok(self) -> bool:
        return False


TransitionResult = Transitioned | Refused


def transition(state: SessionState, action: SessionAction) -> TransitionResult:
    """Decide what `action` does from `state`. Total; never raises."""
    key = (state, action)
    legal = _TRANSITIONS.get(key)
    if legal is not None:
        target, message = legal
        return Transitioned(action=action, source=state, target=target, message=message)
    return Refused(action=action, state=state, reason=_REFUSALS[key])


def allowed_actions(state: SessionState) -> frozenset[SessionAction]:
    """Actions that would move a session out of `state`."""
    return frozenset(a for s, a in _TRANSITIONS if s == state)


def is_terminal(state: SessionState) -> bool:
    """True for REJECTED and COMPLETED."""
    return not allowed_actions(state)


@dataclass
class Session:
    """A tutoring session request and its subscribers.

    `state` only changes through accept/reject/complete, and only along
    the legal transitions above. Each legal transition is broadcast to
    every subscriber in subscription order.
    """

    description: str = ""
    id: UUID = field(default_factory=uuid4)
    state: SessionState = SessionState.REQUESTED
    subscribers: list[Notifiable] = field(default_factory=list, repr=False)
    assigned_tutor: Tutor | None = None
    created_at: str = field(default_factory=now_iso)
    event_log: EventLog | None = field(default=None, repr=False, compare=False)

    @property
    def state_name(self) -> str:
        return self.state.value

    def subscribe(self, observer: Notifiable) -> None:
        """Append a subscriber. Duplicates are kept and notified twice."""
        if not isinstance(observer, Notifiable):
            raise TypeError(f"not notifiable: {observer!r}")
        self.subscribers.append(observer)

    def notify_all(self, message: str) -> None:
        """Deliver `message` to every subscriber, synchronously, in order."""
        for observer in self.subscribers:
            observer.receive(message)

    def apply(self, action: SessionAction) -> TransitionResult:
        """Run `action` through the state machine and notify on success."""
        result = transition(self.state, action)
        if isinstance(result, Refused):
            _log.debug(
                "session %s: %s refused: %s", self.id, action.value, result.reason
            )
            return result
        self.state = result.target
        _log.debug(
            "session %s: %s → %s",
            self.id,
            result.source.value,
            result.target.value,
        )
        self.notify_all(result.message)
        return result

    @log_method(after=True)
    def accept(self) -> TransitionResult:
        """REQUESTED → ACCEPTED."""
        return self.apply(SessionAction.ACCEPT)

    @log_method(after=True)
    def reject(self) -> TransitionResult:
        """REQUESTED/ACCEPTED → REJECTED."""
        return self.apply(SessionAction.REJECT)

    @log_method(after=True)
    def complete(self) -> TransitionResult:
        """ACCEPTED → COMPLETED."""
        return self.apply(SessionAction.COMPLETE)
