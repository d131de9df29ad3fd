# SPDX-FileCopyrightText: 2026 Tutorlink authors
#
# SPDX-License-Identifier: Apache-2.0

from tutorlink.session.model import (
    Refused,
    Session,
    SessionAction,
    SessionState,
    TransitionResult,
    Transitioned,
    allowed_actions,
    is_terminal,
    transition,
)
from tutorlink.session.notify import Notifiable, Participant, Student, Tutor

__all__ = [
    "Notifiable",
    "Participant",
    "Refused",
    "Session",
    "SessionAction",
    "SessionState",
    "Student",
    "TransitionResult",
    "Transitioned",
    "Tutor",
    "allowed_actions",
    "is_terminal",
    "transition",
]
