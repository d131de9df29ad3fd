# SPDX-FileCopyrightText: 2026 Tutorlink authors
#
# SPDX-License-Identifier: Apache-2.0

"""Notification receivers: the Notifiable protocol and session participants."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import ClassVar, Protocol, runtime_checkable

_log = logging.getLogger(__name__)


@runtime_checkable
class Notifiable(Protocol):
    """Anything a session can push transition messages to."""

    def receive(self, message: str) -> None:
        """Accept one notification. Must not raise."""
        ...


@dataclass(eq=False)
class Participant:
    """A named party with a FIFO inbox of received notifications.

    Compared by identity, so two participants with the same name are
    still distinct subscribers.
    """

    name: str
    inbox: deque[str] = field(default_factory=deque, repr=False)

    role: ClassVar[str] = "participant"

    def receive(self, message: str) -> None:
        """Append a notification to the inbox."""
        self.inbox.append(message)
        _log.info("notification to %s %s: %s", self.role, self.name, message)

    def collect(self) -> list[str]:
        """Drain all notifications in FIFO order. Inbox is empty afterwards."""
        items = list(self.inbox)
        self.inbox.clear()
        return items

    def peek(self) -> list[str]:
        """Return all notifications without removing them."""
        return list(self.inbox)


class Tutor(Participant):
    role = "tutor"


class Student(Participant):
    role = "student"
