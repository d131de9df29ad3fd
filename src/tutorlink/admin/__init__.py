# SPDX-FileCopyrightText: 2026 Tutorlink authors
#
# SPDX-License-Identifier: Apache-2.0

from tutorlink.admin.action import AssignTutor, ReversibleAction
from tutorlink.admin.history import ActionHistory, HistoryOutcome, HistoryResult

__all__ = [
    "ActionHistory",
    "AssignTutor",
    "HistoryOutcome",
    "HistoryResult",
    "ReversibleAction",
]
