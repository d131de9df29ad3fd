# SPDX-FileCopyrightText: 2026 Tutorlink authors
#
# SPDX-License-Identifier: Apache-2.0

from tutorlink.logging.decorator import Loggable, log_method
from tutorlink.logging.event_log import EventLog, read_log

__all__ = ["EventLog", "Loggable", "log_method", "read_log"]
