# SPDX-FileCopyrightText: 2026 Tutorlink authors
#
# SPDX-License-Identifier: Apache-2.0

"""Append-only JSONL audit log for session and admin events."""

import json
import os
from pathlib import Path
from types import TracebackType
from typing import Any

from tutorlink import now_iso


def _full_write(fd: int, data: bytes) -> None:
    """Write all bytes, retrying on short writes."""
    while data:
        n = os.write(fd, data)
        data = data[n:]


class EventLog:
    """Per-session structured event log.

    One JSON object per line. Each entry is fsynced before log() returns,
    so a crash loses at most the entry being written. A partial trailing
    line left by such a crash is skipped by read_log().
    """

    def __init__(self, path: Path, context: dict[str, str] | None = None) -> None:
        self._path = path
        self._context = context or {}
        self._fd: int | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_open(self) -> bool:
        return self._fd is not None

    def open(self) -> None:
        """Open (or create) the log file for appending."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._fd = os.open(
            self._path,
            os.O_WRONLY | os.O_CREAT | os.O_APPEND,
            0o644,
        )

    def __enter__(self) -> "EventLog":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def log(self, event: str, data: dict[str, Any] | None = None) -> None:
        """Append one event. Durable on return."""
        if self._fd is None:
            msg = "EventLog not open"
            raise RuntimeError(msg)
        _full_write(self._fd, self._serialize(event, data))
        os.fsync(self._fd)

    def close(self) -> None:
        """Close the file descriptor. Safe to call twice."""
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def _serialize(self, event: str, data: dict[str, Any] | None) -> bytes:
        # Reserved keys go last so context can't overwrite them.
        entry: dict[str, Any] = {
            **self._context,
            "ts": now_iso(),
            "event": event,
        }
        if data is not None:
            entry["data"] = data
        return (json.dumps(entry, separators=(",", ":")) + "\n").encode()


def read_log(path: Path) -> list[dict[str, Any]]:
    """Parse a log file into a list of entries, oldest first.

    Missing file reads as empty. An unterminated last line is dropped.
    """
    if not path.exists():
        return []
    content = path.read_bytes()
    if not content.endswith(b"\n"):
        content = content[: content.rfind(b"\n") + 1]
    return [json.loads(line) for line in content.splitlines() if line.strip()]


__all__ = ["EventLog", "read_log"]
