"""Tests for the @log_method decorator."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from tutorlink.logging import EventLog, log_method, read_log
from tutorlink.session import SessionState


@dataclass(frozen=True)
class Outcome:
    state: SessionState
    note: str


class FakeActor:
    """Minimal loggable class for testing the decorator."""

    def __init__(self, log: EventLog | None = None) -> None:
        self.event_log = log

    @log_method(before=True, after=True)
    def move(self, target: SessionState) -> Outcome:
        return Outcome(state=target, note="moved")

    @log_method(after=True)
    def stop(self) -> None:
        pass

    @log_method(after=True)
    def fail(self) -> None:
        raise RuntimeError("boom")


@pytest.fixture()
def event_log(tmp_path: Path) -> EventLog:
    log = EventLog(tmp_path / "events.jsonl")
    log.open()
    return log


def test_before_and_after(event_log: EventLog) -> None:
    actor = FakeActor(log=event_log)
    assert actor.move(SessionState.ACCEPTED).note == "moved"
    event_log.close()
    events = read_log(event_log.path)
    assert [e["event"] for e in events] == ["move", "move.result"]
    assert events[0]["data"] == {"target": "Accepted"}
    assert events[1]["data"]["result"] == {"state": "Accepted", "note": "moved"}


def test_none_result_omitted(event_log: EventLog) -> None:
    FakeActor(log=event_log).stop()
    event_log.close()
    events = read_log(event_log.path)
    assert events[0]["event"] == "stop.result"
    assert "result" not in events[0]["data"]


def test_no_log_still_works() -> None:
    actor = FakeActor(log=None)
    assert actor.move(SessionState.REJECTED).state == SessionState.REJECTED


def test_closed_log_is_skipped(event_log: EventLog) -> None:
    event_log.close()
    actor = FakeActor(log=event_log)
    actor.stop()
    assert read_log(event_log.path) == []


def test_exception_propagates_unlogged(event_log: EventLog) -> None:
    actor = FakeActor(log=event_log)
    with pytest.raises(RuntimeError, match="boom"):
        actor.fail()
    event_log.close()
    assert read_log(event_log.path) == []
