"""Tests for the TutoringDesk facade."""

from pathlib import Path

import pytest

from tutorlink.admin import HistoryOutcome
from tutorlink.desk import TutoringDesk
from tutorlink.logging import EventLog, read_log
from tutorlink.session import Refused, Transitioned, Tutor


@pytest.fixture()
def desk() -> TutoringDesk:
    return TutoringDesk("Ana", "Luis", "Math help")


def test_initial_wiring(desk: TutoringDesk) -> None:
    assert desk.current_state_name() == "Requested"
    assert desk.session.description == "Math help"
    assert desk.session.subscribers == [desk.tutor, desk.student]
    assert desk.history.has_permission


def test_accept_then_complete_scenario(desk: TutoringDesk) -> None:
    assert isinstance(desk.accept_session(), Transitioned)
    assert desk.current_state_name() == "Accepted"
    assert desk.tutor.collect() == ["Tutoring session accepted."]
    assert desk.student.collect() == ["Tutoring session accepted."]

    again = desk.accept_session()
    assert isinstance(again, Refused)
    assert "already accepted" in again.reason
    assert desk.tutor.peek() == []

    assert isinstance(desk.complete_session(), Transitioned)
    assert desk.current_state_name() == "Completed"
    assert desk.student.collect() == ["Tutoring session completed."]

    assert isinstance(desk.reject_session(), Refused)
    assert desk.current_state_name() == "Completed"
    assert desk.student.peek() == []


def test_admin_without_permission() -> None:
    desk = TutoringDesk("Ana", "Luis", "Math help", has_permission=False)
    result = desk.assign_tutor()
    assert result.outcome == HistoryOutcome.DENIED
    assert len(desk.history) == 0
    assert desk.session.assigned_tutor is None
    assert desk.undo_last_admin_action().outcome == HistoryOutcome.NOTHING_TO_UNDO


def test_assign_then_undo(desk: TutoringDesk) -> None:
    other = Tutor("Marta")
    assert desk.assign_tutor(other).outcome == HistoryOutcome.EXECUTED
    assert desk.session.assigned_tutor is other
    undone = desk.undo_last_admin_action()
    assert undone.outcome == HistoryOutcome.UNDONE
    assert desk.session.assigned_tutor is None
    assert len(desk.history) == 0
    assert desk.undo_last_admin_action().outcome == HistoryOutcome.NOTHING_TO_UNDO


def test_assign_defaults_to_desk_tutor(desk: TutoringDesk) -> None:
    desk.assign_tutor()
    assert desk.session.assigned_tutor is desk.tutor


def test_event_log_records_transitions_and_admin(tmp_path: Path) -> None:
    with TutoringDesk("Ana", "Luis", "Math help", log_root=tmp_path) as desk:
        desk.accept_session()
        desk.accept_session()
        desk.assign_tutor()
        desk.undo_last_admin_action()
        path = tmp_path / desk.session.id.hex / "events.jsonl"
    events = read_log(path)
    names = [e["event"] for e in events]
    assert names == [
        "session.created",
        "accept.result",
        "accept.result",
        "execute.result",
        "undo_last.result",
        "session.closed",
    ]
    assert all(e["session_id"] == desk.session.id.hex for e in events)
    assert events[1]["data"]["result"]["target"] == "Accepted"
    assert "reason" in events[2]["data"]["result"]
    assert events[3]["data"]["action"] == "assign tutor Ana"
    assert events[3]["data"]["result"]["outcome"] == "executed"
    assert events[5]["data"]["state"] == "Accepted"


def test_close_is_idempotent(tmp_path: Path) -> None:
    desk = TutoringDesk("Ana", "Luis", "Math help", log_root=tmp_path)
    desk.close()
    desk.close()
    # Closed log: operations still work, just unlogged.
    assert isinstance(desk.accept_session(), Transitioned)


def test_failed_first_write_closes_log(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    opened: list[EventLog] = []
    real_open = EventLog.open

    def tracking_open(self: EventLog) -> None:
        real_open(self)
        opened.append(self)

    def failing_log(self: EventLog, event: str, data: object = None) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(EventLog, "open", tracking_open)
    monkeypatch.setattr(EventLog, "log", failing_log)
    with pytest.raises(OSError, match="disk full"):
        TutoringDesk("Ana", "Luis", "Math help", log_root=tmp_path)
    assert len(opened) == 1
    assert not opened[0].is_open
