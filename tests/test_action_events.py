import logging
from datetime import datetime, timedelta, timezone

from leafbridge.action_events import ActionStarted, ActionStopped
from leafbridge.flows import ActionType
from leafbridge.textfmt import format_duration

T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def _stopped(seconds, error=None):
    return ActionStopped(
        deployment="dep-1",
        flow="install",
        action_index=0,
        action_type=ActionType.COPY_FILE,
        started=T0,
        stopped=T0 + timedelta(seconds=seconds),
        error=error,
    )


def test_action_started_message():
    event = ActionStarted(
        deployment="dep-1",
        flow="install",
        action_index=2,
        action_type=ActionType.INVOKE_COMMAND,
    )
    assert event.message() == "dep-1: install: 3: invoke-command: Starting action"
    assert event.component() == "action"
    assert event.level() == logging.DEBUG
    assert event.details() == ""


def test_action_started_attrs():
    event = ActionStarted(
        deployment="dep-1", flow="install", action_index=2, action_type="start-flow"
    )
    assert event.attrs() == {
        "deployment": "dep-1",
        "flow": "install",
        "action": {"index": 2, "type": "start-flow"},
    }


def test_action_stopped_duration():
    assert _stopped(7).duration() == timedelta(seconds=7)


def test_action_stopped_levels():
    assert _stopped(1).level() == logging.DEBUG
    assert _stopped(5).level() == logging.INFO
    assert _stopped(10).level() == logging.INFO
    assert _stopped(1, RuntimeError("boom")).level() == logging.ERROR


def test_action_stopped_completed_message():
    assert _stopped(2).message() == "dep-1: install: 1: copy-file: Completed action (2s)"


def test_action_stopped_error_message():
    event = _stopped(3, RuntimeError("boom"))
    message = event.message()
    assert "Stopped action due to an error: boom" in message
    assert message.endswith(f"({format_duration(event.duration())})")
    assert message.startswith("dep-1: install: 1: copy-file: ")


def test_action_stopped_attrs_error():
    with_error = _stopped(1, RuntimeError("boom")).attrs()
    assert with_error["error"] == "boom"
    assert with_error["started"] == T0
    without = _stopped(1).attrs()
    assert "error" not in without
    assert without["action"] == {"index": 0, "type": ActionType.COPY_FILE}
    assert without["stopped"] == T0 + timedelta(seconds=1)