import logging
from datetime import datetime, timedelta, timezone

from leafbridge.conditions import ConditionUse
from leafbridge.flow_events import (
    FlowAlreadyRunning,
    FlowCondition,
    FlowLockNotAcquired,
    FlowStarted,
    FlowStopped,
)
from leafbridge.flows import FlowStats

T0 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_flow_started():
    event = FlowStarted(deployment="dep", flow="install")
    assert event.component() == "flow"
    assert event.level() == logging.INFO
    assert "Starting." in event.message()
    assert "dep" in event.message() and "install" in event.message()
    assert event.details() == ""
    assert event.attrs() == {"deployment": "dep", "flow": "install"}


def test_flow_stopped_completed():
    event = FlowStopped(deployment="dep", flow="install", started=T0, stopped=T0 + timedelta(seconds=3))
    assert event.level() == logging.INFO
    assert "Completed." in event.message()
    assert event.duration() == timedelta(seconds=3)
    assert event.details() == ""


def test_flow_stopped_mixed_results_with_error():
    err = RuntimeError("boom")
    event = FlowStopped(
        deployment="dep",
        flow="install",
        stats=FlowStats(actions_completed=2, actions_failed=1),
        started=T0,
        stopped=T0,
        error=err,
    )
    assert event.level() == logging.ERROR
    assert "completed successfully and" in event.message()
    assert "encountered an error." in event.message()
    assert event.details() == "boom"
    attrs = event.attrs()
    assert attrs["actions"] == {"completed": 2, "failed": 1}
    assert attrs["error"] == "boom"


def test_flow_stopped_single_error_in_message():
    event = FlowStopped(
        flow="f",
        stats=FlowStats(actions_failed=1),
        started=T0,
        stopped=T0,
        error=ValueError("bad"),
    )
    assert "Stopped after encountering an error: bad." in event.message()
    assert event.details() == ""


def test_flow_stopped_failed_without_error():
    event = FlowStopped(flow="f", stats=FlowStats(actions_failed=1), started=T0, stopped=T0)
    assert "Stopped." in event.message()
    assert "error" not in event.attrs()


def test_flow_condition_all_passed():
    event = FlowCondition(
        deployment="dep",
        flow="f",
        use=ConditionUse.CONSTRAINT,
        passed=["a", "b"],
    )
    assert event.level() == logging.DEBUG
    assert "All constraints passed: a, b." in event.message()
    assert event.attrs()["use"] == "constraint"
    assert event.attrs()["conditions"] == {"passed": ["a", "b"], "failed": []}


def test_flow_condition_failed_precondition_is_error():
    event = FlowCondition(flow="f", use=ConditionUse.PRECONDITION, failed=["x"])
    assert event.level() == logging.ERROR
    assert "did not pass" in event.message()
    assert "preconditions" in event.message()


def test_flow_condition_failed_constraint_is_debug():
    event = FlowCondition(flow="f", use=ConditionUse.CONSTRAINT, failed=["x"])
    assert event.level() == logging.DEBUG


def test_flow_condition_error():
    event = FlowCondition(flow="f", error=RuntimeError("oops"))
    assert event.level() == logging.ERROR
    assert "Unable to evaluate conditions: oops" in event.message()
    assert event.attrs()["error"] == "oops"


def test_flow_lock_not_acquired():
    event = FlowLockNotAcquired(deployment="dep", flow="f", lock="main")
    assert event.level() == logging.ERROR
    assert "lock could not be acquired." in event.message()
    assert event.attrs() == {"deployment": "dep", "flow": "f", "lock": "main"}


def test_flow_lock_not_acquired_with_error():
    event = FlowLockNotAcquired(flow="f", error=RuntimeError("denied"))
    assert "Unable to start the flow: denied" in event.message()
    assert "lock" not in event.attrs()
    assert event.attrs()["error"] == "denied"


def test_flow_already_running():
    event = FlowAlreadyRunning(deployment="dep", flow="f")
    assert event.level() == logging.ERROR
    assert "Is there a cycle in the flow logic?" in event.message()
    assert event.component() == "flow"
    assert event.attrs() == {"deployment": "dep", "flow": "f"}