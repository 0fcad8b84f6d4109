#!filepath: tests/observability/test_timeline.py

import time

import pytest

from integration_world.observability import StepTimer


def test_report_log_output(log_lines):
    t = StepTimer()
    t.timeline.update({"base node": 1.23, "wallet": 2.34})

    t.report("Suite compilation")

    output = "\n".join(log_lines)

    assert "[SuiteSetup] Suite compilation" in output
    assert "base node=1.230s" in output
    assert "wallet=2.340s" in output
    assert "total=3.570s" in output


def test_report_without_steps(log_lines):
    StepTimer().report("Suite compilation")

    assert any("no steps ran" in line for line in log_lines)


def test_measure_records_in_order():
    t = StepTimer()

    with t.measure("first"):
        time.sleep(0.01)
    with t.measure("second"):
        pass

    assert list(t.timeline) == ["first", "second"]
    assert t.timeline["first"] > 0
    assert t.total() >= t.timeline["first"]


def test_measure_records_failed_step():
    t = StepTimer()

    with pytest.raises(ValueError):
        with t.measure("broken"):
            raise ValueError("x")

    assert "broken" in t.timeline
