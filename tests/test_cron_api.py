# tests/test_cron_api.py

from __future__ import annotations

import pytest

import tickcron
from tickcron.cron import cron_api
from tickcron.cron.cron_api import Scheduler
from tickcron.cron.errors import InvalidRuleFormat

from .fakes import CountingAction, RecordingFaultReporter


def test_scheduler_runs_actions_in_background() -> None:
    scheduler = Scheduler()
    action = CountingAction()
    scheduler.add(action)

    scheduler.start()
    scheduler.start()  # idempotent
    try:
        assert scheduler.running
        assert action.called.wait(timeout=3.0), "action should fire within a couple of ticks"
    finally:
        scheduler.stop(timeout=5.0)

    assert not scheduler.running
    assert action.calls >= 1


def test_scheduler_reports_faults_from_background_thread() -> None:
    reporter = RecordingFaultReporter()
    scheduler = Scheduler(fault_reporter=reporter)
    survivor = CountingAction()

    def boom() -> None:
        raise RuntimeError("boom")

    bad_id = scheduler.add(boom)
    scheduler.add(survivor)

    scheduler.start()
    try:
        assert survivor.called.wait(timeout=3.0)
    finally:
        scheduler.stop(timeout=5.0)

    assert bad_id in {f.task_id for f in reporter.faults}


def test_stop_without_start_is_a_noop() -> None:
    scheduler = Scheduler()
    scheduler.stop()
    assert not scheduler.running


def test_module_level_add_starts_default_scheduler(fresh_default_scheduler: Scheduler) -> None:
    action = CountingAction()

    task_id = tickcron.add(action)

    assert cron_api.default_scheduler() is fresh_default_scheduler
    assert fresh_default_scheduler.running
    assert task_id in fresh_default_scheduler.registry
    assert action.called.wait(timeout=3.0)

    tickcron.remove(task_id)
    assert task_id not in fresh_default_scheduler.registry


def test_module_level_add_rejects_bad_rules(fresh_default_scheduler: Scheduler) -> None:
    with pytest.raises(InvalidRuleFormat):
        tickcron.add(CountingAction(), "00", "60")

    assert fresh_default_scheduler.registry.count() == 0
    assert not fresh_default_scheduler.running


def test_module_level_clear(fresh_default_scheduler: Scheduler) -> None:
    tickcron.add(CountingAction(), "00")
    tickcron.add(CountingAction(), "30")

    tickcron.clear()

    assert fresh_default_scheduler.registry.count() == 0
