# tests/conftest.py

from __future__ import annotations

from datetime import datetime

import pytest

from tickcron.cron import cron_api
from tickcron.cron.cron_api import Scheduler
from tickcron.cron.task_registry import TaskRegistry

from .fakes import FakeClock, RecordingFaultReporter


@pytest.fixture()
def registry() -> TaskRegistry:
    return TaskRegistry()


@pytest.fixture()
def reporter() -> RecordingFaultReporter:
    return RecordingFaultReporter()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2021, 9, 14, 8, 29, 58, 300_000))


@pytest.fixture()
def fresh_default_scheduler(monkeypatch: pytest.MonkeyPatch):
    """
    Replace the process-wide scheduler with a fresh one for the test,
    and stop its thread afterwards.
    """
    scheduler = Scheduler()
    monkeypatch.setattr(cron_api, "_default", scheduler)
    yield scheduler
    scheduler.stop(timeout=5.0)
