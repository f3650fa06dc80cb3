# src/tickcron/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the scheduler.

The tick loop depends on Protocols instead of concrete implementations,
so clocks and fault reporting can be swapped in tests.
"""

from datetime import datetime
from typing import Awaitable, Protocol

from ..cron.errors import ActionFault


class Clock(Protocol):
    """Returns the current local wall-clock time."""
    def __call__(self) -> datetime: ...


class Sleeper(Protocol):
    def __call__(self, delay: float) -> Awaitable[None]: ...


class FaultReporter(Protocol):
    """
    Receives faults contained at the dispatch boundary.

    Called from the scheduler's event loop thread; must not block for long.
    """

    def report(self, fault: ActionFault) -> None: ...
