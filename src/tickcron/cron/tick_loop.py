# src/tickcron/cron/tick_loop.py

from __future__ import annotations

"""
Tick loop.

Once per whole second:
- take a snapshot of the registry,
- decompose the current time into rule fields (once per tick),
- start every matching task's action as its own asyncio task.

Dispatch is fire-and-forget. Each action runs inside a fault boundary that hands
failures to a FaultReporter; nothing an action does can reach the loop.

Overlap is allowed: an action slower than one second can have several invocations
in flight at once.

To stop the loop, cancel the coroutine/task.
"""

import asyncio
import inspect
import logging
import threading
from datetime import datetime, timedelta
from typing import Final

from ..core.ports import Clock, FaultReporter, Sleeper
from .errors import ActionFault
from .rules import task_matches, time_fields
from .task_models import Task
from .task_registry import TaskRegistry

logger = logging.getLogger(__name__)

ONE_SECOND: Final = timedelta(seconds=1)


class LoggingFaultReporter:
    """Default reporter: log the fault with the action's traceback."""

    def report(self, fault: ActionFault) -> None:
        logger.error(
            "Action failed task_id=%s: %r",
            fault.task_id,
            fault.__cause__,
            exc_info=fault.__cause__,
        )


def seconds_until_next_tick(now: datetime) -> float:
    """Time left until the next whole second, from `now` (never 0)."""
    return 1.0 - now.microsecond / 1_000_000


def tick_instant(now: datetime) -> datetime:
    """The whole second `now` falls in; rule fields always come from the actual clock."""
    return now.replace(microsecond=0)


class TickLoop:
    def __init__(
        self,
        registry: TaskRegistry,
        *,
        fault_reporter: FaultReporter | None = None,
        clock: Clock = datetime.now,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        self.registry = registry
        self._fault_reporter: FaultReporter = fault_reporter or LoggingFaultReporter()
        self._clock = clock
        self._sleep = sleep
        self._in_flight: set[asyncio.Task[None]] = set()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def run_forever(self) -> None:
        """
        Align to second boundaries and tick until cancelled.

        A wake-up more than a second late skips the seconds in between; fields
        always come from the actual clock.
        """
        while True:
            # Recomputed from the clock every time, so dispatch overhead never accumulates.
            now = self._clock()
            target = tick_instant(now) + ONE_SECOND
            await self._sleep(seconds_until_next_tick(now))

            tick_at = tick_instant(self._clock())
            if tick_at < target:
                # Woke up early; sleep the rest of the way to the boundary.
                continue

            try:
                self.run_tick(tick_at)
            except Exception:
                logger.exception("Tick failed at=%s", tick_at)

    def run_tick(self, now: datetime) -> list[int]:
        """
        Evaluate every registered task against `now` and dispatch the matches.

        Must be called from a running event loop. Returns the dispatched task ids.
        """
        tasks = self.registry.snapshot()
        fields = time_fields(now)
        fired: list[int] = []

        for task in tasks:
            try:
                matched = task_matches(fields, task.rules)
            except Exception as exc:
                logger.exception("Rule evaluation failed task_id=%s", task.id)
                self._report(ActionFault(task.id, exc))
                continue

            if matched:
                self._dispatch(task)
                fired.append(task.id)

        if fired:
            logger.debug("Tick %s fired=%s", " ".join(fields), fired)
        return fired

    async def wait_idle(self) -> None:
        """Wait for every action dispatched so far to finish."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    def _dispatch(self, task: Task) -> None:
        unit = asyncio.create_task(self._supervise(task), name=f"tickcron-task-{task.id}")
        self._in_flight.add(unit)
        unit.add_done_callback(self._in_flight.discard)

    async def _supervise(self, task: Task) -> None:
        try:
            if inspect.iscoroutinefunction(task.action):
                await task.action()
            else:
                result = await self._run_in_thread(task)
                if inspect.isawaitable(result):
                    await result
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self._report(ActionFault(task.id, exc))

    async def _run_in_thread(self, task: Task) -> object:
        """
        Run a plain callable on a thread of its own.

        One thread per invocation: blocking actions never stall the loop and never
        wait behind each other in a shared pool.
        """
        loop = asyncio.get_running_loop()
        done: asyncio.Future[object] = loop.create_future()

        def resolve(result: object, exc: BaseException | None) -> None:
            if done.done():
                return
            if exc is not None:
                done.set_exception(exc)
            else:
                done.set_result(result)

        def target() -> None:
            try:
                result = task.action()
            except Exception as exc:
                loop.call_soon_threadsafe(resolve, None, exc)
            except BaseException as exc:
                # SystemExit and friends must not unwind the loop thread.
                fault = RuntimeError(f"action exited: {exc!r}")
                fault.__cause__ = exc
                loop.call_soon_threadsafe(resolve, None, fault)
            else:
                loop.call_soon_threadsafe(resolve, result, None)

        threading.Thread(target=target, name=f"tickcron-task-{task.id}", daemon=True).start()
        return await done

    def _report(self, fault: ActionFault) -> None:
        try:
            self._fault_reporter.report(fault)
        except Exception:
            logger.exception("FaultReporter failed task_id=%s", fault.task_id)
