# src/tickcron/cron/cron_api.py

from __future__ import annotations

"""
Process-wide scheduler.

Scheduler runs a TickLoop on its own event loop in a daemon thread, so callers
(sync or async) only ever touch the thread-safe TaskRegistry.

Module-level add()/remove()/clear() use a default Scheduler that starts on the
first add().
"""

import asyncio
import contextlib
import logging
import threading

from ..core.ports import FaultReporter
from .task_models import Action
from .task_registry import TaskRegistry
from .tick_loop import TickLoop

logger = logging.getLogger(__name__)


class Scheduler:
    def __init__(
        self,
        registry: TaskRegistry | None = None,
        *,
        fault_reporter: FaultReporter | None = None,
    ) -> None:
        self.registry = registry if registry is not None else TaskRegistry()
        self._fault_reporter = fault_reporter
        self._start_lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._main: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def add(self, action: Action, *rules: str) -> int:
        """
        Register an action.

        rules: "ss mm hh DD MM YYYY" prefixes, any number; none means every second.
          "00"                  -> every minute
          "00 30 08"            -> every day at 08:30
          "05 30 08 14 09 2021" -> 2021-09-14 08:30:05
        """
        return self.registry.add(action, *rules)

    def remove(self, *ids: int) -> None:
        self.registry.remove(*ids)

    def clear(self) -> None:
        self.registry.clear()

    def start(self) -> None:
        """Start the background tick thread (no-op if already running)."""
        with self._start_lock:
            if self.running:
                return

            ready = threading.Event()
            holder: dict[str, object] = {}

            def runner() -> None:
                loop = asyncio.new_event_loop()
                asyncio.set_event_loop(loop)
                tick_loop = TickLoop(self.registry, fault_reporter=self._fault_reporter)
                main = loop.create_task(tick_loop.run_forever())

                holder["loop"] = loop
                holder["main"] = main
                ready.set()

                try:
                    with contextlib.suppress(asyncio.CancelledError):
                        loop.run_until_complete(main)
                finally:
                    # Let dispatched actions finish; they are never cancelled.
                    with contextlib.suppress(Exception):
                        loop.run_until_complete(tick_loop.wait_idle())
                    loop.close()

            t = threading.Thread(target=runner, name="tickcron", daemon=True)
            t.start()

            if not ready.wait(timeout=5.0):
                raise RuntimeError("tickcron thread did not initialize")

            loop = holder["loop"]
            main = holder["main"]
            assert isinstance(loop, asyncio.AbstractEventLoop)
            assert isinstance(main, asyncio.Task)

            self._thread = t
            self._loop = loop
            self._main = main
            logger.info("Scheduler thread started.")

    def stop(self, timeout: float | None = 5.0) -> None:
        """Stop ticking and wait for the thread; in-flight actions run to completion."""
        with self._start_lock:
            thread, loop, main = self._thread, self._loop, self._main
            self._thread = self._loop = self._main = None

        if thread is None or loop is None or main is None:
            return

        try:
            loop.call_soon_threadsafe(main.cancel)
        except RuntimeError:
            logger.debug("Scheduler loop already closed.", exc_info=True)

        thread.join(timeout=timeout)
        if thread.is_alive():
            logger.warning("Scheduler thread still running after %.1fs", timeout or 0.0)
        else:
            logger.info("Scheduler stopped.")


_default: Scheduler | None = None
_default_lock = threading.Lock()


def default_scheduler() -> Scheduler:
    global _default
    with _default_lock:
        if _default is None:
            _default = Scheduler()
        return _default


def add(action: Action, *rules: str) -> int:
    """Register `action` on the default scheduler, starting it if needed."""
    scheduler = default_scheduler()
    task_id = scheduler.add(action, *rules)
    scheduler.start()
    return task_id


def remove(*ids: int) -> None:
    default_scheduler().remove(*ids)


def clear() -> None:
    default_scheduler().clear()
