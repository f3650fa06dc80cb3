# src/tickcron/cron/task_registry.py

from __future__ import annotations

import itertools
import logging
import threading
from types import MappingProxyType

from .rules import describe_rule, parse_rules
from .task_models import Action, Task

logger = logging.getLogger(__name__)


class TaskRegistry:
    """
    In-memory set of registered tasks.

    Locking discipline:
    - every read and write takes the same lock
    - writes replace the mapping instead of mutating it, so a snapshot handed
      to the tick loop never changes underneath it

    Ids come from a counter owned by the registry and are never reused,
    even after remove().
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count()
        self._tasks: MappingProxyType[int, Task] = MappingProxyType({})

    def add(self, action: Action, *rules: str) -> int:
        """
        Register `action` with zero or more rules and return its id.

        Raises InvalidRuleFormat on the first bad rule; nothing is registered then.
        """
        if not callable(action):
            raise TypeError(f"action must be callable, got {type(action).__name__}")

        # Validate outside the lock; parsing is pure.
        parsed = parse_rules(rules)

        with self._lock:
            task_id = next(self._ids)
            tasks = dict(self._tasks)
            tasks[task_id] = Task(id=task_id, rules=parsed, action=action)
            self._tasks = MappingProxyType(tasks)

        logger.debug(
            "Task added id=%s rules=%s",
            task_id,
            [describe_rule(r) for r in parsed] or "<every second>",
        )
        return task_id

    def remove(self, *ids: int) -> None:
        """Unregister tasks; unknown ids are ignored."""
        with self._lock:
            tasks = dict(self._tasks)
            removed = [i for i in ids if tasks.pop(i, None) is not None]
            if removed:
                self._tasks = MappingProxyType(tasks)

        if removed:
            logger.debug("Tasks removed ids=%s", removed)

    def clear(self) -> None:
        with self._lock:
            n = len(self._tasks)
            self._tasks = MappingProxyType({})
        logger.debug("Registry cleared (%d tasks)", n)

    def snapshot(self) -> tuple[Task, ...]:
        """Current tasks in id order, as an immutable tuple."""
        with self._lock:
            tasks = self._tasks
        return tuple(tasks.values())

    def get(self, task_id: int) -> Task | None:
        with self._lock:
            return self._tasks.get(task_id)

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, task_id: object) -> bool:
        with self._lock:
            return task_id in self._tasks
