# src/tickcron/cron/errors.py

from __future__ import annotations


class CronError(Exception):
    """Base class for scheduler errors."""


class InvalidRuleFormat(CronError, ValueError):
    """A rule string does not match the `ss [mm [hh [DD [MM [YYYY]]]]]` grammar."""

    def __init__(self, rule: object) -> None:
        self.rule = rule
        super().__init__(f"{rule!r} rules not match")


class ActionFault(CronError):
    """
    A dispatched action terminated abnormally.

    Never raised into the tick loop: it is built at the dispatch boundary and handed
    to the FaultReporter. The original exception is available as __cause__.
    """

    def __init__(self, task_id: int, cause: BaseException) -> None:
        self.task_id = task_id
        super().__init__(f"task {task_id} failed: {cause!r}")
        self.__cause__ = cause
