"""
tickcron: in-process per-second recurring task scheduler.

    import tickcron

    task_id = tickcron.add(do_backup, "00 30 03")  # every day at 03:30:00
    tickcron.remove(task_id)
"""

from .cron.cron_api import Scheduler, add, clear, default_scheduler, remove
from .cron.errors import ActionFault, CronError, InvalidRuleFormat
from .cron.task_registry import TaskRegistry
from .cron.tick_loop import LoggingFaultReporter, TickLoop

__all__ = [
    "ActionFault",
    "CronError",
    "InvalidRuleFormat",
    "LoggingFaultReporter",
    "Scheduler",
    "TaskRegistry",
    "TickLoop",
    "add",
    "clear",
    "default_scheduler",
    "remove",
]
