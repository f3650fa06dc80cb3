# src/tickcron/cli/main.py

"""
CLI entrypoint.

Initializes logging, registers a heartbeat task with the configured rules,
then runs the scheduler until SIGINT/SIGTERM.
"""

from __future__ import annotations

import logging
import signal
import sys
import threading

from ..config import Settings, get_settings
from ..cron.cron_api import Scheduler
from ..cron.errors import InvalidRuleFormat
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _heartbeat(app_name: str):
    def beat() -> None:
        logger.info("%s heartbeat", app_name)

    return beat


def run(settings: Settings, stop: threading.Event) -> int:
    """Run the scheduler until `stop` is set. Returns the process exit code."""
    scheduler = Scheduler()

    try:
        task_id = scheduler.add(_heartbeat(settings.app_name), *settings.heartbeat_rules)
    except InvalidRuleFormat as e:
        logger.error("Invalid heartbeat rule %r (expected 'ss [mm [hh [DD [MM [YYYY]]]]]')", e.rule)
        return 2

    logger.info("Heartbeat task id=%s rules=%s", task_id, settings.heartbeat_rules or "<every second>")

    scheduler.start()
    try:
        stop.wait()
    finally:
        scheduler.stop(timeout=settings.stop_join_timeout)
    return 0


def main() -> None:
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.INFO)
    setup_logging(
        log_dir=settings.log_dir,
        console_level=console_level,
        log_to_file=settings.log_to_file,
    )

    logger.info("Starting %s...", settings.app_name)

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    signal.signal(signal.SIGINT, _handle_signal)
    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, _handle_signal)

    code = run(settings, stop_main)
    logger.info("Bye.")
    sys.exit(code)


if __name__ == "__main__":
    main()
