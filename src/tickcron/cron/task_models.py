# src/tickcron/cron/task_models.py

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Union

Rule = tuple[str, ...]
# Rule fields in order: second, minute, hour, day, month, year (prefix only).

Action = Callable[[], Union[Any, Awaitable[Any]]]


@dataclass(slots=True, frozen=True)
class Task:
    """
    A registered action plus its time rules.

    Notes:
    - an empty `rules` tuple matches every tick
    - tasks are never mutated; remove and re-add to change rules
    """

    id: int
    rules: tuple[Rule, ...]
    action: Action

    @property
    def unconditional(self) -> bool:
        return not self.rules
