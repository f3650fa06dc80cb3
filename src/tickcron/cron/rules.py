# src/tickcron/cron/rules.py

from __future__ import annotations

"""
Rule grammar and matching.

A rule is a space-separated prefix of the fields

    ss mm hh DD MM YYYY

Fields after the prefix are wildcards. "00" fires every minute, "00 30 08" every day
at 08:30:00, "05 30 08 14 09 2021" exactly once at 2021-09-14 08:30:05.

Everything here is pure: no locking, no clock reads.
"""

import re
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Final

from .errors import InvalidRuleFormat
from .task_models import Rule

RULE_RE: Final = re.compile(
    r"^([0-5]\d)"
    r"( [0-5]\d"
    r"( (2[0-3]|[01]\d)"
    r"( (0[1-9]|[12]\d|3[01])"
    r"( (0[1-9]|1[0-2])"
    r"( \d{4})?)?)?)?)?$",
    re.ASCII,
)

FIELD_NAMES: Final = ("second", "minute", "hour", "day", "month", "year")

# strftime rendering with the same padding as rule fields, in rule order.
TIME_FORMAT: Final = "%S %M %H %d %m %Y"

TimeFields = tuple[str, str, str, str, str, str]


def parse_rule(text: str) -> Rule:
    """Validate one rule string and split it into its fields."""
    if not isinstance(text, str) or not RULE_RE.fullmatch(text):
        raise InvalidRuleFormat(text)
    return tuple(text.split(" "))


def parse_rules(texts: Iterable[str]) -> tuple[Rule, ...]:
    """Parse all rules or none; the first bad rule raises."""
    return tuple(parse_rule(t) for t in texts)


def time_fields(now: datetime) -> TimeFields:
    """Decompose a wall-clock instant into the six rule fields."""
    second, minute, hour, day, month, year = now.strftime(TIME_FORMAT).split(" ")
    return second, minute, hour, day, month, year


def rule_matches(current: Sequence[str], rule: Sequence[str]) -> bool:
    for pos, want in enumerate(rule):
        if want != current[pos]:
            return False
    return True


def task_matches(current: Sequence[str], rules: Sequence[Sequence[str]]) -> bool:
    """
    No rules means "every tick".
    Rules are OR'd; the first matching rule wins.
    """
    if not rules:
        return True
    return any(rule_matches(current, rule) for rule in rules)


def describe_rule(rule: Sequence[str]) -> str:
    """Human-readable form for logs, e.g. "second=05 minute=30"."""
    return " ".join(f"{name}={value}" for name, value in zip(FIELD_NAMES, rule))
