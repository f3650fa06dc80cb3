# tests/test_rules.py

from __future__ import annotations

from datetime import datetime

import pytest

from tickcron.cron.errors import InvalidRuleFormat
from tickcron.cron.rules import (
    describe_rule,
    parse_rule,
    parse_rules,
    rule_matches,
    task_matches,
    time_fields,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("00", ("00",)),
        ("59 59", ("59", "59")),
        ("00 30 08", ("00", "30", "08")),
        ("00 00 23 31", ("00", "00", "23", "31")),
        ("00 00 00 01 12", ("00", "00", "00", "01", "12")),
        ("05 30 08 14 09 2021", ("05", "30", "08", "14", "09", "2021")),
    ],
)
def test_parse_rule_accepts_prefixes(text: str, expected: tuple[str, ...]) -> None:
    assert parse_rule(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "",
        "60",  # second out of range
        "5",  # not zero-padded
        "00 60",  # minute out of range
        "00 00 24",  # hour out of range
        "00 00 00 00",  # day 00
        "00 00 00 32",  # day out of range
        "00 00 00 01 13",  # month out of range
        "00 00 00 01 00",  # month 00
        "00 00 00 01 01 21",  # two-digit year
        "00 00 00 01 01 2021 00",  # too many fields
        "00  30",  # double space
        " 00",
        "00 ",
        "00\t30",
        "08 * 00",
        "0٥",  # Arabic-Indic digit five
        "05 30 08 14 09 ２０２１",  # fullwidth year
        "０5",
    ],
)
def test_parse_rule_rejects_bad_rules(text: str) -> None:
    with pytest.raises(InvalidRuleFormat) as exc_info:
        parse_rule(text)
    assert exc_info.value.rule == text


def test_parse_rule_rejects_non_strings() -> None:
    with pytest.raises(InvalidRuleFormat):
        parse_rule(5)  # type: ignore[arg-type]


def test_invalid_rule_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        parse_rule("99")


def test_parse_rules_stops_at_first_bad_rule() -> None:
    with pytest.raises(InvalidRuleFormat) as exc_info:
        parse_rules(["00", "61", "62"])
    assert exc_info.value.rule == "61"
    assert parse_rules([]) == ()


def test_time_fields_uses_rule_order_and_padding() -> None:
    now = datetime(2021, 9, 4, 8, 3, 5, 999_999)
    assert time_fields(now) == ("05", "03", "08", "04", "09", "2021")


def test_rule_matches_prefix_and_wildcards() -> None:
    current = ("05", "30", "08", "14", "09", "2021")

    assert rule_matches(current, ("05",))
    assert rule_matches(current, ("05", "30", "08"))
    assert rule_matches(current, current)

    assert not rule_matches(current, ("06",))
    assert not rule_matches(current, ("05", "31"))
    assert not rule_matches(current, ("05", "30", "08", "14", "09", "2022"))


def test_task_matches_or_semantics() -> None:
    current = ("05", "30", "08", "14", "09", "2021")

    assert task_matches(current, [])
    assert task_matches(current, [("06",), ("05", "30")])
    assert task_matches(current, [("05",), ("05", "30")])
    assert not task_matches(current, [("06",), ("05", "31")])


def test_describe_rule() -> None:
    assert describe_rule(("05", "30")) == "second=05 minute=30"
