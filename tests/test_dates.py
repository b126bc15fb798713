"""Tests for utils.py: week arithmetic and plan identity."""

from datetime import date, datetime

import pytest

from sport_coach.utils import (
    days_until,
    format_week_range,
    get_week_number,
    get_week_start,
    parse_date,
    plan_id_for_week,
    to_date_string,
    training_week_number,
    week_title,
    weeks_until,
)


def test_parse_date_variants():
    assert parse_date("2026-02-11") == date(2026, 2, 11)
    assert parse_date("2026-02-11T07:12:00") == date(2026, 2, 11)
    assert parse_date(datetime(2026, 2, 11, 7, 12)) == date(2026, 2, 11)
    assert to_date_string(date(2026, 2, 1)) == "2026-02-01"


@pytest.mark.parametrize("day,monday", [
    ("2026-02-09", "2026-02-09"),
    ("2026-02-11", "2026-02-09"),
    ("2026-02-15", "2026-02-09"),
    ("2026-01-01", "2025-12-29"),
])
def test_week_start(day, monday):
    assert get_week_start(day) == monday


@pytest.mark.parametrize("week_start,plan_id", [
    ("2026-02-09", "plan-2026-w07"),
    ("2026-02-11", "plan-2026-w07"),
    ("2025-12-29", "plan-2026-w01"),
    ("2027-01-01", "plan-2026-w53"),
])
def test_plan_id_for_week(week_start, plan_id):
    assert plan_id_for_week(week_start) == plan_id


def test_week_title():
    assert get_week_number("2026-01-26") == 5
    assert format_week_range("2026-01-26") == "26.01.2026 - 01.02.2026"
    assert week_title("2026-01-26") == "Week 5: 26.01.2026 - 01.02.2026"


def test_weeks_and_days_until():
    now = date(2026, 2, 11)
    assert weeks_until("2026-02-15", now) == 0
    assert weeks_until("2026-02-16", now) == 1
    assert weeks_until("2026-02-01", now) == -2
    assert days_until("2026-02-15", now) == 4


@pytest.mark.parametrize("now,week", [
    (date(2026, 4, 15), 16),
    (date(2026, 4, 8), 15),
    (date(2026, 2, 11), 7),
    (date(2025, 10, 1), 1),
    (date(2026, 5, 1), 16),
])
def test_training_week_number(now, week):
    assert training_week_number("2026-04-19", 16, now) == week
