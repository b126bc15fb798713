"""
Shared date helpers for the sport coach.

Week arithmetic follows ISO weeks (Monday start) everywhere: plan identities,
activity grouping, and the training-block week index.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

DateLike = Union[date, datetime, str]


def parse_date(value: DateLike) -> date:
    """Coerce a date, datetime, or ISO string (date or datetime) to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def to_date_string(value: DateLike) -> str:
    """Format a date-like value as YYYY-MM-DD."""
    return parse_date(value).isoformat()


def now_iso() -> str:
    """Current UTC timestamp in ISO format, including the time component."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def get_week_start(day: Optional[DateLike] = None) -> str:
    """Monday of the week containing `day` (default: today)."""
    d = parse_date(day) if day is not None else date.today()
    return to_date_string(d - timedelta(days=d.weekday()))


def get_week_number(day: DateLike) -> int:
    """ISO week number of a date."""
    return parse_date(day).isocalendar()[1]


def plan_id_for_week(week_start: DateLike) -> str:
    """Derive the plan identity for a week, e.g. "plan-2026-w07".

    Uses the ISO year so that a week starting on 29 Dec belonging to
    ISO week 1 is keyed to the following year.
    """
    iso_year, iso_week, _ = parse_date(week_start).isocalendar()
    return f"plan-{iso_year}-w{iso_week:02d}"


def format_week_range(week_start: DateLike) -> str:
    """Format a week range like "26.01.2026 - 01.02.2026"."""
    start = parse_date(week_start)
    end = start + timedelta(days=6)
    return f"{start:%d.%m.%Y} - {end:%d.%m.%Y}"


def week_title(week_start: DateLike) -> str:
    """Human title for a plan week, e.g. "Week 5: 26.01.2026 - 01.02.2026"."""
    return f"Week {get_week_number(week_start)}: {format_week_range(week_start)}"


def weeks_until(target: DateLike, now: Optional[DateLike] = None) -> int:
    """Whole calendar weeks between this week and the week of `target`.

    0 means the target falls in the current week. Negative once it has passed.
    """
    current = parse_date(get_week_start(now))
    target_week = parse_date(get_week_start(target))
    return (target_week - current).days // 7


def days_until(target: DateLike, now: Optional[DateLike] = None) -> int:
    """Calendar days from today (or `now`) to `target`."""
    current = parse_date(now) if now is not None else date.today()
    return (parse_date(target) - current).days


def training_week_number(race_date: DateLike, total_weeks: int, now: Optional[DateLike] = None) -> int:
    """Week index within the training block, counting back from race week.

    Race week is week `total_weeks`. The result is clamped to 1..total_weeks.
    """
    week = total_weeks - weeks_until(race_date, now)
    return max(1, min(total_weeks, week))
