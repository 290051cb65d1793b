"""
date_utils.py — Calendar date arithmetic
Parsing of incoming day/timestamp values, visible ranges per calendar view,
period navigation, and human-readable time formatting.
"""

import calendar
from datetime import date, datetime, timedelta, timezone

from calendar_backend.config import WEEK_STARTS_ON

DAY = "day"
WEEK = "week"
MONTH = "month"
YEAR = "year"
VIEWS = (DAY, WEEK, MONTH, YEAR)


def to_naive_utc(value: datetime) -> datetime:
    """Aware timestamps are converted to UTC and stored without tzinfo."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_naive_utc(datetime.fromisoformat(text))


def parse_day(value) -> date:
    """Accept `YYYY-MM-DD` or a full ISO timestamp and keep only the calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return parse_timestamp(text).date()


def start_of_week(day: date, week_starts_on: int = WEEK_STARTS_ON) -> date:
    offset = (day.weekday() - week_starts_on) % 7
    return day - timedelta(days=offset)


def end_of_week(day: date, week_starts_on: int = WEEK_STARTS_ON) -> date:
    return start_of_week(day, week_starts_on) + timedelta(days=6)


def view_range(view: str, anchor: date, week_starts_on: int = WEEK_STARTS_ON) -> tuple[date, date]:
    """Inclusive (first, last) day the given view shows around `anchor`."""
    if view == DAY:
        return anchor, anchor
    if view == WEEK:
        return start_of_week(anchor, week_starts_on), end_of_week(anchor, week_starts_on)
    if view == MONTH:
        first = anchor.replace(day=1)
        last = anchor.replace(day=calendar.monthrange(anchor.year, anchor.month)[1])
        return start_of_week(first, week_starts_on), end_of_week(last, week_starts_on)
    if view == YEAR:
        return date(anchor.year, 1, 1), date(anchor.year, 12, 31)
    raise ValueError(f"Unknown calendar view: {view}")


def add_months(day: date, months: int) -> date:
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def shift_period(view: str, anchor: date, steps: int) -> date:
    """Move the anchor by `steps` periods of the view (negative goes back)."""
    if view == DAY:
        return anchor + timedelta(days=steps)
    if view == WEEK:
        return anchor + timedelta(weeks=steps)
    if view == MONTH:
        return add_months(anchor, steps)
    if view == YEAR:
        return add_months(anchor, 12 * steps)
    raise ValueError(f"Unknown calendar view: {view}")


def duration_minutes(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


def format_time(value: datetime) -> str:
    """12-hour clock, e.g. `9:05 AM`."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def readable_time_range(start: datetime, end: datetime) -> str:
    return f"{format_time(start)} - {format_time(end)}"


def format_duration(minutes: int) -> str:
    """`1h 30m`, `2h` or `45m`."""
    if minutes >= 60:
        hours, mins = divmod(minutes, 60)
        return f"{hours}h {mins}m" if mins else f"{hours}h"
    return f"{minutes}m"
