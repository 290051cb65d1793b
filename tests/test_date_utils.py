from datetime import date, datetime

import pytest

from calendar_backend.services.categories import (
    category_for_goal_color,
    category_style,
    category_title,
    event_categories,
)
from calendar_backend.services.date_utils import (
    add_months,
    format_duration,
    format_time,
    parse_day,
    parse_timestamp,
    readable_time_range,
    shift_period,
    view_range,
)


class TestParsing:
    def test_utc_suffix_is_normalised(self):
        assert parse_timestamp("2024-06-03T09:00:00Z") == datetime(2024, 6, 3, 9, 0)
        assert parse_timestamp("2024-06-03T11:00:00+02:00") == datetime(2024, 6, 3, 9, 0)

    def test_parse_day_accepts_timestamps(self):
        assert parse_day("2024-06-03") == date(2024, 6, 3)
        assert parse_day("2024-06-03T23:30:00.000Z") == date(2024, 6, 3)

    def test_parse_day_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_day("next tuesday")


class TestRanges:
    anchor = date(2024, 6, 5)

    def test_week_range(self):
        assert view_range("week", self.anchor) == (date(2024, 6, 2), date(2024, 6, 8))

    def test_month_range_covers_whole_weeks(self):
        assert view_range("month", self.anchor) == (date(2024, 5, 26), date(2024, 7, 6))

    def test_year_range(self):
        assert view_range("year", self.anchor) == (date(2024, 1, 1), date(2024, 12, 31))

    def test_month_navigation_clamps_day(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2024, 1, 15), -1) == date(2023, 12, 15)

    def test_shift_period(self):
        assert shift_period("day", self.anchor, -1) == date(2024, 6, 4)
        assert shift_period("week", self.anchor, 1) == date(2024, 6, 12)
        assert shift_period("year", date(2024, 2, 29), 1) == date(2025, 2, 28)


class TestFormatting:
    def test_format_time(self):
        assert format_time(datetime(2024, 6, 3, 9, 5)) == "9:05 AM"
        assert format_time(datetime(2024, 6, 3, 0, 0)) == "12:00 AM"
        assert format_time(datetime(2024, 6, 3, 12, 30)) == "12:30 PM"

    def test_readable_range(self):
        start, end = datetime(2024, 6, 3, 9), datetime(2024, 6, 3, 14, 15)
        assert readable_time_range(start, end) == "9:00 AM - 2:15 PM"

    @pytest.mark.parametrize("minutes, text", [(45, "45m"), (60, "1h"), (90, "1h 30m"), (120, "2h")])
    def test_format_duration(self, minutes, text):
        assert format_duration(minutes) == text


class TestCategories:
    def test_goal_colors_map_to_categories(self):
        assert category_for_goal_color("#10B981") == "exercise"
        assert category_for_goal_color("#ef4444") == "family"

    def test_unknown_or_missing_color_defaults_to_work(self):
        assert category_for_goal_color("#123456") == "work"
        assert category_for_goal_color(None) == "work"

    def test_unknown_category_falls_back_to_work_style(self):
        assert category_style("unknown") == category_style("work")
        assert category_title("social") == "Social"

    def test_event_categories(self):
        values = [c["value"] for c in event_categories()]
        assert set(values) == {"exercise", "eating", "work", "relax", "family", "social"}
