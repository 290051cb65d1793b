"""
placement.py — Event placement on the calendar grid
Maps events onto slots, converts durations to pixel heights and back, and
computes the result of a move (drag) or a duration change (resize).

An event renders only in the slot matching its exact start; its height is
what shows the duration. Heights are linear in minutes with a floor for
visibility that never feeds back into the stored duration.
"""

import math
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta

from calendar_backend.services.categories import DEFAULT_CATEGORY, category_for_goal_color
from calendar_backend.services.date_utils import (
    MONTH,
    YEAR,
    duration_minutes,
    parse_day,
    parse_timestamp,
)
from calendar_backend.services.slot_grid import Slot, SlotRef

FULL_HOUR_HEIGHT = 64  # px
MINUTE_HEIGHT = FULL_HOUR_HEIGHT / 60
MIN_EVENT_HEIGHT = 20  # px
SNAP_MINUTES = 5
MIN_RESIZE_MINUTES = 15
DEFAULT_EVENT_MINUTES = 60
MONTH_DRAFT_START = time(9, 0)


@dataclass(frozen=True)
class CalendarEvent:
    id: int | str | None
    title: str
    category: str
    day: date
    start: datetime
    end: datetime

    @classmethod
    def from_api(cls, data: dict) -> "CalendarEvent":
        start = parse_timestamp(data["startTime"])
        return cls(
            id=data.get("_id", data.get("id")),
            title=data.get("title", ""),
            category=data.get("category", DEFAULT_CATEGORY),
            day=parse_day(data["date"]) if data.get("date") else start.date(),
            start=start,
            end=parse_timestamp(data["endTime"]),
        )

    @property
    def duration(self) -> int:
        return duration_minutes(self.start, self.end)

    def to_payload(self) -> dict:
        return {
            "title": self.title,
            "category": self.category,
            "date": self.day.isoformat(),
            "startTime": self.start.isoformat(),
            "endTime": self.end.isoformat(),
        }


@dataclass(frozen=True)
class EventDraft:
    """Pre-filled values for the event form. Nothing is saved until confirmed."""

    title: str
    category: str
    day: date
    start: datetime
    end: datetime
    task_id: int | str | None = None

    def to_payload(self) -> dict:
        payload = {
            "title": self.title,
            "category": self.category,
            "date": self.day.isoformat(),
            "startTime": self.start.isoformat(),
            "endTime": self.end.isoformat(),
        }
        if self.task_id is not None:
            payload["taskId"] = self.task_id
        return payload


# ------------------------------------------------------------------
# Slot mapping

def events_for_slot(events: list[CalendarEvent], slot: Slot | SlotRef) -> list[CalendarEvent]:
    ref = slot.ref if isinstance(slot, Slot) else slot
    if ref.is_timed:
        return [
            e for e in events
            if e.day == ref.day and e.start.hour == ref.hour and e.start.minute == ref.minute
        ]
    if ref.view == MONTH:
        return [e for e in events if e.day == ref.day]
    return [e for e in events if e.day.year == ref.day.year and e.day.month == ref.day.month]


# ------------------------------------------------------------------
# Heights

def event_height(minutes: float) -> float:
    """Pixel height for a duration, never below MIN_EVENT_HEIGHT."""
    return max(MIN_EVENT_HEIGHT, minutes * MINUTE_HEIGHT)


def height_to_minutes(height: float) -> float:
    return height / MINUTE_HEIGHT


def snap_minutes(minutes: float) -> int:
    """Nearest multiple of SNAP_MINUTES (halves round up), at least MIN_RESIZE_MINUTES."""
    snapped = math.floor(minutes / SNAP_MINUTES + 0.5) * SNAP_MINUTES
    return max(MIN_RESIZE_MINUTES, snapped)


def resize_end(event: CalendarEvent, height: float) -> datetime:
    return event.start + timedelta(minutes=snap_minutes(height_to_minutes(height)))


def resize_event(event: CalendarEvent, height: float) -> CalendarEvent:
    """Change only the end time so the duration matches `height`."""
    return replace(event, end=resize_end(event, height))


# ------------------------------------------------------------------
# Moving

def move_event(event: CalendarEvent, target: SlotRef) -> CalendarEvent:
    """Place the event at `target` keeping its exact duration.

    Month cells keep the event's time of day; year cells are not drop targets.
    """
    if not target.accepts_drop:
        raise ValueError(f"Cannot drop an event on a {target.view} cell")
    if target.is_timed:
        start = target.start()
    else:
        start = datetime.combine(target.day, event.start.time())
    return replace(event, day=start.date(), start=start, end=start + (event.end - event.start))


# ------------------------------------------------------------------
# Drafts

def draft_for_slot(target: SlotRef) -> EventDraft:
    """Form values for a click on an empty slot: one hour starting at the slot."""
    if target.view == YEAR:
        raise ValueError("Year cells do not create events")
    start = target.start() if target.is_timed else datetime.combine(target.day, MONTH_DRAFT_START)
    return EventDraft(
        title="",
        category=DEFAULT_CATEGORY,
        day=start.date(),
        start=start,
        end=start + timedelta(minutes=DEFAULT_EVENT_MINUTES),
    )


def draft_from_task(task: dict, target: SlotRef, goal_color: str | None = None) -> EventDraft:
    """Form values for a task dropped on a slot; the category follows the goal color."""
    if goal_color is None and isinstance(task.get("goal"), dict):
        goal_color = task["goal"].get("color")
    draft = draft_for_slot(target)
    return replace(
        draft,
        title=task.get("title", ""),
        category=category_for_goal_color(goal_color),
        task_id=task.get("_id", task.get("id")),
    )


# ------------------------------------------------------------------
# Search

def search_events(events: list[CalendarEvent], term: str) -> list[CalendarEvent]:
    """Case-insensitive match on title, category, or `YYYY-MM-DD HH:MM` start."""
    term = (term or "").strip().lower()
    if not term:
        return list(events)
    return [
        e for e in events
        if term in e.title.lower()
        or term in e.category.lower()
        or term in e.start.strftime("%Y-%m-%d %H:%M")
    ]
