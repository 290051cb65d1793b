"""
slot_grid.py — Calendar time-slot grid
Builds the ordered slots a calendar view renders and the structured slot
references that travel from a drop target back to a concrete date and time.

Day and week views use 15-minute slots over 24 hours. Month view is a fixed
42-cell (six week) grid starting on the week start on or before the 1st; cells
outside the month are flagged but stay valid drop targets. Year view has one
cell per month and is navigation only.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from calendar_backend.config import WEEK_STARTS_ON
from calendar_backend.services.date_utils import DAY, MONTH, VIEWS, WEEK, YEAR, start_of_week

SLOT_MINUTES = 15
SLOTS_PER_DAY = 24 * 60 // SLOT_MINUTES
MONTH_GRID_CELLS = 42


@dataclass(frozen=True)
class SlotRef:
    """Where something was dropped or clicked: view kind, day, hour and minute."""

    view: str
    day: date
    hour: int = 0
    minute: int = 0

    def __post_init__(self):
        if self.view not in VIEWS:
            raise ValueError(f"Unknown calendar view: {self.view}")
        if not 0 <= self.hour < 24 or not 0 <= self.minute < 60:
            raise ValueError(f"Invalid slot time {self.hour}:{self.minute}")

    @property
    def slot_id(self) -> str:
        return f"{self.view}:{self.day.isoformat()}:{self.hour:02d}:{self.minute:02d}"

    @classmethod
    def parse(cls, slot_id: str) -> "SlotRef":
        parts = slot_id.split(":")
        if len(parts) != 4:
            raise ValueError(f"Malformed slot id: {slot_id!r}")
        view, day, hour, minute = parts
        if len(day) != 10 or len(hour) != 2 or len(minute) != 2 or not (hour + minute).isdigit():
            raise ValueError(f"Malformed slot id: {slot_id!r}")
        return cls(view, date.fromisoformat(day), int(hour), int(minute))

    @property
    def is_timed(self) -> bool:
        """Day and week slots carry a time of day; month and year cells do not."""
        return self.view in (DAY, WEEK)

    @property
    def accepts_drop(self) -> bool:
        return self.view != YEAR

    def start(self) -> datetime:
        return datetime(self.day.year, self.day.month, self.day.day, self.hour, self.minute)


@dataclass(frozen=True)
class Slot:
    ref: SlotRef
    is_hour: bool
    is_half_hour: bool
    is_quarter_hour: bool
    in_range: bool = True

    @property
    def slot_id(self) -> str:
        return self.ref.slot_id

    @property
    def day(self) -> date:
        return self.ref.day

    @property
    def hour(self) -> int:
        return self.ref.hour

    @property
    def minute(self) -> int:
        return self.ref.minute


def _timed_slot(view: str, day: date, index: int) -> Slot:
    hour, minute = divmod(index * SLOT_MINUTES, 60)
    return Slot(
        ref=SlotRef(view, day, hour, minute),
        is_hour=minute == 0,
        is_half_hour=minute % 30 == 0,
        is_quarter_hour=minute % 15 == 0,
    )


def _cell(view: str, day: date, in_range: bool = True) -> Slot:
    return Slot(ref=SlotRef(view, day), is_hour=True, is_half_hour=True, is_quarter_hour=True, in_range=in_range)


def day_slots(day: date, view: str = DAY) -> list[Slot]:
    return [_timed_slot(view, day, i) for i in range(SLOTS_PER_DAY)]


def week_days(anchor: date, week_starts_on: int = WEEK_STARTS_ON) -> list[date]:
    first = start_of_week(anchor, week_starts_on)
    return [first + timedelta(days=i) for i in range(7)]


def month_cells(anchor: date, week_starts_on: int = WEEK_STARTS_ON) -> list[Slot]:
    first = start_of_week(anchor.replace(day=1), week_starts_on)
    days = (first + timedelta(days=i) for i in range(MONTH_GRID_CELLS))
    return [_cell(MONTH, d, in_range=d.month == anchor.month) for d in days]


def year_cells(anchor: date) -> list[Slot]:
    return [_cell(YEAR, date(anchor.year, m, 1)) for m in range(1, 13)]


def build_slots(view: str, anchor: date, week_starts_on: int = WEEK_STARTS_ON) -> list[Slot]:
    """Ordered slots for a view around `anchor`. Week slots are ordered day by day."""
    if view == DAY:
        return day_slots(anchor)
    if view == WEEK:
        return [s for d in week_days(anchor, week_starts_on) for s in day_slots(d, WEEK)]
    if view == MONTH:
        return month_cells(anchor, week_starts_on)
    if view == YEAR:
        return year_cells(anchor)
    raise ValueError(f"Unknown calendar view: {view}")
