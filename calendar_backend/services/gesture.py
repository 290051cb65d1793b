"""
gesture.py — Calendar pointer gestures
One controller owns the current gesture for the whole calendar view, so a
resize and the click that trails it can never both act. Moves and resizes
stay in memory until the pointer is released; release issues at most one
write through the store.
"""

import logging
import time
from dataclasses import dataclass, replace
from datetime import datetime

from calendar_backend.services.placement import (
    MINUTE_HEIGHT,
    CalendarEvent,
    EventDraft,
    draft_for_slot,
    draft_from_task,
    move_event,
    resize_end,
)
from calendar_backend.services.slot_grid import SlotRef

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    event_id: int | str


@dataclass(frozen=True)
class DraggingTask:
    task: dict
    goal_color: str | None = None


@dataclass(frozen=True)
class Resizing:
    event_id: int | str
    start: datetime
    original_end: datetime
    origin_y: float
    base_height: float
    pending_end: datetime | None = None


@dataclass(frozen=True)
class Settling:
    """A resize just ended; the click the browser fires right after it is swallowed.

    Only clicks arriving before `expires_at` count as that trailing click, and
    the next pointer-down ends the state, so it cannot outlive the gesture.
    """

    event_id: int | str
    expires_at: float


Gesture = Idle | Dragging | DraggingTask | Resizing | Settling

IDLE = Idle()

# Browsers fire the trailing click immediately after pointer-up
SETTLE_SECONDS = 0.5


class InteractionController:
    """Drag, resize and click handling for one calendar view.

    `store` is a CalendarStore (or anything with the same find_event,
    update_event, create_event and complete_task methods). `clock` returns
    seconds and only needs to be monotonic.
    """

    def __init__(self, store, clock=time.monotonic):
        self.store = store
        self.clock = clock
        self.gesture: Gesture = IDLE

    # ------------------------------------------------------------------
    def _event(self, event_id) -> CalendarEvent | None:
        data = self.store.find_event(event_id)
        return CalendarEvent.from_api(data) if data else None

    def _expire_settling(self) -> None:
        g = self.gesture
        if isinstance(g, Settling) and self.clock() > g.expires_at:
            self.gesture = IDLE

    def _can_press(self) -> bool:
        if isinstance(self.gesture, (Resizing, Dragging, DraggingTask)):
            return False
        # a new pointer-down means the resize's trailing click is not coming
        self.gesture = IDLE
        return True

    @property
    def is_busy(self) -> bool:
        self._expire_settling()
        return not isinstance(self.gesture, Idle)

    # ------------------------------------------------------------------
    def press_event(self, event_id) -> bool:
        """Pointer down on an event body starts a move."""
        if not self._can_press():
            return False
        if self._event(event_id) is None:
            return False
        self.gesture = Dragging(event_id)
        return True

    def press_task(self, task: dict, goal_color: str | None = None) -> bool:
        if not self._can_press():
            return False
        self.gesture = DraggingTask(task, goal_color)
        return True

    def press_resize_handle(self, event_id, y: float) -> bool:
        """Pointer down on the bottom handle starts a resize instead of a move."""
        if not self._can_press():
            return False
        event = self._event(event_id)
        if event is None:
            return False
        self.gesture = Resizing(
            event_id=event_id,
            start=event.start,
            original_end=event.end,
            origin_y=y,
            # true height, not the clamped display height
            base_height=event.duration * MINUTE_HEIGHT,
        )
        return True

    def pointer_move(self, y: float) -> datetime | None:
        """Track the handle; returns the snapped end time to preview while resizing.

        Back at the starting point the original end is shown and nothing is saved.
        """
        g = self.gesture
        if not isinstance(g, Resizing):
            return None
        if y == g.origin_y:
            self.gesture = replace(g, pending_end=None)
            return g.original_end
        height = max(0.0, g.base_height + (y - g.origin_y))
        event = CalendarEvent(g.event_id, "", "", g.start.date(), g.start, g.original_end)
        pending = resize_end(event, height)
        self.gesture = replace(g, pending_end=pending)
        return pending

    def release(self, target: SlotRef | None = None):
        """End the gesture.

        Returns the updated event dict after a move or resize, an EventDraft
        when a task was dropped on a slot, or None when nothing changed.
        """
        g = self.gesture

        if isinstance(g, Resizing):
            self.gesture = Settling(g.event_id, self.clock() + SETTLE_SECONDS)
            if g.pending_end is None or g.pending_end == g.original_end:
                return None
            logger.info(f"Resized event {g.event_id}: end {g.original_end.isoformat()} -> {g.pending_end.isoformat()}")
            return self.store.update_event(g.event_id, {"endTime": g.pending_end.isoformat()})

        self.gesture = IDLE

        if isinstance(g, Dragging):
            if target is None or not target.accepts_drop:
                return None
            event = self._event(g.event_id)
            if event is None:
                return None
            moved = move_event(event, target)
            if moved.start == event.start:
                return None
            logger.info(f"Moved event {g.event_id} to {target.slot_id}")
            return self.store.update_event(g.event_id, moved.to_payload())

        if isinstance(g, DraggingTask):
            if target is None or not target.accepts_drop:
                return None
            return draft_from_task(g.task, target, g.goal_color)

        return None

    def cancel(self) -> None:
        self.gesture = IDLE

    # ------------------------------------------------------------------
    def _click_allowed(self) -> bool:
        self._expire_settling()
        if isinstance(self.gesture, Settling):
            self.gesture = IDLE
            return False
        return isinstance(self.gesture, Idle)

    def click_event(self, event_id) -> CalendarEvent | None:
        """The event to open in the edit form, or None when the click is suppressed."""
        if not self._click_allowed():
            return None
        return self._event(event_id)

    def click_slot(self, target: SlotRef) -> EventDraft | None:
        """A new-event draft for an empty slot, or None when suppressed or not creatable."""
        if not self._click_allowed() or not target.accepts_drop:
            return None
        return draft_for_slot(target)

    # ------------------------------------------------------------------
    def confirm_draft(self, draft: EventDraft) -> dict | None:
        """Create the event; a task behind the draft is completed only once that succeeds."""
        created = self.store.create_event(draft.to_payload())
        if created is None:
            return None
        if draft.task_id is not None:
            self.store.complete_task(draft.task_id)
        return created
