"""
event_service.py — Calendar events
CRUD over the events table. Every write re-checks the event rules on the
merged record so that a partial update can never leave end <= start.
"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from calendar_backend.models.event import Event, EVENT_CATEGORIES
from calendar_backend.services.errors import RuleViolation

logger = logging.getLogger(__name__)

_FIELDS = ("title", "category", "date", "start_time", "end_time")


def check_event_rules(title, category, start_time, end_time) -> None:
    errors = []
    if not title or not str(title).strip():
        errors.append("Title is required")
    if category not in EVENT_CATEGORIES:
        errors.append(f"`{category}` is not a valid category")
    if start_time is not None and end_time is not None and end_time <= start_time:
        errors.append("End time must be after start time")
    if errors:
        raise RuleViolation(errors)


class EventService:
    @staticmethod
    def list(db: Session, start: date | None = None, end: date | None = None) -> list[Event]:
        """All events ordered by start time, optionally limited to an inclusive day range."""
        query = db.query(Event)
        if start is not None and end is not None:
            query = query.filter(Event.date >= start, Event.date <= end)
        return query.order_by(Event.start_time.asc(), Event.id.asc()).all()

    @staticmethod
    def get_by_id(db: Session, event_id: int) -> Event | None:
        return db.get(Event, event_id)

    @staticmethod
    def create(db: Session, data: dict) -> Event:
        title = (data.get("title") or "").strip()
        category = data.get("category") or "work"
        check_event_rules(title, category, data.get("start_time"), data.get("end_time"))
        event = Event(
            title=title,
            category=category,
            date=data["date"],
            start_time=data["start_time"],
            end_time=data["end_time"],
        )
        try:
            db.add(event)
            db.commit()
            db.refresh(event)
        except Exception:
            db.rollback()
            raise
        logger.info(f"Created event {event.id} '{event.title}' at {event.start_time.isoformat()}")
        return event

    @staticmethod
    def update(db: Session, event_id: int, data: dict) -> Event | None:
        """Apply a partial update. Returns None when the event does not exist."""
        event = EventService.get_by_id(db, event_id)
        if not event:
            return None

        merged = {k: getattr(event, k) for k in _FIELDS}
        merged.update({k: v for k, v in data.items() if k in _FIELDS and v is not None})
        if data.get("start_time") is not None and data.get("date") is None:
            # range queries filter on date, so it follows the new start
            merged["date"] = merged["start_time"].date()
        if isinstance(merged["title"], str):
            merged["title"] = merged["title"].strip()
        try:
            check_event_rules(merged["title"], merged["category"], merged["start_time"], merged["end_time"])
        except RuleViolation as e:
            logger.warning(f"Rejected update of event {event_id}: {e}")
            raise

        for key, value in merged.items():
            setattr(event, key, value)
        try:
            db.commit()
            db.refresh(event)
        except Exception:
            db.rollback()
            raise
        logger.info(f"Updated event {event.id}: {event.start_time.isoformat()} -> {event.end_time.isoformat()}")
        return event

    @staticmethod
    def delete(db: Session, event_id: int) -> bool:
        event = EventService.get_by_id(db, event_id)
        if not event:
            return False
        try:
            db.delete(event)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Deleted event {event_id}")
        return True

    @staticmethod
    def count(db: Session) -> int:
        return db.query(Event).count()
