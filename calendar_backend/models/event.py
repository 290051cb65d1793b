from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Date, DateTime
from calendar_backend.database import Base

EVENT_CATEGORIES = ("exercise", "eating", "work", "relax", "family", "social")


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    category = Column(String(20), nullable=False, default="work")  # one of EVENT_CATEGORIES
    date = Column(Date, nullable=False, index=True)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)  # strictly after start_time
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    @property
    def duration_minutes(self) -> int:
        return int((self.end_time - self.start_time).total_seconds() // 60)

    def to_dict(self) -> dict:
        return {
            "_id": self.id,
            "title": self.title,
            "category": self.category,
            "date": self.date.isoformat(),
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
            "duration": self.duration_minutes,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
