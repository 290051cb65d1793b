from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from calendar_backend.database import Base

DEFAULT_GOAL_COLOR = "#3B82F6"  # blue


class Goal(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    color = Column(String(20), nullable=False, default=DEFAULT_GOAL_COLOR)
    user_id = Column(Integer, nullable=True)  # reserved, no auth yet
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    tasks = relationship("Task", back_populates="goal", cascade="all, delete-orphan")

    def to_dict(self) -> dict:
        return {
            "_id": self.id,
            "title": self.title,
            "color": self.color,
            "userId": self.user_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def summary(self) -> dict:
        return {"_id": self.id, "title": self.title, "color": self.color}
