from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from calendar_backend.database import Base

TASK_PRIORITIES = ("low", "medium", "high")


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    goal_id = Column(Integer, ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True)
    completed = Column(Boolean, nullable=False, default=False)
    due_date = Column(DateTime, nullable=True)
    priority = Column(String(20), nullable=False, default="medium")  # low/medium/high
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    goal = relationship("Goal", back_populates="tasks")

    def to_dict(self) -> dict:
        return {
            "_id": self.id,
            "title": self.title,
            "goalId": self.goal_id,
            "goal": self.goal.summary() if self.goal else None,
            "completed": bool(self.completed),
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "priority": self.priority,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
