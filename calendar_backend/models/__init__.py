# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from calendar_backend.models.event import Event, EVENT_CATEGORIES
from calendar_backend.models.goal import Goal, DEFAULT_GOAL_COLOR
from calendar_backend.models.task import Task, TASK_PRIORITIES

__all__ = [
    "Event",
    "EVENT_CATEGORIES",
    "Goal",
    "DEFAULT_GOAL_COLOR",
    "Task",
    "TASK_PRIORITIES",
]
