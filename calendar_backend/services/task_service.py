"""
task_service.py — Task management
Handles CRUD for tasks under a goal, plus completion toggling.
"""

import logging

from sqlalchemy.orm import Session

from calendar_backend.models.goal import Goal
from calendar_backend.models.task import Task, TASK_PRIORITIES
from calendar_backend.services.errors import RuleViolation

logger = logging.getLogger(__name__)


class GoalMissing(LookupError):
    """The goal a task points at does not exist."""


def _check_priority(priority) -> None:
    if priority not in TASK_PRIORITIES:
        raise RuleViolation(f"`{priority}` is not a valid priority")


class TaskService:
    @staticmethod
    def get_all(db: Session, filters: dict = None) -> list[Task]:
        """Query with optional `completed` and `goal_id` filters, newest first."""
        query = db.query(Task)
        if filters:
            if filters.get("completed") is not None:
                query = query.filter(Task.completed == filters["completed"])
            if filters.get("goal_id") is not None:
                query = query.filter(Task.goal_id == filters["goal_id"])
        return query.order_by(Task.created_at.desc(), Task.id.desc()).all()

    @staticmethod
    def get_by_id(db: Session, task_id: int) -> Task | None:
        return db.get(Task, task_id)

    @staticmethod
    def create(db: Session, data: dict) -> Task:
        """Create a task from data dict. Raises GoalMissing for an unknown goal."""
        if db.get(Goal, data.get("goal_id")) is None:
            raise GoalMissing(data.get("goal_id"))
        title = (data.get("title") or "").strip()
        if not title:
            raise RuleViolation("Task title is required")
        priority = data.get("priority") or "medium"
        _check_priority(priority)

        task = Task(
            title=title,
            goal_id=data["goal_id"],
            completed=bool(data.get("completed", False)),
            due_date=data.get("due_date"),
            priority=priority,
        )
        try:
            db.add(task)
            db.commit()
            db.refresh(task)
        except Exception:
            db.rollback()
            raise
        logger.info(f"Created task {task.id} '{task.title}' under goal {task.goal_id}")
        return task

    @staticmethod
    def update(db: Session, task_id: int, data: dict) -> Task | None:
        """Update task fields. Returns None when the task does not exist."""
        task = TaskService.get_by_id(db, task_id)
        if not task:
            return None
        if data.get("goal_id") is not None and db.get(Goal, data["goal_id"]) is None:
            raise GoalMissing(data["goal_id"])

        if "title" in data:
            title = (data["title"] or "").strip()
            if not title:
                raise RuleViolation("Task title is required")
            task.title = title
        if data.get("priority") is not None:
            _check_priority(data["priority"])
            task.priority = data["priority"]
        if data.get("goal_id") is not None:
            task.goal_id = data["goal_id"]
        if data.get("completed") is not None:
            task.completed = bool(data["completed"])
        if "due_date" in data:
            task.due_date = data["due_date"]

        try:
            db.commit()
            db.refresh(task)
        except Exception:
            db.rollback()
            raise
        return task

    @staticmethod
    def toggle(db: Session, task_id: int) -> Task | None:
        task = TaskService.get_by_id(db, task_id)
        if not task:
            return None
        task.completed = not task.completed
        try:
            db.commit()
            db.refresh(task)
        except Exception:
            db.rollback()
            raise
        logger.info(f"Task {task_id} completed={task.completed}")
        return task

    @staticmethod
    def delete(db: Session, task_id: int) -> bool:
        task = TaskService.get_by_id(db, task_id)
        if not task:
            return False
        try:
            db.delete(task)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return True

    @staticmethod
    def count(db: Session) -> int:
        return db.query(Task).count()
