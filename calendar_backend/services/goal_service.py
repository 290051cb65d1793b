"""
goal_service.py — Goals
CRUD for goals. Deleting a goal removes every task that belongs to it.
"""

import logging

from sqlalchemy.orm import Session

from calendar_backend.models.goal import Goal, DEFAULT_GOAL_COLOR
from calendar_backend.models.task import Task
from calendar_backend.services.errors import RuleViolation

logger = logging.getLogger(__name__)


class GoalService:
    @staticmethod
    def get_all(db: Session) -> list[Goal]:
        return db.query(Goal).order_by(Goal.created_at.desc(), Goal.id.desc()).all()

    @staticmethod
    def get_by_id(db: Session, goal_id: int) -> Goal | None:
        return db.get(Goal, goal_id)

    @staticmethod
    def create(db: Session, data: dict) -> Goal:
        title = (data.get("title") or "").strip()
        if not title:
            raise RuleViolation("Goal title is required")
        goal = Goal(
            title=title,
            color=data.get("color") or DEFAULT_GOAL_COLOR,
            user_id=data.get("user_id"),
        )
        try:
            db.add(goal)
            db.commit()
            db.refresh(goal)
        except Exception:
            db.rollback()
            raise
        logger.info(f"Created goal {goal.id} '{goal.title}'")
        return goal

    @staticmethod
    def update(db: Session, goal_id: int, data: dict) -> Goal | None:
        goal = GoalService.get_by_id(db, goal_id)
        if not goal:
            return None
        if "title" in data:
            title = (data["title"] or "").strip()
            if not title:
                raise RuleViolation("Goal title is required")
            goal.title = title
        if data.get("color"):
            goal.color = data["color"]
        if "user_id" in data:
            goal.user_id = data["user_id"]
        try:
            db.commit()
            db.refresh(goal)
        except Exception:
            db.rollback()
            raise
        return goal

    @staticmethod
    def delete(db: Session, goal_id: int) -> bool:
        """Delete the goal and all of its tasks in one transaction."""
        goal = GoalService.get_by_id(db, goal_id)
        if not goal:
            return False
        removed = len(goal.tasks)
        try:
            # tasks go with the goal via the relationship cascade
            db.delete(goal)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Deleted goal {goal_id} and {removed} task(s)")
        return True

    @staticmethod
    def get_tasks(db: Session, goal_id: int) -> list[Task]:
        return (
            db.query(Task)
            .filter(Task.goal_id == goal_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
            .all()
        )

    @staticmethod
    def count(db: Session) -> int:
        return db.query(Goal).count()
