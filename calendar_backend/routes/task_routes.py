from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.orm import Session

from calendar_backend.config import API_PREFIX
from calendar_backend.database import get_db
from calendar_backend.services.date_utils import parse_timestamp
from calendar_backend.services.errors import RuleViolation
from calendar_backend.services.task_service import GoalMissing, TaskService

router = APIRouter(prefix=f"{API_PREFIX}/tasks", tags=["Tasks"])

Priority = Literal["low", "medium", "high"]


class TaskCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    goal_id: int = Field(alias="goalId")
    completed: bool = False
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    priority: Priority = "medium"

    @field_validator("due_date", mode="before")
    @classmethod
    def _coerce_due_date(cls, value):
        return None if value in (None, "") else parse_timestamp(value)


class TaskUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    goal_id: Optional[int] = Field(default=None, alias="goalId")
    completed: Optional[bool] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    priority: Optional[Priority] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def _coerce_due_date(cls, value):
        return None if value in (None, "") else parse_timestamp(value)


@router.get("")
async def list_tasks(
    completed: Optional[bool] = Query(default=None),
    goal_id: Optional[int] = Query(default=None, alias="goalId"),
    db: Session = Depends(get_db),
):
    tasks = TaskService.get_all(db, {"completed": completed, "goal_id": goal_id})
    return {"success": True, "count": len(tasks), "data": [t.to_dict() for t in tasks]}


@router.post("", status_code=201)
async def create_task(task_data: TaskCreate, db: Session = Depends(get_db)):
    try:
        task = TaskService.create(db, task_data.model_dump())
    except GoalMissing:
        raise HTTPException(status_code=404, detail="Goal not found")
    except RuleViolation as e:
        raise HTTPException(status_code=400, detail=e.messages)
    return {"success": True, "data": task.to_dict()}


@router.get("/{task_id}")
async def get_task(task_id: int, db: Session = Depends(get_db)):
    task = TaskService.get_by_id(db, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"success": True, "data": task.to_dict()}


@router.put("/{task_id}")
async def update_task(task_id: int, task_data: TaskUpdate, db: Session = Depends(get_db)):
    try:
        task = TaskService.update(db, task_id, task_data.model_dump(exclude_unset=True))
    except GoalMissing:
        raise HTTPException(status_code=404, detail="Goal not found")
    except RuleViolation as e:
        raise HTTPException(status_code=400, detail=e.messages)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"success": True, "data": task.to_dict()}


@router.patch("/{task_id}/toggle")
async def toggle_task(task_id: int, db: Session = Depends(get_db)):
    task = TaskService.toggle(db, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"success": True, "data": task.to_dict()}


@router.delete("/{task_id}")
async def delete_task(task_id: int, db: Session = Depends(get_db)):
    if not TaskService.delete(db, task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return {"success": True, "data": {}}
